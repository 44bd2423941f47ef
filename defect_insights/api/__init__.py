"""
defect_insights/api package marker.
"""
