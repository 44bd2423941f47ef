"""
defect_insights/validators package marker.
"""
