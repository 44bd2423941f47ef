"""
defect_insights package marker.

CSV ingestion and analytics for defect-tracking exports.
"""

__version__ = "1.0.0"
