"""
defect_insights/parsing package marker.
"""

from defect_insights.parsing.csv_tokenizer import tokenize
from defect_insights.parsing.date_normalizer import format_iso, normalize_date, parse_date

__all__ = ["format_iso", "normalize_date", "parse_date", "tokenize"]
