"""
Ingest a defect CSV export and print an analytics report as JSON.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from defect_insights.analytics.attention import classify_attention
from defect_insights.analytics.grouping import GroupOrder, count_by
from defect_insights.analytics.resolution import format_duration, resolution_time_stats
from defect_insights.analytics.trends import AnalysisType, TrendPeriod, build_trend
from defect_insights.domain.errors import DefectIngestionError
from defect_insights.services.defect_ingestion_service import get_defect_ingestion_service


def build_report(
    data: bytes,
    *,
    group_by: str,
    period: TrendPeriod,
    analysis: AnalysisType,
) -> dict:
    result = get_defect_ingestion_service().ingest_bytes(data)
    groups = count_by(result.defects, group_by, order=GroupOrder.COUNT)
    trend = build_trend(result.defects, period, analysis=analysis)
    resolution = resolution_time_stats(result.defects)
    return {
        "rows_processed": result.rows_processed,
        "rows_failed": result.rows_failed,
        "validation_errors": [error.to_dict() for error in result.errors],
        "groups": [group.to_dict() for group in groups],
        "trend": [bucket.to_dict() for bucket in trend],
        "attention": [
            {"id": record.defect.id, "reason_for_attention": record.reason_for_attention}
            for record in classify_attention(result.defects)
        ],
        "resolution_time": {
            **resolution.to_dict(),
            "average_display": format_duration(resolution.average_hours),
        },
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Analyze a defect CSV export.")
    parser.add_argument("path", type=Path, help="CSV file to ingest.")
    parser.add_argument(
        "--group-by",
        dest="group_by",
        default="severity",
        help="Field to group counts by (severity, priority, status, domain, reporter).",
    )
    parser.add_argument(
        "--period",
        choices=[period.value for period in TrendPeriod if period is not TrendPeriod.RANGE],
        default=TrendPeriod.WEEK.value,
        help="Trend bucket width.",
    )
    parser.add_argument(
        "--analysis",
        choices=[analysis.value for analysis in AnalysisType],
        default=AnalysisType.CREATION.value,
        help="Trend time axis: creation date or resolution date.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.ERROR, format="%(levelname)s [%(name)s] %(message)s")

    try:
        report = build_report(
            args.path.read_bytes(),
            group_by=args.group_by,
            period=TrendPeriod(args.period),
            analysis=AnalysisType(args.analysis),
        )
    except OSError as exc:
        print(f"Cannot read {args.path}: {exc}", file=sys.stderr)
        return 2
    except DefectIngestionError as exc:
        print(json.dumps(exc.to_dict(), indent=2), file=sys.stderr)
        return 1

    print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
