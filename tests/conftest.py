"""
Shared pytest fixtures for the defect insights test suite.
"""

from __future__ import annotations

from typing import Callable

import pytest

from defect_insights.domain.defect import Defect
from tests.factories import build_defect


@pytest.fixture
def make_defect() -> Callable[..., Defect]:
    """Factory for Defect records with sensible required fields."""
    return build_defect


# ---------------------------------------------------------------------------
# Sample CSV documents
# ---------------------------------------------------------------------------


@pytest.fixture
def jira_export_csv() -> str:
    """A small tracker export using Jira-style headers."""
    return (
        "Summary,Issue key,Issue id,Status,Reporter,Severity,Priority,"
        "Created,Updated,Custom field (Business Domain),Description,Sprint\r\n"
        "Login fails,BUG-1,10001,Open,alice,High,P1,30/May/24 5:20 PM,,Billing,"
        "\"Expected: login works\nActual: 500 error\nInvoice ID 1234567\",Sprint 7\r\n"
        "Export is slow,BUG-2,10002,Done,bob,Low,P3,5/27/2024 09:15,"
        "5/29/2024 11:15,Reporting,\"Given a report, When exported, Then slow\",\r\n"
        "Cart total wrong,BUG-3,10003,Ready for Testing,alice,Critical,P2,"
        "2024-06-03T08:00:00Z,,Billing,,Sprint 8\r\n"
    )
