"""Tests for deal health flag lookup."""

import pytest

from app.core.health_flags import HEALTH_FLAGS, build_health_breakdown, lookup_flag


@pytest.mark.parametrize(
    "flag,label,severity",
    [
        ("no_activity", "No Recent Activity", "critical"),
        ("missing_economic_buyer", "Missing Economic Buyer", "critical"),
        ("no_response_to_proposal", "Proposal Sent, No Response", "warning"),
        ("competitive_pressure", "Competitive Pressure Detected", "warning"),
        ("follow_up_overdue", "Follow-up Overdue", "critical"),
        ("missing_technical_champion", "No Technical Champion", "warning"),
        ("stalled", "Deal Stalled", "critical"),
        ("budget_concerns", "Budget Questions", "warning"),
    ],
)
def test_known_flags(flag, label, severity):
    info = lookup_flag(flag)
    assert info.label == label
    assert info.severity == severity


def test_exactly_eight_flags():
    assert len(HEALTH_FLAGS) == 8


def test_unknown_flag_lookup_returns_none():
    assert lookup_flag("made_up_flag") is None


def test_breakdown_splits_by_severity_and_skips_unknown():
    breakdown = build_health_breakdown(["stalled", "budget_concerns", "made_up_flag", "no_activity"])

    assert [f.flag for f in breakdown.critical] == ["stalled", "no_activity"]
    assert [f.flag for f in breakdown.warning] == ["budget_concerns"]
    assert breakdown.inactivity is None


def test_breakdown_empty_for_no_flags():
    assert build_health_breakdown(None).is_empty
    assert build_health_breakdown([]).is_empty


def test_inactivity_alert_from_ten_days():
    assert build_health_breakdown([], days_since_activity=9).inactivity is None

    breakdown = build_health_breakdown([], days_since_activity=12)
    assert breakdown.inactivity.label == "No activity in 12 days"
    assert not breakdown.is_empty


def test_breakdowns_do_not_share_lists():
    first = build_health_breakdown(["stalled"])
    second = build_health_breakdown([])
    assert len(first.critical) == 1
    assert second.critical == []
