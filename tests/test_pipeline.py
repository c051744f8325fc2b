"""Tests for deal pipeline grouping, staleness and urgency."""

from datetime import datetime, timedelta, timezone

import pytest

from app.core.pipeline import (
    STAGES,
    cloud_counts,
    days_since_last_activity,
    days_until,
    filter_by_cloud,
    group_by_stage,
    group_by_timeline,
    group_rows_by,
    is_stale,
    latest_sync_time,
    next_action_urgency,
    parse_timestamp,
    timeline_bucket,
)

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def _iso(dt: datetime) -> str:
    return dt.isoformat().replace("+00:00", "Z")


class TestParseTimestamp:
    def test_z_suffix(self):
        assert parse_timestamp("2026-03-10T12:00:00Z") == NOW

    def test_naive_date_is_utc(self):
        assert parse_timestamp("2026-03-10") == datetime(2026, 3, 10, tzinfo=timezone.utc)

    def test_empty(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None


class TestActivity:
    def test_days_since_uses_newest_row(self):
        activities = [
            {"created_at": _iso(NOW - timedelta(days=3, hours=5))},
            {"created_at": _iso(NOW - timedelta(days=20))},
        ]
        assert days_since_last_activity(activities, NOW) == 3

    def test_no_activity(self):
        assert days_since_last_activity([], NOW) is None

    @pytest.mark.parametrize("days,stale", [(None, False), (0, False), (6, False), (7, True), (30, True)])
    def test_is_stale(self, days, stale):
        assert is_stale(days) is stale


class TestNextActionUrgency:
    def test_none_without_due_date(self):
        assert next_action_urgency(None, NOW) == "none"

    def test_overdue(self):
        assert next_action_urgency(_iso(NOW - timedelta(days=2)), NOW) == "overdue"

    def test_due_soon(self):
        assert next_action_urgency(_iso(NOW + timedelta(hours=20)), NOW) == "due_soon"

    def test_on_track(self):
        assert next_action_urgency(_iso(NOW + timedelta(days=5)), NOW) == "on_track"

    def test_days_until_rounds_up(self):
        assert days_until(_iso(NOW + timedelta(hours=1)), NOW) == 1


class TestGroupByStage:
    def test_every_stage_present_in_order(self):
        groups = group_by_stage([])
        assert [g.name for g in groups] == list(STAGES)
        assert all(g.count == 0 for g in groups)

    def test_counts_and_amounts(self):
        deals = [
            {"id": "1", "stage": "Demo", "amount": 100000},
            {"id": "2", "stage": "Demo", "amount": None},
            {"id": "3", "stage": "Proposal", "amount": "50000"},
            {"id": "4", "stage": "Unknown Stage", "amount": 1},
        ]
        groups = {g.name: g for g in group_by_stage(deals)}

        assert groups["Demo"].count == 2
        assert groups["Demo"].total_amount == 100000
        assert groups["Proposal"].total_amount == 50000
        assert sum(g.count for g in groups.values()) == 3


class TestTimeline:
    @pytest.mark.parametrize(
        "offset,bucket",
        [
            (timedelta(days=-1), "Overdue"),
            (timedelta(0), "Today"),
            (timedelta(days=3), "This Week"),
            (timedelta(days=7), "This Week"),
            (timedelta(days=10), "Next Week"),
            (timedelta(days=30), "Later"),
        ],
    )
    def test_bucket(self, offset, bucket):
        deal = {"next_action_due_date": _iso(NOW + offset)}
        assert timeline_bucket(deal, NOW) == bucket

    def test_no_due_date_is_later(self):
        assert timeline_bucket({}, NOW) == "Later"

    def test_empty_buckets_omitted(self):
        deals = [
            {"id": "1", "next_action_due_date": _iso(NOW - timedelta(days=3))},
            {"id": "2"},
        ]
        groups = group_by_timeline(deals, NOW)
        assert [g.name for g in groups] == ["Overdue", "Later"]


class TestCloudFilter:
    deals = [{"id": "a"}, {"id": "b"}, {"id": "c"}]
    contexts = {"a": {"cloud_provider": "AWS"}, "b": {"cloud_provider": "GCP"}}

    def test_all_keeps_everything(self):
        assert filter_by_cloud(self.deals, self.contexts, "all") == self.deals
        assert filter_by_cloud(self.deals, self.contexts, None) == self.deals

    def test_provider(self):
        assert [d["id"] for d in filter_by_cloud(self.deals, self.contexts, "AWS")] == ["a"]

    def test_counts(self):
        counts = cloud_counts(self.deals, self.contexts)
        assert counts == {"all": 3, "AWS": 1, "Azure": 0, "GCP": 1, "Multi-Cloud": 0}


def test_group_rows_by_preserves_order():
    rows = [{"deal_id": "x", "n": 1}, {"deal_id": "y", "n": 2}, {"deal_id": "x", "n": 3}]
    grouped = group_rows_by(rows, "deal_id")
    assert [r["n"] for r in grouped["x"]] == [1, 3]


def test_latest_sync_time():
    deals = [
        {"last_synced_at": "2026-03-01T00:00:00Z"},
        {"last_synced_at": None},
        {"last_synced_at": "2026-03-05T00:00:00Z"},
    ]
    assert latest_sync_time(deals) == datetime(2026, 3, 5, tzinfo=timezone.utc)
    assert latest_sync_time([]) is None
