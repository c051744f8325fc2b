"""Deal pipeline views: stage columns, next-action timeline, staleness.

Pure functions over deal rows. ``now`` is always passed in so callers (and
tests) control the clock.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel

STAGES: tuple[str, ...] = (
    "Discovery",
    "Demo",
    "Technical Validation",
    "Proposal",
    "Negotiation",
    "Closed Won",
)

CLOUD_PROVIDERS: tuple[str, ...] = ("AWS", "Azure", "GCP", "Multi-Cloud")

TIMELINE_BUCKETS: tuple[str, ...] = ("Overdue", "Today", "This Week", "Next Week", "Later")

STALE_AFTER_DAYS = 7
SECONDS_PER_DAY = 86_400

NextActionUrgency = Literal["none", "overdue", "due_soon", "on_track"]


class DealGroup(BaseModel):
    """A column of deals with its summed pipeline amount."""

    name: str
    deals: list[dict[str, Any]]
    count: int
    total_amount: float


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse a Supabase date/timestamp into an aware datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def days_until(due: str | datetime | None, now: datetime) -> int | None:
    """Whole days until ``due``, rounded up; negative once it has passed."""
    due_at = parse_timestamp(due)
    if due_at is None:
        return None
    return math.ceil((due_at - now).total_seconds() / SECONDS_PER_DAY)


def days_since_last_activity(activities: list[dict[str, Any]], now: datetime) -> int | None:
    """
    Floor of days since the most recent activity.

    Args:
        activities: Activity rows for one deal, newest first
        now: Reference time

    Returns:
        Day count, or None when the deal has no activity
    """
    if not activities:
        return None
    last = parse_timestamp(activities[0].get("created_at"))
    if last is None:
        return None
    return math.floor((now - last).total_seconds() / SECONDS_PER_DAY)


def is_stale(days_since_activity: int | None) -> bool:
    return days_since_activity is not None and days_since_activity >= STALE_AFTER_DAYS


def next_action_urgency(due: str | datetime | None, now: datetime) -> NextActionUrgency:
    diff = days_until(due, now)
    if diff is None:
        return "none"
    if diff < 0:
        return "overdue"
    if diff <= 1:
        return "due_soon"
    return "on_track"


def _amount(deal: dict[str, Any]) -> float:
    try:
        return float(deal.get("amount") or 0)
    except (TypeError, ValueError):
        return 0.0


def _group(name: str, deals: list[dict[str, Any]]) -> DealGroup:
    return DealGroup(
        name=name,
        deals=deals,
        count=len(deals),
        total_amount=sum(_amount(d) for d in deals),
    )


def group_by_stage(deals: Iterable[dict[str, Any]]) -> list[DealGroup]:
    """One group per pipeline stage, in stage order, including empty stages."""
    by_stage: dict[str, list[dict[str, Any]]] = {stage: [] for stage in STAGES}
    for deal in deals:
        stage = deal.get("stage")
        if stage in by_stage:
            by_stage[stage].append(deal)
    return [_group(stage, by_stage[stage]) for stage in STAGES]


def timeline_bucket(deal: dict[str, Any], now: datetime) -> str:
    diff = days_until(deal.get("next_action_due_date"), now)
    if diff is None:
        return "Later"
    if diff < 0:
        return "Overdue"
    if diff == 0:
        return "Today"
    if diff <= 7:
        return "This Week"
    if diff <= 14:
        return "Next Week"
    return "Later"


def group_by_timeline(deals: Iterable[dict[str, Any]], now: datetime) -> list[DealGroup]:
    """Group deals by next-action due date; empty buckets are omitted."""
    buckets: dict[str, list[dict[str, Any]]] = {name: [] for name in TIMELINE_BUCKETS}
    for deal in deals:
        buckets[timeline_bucket(deal, now)].append(deal)
    return [_group(name, buckets[name]) for name in TIMELINE_BUCKETS if buckets[name]]


def filter_by_cloud(
    deals: list[dict[str, Any]],
    contexts: dict[str, dict[str, Any]],
    provider: str | None,
) -> list[dict[str, Any]]:
    """Keep deals whose context names ``provider``; ``all``/None keeps everything."""
    if not provider or provider == "all":
        return deals
    return [
        deal
        for deal in deals
        if (contexts.get(str(deal.get("id"))) or {}).get("cloud_provider") == provider
    ]


def cloud_counts(
    deals: list[dict[str, Any]],
    contexts: dict[str, dict[str, Any]],
) -> dict[str, int]:
    counts = {"all": len(deals)}
    for provider in CLOUD_PROVIDERS:
        counts[provider] = len(filter_by_cloud(deals, contexts, provider))
    return counts


def group_rows_by(rows: Iterable[dict[str, Any]], key: str) -> dict[str, list[dict[str, Any]]]:
    """Bucket rows by a foreign key, preserving row order within each bucket."""
    grouped: dict[str, list[dict[str, Any]]] = {}
    for row in rows:
        grouped.setdefault(str(row.get(key)), []).append(row)
    return grouped


def latest_sync_time(deals: Iterable[dict[str, Any]]) -> datetime | None:
    """Most recent ``last_synced_at`` across deals."""
    latest: datetime | None = None
    for deal in deals:
        synced = parse_timestamp(deal.get("last_synced_at"))
        if synced is not None and (latest is None or synced > latest):
            latest = synced
    return latest
