"""Deal completeness scoring.

Pure-logic scoring module, no DB access.
Operates on deal and deal_context rows already fetched by the deals endpoint.
The score only drives sorting and colouring in the pipeline view.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Literal

CompletenessBand = Literal["complete", "partial", "sparse"]


@dataclass(frozen=True)
class PresenceCheck:
    """A single weighted field-presence check."""

    name: str
    source: Literal["deal", "context"]
    weight: int
    is_present: Callable[[Any], bool] = bool


def _field(record: Any, name: str) -> Any:
    if record is None:
        return None
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def _positive(value: Any) -> bool:
    try:
        return value is not None and float(value) > 0
    except (TypeError, ValueError):
        return False


def _non_empty_list(value: Any) -> bool:
    return bool(value) and len(value) > 0


COMPLETENESS_CHECKS: tuple[PresenceCheck, ...] = (
    PresenceCheck("company_name", "deal", 5),
    PresenceCheck("amount", "deal", 5, _positive),
    PresenceCheck("close_date", "deal", 5),
    PresenceCheck("industry", "deal", 10),
    PresenceCheck("description", "context", 15),
    PresenceCheck("primary_use_case", "context", 15),
    PresenceCheck("cloud_provider", "context", 10),
    PresenceCheck("primary_persona", "context", 10),
    PresenceCheck("meeting_notes", "context", 15),
    PresenceCheck("technical_requirements", "context", 5),
    PresenceCheck("pain_points", "context", 5, _non_empty_list),
)

TOTAL_WEIGHT = sum(check.weight for check in COMPLETENESS_CHECKS)


def compute_completeness_score(deal: Any, context: Any | None = None) -> int:
    """
    Compute the 0-100 completeness score for a deal.

    Args:
        deal: Deal row (dict or model)
        context: Optional deal_context row. ``None`` scores every context
            check as absent rather than failing.

    Returns:
        Integer percentage of the total weight that is present
    """
    earned = 0
    for check in COMPLETENESS_CHECKS:
        record = deal if check.source == "deal" else context
        if check.is_present(_field(record, check.name)):
            earned += check.weight

    return round(earned / TOTAL_WEIGHT * 100)


def missing_fields(deal: Any, context: Any | None = None) -> list[str]:
    """Names of the checks that did not pass, heaviest first."""
    missing = [
        check
        for check in COMPLETENESS_CHECKS
        if not check.is_present(_field(deal if check.source == "deal" else context, check.name))
    ]
    missing.sort(key=lambda c: c.weight, reverse=True)
    return [check.name for check in missing]


def completeness_band(score: int) -> CompletenessBand:
    if score >= 75:
        return "complete"
    if score >= 50:
        return "partial"
    return "sparse"
