"""Deal health flag lookup.

Health flags are stored on the deal by the CRM import; nothing here infers
them. This module maps each known tag to its display label and severity.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

Severity = Literal["critical", "warning"]

INACTIVITY_ALERT_DAYS = 10


class HealthFlagInfo(BaseModel):
    flag: str
    label: str
    description: str
    severity: Severity


class InactivityAlert(BaseModel):
    days_since_activity: int
    label: str
    description: str = "Deal at risk of going cold"


class HealthBreakdown(BaseModel):
    """Flags split by severity, plus the optional inactivity alert."""

    critical: list[HealthFlagInfo] = []
    warning: list[HealthFlagInfo] = []
    inactivity: InactivityAlert | None = None

    @property
    def is_empty(self) -> bool:
        return not self.critical and not self.warning and self.inactivity is None


HEALTH_FLAGS: dict[str, HealthFlagInfo] = {
    info.flag: info
    for info in (
        HealthFlagInfo(
            flag="no_activity",
            label="No Recent Activity",
            description="No engagement in 10+ days",
            severity="critical",
        ),
        HealthFlagInfo(
            flag="missing_economic_buyer",
            label="Missing Economic Buyer",
            description="No decision maker identified or engaged",
            severity="critical",
        ),
        HealthFlagInfo(
            flag="no_response_to_proposal",
            label="Proposal Sent, No Response",
            description="Waiting for feedback on proposal",
            severity="warning",
        ),
        HealthFlagInfo(
            flag="competitive_pressure",
            label="Competitive Pressure Detected",
            description="Customer evaluating alternative solutions",
            severity="warning",
        ),
        HealthFlagInfo(
            flag="follow_up_overdue",
            label="Follow-up Overdue",
            description="Planned follow-up action is past due",
            severity="critical",
        ),
        HealthFlagInfo(
            flag="missing_technical_champion",
            label="No Technical Champion",
            description="Need to identify technical stakeholder",
            severity="warning",
        ),
        HealthFlagInfo(
            flag="stalled",
            label="Deal Stalled",
            description="No clear next steps or momentum",
            severity="critical",
        ),
        HealthFlagInfo(
            flag="budget_concerns",
            label="Budget Questions",
            description="Pricing or budget concerns raised",
            severity="warning",
        ),
    )
}


def lookup_flag(flag: str) -> HealthFlagInfo | None:
    return HEALTH_FLAGS.get(flag)


def build_health_breakdown(
    flags: list[str] | None,
    days_since_activity: int | None = None,
) -> HealthBreakdown:
    """
    Group a deal's stored flags by severity.

    Unknown flag strings are skipped. Flag order within each severity
    follows the order stored on the deal.
    """
    breakdown = HealthBreakdown()

    if days_since_activity is not None and days_since_activity >= INACTIVITY_ALERT_DAYS:
        breakdown.inactivity = InactivityAlert(
            days_since_activity=days_since_activity,
            label=f"No activity in {days_since_activity} days",
        )

    for flag in flags or []:
        info = lookup_flag(flag)
        if info is None:
            continue
        if info.severity == "critical":
            breakdown.critical.append(info)
        else:
            breakdown.warning.append(info)

    return breakdown
