"""Pattern-matched copilot responses.

No model is called. Deal details and email recipients are pulled from the
pasted text with regular expressions and dropped into fixed templates.
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel

UNKNOWN = "Unknown"

_STAGE_RE = re.compile(r"stage:\s*(.+?)(?:\n|$)", re.IGNORECASE)
_AMOUNT_RE = re.compile(r"amount:\s*\$?([\d,]+)k?", re.IGNORECASE)
_CLOSE_DATE_RE = re.compile(r"close\s+date:\s*(.+?)(?:\n|$)", re.IGNORECASE)
_COMPETITORS_RE = re.compile(r"competitors?:\s*(.+?)(?:\n|$)", re.IGNORECASE)
_CONTACT_RE = re.compile(r"contact:\s*(.+?)(?:\(|$)", re.IGNORECASE | re.MULTILINE)
_COMPANY_RE = re.compile(r"email to\s+(.+?)\s+(?:after|M&A)", re.IGNORECASE)

FOLLOW_UP_SUBJECT = "Following up on our conversation"


class DealInfo(BaseModel):
    stage: str = UNKNOWN
    amount: str = "0"
    close_date: str = UNKNOWN
    competitors: str = UNKNOWN


class EmailInfo(BaseModel):
    contact: str = "Contact"
    company: str = "the prospect"


class Insight(BaseModel):
    type: Literal["positive", "warning", "opportunity"]
    title: str
    description: str


class NextStep(BaseModel):
    priority: Literal["high", "medium", "low"]
    action: str
    reasoning: str
    timeline: str


class SuggestedAsset(BaseModel):
    title: str
    type: str
    reason: str


class DealInsights(BaseModel):
    deal: DealInfo
    insights: list[Insight]
    next_steps: list[NextStep]
    recommended_assets: list[SuggestedAsset]


class FollowUpEmail(BaseModel):
    to: str
    subject: str
    body: str


def _first_group(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def extract_deal_info(text: str) -> DealInfo:
    """Pull ``stage:``, ``amount:``, ``close date:`` and ``competitors:`` values."""
    return DealInfo(
        stage=_first_group(_STAGE_RE, text) or UNKNOWN,
        amount=_first_group(_AMOUNT_RE, text) or "0",
        close_date=_first_group(_CLOSE_DATE_RE, text) or UNKNOWN,
        competitors=_first_group(_COMPETITORS_RE, text) or UNKNOWN,
    )


def extract_email_info(text: str) -> EmailInfo:
    """Pull the contact name and the company named in 'email to <company> after ...'."""
    info = EmailInfo()
    contact = _first_group(_CONTACT_RE, text)
    if contact:
        info.contact = contact
    company = _first_group(_COMPANY_RE, text)
    if company:
        info.company = company
    return info


def build_deal_insights(text: str) -> DealInsights:
    """Fixed insight set, with the competitor line filled from the text."""
    deal = extract_deal_info(text)
    competitors = deal.competitors if deal.competitors != UNKNOWN else "incumbent vendors"

    return DealInsights(
        deal=deal,
        insights=[
            Insight(
                type="positive",
                title="Strong Position",
                description=(
                    f"Deal is in {deal.stage} with an active evaluation, which shows "
                    "engagement and product fit."
                ),
            ),
            Insight(
                type="warning",
                title="Competitive Risk",
                description=(
                    f"{competitors} have existing market presence. Differentiate on AI "
                    "capabilities and industry-specific features."
                ),
            ),
            Insight(
                type="opportunity",
                title="Expansion Potential",
                description=(
                    "A successful pilot can lead to expansion across other teams and "
                    "business units."
                ),
            ),
        ],
        next_steps=[
            NextStep(
                priority="high",
                action="Share customer success stories from similar companies",
                reasoning="Build confidence by showing proven results in comparable environments",
                timeline="This Week",
            ),
            NextStep(
                priority="high",
                action="Schedule an executive business review with the economic buyer",
                reasoning="Secure buy-in and discuss ROI metrics from the pilot",
                timeline="This Week",
            ),
            NextStep(
                priority="medium",
                action=f"Prepare a competitive battle card against {competitors}",
                reasoning="Address competitor comparisons proactively with clear differentiation",
                timeline="Next Week",
            ),
            NextStep(
                priority="medium",
                action="Create an expansion roadmap showing phase 2-3 opportunities",
                reasoning="Position this as a strategic partnership, not a point solution",
                timeline="Next Week",
            ),
        ],
        recommended_assets=[
            SuggestedAsset(
                title="Customer Success Story",
                type="Case Study",
                reason="Similar industry and use case with proven ROI metrics",
            ),
            SuggestedAsset(
                title="Competitive Comparison Guide",
                type="Battle Card",
                reason=f"Direct comparison against {competitors}",
            ),
            SuggestedAsset(
                title="Technical Deep-Dive Demo",
                type="Demo",
                reason="Shows advanced capabilities for the technical evaluation team",
            ),
        ],
    )


def draft_follow_up_email(text: str) -> FollowUpEmail:
    """Fill the follow-up email template from pasted meeting notes."""
    info = extract_email_info(text)
    body = f"""Hi {info.contact},

Thank you for taking the time to meet with me. I enjoyed learning more about {info.company}'s priorities and the challenges your team is facing.

Based on our discussion, I wanted to share a few resources that directly address your needs:

- Case study: how a similar customer cut manual review time with our platform
- Demo: a 10-minute walkthrough of the workflow we discussed

I'd love to schedule a technical deep-dive with your team to review pilot scope and success metrics.

Proposed Next Steps:
- Technical deep-dive session with your team (60 mins)
- Review pilot scope and success metrics
- Discuss implementation timeline and support model

Would next Tuesday or Wednesday work for you and the team?

Looking forward to helping {info.company} move this forward.

Best regards,
[Your Name]"""

    return FollowUpEmail(to=info.contact, subject=FOLLOW_UP_SUBJECT, body=body)
