"""Pydantic schemas for deal endpoints."""

from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, Field

from app.core.completeness import CompletenessBand
from app.core.health_flags import HealthBreakdown

DealStage = Literal[
    "Discovery",
    "Demo",
    "Technical Validation",
    "Proposal",
    "Negotiation",
    "Closed Won",
]
CloudProvider = Literal["AWS", "Azure", "GCP", "Multi-Cloud"]


class DealCard(BaseModel):
    """A deal as shown in the pipeline, with its derived indicators."""

    deal: dict[str, Any]
    context: dict[str, Any] | None = None
    completeness_score: int = Field(..., ge=0, le=100)
    completeness_band: CompletenessBand
    days_since_activity: int | None = None
    is_stale: bool = False
    next_action_urgency: Literal["none", "overdue", "due_soon", "on_track"] = "none"
    health: HealthBreakdown
    recommendation_count: int = 0
    tasks_completed: int = 0
    tasks_total: int = 0


class DealListResponse(BaseModel):
    deals: list[DealCard]
    total: int
    cloud_counts: dict[str, int]
    last_synced_at: str | None = None


class PipelineColumn(BaseModel):
    name: str
    count: int
    total_amount: float
    deals: list[DealCard]


class PipelineResponse(BaseModel):
    view: Literal["stage", "timeline"]
    columns: list[PipelineColumn]


class DealDetailResponse(BaseModel):
    """Everything the deal detail view loads for one deal."""

    card: DealCard
    recommendations: list[dict[str, Any]] = []
    activities: list[dict[str, Any]] = []
    comments: list[dict[str, Any]] = []
    missing_fields: list[str] = []


class DealUpdate(BaseModel):
    """Request body for editing a deal."""

    company_name: str | None = Field(None, min_length=1)
    amount: float | None = Field(None, ge=0)
    stage: DealStage | None = None
    close_date: str | None = None
    industry: str | None = None
    cloud_provider: CloudProvider | None = None
    notes: str | None = None
    next_action: str | None = None
    next_action_due_date: str | None = None
    health_flags: list[str] | None = None


class DealContextUpdate(BaseModel):
    """Request body for saving deal context (created on first save)."""

    description: str = ""
    primary_use_case: str = ""
    cloud_provider: CloudProvider | None = None
    primary_persona: str = ""
    meeting_notes: str = ""
    technical_requirements: str = ""
    pain_points: list[str] = Field(default_factory=list)
    competitor_landscape: str = ""


class LinkAssetRequest(BaseModel):
    asset_id: UUID
    linked_by: UUID | None = None


class LinkRecommendationsRequest(BaseModel):
    linked_by: UUID | None = None


class MilestoneOut(BaseModel):
    id: UUID
    deal_id: UUID
    title: str | None = None
    due_date: str
    company_name: str
    is_overdue: bool
    days_until: int
