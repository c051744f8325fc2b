"""Pydantic schemas for asset, comment and recommendation endpoints."""

from typing import Annotated, Any, Literal
from uuid import UUID

from pydantic import BaseModel, Field, StringConstraints

from app.core.library import AssetCategory, AssetStatus

# Rejects empty and whitespace-only text before anything reaches the store
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

AssetType = Literal["Demo", "Case Study", "Deck", "Proof", "Video", "Tutorial", "Sales Play"]


class ExternalContact(BaseModel):
    name: str
    email: str = ""
    company: str = ""
    role: str = ""


class AssetCreate(BaseModel):
    """Request body for creating an asset."""

    title: str = Field(..., min_length=1, description="Asset title")
    type: AssetType | None = None
    category: AssetCategory = "other"
    description: str = ""
    url: str = ""
    industry_tags: list[str] = Field(default_factory=list)
    persona_tags: list[str] = Field(default_factory=list)
    stage_tags: list[str] = Field(default_factory=list)
    cloud_tags: list[str] = Field(default_factory=list)
    contact_ae_id: UUID | None = None
    contact_engineer_id: UUID | None = None
    external_contacts: list[ExternalContact] = Field(default_factory=list)
    status: AssetStatus = "draft"
    created_by: UUID | None = None


class AssetUpdate(BaseModel):
    """Request body for editing an asset. Every edit records a version."""

    title: str | None = Field(None, min_length=1)
    type: AssetType | None = None
    category: AssetCategory | None = None
    description: str | None = None
    url: str | None = None
    industry_tags: list[str] | None = None
    persona_tags: list[str] | None = None
    stage_tags: list[str] | None = None
    cloud_tags: list[str] | None = None
    contact_ae_id: UUID | None = None
    contact_engineer_id: UUID | None = None
    external_contacts: list[ExternalContact] | None = None
    status: AssetStatus | None = None
    save_as_draft: bool = Field(False, description="Force status to draft")
    changed_by: UUID | None = None
    change_notes: str = ""


class AssetListResponse(BaseModel):
    assets: list[dict[str, Any]]
    total: int
    usage: dict[str, int]
    comment_counts: dict[str, int]


class VersionListResponse(BaseModel):
    versions: list[dict[str, Any]]
    total: int


class FeedbackRequest(BaseModel):
    user_id: UUID
    vote: Literal["up", "down"]


class FeedbackResponse(BaseModel):
    asset_id: UUID
    up: int
    down: int
    user_vote: Literal["up", "down"] | None = None


class DealCommentCreate(BaseModel):
    comment_text: NonBlankStr = Field(..., description="Comment body")
    user_id: UUID | None = None


class AssetCommentCreate(BaseModel):
    comment: NonBlankStr = Field(..., description="Comment body")
    user_id: UUID


class DealCommentResponse(BaseModel):
    comment: dict[str, Any]
    hubspot: dict[str, Any] | None = None


class SearchRequest(BaseModel):
    query: NonBlankStr = Field(..., description="Free-text query")
    user_id: UUID | None = None


class RecommendationListResponse(BaseModel):
    recommendations: list[dict[str, Any]]
    total: int
