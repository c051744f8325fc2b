"""API endpoints for the content library: assets, versions, views and feedback."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, HTTPException, Path, Query

from app.core.library import ContentAnalytics, SortBy, compute_content_analytics, count_by_asset, filter_assets
from app.core.logging import get_logger
from app.core.schemas_assets import (
    AssetCreate,
    AssetListResponse,
    AssetUpdate,
    FeedbackRequest,
    FeedbackResponse,
    VersionListResponse,
)
from app.db import asset_feedback as feedback_db
from app.db import asset_versions as versions_db
from app.db import assets as assets_db
from app.db import comments as comments_db
from app.db import linked_assets as links_db

logger = get_logger(__name__)

router = APIRouter(prefix="/assets")


def _feedback_summary(asset_id: UUID, user_id: UUID | None) -> FeedbackResponse:
    rows = feedback_db.list_feedback(asset_id)
    user_vote = None
    if user_id is not None:
        user_vote = next(
            (r.get("vote") for r in rows if str(r.get("user_id")) == str(user_id)),
            None,
        )
    return FeedbackResponse(
        asset_id=asset_id,
        up=sum(1 for r in rows if r.get("vote") == "up"),
        down=sum(1 for r in rows if r.get("vote") == "down"),
        user_vote=user_vote,
    )


@router.get("", response_model=AssetListResponse)
async def list_assets(
    category: str | None = Query(None, description="Category, or 'all'"),
    q: str | None = Query(None, description="Search title, description and tags"),
    status: str | None = Query(None, description="draft, published or archived"),
    industry: str | None = Query(None),
    persona: str | None = Query(None),
    stage: str | None = Query(None),
    cloud: str | None = Query(None),
    sort_by: SortBy = Query("popular", description="recent, popular or views"),
) -> AssetListResponse:
    """
    List library assets with deal-usage and comment counts.

    Store failures surface as an empty library rather than an error.
    """
    assets = filter_assets(
        assets_db.list_assets(),
        category=category,
        query=q,
        status=status,
        industry=industry,
        persona=persona,
        stage=stage,
        cloud=cloud,
        sort_by=sort_by,
    )

    return AssetListResponse(
        assets=assets,
        total=len(assets),
        usage=count_by_asset(links_db.list_links()),
        comment_counts=count_by_asset(comments_db.list_asset_comments()),
    )


@router.get("/analytics", response_model=ContentAnalytics)
async def content_analytics() -> ContentAnalytics:
    """Library-wide totals, top content and unused assets."""
    return compute_content_analytics(
        assets_db.list_assets(),
        count_by_asset(links_db.list_links()),
    )


@router.post("", status_code=201)
async def create_asset(body: AssetCreate) -> dict[str, Any]:
    try:
        return assets_db.create_asset(body.model_dump(mode="json"), body.created_by)
    except Exception as e:
        logger.error(f"Error creating asset: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@router.get("/{asset_id}")
async def get_asset(
    asset_id: UUID = Path(..., description="Asset UUID"),
) -> dict[str, Any]:
    asset = assets_db.get_asset(asset_id)
    if asset is None:
        raise HTTPException(status_code=404, detail="Asset not found")
    return asset


@router.patch("/{asset_id}")
async def update_asset(
    asset_id: UUID = Path(..., description="Asset UUID"),
    body: AssetUpdate = ...,
) -> dict[str, Any]:
    """
    Edit an asset. Each successful edit appends one version snapshot.

    ``save_as_draft`` forces the status to draft regardless of ``status``.
    """
    updates = body.model_dump(
        mode="json",
        exclude_none=True,
        exclude={"save_as_draft", "changed_by", "change_notes"},
    )
    if body.save_as_draft:
        updates["status"] = "draft"

    try:
        updated = assets_db.update_asset(asset_id, updates, body.changed_by, body.change_notes)
    except Exception as e:
        logger.error(f"Error updating asset {asset_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    if updated is None:
        raise HTTPException(status_code=404, detail="Asset not found")
    return updated


@router.get("/{asset_id}/versions", response_model=VersionListResponse)
async def list_versions(
    asset_id: UUID = Path(..., description="Asset UUID"),
) -> VersionListResponse:
    versions = versions_db.list_versions(asset_id)
    return VersionListResponse(versions=versions, total=len(versions))


@router.post("/{asset_id}/view")
async def record_view(
    asset_id: UUID = Path(..., description="Asset UUID"),
) -> dict[str, Any]:
    """Count a view of the asset."""
    try:
        updated = assets_db.record_asset_view(asset_id)
    except Exception as e:
        logger.error(f"Error recording view for asset {asset_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    if updated is None:
        raise HTTPException(status_code=404, detail="Asset not found")
    return updated


@router.get("/{asset_id}/feedback", response_model=FeedbackResponse)
async def get_feedback(
    asset_id: UUID = Path(..., description="Asset UUID"),
    user_id: UUID | None = Query(None, description="Include this user's vote"),
) -> FeedbackResponse:
    return _feedback_summary(asset_id, user_id)


@router.post("/{asset_id}/feedback", response_model=FeedbackResponse)
async def vote_on_asset(
    asset_id: UUID = Path(..., description="Asset UUID"),
    body: FeedbackRequest = ...,
) -> FeedbackResponse:
    """Toggle a thumbs up/down vote and return the updated tallies."""
    try:
        feedback_db.toggle_vote(asset_id, body.user_id, body.vote)
    except Exception as e:
        logger.error(f"Error saving feedback for asset {asset_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    return _feedback_summary(asset_id, body.user_id)
