"""API endpoints for asset recommendations and recent searches."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Path

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.matching import ScoredAsset, more_like_this, recommend_for_query
from app.core.recent_searches import push_recent_search
from app.core.schemas_assets import RecommendationListResponse, SearchRequest
from app.db import assets as assets_db
from app.db import recommendations as recommendations_db
from app.db import user_preferences as preferences_db

logger = get_logger(__name__)

router = APIRouter()


@router.post("/recommendations/search", response_model=list[ScoredAsset])
async def search_recommendations(body: SearchRequest) -> list[ScoredAsset]:
    """
    Recommend assets for a free-text query.

    Every asset in the first page is returned with the fixed query-match
    confidence. When a user id is given the query is added to their recent
    searches.
    """
    settings = get_settings()

    if body.user_id is not None:
        existing = preferences_db.get_recent_searches(body.user_id)
        updated = push_recent_search(existing, body.query, limit=settings.RECENT_SEARCHES_LIMIT)
        if updated != existing:
            preferences_db.save_recent_searches(body.user_id, updated)

    assets = assets_db.list_assets(limit=settings.RECOMMENDATION_PAGE_SIZE)
    logger.debug(f"Query recommendations over {len(assets)} assets")
    return recommend_for_query(body.query, assets)


@router.get("/recommendations/similar/{asset_id}", response_model=list[ScoredAsset])
async def similar_assets(
    asset_id: UUID = Path(..., description="Reference asset UUID"),
) -> list[ScoredAsset]:
    """Assets sharing the reference asset's type or an industry/cloud tag."""
    reference = assets_db.get_asset(asset_id)
    if reference is None:
        raise HTTPException(status_code=404, detail="Asset not found")

    settings = get_settings()
    candidates = assets_db.list_assets(
        limit=settings.RECOMMENDATION_PAGE_SIZE,
        exclude_id=asset_id,
    )
    return more_like_this(reference, candidates, limit=settings.SIMILAR_ASSETS_LIMIT)


@router.get("/deals/{deal_id}/recommendations", response_model=RecommendationListResponse)
async def deal_recommendations(
    deal_id: UUID = Path(..., description="Deal UUID"),
) -> RecommendationListResponse:
    """Stored recommendations for a deal, highest confidence first."""
    recommendations = recommendations_db.list_recommendations(deal_id)
    return RecommendationListResponse(
        recommendations=recommendations,
        total=len(recommendations),
    )


@router.get("/users/{user_id}/recent-searches", response_model=list[str])
async def recent_searches(
    user_id: UUID = Path(..., description="User UUID"),
) -> list[str]:
    return preferences_db.get_recent_searches(user_id)
