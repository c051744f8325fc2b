"""API router for v1 endpoints."""

from fastapi import APIRouter

from app.api import assets, comments, copilot, deals, integrations, recommendations

router = APIRouter()

# Deal pipeline, detail, context and linked assets
router.include_router(deals.router, tags=["deals"])

# Deal and asset comments (deal comments sync to HubSpot)
router.include_router(comments.router, tags=["comments"])

# Content library
router.include_router(assets.router, tags=["assets"])

# Query / "more like this" recommendations and recent searches
router.include_router(recommendations.router, tags=["recommendations"])

# Template-based copilot
router.include_router(copilot.router, tags=["copilot"])

# HubSpot
router.include_router(integrations.router, tags=["integrations"])
