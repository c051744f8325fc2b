"""API endpoints for deal and asset comments."""

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, HTTPException, Path

from app.core.hubspot import HubSpotSyncError, sync_comment_to_hubspot
from app.core.logging import get_logger, log_with_context
from app.core.schemas_assets import AssetCommentCreate, DealCommentCreate, DealCommentResponse
from app.db import comments as comments_db
from app.db import deals as deals_db

logger = get_logger(__name__)

router = APIRouter()


@router.get("/deals/{deal_id}/comments")
async def list_deal_comments(
    deal_id: UUID = Path(..., description="Deal UUID"),
) -> list[dict[str, Any]]:
    return comments_db.list_deal_comments(deal_id)


@router.post("/deals/{deal_id}/comments", response_model=DealCommentResponse, status_code=201)
async def create_deal_comment(
    deal_id: UUID = Path(..., description="Deal UUID"),
    body: DealCommentCreate = ...,
) -> DealCommentResponse:
    """
    Add a comment to a deal, then push it to HubSpot when the deal is linked.

    The comment is stored first. A failed sync is reported in ``hubspot``
    and leaves the comment with ``synced_to_hubspot=false``.
    """
    deal = deals_db.get_deal(deal_id)
    if deal is None:
        raise HTTPException(status_code=404, detail="Deal not found")

    try:
        comment = comments_db.insert_deal_comment(deal_id, body.comment_text, body.user_id)
    except Exception as e:
        logger.error(f"Error adding comment to deal {deal_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    hubspot_deal_id = deal.get("hubspot_deal_id")
    if not hubspot_deal_id:
        return DealCommentResponse(comment=comment)

    try:
        result = await sync_comment_to_hubspot(hubspot_deal_id, body.comment_text)
    except HubSpotSyncError as e:
        logger.warning(f"Skipped HubSpot sync for deal {deal_id}: {e}")
        return DealCommentResponse(comment=comment)

    if result.success and comment.get("id"):
        log_with_context(
            logger,
            logging.INFO,
            "Deal comment synced to HubSpot",
            deal_id=str(deal_id),
            hubspot_note_id=result.hubspot_note_id,
            demo_mode=result.demo_mode,
        )
        comments_db.mark_deal_comment_synced(comment["id"], result.hubspot_note_id)
        comment = {
            **comment,
            "synced_to_hubspot": True,
            "hubspot_note_id": result.hubspot_note_id,
        }
    elif not result.success:
        logger.error(
            f"HubSpot sync failed for deal {deal_id}: {result.error}",
            extra={"deal_id": str(deal_id)},
        )

    return DealCommentResponse(comment=comment, hubspot=result.model_dump())


@router.get("/assets/{asset_id}/comments")
async def list_asset_comments(
    asset_id: UUID = Path(..., description="Asset UUID"),
) -> list[dict[str, Any]]:
    return comments_db.list_asset_comments(asset_id)


@router.post("/assets/{asset_id}/comments", status_code=201)
async def create_asset_comment(
    asset_id: UUID = Path(..., description="Asset UUID"),
    body: AssetCommentCreate = ...,
) -> dict[str, Any]:
    try:
        return comments_db.insert_asset_comment(asset_id, body.user_id, body.comment)
    except Exception as e:
        logger.error(f"Error adding comment to asset {asset_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e
