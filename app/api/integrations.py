"""Third-party integration endpoints."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from app.core.hubspot import HubSpotSyncError, HubSpotSyncResult, sync_comment_to_hubspot
from app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/integrations")


class SyncCommentRequest(BaseModel):
    hubspot_deal_id: str | None = None
    comment: str | None = None


@router.post("/hubspot/sync-comment", response_model=HubSpotSyncResult)
async def sync_comment(body: SyncCommentRequest) -> HubSpotSyncResult:
    """
    Push a comment to HubSpot as a deal note.

    Runs in demo mode when no HubSpot token is configured.
    """
    try:
        return await sync_comment_to_hubspot(body.hubspot_deal_id, body.comment)
    except HubSpotSyncError as e:
        logger.warning(f"Rejected HubSpot sync request: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e
