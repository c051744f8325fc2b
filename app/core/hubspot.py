"""HubSpot sync for deal comments.

Async httpx wrapper around the HubSpot notes API (same pattern as the other
outbound service clients). When no access token is configured the sync runs
in demo mode and returns a mock note id instead of calling HubSpot.
"""

import time
from datetime import datetime, timezone

import httpx
from pydantic import BaseModel

from app.core.config import get_settings
from app.core.logging import get_logger

logger = get_logger(__name__)

DEMO_NOTE_PREFIX = "demo-note-"


class HubSpotSyncError(ValueError):
    """Raised when a sync request is missing its deal id or comment."""


class HubSpotSyncResult(BaseModel):
    """Outcome of a single comment sync. Failures are data, not exceptions."""

    success: bool
    hubspot_note_id: str | None = None
    demo_mode: bool = False
    message: str | None = None
    error: str | None = None
    details: str | None = None


def _demo_result() -> HubSpotSyncResult:
    return HubSpotSyncResult(
        success=True,
        hubspot_note_id=f"{DEMO_NOTE_PREFIX}{int(time.time() * 1000)}",
        demo_mode=True,
        message="Comment synced successfully (demo mode)",
    )


async def sync_comment_to_hubspot(
    hubspot_deal_id: str | None,
    comment: str | None,
) -> HubSpotSyncResult:
    """
    Post a comment as a note on a HubSpot deal.

    Args:
        hubspot_deal_id: HubSpot deal id the note is attached to
        comment: Note body

    Returns:
        HubSpotSyncResult. HubSpot and transport errors are reported with
        ``success=False``; nothing is retried.

    Raises:
        HubSpotSyncError: If the deal id or comment is missing
    """
    if not hubspot_deal_id or not comment:
        raise HubSpotSyncError("Missing hubspot_deal_id or comment")

    settings = get_settings()

    if not settings.HUBSPOT_ACCESS_TOKEN:
        logger.info("Running in demo mode - simulating HubSpot sync")
        return _demo_result()

    url = f"{settings.HUBSPOT_API_URL}/crm/v3/objects/deals/{hubspot_deal_id}/notes"
    payload = {
        "properties": {
            "hs_note_body": comment,
            "hs_timestamp": datetime.now(timezone.utc).isoformat(),
        }
    }

    try:
        async with httpx.AsyncClient(timeout=settings.HUBSPOT_TIMEOUT_SECONDS) as client:
            response = await client.post(
                url,
                headers={
                    "Authorization": f"Bearer {settings.HUBSPOT_ACCESS_TOKEN}",
                    "Content-Type": "application/json",
                },
                json=payload,
            )

            if not response.is_success:
                logger.error(
                    f"HubSpot API error for deal {hubspot_deal_id}: "
                    f"status={response.status_code} body={response.text}"
                )
                return HubSpotSyncResult(
                    success=False,
                    error="Failed to sync to HubSpot",
                    details=response.text,
                )

            data = response.json()
            note_id = data.get("id")
    except httpx.HTTPError as e:
        logger.error(f"HubSpot request failed for deal {hubspot_deal_id}: {e}")
        return HubSpotSyncResult(success=False, error=str(e))
    except (ValueError, AttributeError) as e:
        # 2xx with a body that is not a JSON object
        logger.error(f"Unreadable HubSpot response for deal {hubspot_deal_id}: {e}")
        return HubSpotSyncResult(
            success=False,
            error="Unreadable response from HubSpot",
            details=str(e),
        )

    logger.info(f"Synced comment to HubSpot deal {hubspot_deal_id}, note_id={note_id}")
    return HubSpotSyncResult(success=True, hubspot_note_id=str(note_id) if note_id else None)
