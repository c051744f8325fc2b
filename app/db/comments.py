"""Deal and asset comments. Both tables are insert-only."""

from typing import Any
from uuid import UUID

from app.core.logging import get_logger
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)


def list_deal_comments(deal_id: UUID | str) -> list[dict[str, Any]]:
    """Comments on a deal, newest first; empty list if the query fails."""
    supabase = get_supabase()

    try:
        response = (
            supabase.table("deal_comments")
            .select("*")
            .eq("deal_id", str(deal_id))
            .order("created_at", desc=True)
            .execute()
        )
        return response.data or []
    except Exception as e:
        logger.error(f"Failed to list comments for deal {deal_id}: {e}")
        return []


def insert_deal_comment(
    deal_id: UUID | str,
    comment_text: str,
    user_id: UUID | str | None = None,
) -> dict[str, Any]:
    """
    Insert a deal comment, initially unsynced.

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()
    row = {
        "deal_id": str(deal_id),
        "comment_text": comment_text,
        "user_id": str(user_id) if user_id else None,
        "synced_to_hubspot": False,
    }

    try:
        response = supabase.table("deal_comments").insert(row).execute()
    except Exception as e:
        logger.error(f"Failed to insert comment for deal {deal_id}: {e}", extra={"deal_id": str(deal_id)})
        raise

    return response.data[0] if response.data else row


def mark_deal_comment_synced(comment_id: UUID | str, hubspot_note_id: str | None) -> None:
    """
    Record the HubSpot note id on a comment after a successful sync.

    Failures are logged only; the comment itself stays in place.
    """
    supabase = get_supabase()

    try:
        (
            supabase.table("deal_comments")
            .update({"synced_to_hubspot": True, "hubspot_note_id": hubspot_note_id})
            .eq("id", str(comment_id))
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to mark comment {comment_id} as synced: {e}")


def list_asset_comments(asset_id: UUID | str | None = None) -> list[dict[str, Any]]:
    """
    Asset comments, newest first.

    Args:
        asset_id: Limit to one asset; None lists comments on every asset

    Returns:
        List of comment dicts; empty list if the query fails
    """
    supabase = get_supabase()

    try:
        query = supabase.table("asset_comments").select("*")
        if asset_id is not None:
            query = query.eq("asset_id", str(asset_id))
        response = query.order("created_at", desc=True).execute()
        return response.data or []
    except Exception as e:
        logger.error(f"Failed to list asset comments: {e}")
        return []


def insert_asset_comment(
    asset_id: UUID | str,
    user_id: UUID | str,
    comment: str,
) -> dict[str, Any]:
    """
    Insert an asset comment.

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()
    row = {"asset_id": str(asset_id), "user_id": str(user_id), "comment": comment}

    try:
        response = supabase.table("asset_comments").insert(row).execute()
    except Exception as e:
        logger.error(f"Failed to insert comment for asset {asset_id}: {e}", extra={"asset_id": str(asset_id)})
        raise

    return response.data[0] if response.data else row
