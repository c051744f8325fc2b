"""Per-user up/down votes on assets.

Rows are only inserted or removed; switching a vote replaces the row.
"""

from typing import Any, Literal
from uuid import UUID

from app.core.logging import get_logger
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)

Vote = Literal["up", "down"]


def get_vote(asset_id: UUID | str, user_id: UUID | str) -> dict[str, Any] | None:
    supabase = get_supabase()

    response = (
        supabase.table("asset_feedback")
        .select("*")
        .eq("asset_id", str(asset_id))
        .eq("user_id", str(user_id))
        .limit(1)
        .execute()
    )
    return response.data[0] if response.data else None


def toggle_vote(asset_id: UUID | str, user_id: UUID | str, vote: Vote) -> Vote | None:
    """
    Toggle a user's vote on an asset.

    Casting the same vote again clears it; casting the opposite vote
    replaces it.

    Returns:
        The user's vote after the toggle, or None if cleared

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()

    try:
        existing = get_vote(asset_id, user_id)
        if existing is not None:
            supabase.table("asset_feedback").delete().eq("id", str(existing["id"])).execute()
            if existing.get("vote") == vote:
                logger.info(f"Cleared {vote} vote on asset {asset_id}", extra={"asset_id": str(asset_id)})
                return None

        supabase.table("asset_feedback").insert(
            {"asset_id": str(asset_id), "user_id": str(user_id), "vote": vote}
        ).execute()
    except Exception as e:
        logger.error(f"Failed to toggle vote on asset {asset_id}: {e}", extra={"asset_id": str(asset_id)})
        raise

    return vote


def list_feedback(asset_id: UUID | str) -> list[dict[str, Any]]:
    """All votes on an asset; empty list if the query fails."""
    supabase = get_supabase()

    try:
        response = (
            supabase.table("asset_feedback")
            .select("*")
            .eq("asset_id", str(asset_id))
            .execute()
        )
        return response.data or []
    except Exception as e:
        logger.error(f"Failed to list feedback for asset {asset_id}: {e}")
        return []
