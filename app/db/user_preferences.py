"""Per-user key-value preferences (recent searches)."""

from uuid import UUID

from app.core.logging import get_logger
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)


def get_recent_searches(user_id: str | UUID) -> list[str]:
    """Recent searches for a user, most recent first. Empty on any failure."""
    supabase = get_supabase()

    try:
        result = (
            supabase.table("user_preferences")
            .select("recent_searches")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to read recent searches for user {user_id}: {e}")
        return []

    if result.data:
        return list(result.data[0].get("recent_searches") or [])
    return []


def save_recent_searches(user_id: str | UUID, searches: list[str]) -> None:
    """
    Replace a user's recent searches.

    Failures are logged only; losing a recent-search entry is harmless.
    """
    supabase = get_supabase()

    try:
        supabase.table("user_preferences").upsert(
            {"user_id": str(user_id), "recent_searches": searches},
            on_conflict="user_id",
        ).execute()
    except Exception as e:
        logger.warning(f"Failed to save recent searches for user {user_id}: {e}")
