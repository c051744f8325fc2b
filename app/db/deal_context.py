"""Deal context database operations.

A deal has at most one context row. It does not exist until the first save.
"""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from app.core.logging import get_logger
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)

CONTEXT_FIELDS = {
    "description",
    "primary_use_case",
    "cloud_provider",
    "primary_persona",
    "meeting_notes",
    "technical_requirements",
    "pain_points",
    "competitor_landscape",
}


def list_contexts() -> dict[str, dict[str, Any]]:
    """
    Load every context row keyed by deal id.

    Returns:
        Mapping deal_id -> context dict; empty if the query fails
    """
    supabase = get_supabase()

    try:
        response = supabase.table("deal_context").select("*").execute()
    except Exception as e:
        logger.error(f"Failed to list deal contexts: {e}")
        return {}

    return {str(row["deal_id"]): row for row in response.data or []}


def get_context(deal_id: UUID | str) -> dict[str, Any] | None:
    """Get the context row for a deal, or None if it was never created."""
    supabase = get_supabase()

    try:
        response = (
            supabase.table("deal_context")
            .select("*")
            .eq("deal_id", str(deal_id))
            .maybe_single()
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to get context for deal {deal_id}: {e}", extra={"deal_id": str(deal_id)})
        return None

    return response.data if response else None


def upsert_context(deal_id: UUID | str, fields: dict[str, Any]) -> dict[str, Any]:
    """
    Save deal context, creating the row on first save.

    Args:
        deal_id: Deal UUID
        fields: Context values; unknown keys are ignored

    Returns:
        The saved context row

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()
    data = {k: v for k, v in fields.items() if k in CONTEXT_FIELDS}
    existing = get_context(deal_id)

    try:
        if existing is None:
            response = (
                supabase.table("deal_context")
                .insert({"deal_id": str(deal_id), **data})
                .execute()
            )
            logger.info(f"Created context for deal {deal_id}", extra={"deal_id": str(deal_id)})
        else:
            data["updated_at"] = datetime.now(timezone.utc).isoformat()
            response = (
                supabase.table("deal_context")
                .update(data)
                .eq("id", str(existing["id"]))
                .execute()
            )
    except Exception as e:
        logger.error(f"Failed to save context for deal {deal_id}: {e}", extra={"deal_id": str(deal_id)})
        raise

    if response.data:
        return response.data[0]
    return {**(existing or {}), "deal_id": str(deal_id), **data}
