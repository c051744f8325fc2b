"""Deals database operations.

Deals are created by the CRM import and only edited here, never deleted.
"""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from app.core.logging import get_logger
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)

# Columns the API is allowed to edit
EDITABLE_FIELDS = {
    "company_name",
    "amount",
    "stage",
    "close_date",
    "industry",
    "cloud_provider",
    "notes",
    "next_action",
    "next_action_due_date",
    "health_flags",
}


def list_deals() -> list[dict[str, Any]]:
    """
    List all deals ordered by close date (soonest first).

    Returns:
        List of deal dicts; empty list if the query fails
    """
    supabase = get_supabase()

    try:
        response = supabase.table("deals").select("*").order("close_date").execute()
        return response.data or []
    except Exception as e:
        logger.error(f"Failed to list deals: {e}")
        return []


def get_deal(deal_id: UUID | str) -> dict[str, Any] | None:
    """
    Get a deal by ID.

    Returns:
        Deal dict, or None if missing or the query fails
    """
    supabase = get_supabase()

    try:
        response = (
            supabase.table("deals")
            .select("*")
            .eq("id", str(deal_id))
            .maybe_single()
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to get deal {deal_id}: {e}", extra={"deal_id": str(deal_id)})
        return None

    return response.data if response else None


def update_deal(deal_id: UUID | str, updates: dict[str, Any]) -> dict[str, Any] | None:
    """
    Update editable deal fields.

    Args:
        deal_id: Deal UUID
        updates: Field values; keys outside EDITABLE_FIELDS are ignored

    Returns:
        Updated deal dict, or None if no row matched

    Raises:
        Exception: If database operation fails
    """
    clean = {k: v for k, v in updates.items() if k in EDITABLE_FIELDS}
    if not clean:
        return get_deal(deal_id)

    clean["updated_at"] = datetime.now(timezone.utc).isoformat()

    supabase = get_supabase()
    try:
        response = supabase.table("deals").update(clean).eq("id", str(deal_id)).execute()
    except Exception as e:
        logger.error(f"Failed to update deal {deal_id}: {e}", extra={"deal_id": str(deal_id)})
        raise

    logger.info(f"Updated deal {deal_id}: {sorted(clean)}", extra={"deal_id": str(deal_id)})
    return response.data[0] if response.data else None


def list_similar_deals(deal: dict[str, Any], limit: int = 3) -> list[dict[str, Any]]:
    """
    Deals in the same industry or the same stage, excluding the deal itself.

    Returns:
        Up to ``limit`` deal dicts; empty list if the query fails
    """
    filters = []
    if deal.get("industry"):
        filters.append(f"industry.eq.{deal['industry']}")
    if deal.get("stage"):
        filters.append(f"stage.eq.{deal['stage']}")
    if not filters:
        return []

    supabase = get_supabase()
    try:
        response = (
            supabase.table("deals")
            .select("*")
            .neq("id", str(deal["id"]))
            .or_(",".join(filters))
            .limit(limit)
            .execute()
        )
        return response.data or []
    except Exception as e:
        logger.error(f"Failed to list similar deals for {deal.get('id')}: {e}")
        return []
