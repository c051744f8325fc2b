"""Stored deal -> asset recommendations."""

from typing import Any
from uuid import UUID

from app.core.logging import get_logger
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)

# Embed the recommended asset row alongside each recommendation
_WITH_ASSET = "*, asset:assets(*)"


def list_recommendations(
    deal_id: UUID | str | None = None,
    limit: int | None = None,
) -> list[dict[str, Any]]:
    """
    Recommendations with their asset, highest confidence first.

    Args:
        deal_id: Limit to one deal; None returns every deal's recommendations
        limit: Optional maximum number of rows

    Returns:
        List of recommendation dicts; empty list if the query fails
    """
    supabase = get_supabase()

    try:
        query = supabase.table("recommendations").select(_WITH_ASSET)
        if deal_id is not None:
            query = query.eq("deal_id", str(deal_id))
        query = query.order("confidence_score", desc=True)
        if limit is not None:
            query = query.limit(limit)
        response = query.execute()
        return response.data or []
    except Exception as e:
        logger.error(f"Failed to list recommendations (deal={deal_id}): {e}")
        return []
