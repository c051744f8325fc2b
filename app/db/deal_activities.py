"""Read-only deal feeds: activities, milestones, tasks."""

from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from app.core.logging import get_logger
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)

MILESTONE_LOOKBACK_DAYS = 7
MILESTONE_LOOKAHEAD_DAYS = 30


def list_activities(
    deal_id: UUID | str | None = None,
    limit: int | None = None,
) -> list[dict[str, Any]]:
    """Activities newest first, optionally for a single deal."""
    supabase = get_supabase()

    try:
        query = supabase.table("deal_activities").select("*")
        if deal_id is not None:
            query = query.eq("deal_id", str(deal_id))
        query = query.order("created_at", desc=True)
        if limit is not None:
            query = query.limit(limit)
        response = query.execute()
        return response.data or []
    except Exception as e:
        logger.error(f"Failed to list activities (deal={deal_id}): {e}")
        return []


def list_upcoming_milestones(now: datetime) -> list[dict[str, Any]]:
    """
    Open milestones due between a week ago and 30 days from now.

    Each row embeds ``deal.company_name``.
    """
    supabase = get_supabase()
    start = (now - timedelta(days=MILESTONE_LOOKBACK_DAYS)).isoformat()
    end = (now + timedelta(days=MILESTONE_LOOKAHEAD_DAYS)).isoformat()

    try:
        response = (
            supabase.table("deal_milestones")
            .select("*, deal:deals(company_name)")
            .eq("completed", False)
            .gte("due_date", start)
            .lte("due_date", end)
            .order("due_date")
            .execute()
        )
        return response.data or []
    except Exception as e:
        logger.error(f"Failed to list upcoming milestones: {e}")
        return []


def list_tasks(deal_id: UUID | str | None = None) -> list[dict[str, Any]]:
    """Tasks newest first, optionally for a single deal."""
    supabase = get_supabase()

    try:
        query = supabase.table("deal_tasks").select("*")
        if deal_id is not None:
            query = query.eq("deal_id", str(deal_id))
        response = query.order("created_at", desc=True).execute()
        return response.data or []
    except Exception as e:
        logger.error(f"Failed to list tasks (deal={deal_id}): {e}")
        return []
