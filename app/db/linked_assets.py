"""Assets linked to deals by account executives."""

from typing import Any
from uuid import UUID

from app.core.logging import get_logger
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)


def list_linked_assets(deal_id: UUID | str) -> list[dict[str, Any]]:
    """Links for a deal with their asset, in display order."""
    supabase = get_supabase()

    try:
        response = (
            supabase.table("linked_assets")
            .select("*, asset:assets(*)")
            .eq("deal_id", str(deal_id))
            .order("order_index")
            .execute()
        )
        return response.data or []
    except Exception as e:
        logger.error(f"Failed to list linked assets for deal {deal_id}: {e}")
        return []


def list_links(asset_id: UUID | str | None = None) -> list[dict[str, Any]]:
    """
    Bare link rows (asset_id, deal_id) for usage counting.

    Args:
        asset_id: Limit to deals using one asset; None returns every link
    """
    supabase = get_supabase()

    try:
        query = supabase.table("linked_assets").select("asset_id, deal_id")
        if asset_id is not None:
            query = query.eq("asset_id", str(asset_id))
        response = query.execute()
        return response.data or []
    except Exception as e:
        logger.error(f"Failed to list asset links: {e}")
        return []


def link_asset(
    deal_id: UUID | str,
    asset_id: UUID | str,
    linked_by: UUID | str | None,
    order_index: int,
) -> dict[str, Any]:
    """
    Link an asset to a deal.

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()
    row = {
        "deal_id": str(deal_id),
        "asset_id": str(asset_id),
        "linked_by": str(linked_by) if linked_by else None,
        "order_index": order_index,
    }

    try:
        response = supabase.table("linked_assets").insert(row).execute()
    except Exception as e:
        logger.error(f"Failed to link asset {asset_id} to deal {deal_id}: {e}", extra={"deal_id": str(deal_id)})
        raise

    logger.info(f"Linked asset {asset_id} to deal {deal_id}", extra={"deal_id": str(deal_id)})
    return response.data[0] if response.data else row


def unlink_asset(link_id: UUID | str) -> None:
    """
    Remove a deal/asset link.

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()

    try:
        supabase.table("linked_assets").delete().eq("id", str(link_id)).execute()
    except Exception as e:
        logger.error(f"Failed to unlink {link_id}: {e}")
        raise
