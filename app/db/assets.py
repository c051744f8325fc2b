"""Assets (sales content) database operations."""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from app.core.logging import get_logger
from app.db.asset_versions import append_version
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)

ASSET_FIELDS = {
    "title",
    "type",
    "category",
    "description",
    "url",
    "industry_tags",
    "persona_tags",
    "stage_tags",
    "cloud_tags",
    "contact_ae_id",
    "contact_engineer_id",
    "external_contacts",
    "status",
    "when_to_use",
    "positioning_angle",
    "common_next_steps",
    "best_for_stages",
    "best_for_personas",
    "what_it_is_not",
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _clean(data: dict[str, Any]) -> dict[str, Any]:
    clean = {}
    for k, v in data.items():
        if k not in ASSET_FIELDS:
            continue
        clean[k] = str(v) if isinstance(v, UUID) else v
    return clean


def list_assets(
    limit: int | None = None,
    exclude_id: UUID | str | None = None,
) -> list[dict[str, Any]]:
    """
    List assets, newest first.

    Args:
        limit: Optional page size
        exclude_id: Asset to leave out (used for "more like this")

    Returns:
        List of asset dicts; empty list if the query fails
    """
    supabase = get_supabase()

    try:
        query = supabase.table("assets").select("*")
        if exclude_id is not None:
            query = query.neq("id", str(exclude_id))
        query = query.order("created_at", desc=True)
        if limit is not None:
            query = query.limit(limit)
        response = query.execute()
        return response.data or []
    except Exception as e:
        logger.error(f"Failed to list assets: {e}")
        return []


def get_asset(asset_id: UUID | str) -> dict[str, Any] | None:
    """Get an asset by ID, or None if missing or the query fails."""
    supabase = get_supabase()

    try:
        response = (
            supabase.table("assets")
            .select("*")
            .eq("id", str(asset_id))
            .maybe_single()
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to get asset {asset_id}: {e}", extra={"asset_id": str(asset_id)})
        return None

    return response.data if response else None


def create_asset(data: dict[str, Any], created_by: UUID | str | None) -> dict[str, Any]:
    """
    Create an asset with zero views.

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()
    row = {
        **_clean(data),
        "created_by": str(created_by) if created_by else None,
        "view_count": 0,
    }

    try:
        response = supabase.table("assets").insert(row).execute()
    except Exception as e:
        logger.error(f"Failed to create asset '{row.get('title')}': {e}")
        raise

    created = response.data[0] if response.data else row
    logger.info(f"Created asset '{row.get('title')}'", extra={"asset_id": str(created.get("id"))})
    return created


def update_asset(
    asset_id: UUID | str,
    updates: dict[str, Any],
    changed_by: UUID | str | None,
    change_notes: str = "",
) -> dict[str, Any] | None:
    """
    Edit an asset and append exactly one version row for the edit.

    Args:
        asset_id: Asset UUID
        updates: Field values; unknown keys are ignored
        changed_by: Profile id of the editor
        change_notes: Note stored on the version row

    Returns:
        Updated asset dict, or None if no asset matched (no version written)

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()
    clean = _clean(updates)
    clean["updated_at"] = _now()

    try:
        response = supabase.table("assets").update(clean).eq("id", str(asset_id)).execute()
    except Exception as e:
        logger.error(f"Failed to update asset {asset_id}: {e}", extra={"asset_id": str(asset_id)})
        raise

    if not response.data:
        return None

    updated = response.data[0]
    append_version(updated, changed_by, change_notes)
    return updated


def record_asset_view(asset_id: UUID | str) -> dict[str, Any] | None:
    """
    Increment view_count and stamp last_accessed_at.

    The count is read then written back, so concurrent views of the same
    asset are last-write-wins and may undercount.

    Returns:
        Updated asset dict, or None if the asset does not exist

    Raises:
        Exception: If database operation fails
    """
    asset = get_asset(asset_id)
    if asset is None:
        return None

    supabase = get_supabase()
    try:
        response = (
            supabase.table("assets")
            .update(
                {
                    "view_count": (asset.get("view_count") or 0) + 1,
                    "last_accessed_at": _now(),
                }
            )
            .eq("id", str(asset_id))
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to record view for asset {asset_id}: {e}", extra={"asset_id": str(asset_id)})
        raise

    return response.data[0] if response.data else None
