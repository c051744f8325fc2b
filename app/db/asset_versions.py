"""Asset version history (append-only)."""

from typing import Any
from uuid import UUID

from app.core.logging import get_logger
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)

# Asset columns captured in every version snapshot
SNAPSHOT_FIELDS = (
    "title",
    "description",
    "url",
    "category",
    "industry_tags",
    "persona_tags",
    "stage_tags",
    "cloud_tags",
    "contact_ae_id",
    "contact_engineer_id",
    "external_contacts",
    "status",
)

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"
MAX_VERSION_ATTEMPTS = 3


def get_latest_version_number(asset_id: UUID | str) -> int:
    """
    Highest version number recorded for an asset.

    Returns:
        Latest version number, 0 when the asset has no history

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()

    response = (
        supabase.table("asset_versions")
        .select("version_number")
        .eq("asset_id", str(asset_id))
        .order("version_number", desc=True)
        .limit(1)
        .execute()
    )

    if not response.data:
        return 0
    return int(response.data[0]["version_number"])


def _is_unique_violation(error: Exception) -> bool:
    return getattr(error, "code", None) == UNIQUE_VIOLATION


def append_version(
    asset: dict[str, Any],
    changed_by: UUID | str | None,
    change_notes: str = "",
) -> dict[str, Any]:
    """
    Append one version row holding the asset's current state.

    The number is ``latest + 1``. The table's unique (asset_id, version_number)
    constraint rejects a number taken by a concurrent edit; the number is then
    recomputed, up to MAX_VERSION_ATTEMPTS times.

    Args:
        asset: Asset row after the edit
        changed_by: Profile id of the editor
        change_notes: Free-text note entered with the edit

    Returns:
        Inserted version row

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()
    asset_id = str(asset["id"])

    for attempt in range(1, MAX_VERSION_ATTEMPTS + 1):
        try:
            version_number = get_latest_version_number(asset_id) + 1
            row = {
                "asset_id": asset_id,
                "version_number": version_number,
                "changed_by": str(changed_by) if changed_by else None,
                "change_notes": change_notes,
                **{field: asset.get(field) for field in SNAPSHOT_FIELDS},
            }
            response = supabase.table("asset_versions").insert(row).execute()
            break
        except Exception as e:
            if _is_unique_violation(e) and attempt < MAX_VERSION_ATTEMPTS:
                logger.warning(
                    f"Version {version_number} of asset {asset_id} already taken, recomputing",
                    extra={"asset_id": asset_id},
                )
                continue
            logger.error(f"Failed to append version for asset {asset_id}: {e}", extra={"asset_id": asset_id})
            raise

    logger.info(f"Recorded version {version_number} of asset {asset_id}", extra={"asset_id": asset_id})
    return response.data[0] if response.data else row


def list_versions(asset_id: UUID | str) -> list[dict[str, Any]]:
    """
    Version history for an asset, newest first.

    Returns:
        List of version dicts; empty list if the query fails
    """
    supabase = get_supabase()

    try:
        response = (
            supabase.table("asset_versions")
            .select("*")
            .eq("asset_id", str(asset_id))
            .order("version_number", desc=True)
            .execute()
        )
        return response.data or []
    except Exception as e:
        logger.error(f"Failed to list versions for asset {asset_id}: {e}")
        return []
