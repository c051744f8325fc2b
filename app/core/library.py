"""Content library filtering, sorting and usage analytics.

Pure-logic module; assets, link rows and comment rows come from the store.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel

from app.core.pipeline import parse_timestamp

AssetCategory = Literal[
    "concept_demo",
    "case_study",
    "testimonial",
    "one_pager",
    "video",
    "tutorial",
    "sales_play",
    "proof",
    "deck",
    "blueprint",
    "other",
]
AssetStatus = Literal["draft", "published", "archived"]
SortBy = Literal["recent", "popular", "views"]

TOP_N = 5

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class CreatorCount(BaseModel):
    user_id: str
    count: int


class ContentAnalytics(BaseModel):
    """Library-wide usage summary."""

    total_content: int
    published_content: int
    draft_content: int
    total_views: int
    by_category: dict[str, int]
    top_viewed: list[dict[str, Any]]
    most_used: list[dict[str, Any]]
    unused: list[dict[str, Any]]
    top_creators: list[CreatorCount]


def _views(asset: dict[str, Any]) -> int:
    return asset.get("view_count") or 0


def _matches_query(asset: dict[str, Any], query: str) -> bool:
    q = query.lower()
    if q in (asset.get("title") or "").lower():
        return True
    if q in (asset.get("description") or "").lower():
        return True
    tags = (asset.get("industry_tags") or []) + (asset.get("persona_tags") or [])
    return any(q in tag.lower() for tag in tags)


def _has_tag(asset: dict[str, Any], key: str, tag: str) -> bool:
    return tag in (asset.get(key) or [])


def _recency(asset: dict[str, Any]) -> datetime:
    try:
        return parse_timestamp(asset.get("last_accessed_at") or asset.get("created_at")) or _EPOCH
    except ValueError:
        return _EPOCH


def filter_assets(
    assets: list[dict[str, Any]],
    category: str | None = None,
    query: str | None = None,
    status: str | None = None,
    industry: str | None = None,
    persona: str | None = None,
    stage: str | None = None,
    cloud: str | None = None,
    sort_by: SortBy = "popular",
) -> list[dict[str, Any]]:
    """
    Apply the content library filters and sort order.

    Args:
        assets: Asset rows
        category: Category to keep (``all`` or None keeps every category)
        query: Case-insensitive text matched against title, description,
            industry and persona tags
        status: Exact status
        industry, persona, stage, cloud: Exact tag that must be present
        sort_by: ``popular`` / ``views`` by view count, ``recent`` by last
            access (falling back to creation time)

    Returns:
        New filtered and sorted list
    """
    filtered = list(assets)

    if category and category != "all":
        filtered = [a for a in filtered if a.get("category") == category]
    if query:
        filtered = [a for a in filtered if _matches_query(a, query)]
    if status:
        filtered = [a for a in filtered if a.get("status") == status]
    if industry:
        filtered = [a for a in filtered if _has_tag(a, "industry_tags", industry)]
    if persona:
        filtered = [a for a in filtered if _has_tag(a, "persona_tags", persona)]
    if stage:
        filtered = [a for a in filtered if _has_tag(a, "stage_tags", stage)]
    if cloud:
        filtered = [a for a in filtered if _has_tag(a, "cloud_tags", cloud)]

    if sort_by in ("popular", "views"):
        filtered.sort(key=_views, reverse=True)
    elif sort_by == "recent":
        filtered.sort(key=_recency, reverse=True)

    return filtered


def count_by_asset(rows: Iterable[dict[str, Any]]) -> dict[str, int]:
    """Count rows (links, comments, ...) per ``asset_id``."""
    return dict(Counter(str(row.get("asset_id")) for row in rows))


def compute_content_analytics(
    assets: list[dict[str, Any]],
    usage: dict[str, int],
) -> ContentAnalytics:
    """
    Summarize library content and how often it is linked to deals.

    Args:
        assets: All asset rows
        usage: Link count per asset id (see ``count_by_asset``)
    """
    by_category = Counter(a.get("category") for a in assets if a.get("category"))
    creators = Counter(str(a["created_by"]) for a in assets if a.get("created_by"))

    return ContentAnalytics(
        total_content=len(assets),
        published_content=sum(1 for a in assets if a.get("status") == "published"),
        draft_content=sum(1 for a in assets if a.get("status") == "draft"),
        total_views=sum(_views(a) for a in assets),
        by_category=dict(by_category),
        top_viewed=sorted(assets, key=_views, reverse=True)[:TOP_N],
        most_used=sorted(assets, key=lambda a: usage.get(str(a.get("id")), 0), reverse=True)[:TOP_N],
        unused=[a for a in assets if not usage.get(str(a.get("id")))],
        top_creators=[
            CreatorCount(user_id=user_id, count=count)
            for user_id, count in creators.most_common(TOP_N)
        ],
    )
