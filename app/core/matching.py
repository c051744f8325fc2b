"""Asset recommendation heuristics.

Two fixed-confidence policies, both operating on asset rows already fetched
from the store:

- query match: every asset in the fetched page is returned with the same
  confidence and a reason quoting the query. There is no relevance ranking.
- "more like this": candidates sharing the reference asset's type, or any
  industry / cloud tag, in source order.

The confidence values are placeholders, not the output of a ranking model.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

QUERY_MATCH_CONFIDENCE = 0.92
SIMILAR_MATCH_CONFIDENCE = 0.85
DEFAULT_SIMILAR_LIMIT = 5


class ScoredAsset(BaseModel):
    """An asset paired with a heuristic confidence and justification."""

    asset_id: str
    asset: dict[str, Any]
    reason: str
    confidence_score: float = Field(..., ge=0, le=1)


def _tags(asset: dict[str, Any], key: str) -> list[str]:
    return asset.get(key) or []


def _overlaps(a: list[str], b: list[str]) -> bool:
    return any(tag in b for tag in a)


def _same_type(reference: dict[str, Any], candidate: dict[str, Any]) -> bool:
    return candidate.get("type") is not None and candidate.get("type") == reference.get("type")


def recommend_for_query(query: str, assets: list[dict[str, Any]]) -> list[ScoredAsset]:
    """
    Wrap each fetched asset as a query recommendation.

    Args:
        query: Free-text query as typed by the user
        assets: Asset rows (already limited to the page size)

    Returns:
        One ScoredAsset per asset, source order, confidence 0.92
    """
    reason = f'Matches your query: "{query}"'
    return [
        ScoredAsset(
            asset_id=str(asset["id"]),
            asset=asset,
            reason=reason,
            confidence_score=QUERY_MATCH_CONFIDENCE,
        )
        for asset in assets
    ]


def is_similar(reference: dict[str, Any], candidate: dict[str, Any]) -> bool:
    """True when candidate shares type, an industry tag, or a cloud tag."""
    if _same_type(reference, candidate):
        return True
    if _overlaps(_tags(candidate, "industry_tags"), _tags(reference, "industry_tags")):
        return True
    return _overlaps(_tags(candidate, "cloud_tags"), _tags(reference, "cloud_tags"))


def more_like_this(
    reference: dict[str, Any],
    candidates: list[dict[str, Any]],
    limit: int = DEFAULT_SIMILAR_LIMIT,
) -> list[ScoredAsset]:
    """
    Find assets similar to a reference asset.

    The reference itself is never part of the result, even when the
    candidate pool contains it.

    Args:
        reference: The asset the user clicked "more like this" on
        candidates: Candidate asset rows in store order
        limit: Maximum number of results

    Returns:
        At most ``limit`` ScoredAssets, confidence 0.85
    """
    reference_id = str(reference.get("id"))
    title = reference.get("title", "")

    results: list[ScoredAsset] = []
    for candidate in candidates:
        if len(results) >= limit:
            break
        if str(candidate.get("id")) == reference_id:
            continue
        if not is_similar(reference, candidate):
            continue

        matched_on = "type" if _same_type(reference, candidate) else "tags"
        results.append(
            ScoredAsset(
                asset_id=str(candidate["id"]),
                asset=candidate,
                reason=f"Similar to {title} - matches {matched_on}",
                confidence_score=SIMILAR_MATCH_CONFIDENCE,
            )
        )

    return results


def unlinked_recommendations(
    recommendations: list[dict[str, Any]],
    linked_assets: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Stored recommendations whose asset is not linked to the deal yet."""
    linked_ids = {str(link.get("asset_id")) for link in linked_assets}
    return [rec for rec in recommendations if str(rec.get("asset_id")) not in linked_ids]
