"""API endpoints for deals, deal context and linked assets."""

from datetime import datetime, timezone
from typing import Any, Literal
from uuid import UUID

from fastapi import APIRouter, HTTPException, Path, Query

from app.core.completeness import completeness_band, compute_completeness_score, missing_fields
from app.core.config import get_settings
from app.core.health_flags import build_health_breakdown
from app.core.logging import get_logger
from app.core.matching import unlinked_recommendations
from app.core.pipeline import (
    cloud_counts,
    days_since_last_activity,
    days_until,
    filter_by_cloud,
    group_by_stage,
    group_by_timeline,
    group_rows_by,
    is_stale,
    latest_sync_time,
    next_action_urgency,
)
from app.core.schemas_deals import (
    DealCard,
    DealContextUpdate,
    DealDetailResponse,
    DealListResponse,
    DealUpdate,
    LinkAssetRequest,
    LinkRecommendationsRequest,
    MilestoneOut,
    PipelineColumn,
    PipelineResponse,
)
from app.db import comments as comments_db
from app.db import deal_activities as activities_db
from app.db import deal_context as context_db
from app.db import deals as deals_db
from app.db import linked_assets as links_db
from app.db import recommendations as recommendations_db

logger = get_logger(__name__)

router = APIRouter(prefix="/deals")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def build_deal_card(
    deal: dict[str, Any],
    context: dict[str, Any] | None,
    activities: list[dict[str, Any]],
    recommendation_count: int,
    tasks: list[dict[str, Any]],
    now: datetime,
) -> DealCard:
    """Derive the pipeline indicators for one deal."""
    score = compute_completeness_score(deal, context)
    days_idle = days_since_last_activity(activities, now)

    return DealCard(
        deal=deal,
        context=context,
        completeness_score=score,
        completeness_band=completeness_band(score),
        days_since_activity=days_idle,
        is_stale=is_stale(days_idle),
        next_action_urgency=next_action_urgency(deal.get("next_action_due_date"), now),
        health=build_health_breakdown(deal.get("health_flags"), days_idle),
        recommendation_count=recommendation_count,
        tasks_completed=sum(1 for t in tasks if t.get("status") == "completed"),
        tasks_total=len(tasks),
    )


def _load_cards(cloud: str | None) -> tuple[list[DealCard], list[dict[str, Any]], dict[str, Any]]:
    deals = deals_db.list_deals()
    contexts = context_db.list_contexts()
    activities = group_rows_by(activities_db.list_activities(), "deal_id")
    recommendations = group_rows_by(recommendations_db.list_recommendations(), "deal_id")
    tasks = group_rows_by(activities_db.list_tasks(), "deal_id")

    now = _now()
    visible = filter_by_cloud(deals, contexts, cloud)
    cards = [
        build_deal_card(
            deal,
            contexts.get(str(deal["id"])),
            activities.get(str(deal["id"]), []),
            len(recommendations.get(str(deal["id"]), [])),
            tasks.get(str(deal["id"]), []),
            now,
        )
        for deal in visible
    ]
    return cards, deals, contexts


@router.get("", response_model=DealListResponse)
async def list_deals(
    cloud: str | None = Query(None, description="Cloud provider filter, or 'all'"),
) -> DealListResponse:
    """
    List deals with completeness, health and staleness indicators.

    Store failures surface as an empty pipeline rather than an error.
    """
    cards, all_deals, contexts = _load_cards(cloud)
    synced = latest_sync_time(all_deals)

    return DealListResponse(
        deals=cards,
        total=len(cards),
        cloud_counts=cloud_counts(all_deals, contexts),
        last_synced_at=synced.isoformat() if synced else None,
    )


@router.get("/pipeline", response_model=PipelineResponse)
async def get_pipeline(
    view: Literal["stage", "timeline"] = Query("stage", description="Grouping"),
    cloud: str | None = Query(None, description="Cloud provider filter, or 'all'"),
) -> PipelineResponse:
    """Deals grouped into stage columns or next-action timeline buckets."""
    cards, _, _ = _load_cards(cloud)
    by_id = {str(card.deal["id"]): card for card in cards}
    deals = [card.deal for card in cards]

    groups = group_by_stage(deals) if view == "stage" else group_by_timeline(deals, _now())

    return PipelineResponse(
        view=view,
        columns=[
            PipelineColumn(
                name=group.name,
                count=group.count,
                total_amount=group.total_amount,
                deals=[by_id[str(d["id"])] for d in group.deals],
            )
            for group in groups
        ],
    )


@router.get("/milestones/upcoming", response_model=list[MilestoneOut])
async def upcoming_milestones() -> list[MilestoneOut]:
    """Open milestones due from a week ago through the next 30 days."""
    now = _now()
    milestones = []
    for row in activities_db.list_upcoming_milestones(now):
        diff = days_until(row.get("due_date"), now)
        if diff is None:
            continue
        milestones.append(
            MilestoneOut(
                id=row["id"],
                deal_id=row["deal_id"],
                title=row.get("title"),
                due_date=row["due_date"],
                company_name=(row.get("deal") or {}).get("company_name") or "Unknown",
                is_overdue=diff < 0,
                days_until=diff,
            )
        )
    return milestones


@router.get("/{deal_id}", response_model=DealDetailResponse)
async def get_deal_detail(
    deal_id: UUID = Path(..., description="Deal UUID"),
) -> DealDetailResponse:
    """Deal detail: indicators plus recommendations, recent activity and comments."""
    deal = deals_db.get_deal(deal_id)
    if deal is None:
        raise HTTPException(status_code=404, detail="Deal not found")

    settings = get_settings()
    context = context_db.get_context(deal_id)
    activities = activities_db.list_activities(deal_id)
    recommendations = recommendations_db.list_recommendations(
        deal_id, limit=settings.DEAL_DETAIL_RECOMMENDATIONS
    )
    tasks = activities_db.list_tasks(deal_id)

    card = build_deal_card(deal, context, activities, len(recommendations), tasks, _now())

    return DealDetailResponse(
        card=card,
        recommendations=recommendations,
        activities=activities[:5],
        comments=comments_db.list_deal_comments(deal_id),
        missing_fields=missing_fields(deal, context),
    )


@router.patch("/{deal_id}")
async def update_deal(
    deal_id: UUID = Path(..., description="Deal UUID"),
    body: DealUpdate = ...,
) -> dict[str, Any]:
    """Edit deal fields (next action, stage, flags, ...)."""
    try:
        updated = deals_db.update_deal(deal_id, body.model_dump(exclude_none=True))
    except Exception as e:
        logger.error(f"Error updating deal {deal_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    if updated is None:
        raise HTTPException(status_code=404, detail="Deal not found")
    return updated


@router.put("/{deal_id}/context")
async def save_deal_context(
    deal_id: UUID = Path(..., description="Deal UUID"),
    body: DealContextUpdate = ...,
) -> dict[str, Any]:
    """Save deal context, creating it on first save."""
    if deals_db.get_deal(deal_id) is None:
        raise HTTPException(status_code=404, detail="Deal not found")

    try:
        return context_db.upsert_context(deal_id, body.model_dump())
    except Exception as e:
        logger.error(f"Error saving context for deal {deal_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@router.get("/{deal_id}/similar")
async def similar_deals(
    deal_id: UUID = Path(..., description="Deal UUID"),
) -> list[dict[str, Any]]:
    """Up to three other deals in the same industry or stage."""
    deal = deals_db.get_deal(deal_id)
    if deal is None:
        raise HTTPException(status_code=404, detail="Deal not found")
    return deals_db.list_similar_deals(deal)


@router.get("/{deal_id}/linked-assets")
async def list_linked_assets(
    deal_id: UUID = Path(..., description="Deal UUID"),
) -> list[dict[str, Any]]:
    return links_db.list_linked_assets(deal_id)


@router.post("/{deal_id}/linked-assets", status_code=201)
async def link_asset(
    deal_id: UUID = Path(..., description="Deal UUID"),
    body: LinkAssetRequest = ...,
) -> dict[str, Any]:
    """Link an asset to the deal at the end of the current list."""
    existing = links_db.list_linked_assets(deal_id)
    linked_by = body.linked_by or (deals_db.get_deal(deal_id) or {}).get("assigned_ae_id")

    try:
        return links_db.link_asset(deal_id, body.asset_id, linked_by, order_index=len(existing))
    except Exception as e:
        logger.error(f"Error linking asset to deal {deal_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@router.post("/{deal_id}/linked-assets/from-recommendations", status_code=201)
async def link_all_recommendations(
    deal_id: UUID = Path(..., description="Deal UUID"),
    body: LinkRecommendationsRequest = LinkRecommendationsRequest(),
) -> list[dict[str, Any]]:
    """Link every recommended asset that is not linked to the deal yet."""
    deal = deals_db.get_deal(deal_id)
    if deal is None:
        raise HTTPException(status_code=404, detail="Deal not found")

    existing = links_db.list_linked_assets(deal_id)
    pending = unlinked_recommendations(recommendations_db.list_recommendations(deal_id), existing)
    linked_by = body.linked_by or deal.get("assigned_ae_id")

    created = []
    try:
        for offset, rec in enumerate(pending):
            created.append(
                links_db.link_asset(
                    deal_id, rec["asset_id"], linked_by, order_index=len(existing) + offset
                )
            )
    except Exception as e:
        logger.error(f"Error linking recommendations to deal {deal_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    return created


@router.delete("/{deal_id}/linked-assets/{link_id}", status_code=204)
async def unlink_asset(
    deal_id: UUID = Path(..., description="Deal UUID"),
    link_id: UUID = Path(..., description="Link UUID"),
) -> None:
    try:
        links_db.unlink_asset(link_id)
    except Exception as e:
        logger.error(f"Error unlinking {link_id} from deal {deal_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e
