"""Copilot endpoints. Responses are template-based; no model is called."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.core.copilot import DealInsights, FollowUpEmail, build_deal_insights, draft_follow_up_email

router = APIRouter(prefix="/copilot")


class CopilotRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Pasted deal notes or meeting summary")


@router.post("/deal-insights", response_model=DealInsights)
async def deal_insights(body: CopilotRequest) -> DealInsights:
    return build_deal_insights(body.text)


@router.post("/follow-up-email", response_model=FollowUpEmail)
async def follow_up_email(body: CopilotRequest) -> FollowUpEmail:
    return draft_follow_up_email(body.text)
