from fastapi import APIRouter, Depends

from app.api.deps import get_recommendation_engine
from app.schema.recommendation import ChatRequest, ChatResponse
from app.services.recommendation_engine import RecommendationEngine

router = APIRouter()


@router.post("", response_model=ChatResponse)
async def chat(
    payload: ChatRequest,
    engine: RecommendationEngine = Depends(get_recommendation_engine),
) -> ChatResponse:
    """Send one message to the agent and return its reply."""
    reply = await engine.chat(payload.message)
    return ChatResponse(reply=reply)
