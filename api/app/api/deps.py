from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app import llm
from app.db.session import get_session
from app.llm import BaseLanguageModel
from app.models.profile import Profile
from app.services import profile_service
from app.services.recommendation_engine import RecommendationEngine, require_profile


async def get_db() -> AsyncSession:
    async for session in get_session():
        yield session


def get_llm_client() -> BaseLanguageModel:
    return llm.get_llm_client()


async def get_active_profile(session: AsyncSession = Depends(get_db)) -> Profile:
    """Resolve the profile every request operates on; raises ProfileNotFoundError."""
    return await require_profile(session)


async def get_optional_profile(session: AsyncSession = Depends(get_db)) -> Profile | None:
    return await profile_service.get_first_profile(session)


def get_recommendation_engine(
    session: AsyncSession = Depends(get_db),
    llm_client: BaseLanguageModel = Depends(get_llm_client),
) -> RecommendationEngine:
    return RecommendationEngine(session, llm_client)
