"""API router composition for all route groups."""

from fastapi import APIRouter

from .routes import chat, profile, recommendations, records

api_router = APIRouter()
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(recommendations.router, prefix="/recommendations", tags=["recommendations"])
api_router.include_router(records.router, prefix="/records", tags=["records"])
api_router.include_router(chat.router, prefix="/chat", tags=["chat"])
