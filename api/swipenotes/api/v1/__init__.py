"""
API v1 router aggregation.
"""
from fastapi import APIRouter
from swipenotes.api.v1.endpoints import (
    users, documents, cards, sessions, statistics, projects, tags
)

api_router = APIRouter()

# Each router defines its own prefix
api_router.include_router(users.router)
api_router.include_router(documents.router)
api_router.include_router(cards.router)
api_router.include_router(sessions.router)
api_router.include_router(statistics.router)
api_router.include_router(projects.router)
api_router.include_router(tags.router)
