"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from journal.api.routes import (
    auth, users, diaries, tags, images, todos, stats, export
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(diaries.router)
api_router.include_router(tags.router)
api_router.include_router(images.router)
api_router.include_router(todos.router)
api_router.include_router(stats.router)
api_router.include_router(export.router)
