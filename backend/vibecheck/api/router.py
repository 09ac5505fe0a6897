"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from vibecheck.api.routes import auth, users, relationships, vibes

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(relationships.router)
api_router.include_router(vibes.router)
