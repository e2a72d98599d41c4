"""API router configuration."""

from fastapi import APIRouter

from src.modules.api_keys.interfaces.router import router as api_keys_router
from src.modules.applications.interfaces.router import router as applications_router
from src.modules.auth.interfaces.router import router as auth_router
from src.modules.users.interfaces.router import router as users_router

api_router = APIRouter()

# Auth
api_router.include_router(auth_router)

# Users
api_router.include_router(users_router)

# Applications
api_router.include_router(applications_router)

# API Keys
api_router.include_router(api_keys_router)
