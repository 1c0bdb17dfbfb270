"""
API Router Aggregator.

Combines all v1 API routers into a single router for the main app.
"""

from fastapi import APIRouter

from app.api.v1 import auth, profile

api_router = APIRouter()

# Account routes live under /user, as the web client expects
api_router.include_router(
    auth.router,
    prefix="/user",
    tags=["Authentication"],
)

api_router.include_router(
    profile.router,
    prefix="/user",
    tags=["Profile"],
)
