"""HTTP routers organized by resource.

- auth: registration, login, logout and token refresh
- users, clients, offers, candidates: paginated listings and lookups,
  all behind the token-pair authentication guard
- analytics: per-day acquisition counts of candidates and clients
"""

from fastapi import APIRouter

from ats_api.routers import analytics, auth, candidates, clients, offers, users
from ats_api.routers.models import ErrorResponse

router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Invalid query or body"},
        401: {"model": ErrorResponse, "description": "Missing or invalid tokens"},
        404: {"model": ErrorResponse, "description": "Not found"},
    }
)

# Public
router.include_router(auth.router)

# Authenticated resources
router.include_router(users.router)
router.include_router(clients.router)
router.include_router(offers.router)
router.include_router(candidates.router)
router.include_router(analytics.router)

__all__ = ["router"]
