"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from notekeeper.api.v1.endpoints import auth, notes

router = APIRouter()

# Notes endpoints
router.include_router(notes.router, prefix="/notes", tags=["notes"])

# PIN login endpoints
router.include_router(auth.router, prefix="/auth", tags=["auth"])
