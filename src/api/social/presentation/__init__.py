"""Social presentation layer.

Organized by concern (profiles, relationships, feed, privacy); each package
contains its own routes and models.
"""

from __future__ import annotations

from fastapi import APIRouter

from social.presentation.feed.routes import router as feed_router
from social.presentation.privacy.routes import router as privacy_router
from social.presentation.profiles.routes import router as profiles_router
from social.presentation.relationships.routes import router as relationships_router

# Auth is enforced per-endpoint; every handler depends on get_current_viewer.
router = APIRouter(
    prefix="/social",
    tags=["social"],
)

router.include_router(profiles_router)
router.include_router(relationships_router)
router.include_router(feed_router)
router.include_router(privacy_router)

__all__ = ["router"]
