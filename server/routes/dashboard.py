"""/api/dashboard and /api/background-images"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from labsite.config import Settings
from labsite.db.store import Store
from labsite.services.dashboard_service import DashboardService
from labsite.services.media_service import MediaService
from server.deps import get_app_settings, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard")
async def dashboard(store: Store = Depends(get_store)):
    return DashboardService(store).summary()


@router.get("/background-images")
async def background_images(settings: Settings = Depends(get_app_settings)):
    try:
        images = MediaService(settings.background_dir).list_background_images()
    except FileNotFoundError:
        logger.warning(f"Background image directory missing: {settings.background_dir}")
        raise HTTPException(status_code=404, detail="Background image directory not found")
    return {"images": images}
