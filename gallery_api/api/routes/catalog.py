# gallery_api/api/routes/catalog.py
# Catalog routes only. Keep routes thin; the logic lives in services/catalog.py.
# - GET /api/photo-categories      GET /api/video-categories
# - GET /api/photos                GET /api/videos
# - GET /api/photos/{category}     GET /api/videos/{category}
# - GET /api/media                 (photos then videos)
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request

from gallery_api.core.categories import MediaKind
from gallery_api.schemas.media import CategorySummary, ErrorBody, MediaItem
from gallery_api.services.catalog import Catalog

# Router mounted under /api in main.py
api_router = APIRouter(tags=["catalog"])


def get_catalog(request: Request) -> Catalog:
    """The Catalog built at startup (see main.create_app)."""
    return request.app.state.catalog


@api_router.get("/photo-categories", response_model=List[CategorySummary])
def photo_categories(catalog: Catalog = Depends(get_catalog)):
    return catalog.get_category_summaries(MediaKind.PHOTO)


@api_router.get("/video-categories", response_model=List[CategorySummary])
def video_categories(catalog: Catalog = Depends(get_catalog)):
    return catalog.get_category_summaries(MediaKind.VIDEO)


@api_router.get("/photos", response_model=List[MediaItem])
def all_photos(catalog: Catalog = Depends(get_catalog)):
    return catalog.get_all_items(MediaKind.PHOTO)


@api_router.get("/videos", response_model=List[MediaItem])
def all_videos(catalog: Catalog = Depends(get_catalog)):
    """All categorized videos, or root-level legacy videos when no category has any."""
    return catalog.get_all_items(MediaKind.VIDEO)


@api_router.get("/photos/{category}", response_model=List[MediaItem],
                responses={404: {"model": ErrorBody}})
def photos_in_category(category: str, catalog: Catalog = Depends(get_catalog)):
    return catalog.get_category_items(MediaKind.PHOTO, category)


@api_router.get("/videos/{category}", response_model=List[MediaItem],
                responses={404: {"model": ErrorBody}})
def videos_in_category(category: str, catalog: Catalog = Depends(get_catalog)):
    return catalog.get_category_items(MediaKind.VIDEO, category)


@api_router.get("/media", response_model=List[MediaItem])
def combined_media(catalog: Catalog = Depends(get_catalog)):
    return catalog.get_combined_media()
