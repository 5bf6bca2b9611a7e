# gallery_api/api/routes/health.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from gallery_api.api.routes.catalog import get_catalog
from gallery_api.core.categories import MediaKind
from gallery_api.schemas.media import HealthStatus
from gallery_api.services.catalog import Catalog

api_router = APIRouter(tags=["health"])


@api_router.get("/health", response_model=HealthStatus)
def health(catalog: Catalog = Depends(get_catalog)) -> HealthStatus:
    # no media paths here: the response is public
    registry = catalog.registry
    return HealthStatus(
        status="OK",
        message="media gallery service is running",
        timestamp=datetime.now(timezone.utc).isoformat(timespec="seconds"),
        photo_categories=registry.keys(MediaKind.PHOTO),
        video_categories=registry.keys(MediaKind.VIDEO),
    )
