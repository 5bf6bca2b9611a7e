# gallery_api/api/routes/thumbs.py
# Public thumbnail route (mounted without prefix):
# - GET /thumb/{kind}/{path}?h=220   -> cached JPEG thumbnail (original file for videos)
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException

from gallery_api.api.routes.catalog import get_catalog
from gallery_api.core.categories import MediaKind
from gallery_api.services.catalog import Catalog
from gallery_api.utils.http import safe_rel_under
from gallery_api.utils.thumbs import serve_or_build_thumb

public_router = APIRouter(tags=["thumbs"])


def resolve_kind_dir(catalog: Catalog, kind: str) -> Path:
    """Map 'photo'/'video' to its base directory or 404."""
    try:
        return catalog.settings.base_dir(MediaKind(kind))
    except ValueError:
        raise HTTPException(status_code=404, detail=f"unknown media kind '{kind}'") from None


@public_router.get("/thumb/{kind}/{path:path}")
def get_thumb(kind: str, path: str, h: int = 220, catalog: Catalog = Depends(get_catalog)):
    """
    Serve (or build+cache) a JPEG thumbnail at height=h.
    Falls back to the original on error (handled in serve_or_build_thumb).
    """
    if not (16 <= h <= 2048):
        raise HTTPException(status_code=400, detail="h must be 16..2048")
    base = resolve_kind_dir(catalog, kind)
    abs_path = (base / path).resolve()
    if safe_rel_under(base, abs_path) is None:
        raise HTTPException(status_code=403, detail="forbidden path")
    if not abs_path.is_file():
        raise HTTPException(status_code=404, detail="file not found")
    return serve_or_build_thumb(abs_path, h, catalog.settings.thumb_dir)
