# gallery_api/main.py: only app wiring, no endpoints here.
# Run with:  uvicorn --factory gallery_api.main:create_app --port 3001   (or the `gallery-api` script)
# No app is built at import time; config is read when create_app() runs.
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from gallery_api.api.routes import catalog, health, thumbs
from gallery_api.core.categories import MediaKind
from gallery_api.core.config import Settings, ensure_layout, load_settings
from gallery_api.core.errors import CatalogIOError, CategoryNotFound
from gallery_api.core.log_setup import setup_logging
from gallery_api.services.catalog import Catalog

log = logging.getLogger("gallery.main")


async def _category_not_found(request: Request, exc: CategoryNotFound) -> JSONResponse:
    log.info("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def _catalog_io_error(request: Request, exc: CatalogIOError) -> JSONResponse:
    # full path goes to the log only; clients get a generic message
    log.error("%s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "failed to scan media catalog"})


def _log_startup(settings: Settings) -> None:
    log.info("media base: %s", settings.media_base)
    for kind in MediaKind:
        log.info("%s dir: %s (categories: %s)", kind.value, settings.base_dir(kind),
                 ", ".join(settings.registry.keys(kind)) or "-")
    if settings.config_path:
        log.info("config: %s", settings.config_path)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()

    if settings.create_dirs:
        for d in ensure_layout(settings):
            log.info("created directory %s", d)

    app = FastAPI(title="Media Gallery API", version="1.0")
    app.state.settings = settings
    app.state.catalog = Catalog(settings)

    # CORS (front end is served separately, e.g. Vite dev)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CategoryNotFound, _category_not_found)
    app.add_exception_handler(CatalogIOError, _catalog_io_error)

    # API routers
    app.include_router(catalog.api_router, prefix="/api")
    app.include_router(health.api_router, prefix="/api")

    # public (non-API) routes: thumbnails and the raw media tree
    app.include_router(thumbs.public_router)
    app.mount(
        settings.assets_prefix,
        StaticFiles(directory=settings.media_base, check_dir=False),
        name="assets",
    )

    _log_startup(settings)
    return app


def run() -> None:
    """Console entry point: configure logging and serve with uvicorn."""
    import uvicorn

    settings = load_settings()
    setup_logging(settings.log_level, settings.logs_dir)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
