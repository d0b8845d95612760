"""
Image Cache Service

FastAPI application wiring one ImageCache per running app.

Run:
    cd backend
    uvicorn server:create_app --factory --port 8000
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from image_cache import (
    HttpImagePrefetcher,
    ImageCache,
    ImageCacheSettings,
    ImagePrefetcher,
    router as image_cache_router,
)

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[ImageCacheSettings] = None,
    prefetcher: Optional[ImagePrefetcher] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Service settings (defaults to environment)
        prefetcher: Image prefetcher to inject; an HttpImagePrefetcher is
            created and closed with the app when omitted
    """
    settings = settings or ImageCacheSettings.from_env()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = None
        active = prefetcher
        if active is None:
            owned = HttpImagePrefetcher(settings.prefetch_config())
            active = owned

        app.state.image_cache = ImageCache(active, max_size=settings.max_entries)
        logger.info(f"[Server] Image cache ready (max {settings.max_entries} entries)")
        try:
            yield
        finally:
            if owned is not None:
                await owned.close()
            logger.info("[Server] Image cache shut down")

    app = FastAPI(title="Image Cache Service", lifespan=lifespan)
    app.include_router(image_cache_router)
    return app

