"""
Image Cache API Routes

Provides endpoints for:
- Preloading images ahead of display
- Registering images loaded by the client
- Cache inspection (contains, stats) and management (clear)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .cache import ImageCache
from .prefetcher import PrefetchError

logger = logging.getLogger(__name__)

# ============================================
# Request/Response Models
# ============================================


class PreloadRequest(BaseModel):
    """Request model for batch preloading."""
    uris: List[str] = Field(..., min_length=1, description="Image URIs to preload")


class PreloadResponse(BaseModel):
    """Response model for batch preloading."""
    success: bool
    requested: int
    cache_size: int


class RegisterRequest(BaseModel):
    """Request model for registering a displayed image."""
    uri: str = Field(..., min_length=1, description="URI of an image that finished loading")


class RegisterResponse(BaseModel):
    success: bool
    cache_size: int


class ContainsResponse(BaseModel):
    uri: str
    cached: bool


# ============================================
# Dependencies
# ============================================


def get_image_cache(request: Request) -> ImageCache:
    """Resolve the application's shared ImageCache."""
    return request.app.state.image_cache


# ============================================
# Router
# ============================================

router = APIRouter(prefix="/api/image-cache", tags=["Image Cache"])


# ============================================
# Endpoints
# ============================================

@router.post("/preload", response_model=PreloadResponse)
async def preload_images(
    request: PreloadRequest,
    cache: ImageCache = Depends(get_image_cache),
):
    """
    Preload images so they are warm before display.

    Already cached URIs are skipped. If any prefetch fails the request
    fails with 502, but images that did load remain cached.

    Example:
        POST /api/image-cache/preload
        {"uris": ["https://example.com/banner1.jpg", "https://example.com/banner2.jpg"]}
    """
    try:
        await cache.preload_images(request.uris)
    except PrefetchError as e:
        logger.error(f"[ImageCacheAPI] Preload failed: {e}")
        raise HTTPException(
            status_code=502,
            detail=f"Failed to preload {e.uri}: {e.reason}",
        )

    return PreloadResponse(
        success=True,
        requested=len(request.uris),
        cache_size=cache.get_cache_size(),
    )


@router.post("/register", response_model=RegisterResponse)
async def register_image(
    request: RegisterRequest,
    cache: ImageCache = Depends(get_image_cache),
):
    """Record an image the client finished loading on its own."""
    cache.add_to_cache(request.uri)
    return RegisterResponse(success=True, cache_size=cache.get_cache_size())


@router.get("/contains", response_model=ContainsResponse)
async def contains_image(
    uri: str = Query(..., description="Image URI to look up"),
    cache: ImageCache = Depends(get_image_cache),
):
    return ContainsResponse(uri=uri, cached=cache.has(uri))


@router.get("/stats")
async def get_cache_stats(cache: ImageCache = Depends(get_image_cache)):
    """Get cache statistics."""
    return JSONResponse(content={
        "success": True,
        "stats": cache.get_stats(),
    })


@router.delete("/clear")
async def clear_cache(cache: ImageCache = Depends(get_image_cache)):
    """Forget every tracked image."""
    removed = cache.get_cache_size()
    cache.clear_cache()
    return JSONResponse(content={
        "success": True,
        "removed_entries": removed,
    })


@router.get("/health")
async def health_check(cache: ImageCache = Depends(get_image_cache)):
    """Health check endpoint."""
    return JSONResponse(content={
        "status": "healthy",
        "service": "image-cache",
        "cache_stats": cache.get_stats(),
    })
