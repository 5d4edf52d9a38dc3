"""
Capability diagnostics endpoints for the Markups API.

The router only observes and drives the loader through its public interface;
it never reaches into the cache store or the in-flight tracker.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from markups import __version__
from markups.modules.detector import has_diagram_content, has_math_content, required_capabilities
from markups.modules.loader import CapabilityLoader, CapabilityLoadError, UnknownCapabilityError

from .models import (
    CapabilityResponse,
    DetectRequest,
    DetectResponse,
    HealthResponse,
    LoadingStatusResponse,
)


async def get_loader(request: Request) -> CapabilityLoader:
    """Return the application's capability loader."""
    loader = getattr(request.app.state, "loader", None)
    if loader is None:
        raise HTTPException(503, "Service not initialized")
    return loader


def create_capability_router() -> APIRouter:
    """
    Create the capability diagnostics router.

    The loader is resolved per request from `app.state.loader`.

    Returns:
        FastAPI router with health, status, detect and load endpoints
    """
    router = APIRouter()

    @router.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=__version__)

    @router.get(
        "/api/v1/capabilities/status",
        response_model=LoadingStatusResponse,
        tags=["capabilities"],
    )
    async def loading_status(
        loader: CapabilityLoader = Depends(get_loader),
    ) -> LoadingStatusResponse:
        """Snapshot of loaded and loading capabilities."""
        status = loader.get_loading_status()
        return LoadingStatusResponse(
            loaded=status.loaded,
            loading=status.loading,
            registered=loader.capabilities,
        )

    @router.post(
        "/api/v1/capabilities/detect",
        response_model=DetectResponse,
        tags=["capabilities"],
    )
    async def detect_capabilities(body: DetectRequest) -> DetectResponse:
        """Report which capabilities a document needs. Never triggers a load."""
        return DetectResponse(
            required=required_capabilities(body.text),
            diagram=has_diagram_content(body.text),
            math=has_math_content(body.text),
        )

    @router.post(
        "/api/v1/capabilities/{key}/load",
        response_model=CapabilityResponse,
        tags=["capabilities"],
    )
    async def load_capability(
        key: str, loader: CapabilityLoader = Depends(get_loader)
    ) -> CapabilityResponse:
        """Load a capability, or return it from the cache."""
        try:
            value = await loader.request_capability(key)
        except UnknownCapabilityError as e:
            raise HTTPException(404, str(e))
        except CapabilityLoadError as e:
            raise HTTPException(502, str(e))

        if hasattr(value, "describe"):
            return CapabilityResponse(**value.describe())
        return CapabilityResponse(key=key)

    return router
