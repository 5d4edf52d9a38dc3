"""
API Module - Black Box Interface

Purpose: Expose capability loading state and detection over HTTP
Interface: create_capability_router(), Pydantic models
Hidden: Endpoint wiring, error-to-status mapping
"""

from .models import (
    CapabilityResponse,
    DetectRequest,
    DetectResponse,
    HealthResponse,
    LoadingStatusResponse,
)
from .routes import create_capability_router, get_loader

__all__ = [
    "CapabilityResponse",
    "DetectRequest",
    "DetectResponse",
    "HealthResponse",
    "LoadingStatusResponse",
    "create_capability_router",
    "get_loader",
]
