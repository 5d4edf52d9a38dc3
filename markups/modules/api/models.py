"""
Markups diagnostics API models.

These models define the structure of data returned by the capability
diagnostics endpoints.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class DetectRequest(BaseModel):
    """Document text to inspect for capability markers."""

    text: str = Field(..., description="Markdown document text")


class DetectResponse(BaseModel):
    """Capabilities required to render a document."""

    required: List[str] = Field(default_factory=list, description="Required capability keys")
    diagram: bool = Field(False, description="Document contains diagram blocks")
    math: bool = Field(False, description="Document contains math markup")


class LoadingStatusResponse(BaseModel):
    """Snapshot of capability loading state."""

    loaded: List[str] = Field(default_factory=list, description="Capabilities in the cache")
    loading: List[str] = Field(default_factory=list, description="Capabilities being loaded")
    registered: List[str] = Field(default_factory=list, description="All registered capabilities")


class CapabilityResponse(BaseModel):
    """Result of loading a capability."""

    key: str
    version: Optional[str] = None
    assets: Dict[str, int] = Field(
        default_factory=dict, description="Asset name to size in characters"
    )
    settings: Dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    version: str
