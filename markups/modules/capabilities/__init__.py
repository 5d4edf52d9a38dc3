"""
Capabilities Module - Black Box Interface

Purpose: Fetch and initialize the optional rendering/export capabilities
Interface: build_registry(), CapabilityBundle, capability key constants
Hidden: CDN layout, asset versions, one-time render configuration

Each factory is registered once at startup; the loader module decides when
it runs.
"""

from .factories import (
    AssetFactory,
    CapabilityBundle,
    DiagramEngineFactory,
    DocxExportFactory,
    MathEngineFactory,
    PdfExportFactory,
    build_registry,
)
from .keys import (
    DIAGRAM_ENGINE,
    DOCX_EXPORT,
    KNOWN_CAPABILITIES,
    MATH_ENGINE,
    PDF_EXPORT,
    PRELOAD_DEFAULTS,
)

__all__ = [
    "AssetFactory",
    "CapabilityBundle",
    "DIAGRAM_ENGINE",
    "DOCX_EXPORT",
    "DiagramEngineFactory",
    "DocxExportFactory",
    "KNOWN_CAPABILITIES",
    "MATH_ENGINE",
    "MathEngineFactory",
    "PDF_EXPORT",
    "PRELOAD_DEFAULTS",
    "PdfExportFactory",
    "build_registry",
]
