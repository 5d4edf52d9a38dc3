"""
Detector Module - Black Box Interface

Purpose: Decide which capabilities a document needs before rendering
Interface: needs_capability(), required_capabilities(), has_diagram_content(), has_math_content()
Hidden: Marker syntax and matching rules

Pure functions; detection never triggers a load.
"""

from .detector import (
    DETECTOR_RULES,
    has_diagram_content,
    has_math_content,
    needs_capability,
    required_capabilities,
)

__all__ = [
    "DETECTOR_RULES",
    "has_diagram_content",
    "has_math_content",
    "needs_capability",
    "required_capabilities",
]
