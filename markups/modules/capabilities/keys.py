"""Capability keys recognized by the registry."""

DIAGRAM_ENGINE = "diagram-engine"
MATH_ENGINE = "math-engine"
PDF_EXPORT = "pdf-export"
DOCX_EXPORT = "docx-export"

KNOWN_CAPABILITIES = (DIAGRAM_ENGINE, MATH_ENGINE, PDF_EXPORT, DOCX_EXPORT)

# Rendering engines are worth warming up; exports are rare and user-triggered
PRELOAD_DEFAULTS = (DIAGRAM_ENGINE, MATH_ENGINE)
