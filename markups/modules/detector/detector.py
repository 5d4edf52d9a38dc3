"""Content sniffing for markdown documents."""

import re
from typing import Callable, Dict, List

from markups.modules.capabilities.keys import DIAGRAM_ENGINE, MATH_ENGINE

# ```mermaid ... ``` or ```diagram ... ```
DIAGRAM_FENCE = re.compile(r"```(?:mermaid|diagram)\b[\s\S]*?```", re.IGNORECASE)

# $$...$$ block math (may span lines) or $...$ inline math (single line)
MATH_MARKER = re.compile(r"\$\$[\s\S]*?\$\$|\$[^$\n]+\$")


def has_diagram_content(text: str) -> bool:
    """Check if the document contains a fenced diagram block."""
    return bool(DIAGRAM_FENCE.search(text))


def has_math_content(text: str) -> bool:
    """Check if the document contains inline or block math."""
    return bool(MATH_MARKER.search(text))


DETECTOR_RULES: Dict[str, Callable[[str], bool]] = {
    DIAGRAM_ENGINE: has_diagram_content,
    MATH_ENGINE: has_math_content,
}


def needs_capability(text: str, key: str) -> bool:
    """
    Check whether rendering text requires the given capability.

    Capabilities without a detector rule (the exporters) are never required
    by content alone.
    """
    rule = DETECTOR_RULES.get(key)
    if rule is None:
        return False
    return rule(text)


def required_capabilities(text: str) -> List[str]:
    """All capability keys the document needs, in registry order."""
    return [key for key, rule in DETECTOR_RULES.items() if rule(text)]
