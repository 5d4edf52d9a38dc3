"""
Unit tests for content detection.
"""

import pytest

from markups.modules.detector import (
    has_diagram_content,
    has_math_content,
    needs_capability,
    required_capabilities,
)


class TestDiagramDetection:

    def test_diagram_fence(self):
        assert needs_capability("```diagram\nA->B\n```", "diagram-engine") is True

    def test_plain_text(self):
        assert needs_capability("plain paragraph, no markers", "diagram-engine") is False

    @pytest.mark.parametrize("text", [
        "# Flow\n\n```mermaid\ngraph TD\n  A-->B\n```\n",
        "```MERMAID\nsequenceDiagram\n```",
    ])
    def test_mermaid_fence(self, text):
        assert has_diagram_content(text)

    def test_other_fences_do_not_match(self):
        assert not has_diagram_content("```python\nprint('hi')\n```")
        assert not has_diagram_content("```mermaidjs\ngraph TD\n```")

    def test_unclosed_fence(self):
        assert not has_diagram_content("```mermaid\ngraph TD\n")


class TestMathDetection:

    def test_inline_and_block_math(self):
        assert needs_capability("Inline $x^2$ math and block $$\\int f$$", "math-engine") is True

    def test_block_math_across_lines(self):
        assert has_math_content("$$\n\\sum_{i=1}^n i\n$$")

    def test_lone_dollar_sign(self):
        assert not has_math_content("It costs $5 today")

    def test_inline_math_does_not_span_lines(self):
        assert not has_math_content("costs $5\nand $")


class TestNeedsCapability:

    def test_exporters_are_never_required_by_content(self):
        text = "```mermaid\ngraph TD\n```\n$x$"

        assert needs_capability(text, "pdf-export") is False
        assert needs_capability(text, "docx-export") is False

    def test_unknown_key(self):
        assert needs_capability("$x$", "chart-engine") is False

    def test_required_capabilities(self):
        text = "```mermaid\ngraph TD\n```\n\nEnergy $E=mc^2$"

        assert required_capabilities(text) == ["diagram-engine", "math-engine"]
        assert required_capabilities("just words") == []
