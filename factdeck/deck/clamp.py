"""
Text Clamp Controller.

Per-card state machine that truncates a fact to a fixed number of lines
and lets the user expand it. Overflow is measured by wrapping the text
the same way the terminal renderer does.
"""

from __future__ import annotations

from enum import Enum

from rich.console import Console
from rich.text import Text

READ_MORE_LABEL = "Read more"
SHOW_LESS_LABEL = "Show less"


class ClampState(Enum):
    TRUNCATED = "truncated"
    EXPANDED = "expanded"


class LineMeasurer:
    """Counts rendered lines for a block of text at a fixed width."""

    def __init__(self, width: int, console: Console | None = None):
        self.width = width
        self.console = console or Console(width=width, color_system=None)

    def line_count(self, text: str) -> int:
        if not text:
            return 0
        return len(Text(text).wrap(self.console, self.width))


class TextClampController:
    """
    Truncated/expanded toggle for one card's fact text.

    Starts truncated. measure() decides whether the expand affordance
    is shown at all.
    """

    def __init__(self, text: str, max_lines: int, measurer: LineMeasurer):
        self.text = text
        self.max_lines = max_lines
        self.measurer = measurer

        self.state = ClampState.TRUNCATED
        self.overflowing = False
        self.line_limit: int | None = max_lines
        self.scrollable = False
        self.scroll_top = 0
        self.rendered_lines = 0

    @property
    def affordance_visible(self) -> bool:
        return self.overflowing

    @property
    def affordance_label(self) -> str:
        return SHOW_LESS_LABEL if self.state is ClampState.EXPANDED else READ_MORE_LABEL

    @property
    def is_expanded(self) -> bool:
        return self.state is ClampState.EXPANDED

    def measure(self) -> bool:
        """Apply the clamp and record whether the text overflows it."""
        self._apply_clamp()
        self.rendered_lines = self.measurer.line_count(self.text)
        self.overflowing = self.rendered_lines > self.max_lines
        return self.overflowing

    def toggle(self) -> ClampState:
        if self.state is ClampState.TRUNCATED:
            self.state = ClampState.EXPANDED
            self.line_limit = None
            self.scrollable = True
        else:
            self._apply_clamp()
        return self.state

    def scroll(self, lines: int) -> int:
        """Scroll the expanded text; no-op while truncated."""
        if not self.scrollable:
            return self.scroll_top
        furthest = max(0, self.rendered_lines - self.max_lines)
        self.scroll_top = min(furthest, max(0, self.scroll_top + lines))
        return self.scroll_top

    def visible_lines(self) -> list[str]:
        """Wrapped lines currently on screen."""
        lines = [line.plain for line in Text(self.text).wrap(self.measurer.console, self.measurer.width)]
        if self.line_limit is None:
            return lines[self.scroll_top:]
        return lines[: self.line_limit]

    def _apply_clamp(self) -> None:
        self.state = ClampState.TRUNCATED
        self.line_limit = self.max_lines
        self.scrollable = False
        self.scroll_top = 0
