"""
Viewport over the rendered lines.

Holds scalar state only (top line and size); callers pass the current line
count, since the layout it belongs to may be evicted and rebuilt at any time.
Every scroll clamps y to [0, max(0, total_lines - height)].
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Viewport:
    width: int = 0
    height: int = 0
    y: int = 0

    @property
    def top(self) -> int:
        return self.y

    @property
    def bottom(self) -> int:
        """First line below the viewport (exclusive)."""
        return self.y + self.height

    def contains(self, line: int) -> bool:
        return self.top <= line < self.bottom

    def max_y(self, total_lines: int) -> int:
        return max(0, total_lines - self.height)

    def scroll_to_line(self, y: int, total_lines: int) -> bool:
        """Move the top to y, clamped. Returns whether y changed."""
        new_y = max(0, min(y, self.max_y(total_lines)))
        changed = new_y != self.y
        self.y = new_y
        return changed

    def scroll_by(self, delta: int, total_lines: int) -> bool:
        return self.scroll_to_line(self.y + delta, total_lines)

    def scroll_to_top(self) -> bool:
        changed = self.y != 0
        self.y = 0
        return changed

    def scroll_to_bottom(self, total_lines: int) -> bool:
        return self.scroll_to_line(total_lines, total_lines)

    def clamp(self, total_lines: int) -> bool:
        """Re-apply the clamp, e.g. after a resize or a new layout."""
        return self.scroll_to_line(self.y, total_lines)

    def resize(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)

    @property
    def half_page(self) -> int:
        return self.height // 2
