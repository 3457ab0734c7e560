"""Locates classname references in generated CSS text."""

from __future__ import annotations

import re
from typing import Sequence

from cssdts.source_map import Position


class CssLineScanner:
    """Finds the first class or animation-name occurrence of an identifier.

    A match must be preceded by `.` (classnames), `:` or whitespace
    (animation names) and must not be followed by a character that could
    continue a CSS identifier, so `foo` never matches inside `foo-bar`.
    """

    def __init__(self, lines: Sequence[str]) -> None:
        self.lines = list(lines)
        self._patterns: dict[str, re.Pattern[str]] = {}

    @classmethod
    def from_css(cls, css: str | None) -> "CssLineScanner":
        """Build a scanner over CSS text split on newlines."""
        return cls(css.split("\n") if css is not None else [])

    def __len__(self) -> int:
        return len(self.lines)

    def find(self, identifier: str) -> Position | None:
        """Return the 0-based position of the first match, or None."""
        pattern = self._pattern(identifier)
        for line_index, line in enumerate(self.lines):
            match = pattern.search(line)
            if match:
                # Column points at the identifier, past the boundary character.
                return Position(line=line_index, column=match.start() + 1)
        return None

    def _pattern(self, identifier: str) -> re.Pattern[str]:
        pattern = self._patterns.get(identifier)
        if pattern is None:
            pattern = re.compile(rf"[:.\s]{re.escape(identifier)}(?![_a-zA-Z0-9-])")
            self._patterns[identifier] = pattern
        return pattern
