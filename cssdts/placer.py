"""Line-aligned placement of declarations for editor go-to-definition.

Each classname is searched for in the generated CSS, the match is translated
through the source map, and the declaration fragment is appended to the
output line that matches the classname's line in the original source.
Positions that cannot be resolved fall back to the first output line.
"""

from __future__ import annotations

from enum import Enum
import logging
from typing import Iterable

from cssdts.declarations import indexed_property, named_export
from cssdts.errors import GenerationError
from cssdts.scanner import CssLineScanner
from cssdts.source_map import OriginalPosition, Position, SourceMapIndex
from cssdts.transforms import is_valid_identifier


logger = logging.getLogger(__name__)


class ExportTarget(Enum):
    """Declaration form produced by a placement pass."""

    DEFAULT = "default"
    NAMED = "named"


class LineBuffer:
    """Fixed-size per-line string accumulators, rendered exactly once."""

    def __init__(self, size: int) -> None:
        self._lines = [""] * self.slots_for(size)
        self._rendered = False

    @staticmethod
    def slots_for(line_count: int) -> int:
        """Number of slots allocated for a CSS text of `line_count` lines."""
        return max(line_count, 1)

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> str:
        return self._lines[index]

    def seed(self, fragment: str) -> None:
        """Write an opening fragment into the first slot."""
        self.append(0, fragment)

    def append(self, index: int, fragment: str) -> None:
        """Append fragment to slot `index`; slots are never added."""
        if self._rendered:
            raise GenerationError(
                code="GEN002",
                message="Line buffer was already rendered.",
                hint="Allocate a new LineBuffer per generation.",
            )
        self._lines[index] += fragment

    def render(self) -> str:
        """Join all slots with newlines; a buffer can only be rendered once."""
        if self._rendered:
            raise GenerationError(
                code="GEN002",
                message="Line buffer was already rendered.",
                hint="Allocate a new LineBuffer per generation.",
            )
        self._rendered = True
        return "\n".join(self._lines)


class DeclarationPlacer:
    """Resolves output lines for classnames and fills a LineBuffer."""

    def __init__(
        self,
        scanner: CssLineScanner,
        index: SourceMapIndex,
        *,
        possibly_undefined: bool = False,
        log: logging.Logger | None = None,
    ) -> None:
        self.scanner = scanner
        self.index = index
        self.possibly_undefined = possibly_undefined
        self.log = log or logger

    def generated_position(self, original_classname: str) -> Position:
        """Source-map query position (1-based line) for a classname."""
        match = self.scanner.find(original_classname)
        if match is None:
            self.log.debug("No CSS match for %r; pointing at file top.", original_classname)
        return self.query_position(match)

    @staticmethod
    def query_position(match: Position | None) -> Position:
        """Convert a 0-based scanner match into a 1-based source-map query."""
        if match is None:
            return Position(line=1, column=0)
        return Position(line=match.line + 1, column=match.column)

    def resolve_line(self, original_classname: str, size: int | None = None) -> int:
        """0-based output line for a classname, clamped to `size` slots when given."""
        original = self.index.original_position_for(self.generated_position(original_classname))
        return self.line_index(original, original_classname, size)

    def line_index(self, original: OriginalPosition, label: str, size: int | None = None) -> int:
        line_number = original.line or 1
        line_index = max(line_number - 1, 0)

        if size is not None and line_index >= size:
            self.log.warning(
                "Original line %d for %r is past the %d-line buffer; using the last line.",
                line_number,
                label,
                size,
            )
            line_index = size - 1
        return line_index

    def fragment(self, classname: str, target: ExportTarget) -> str:
        if target is ExportTarget.DEFAULT:
            return indexed_property(classname, self.possibly_undefined)
        return named_export(classname, self.possibly_undefined)

    def place(
        self,
        entries: Iterable[tuple[str, str]],
        buffer: LineBuffer,
        target: ExportTarget,
    ) -> LineBuffer:
        """Append one fragment per (classname, original classname) pair.

        `classname` is the transformed output identifier; `original` is the
        literal name searched for in the CSS text.
        """
        for classname, original in entries:
            if target is ExportTarget.NAMED and not is_valid_identifier(classname):
                continue
            line_index = self.resolve_line(original, size=len(buffer))
            buffer.append(line_index, self.fragment(classname, target))
        return buffer
