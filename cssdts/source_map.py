"""Source map decoding and generated-to-original position lookup."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
import json
import re
from typing import Any, Final

from cssdts.errors import SourceMapError


_BASE64_CHARS: Final[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_BASE64_VALUES: Final[dict[str, int]] = {ch: idx for idx, ch in enumerate(_BASE64_CHARS)}

_VLQ_SHIFT: Final[int] = 5
_VLQ_CONTINUATION_BIT: Final[int] = 1 << _VLQ_SHIFT
_VLQ_MASK: Final[int] = _VLQ_CONTINUATION_BIT - 1

_XSSI_GUARD = re.compile(r"^\)\]\}'[^\n]*\n")
_URL_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")


@dataclass(frozen=True)
class Position:
    """A line/column pair.

    Scanner positions are 0-based on both axes. Positions handed to
    `SourceMapIndex.original_position_for` use a 1-based line and a 0-based
    column.
    """

    line: int
    column: int

    def to_dict(self) -> dict[str, int]:
        """Serialize the position to a JSON-compatible mapping."""
        return {"line": self.line, "column": self.column}


@dataclass(frozen=True)
class OriginalPosition:
    """Lookup result in the original source; all fields are None when unmapped."""

    source: str | None = None
    line: int | None = None
    column: int | None = None
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the position to a JSON-compatible mapping."""
        return {
            "source": self.source,
            "line": self.line,
            "column": self.column,
            "name": self.name,
        }


@dataclass(frozen=True)
class Mapping:
    """One decoded mapping segment with absolute coordinates."""

    generated_line: int
    generated_column: int
    source: str | None = None
    original_line: int | None = None
    original_column: int | None = None
    name: str | None = None


def decode_vlq(segment: str) -> list[int]:
    """Decode a base64 VLQ segment into its signed integer fields."""
    values: list[int] = []
    value = 0
    shift = 0

    for ch in segment:
        digit = _BASE64_VALUES.get(ch)
        if digit is None:
            raise SourceMapError(
                code="MAP003",
                message=f"Invalid base64 VLQ character {ch!r} in segment {segment!r}.",
                hint="Regenerate the source map; mappings must be base64 VLQ encoded.",
            )
        value += (digit & _VLQ_MASK) << shift
        if digit & _VLQ_CONTINUATION_BIT:
            shift += _VLQ_SHIFT
            continue
        negative = value & 1
        value >>= 1
        values.append(-value if negative else value)
        value = 0
        shift = 0

    if shift:
        raise SourceMapError(
            code="MAP003",
            message=f"Truncated base64 VLQ segment {segment!r}.",
            hint="Regenerate the source map; the mappings string is incomplete.",
        )
    return values


class SourceMapIndex:
    """Read-only lookup structure over a Source Map v3 payload."""

    def __init__(self, payload: dict[str, Any] | str) -> None:
        data = _coerce_payload(payload)

        if "sections" in data:
            raise SourceMapError(
                code="MAP002",
                message="Indexed source maps with 'sections' are not supported.",
                hint="Flatten the source map before passing it in.",
            )
        if str(data.get("version")) != "3":
            raise SourceMapError(
                code="MAP001",
                message=f"Unsupported source map version {data.get('version')!r}.",
                hint="Only version 3 source maps are supported.",
            )
        mappings = data.get("mappings")
        if not isinstance(mappings, str):
            raise SourceMapError(
                code="MAP004",
                message="Source map 'mappings' must be a string.",
                hint="Pass the raw source map object produced by the CSS toolchain.",
            )

        source_root = data.get("sourceRoot") or ""
        self.file: str | None = data.get("file")
        self.sources: list[str] = [_join_source_root(source_root, str(source)) for source in data.get("sources") or []]
        self.names: list[str] = [str(name) for name in data.get("names") or []]
        self._segments: dict[int, list[Mapping]] = {}
        self._columns: dict[int, list[int]] = {}
        self._decode(mappings)

    def original_position_for(self, position: Position) -> OriginalPosition:
        """Translate a generated position (1-based line) into the original source.

        The closest mapping at or before the requested column on the same
        generated line wins. Unmapped positions return an empty
        `OriginalPosition`.
        """
        if position.line < 1:
            raise SourceMapError(
                code="MAP006",
                message=f"Line must be greater than or equal to 1, got {position.line}.",
                hint="Source map lines are 1-based.",
            )
        if position.column < 0:
            raise SourceMapError(
                code="MAP006",
                message=f"Column must be greater than or equal to 0, got {position.column}.",
                hint="Source map columns are 0-based.",
            )

        columns = self._columns.get(position.line)
        if not columns:
            return OriginalPosition()

        idx = bisect_right(columns, position.column) - 1
        if idx < 0:
            return OriginalPosition()
        while idx > 0 and columns[idx - 1] == columns[idx]:
            idx -= 1

        mapping = self._segments[position.line][idx]
        return OriginalPosition(
            source=mapping.source,
            line=mapping.original_line,
            column=mapping.original_column,
            name=mapping.name,
        )

    def mappings(self) -> list[Mapping]:
        """Return all decoded mappings ordered by generated position."""
        ordered: list[Mapping] = []
        for line in sorted(self._segments):
            ordered.extend(self._segments[line])
        return ordered

    def _decode(self, mappings: str) -> None:
        # Source, original line/column and name fields are relative to the
        # previous segment across the whole map; generated column resets per line.
        source_index = 0
        original_line = 0
        original_column = 0
        name_index = 0

        for line_offset, line_text in enumerate(mappings.split(";")):
            generated_line = line_offset + 1
            generated_column = 0
            segments: list[Mapping] = []

            for raw in line_text.split(","):
                if not raw:
                    continue
                fields = decode_vlq(raw)
                if len(fields) not in (1, 4, 5):
                    raise SourceMapError(
                        code="MAP003",
                        message=f"Mapping segment {raw!r} has {len(fields)} fields; expected 1, 4 or 5.",
                        hint="Regenerate the source map.",
                    )

                generated_column += fields[0]
                if len(fields) == 1:
                    segments.append(Mapping(generated_line=generated_line, generated_column=generated_column))
                    continue

                source_index += fields[1]
                original_line += fields[2]
                original_column += fields[3]
                name: str | None = None
                if len(fields) == 5:
                    name_index += fields[4]
                    name = self._lookup(self.names, name_index, "name")

                segments.append(
                    Mapping(
                        generated_line=generated_line,
                        generated_column=generated_column,
                        source=self._lookup(self.sources, source_index, "source"),
                        original_line=original_line + 1,
                        original_column=original_column,
                        name=name,
                    )
                )

            if segments:
                segments.sort(key=lambda item: item.generated_column)
                self._segments[generated_line] = segments
                self._columns[generated_line] = [item.generated_column for item in segments]

    @staticmethod
    def _lookup(table: list[str], index: int, label: str) -> str:
        if 0 <= index < len(table):
            return table[index]
        raise SourceMapError(
            code="MAP007",
            message=f"Mapping references {label} index {index}, but only {len(table)} are declared.",
            hint="Regenerate the source map.",
        )


def _coerce_payload(payload: dict[str, Any] | str) -> dict[str, Any]:
    if isinstance(payload, str):
        try:
            payload = json.loads(_XSSI_GUARD.sub("", payload, count=1))
        except json.JSONDecodeError as exc:
            raise SourceMapError(
                code="MAP005",
                message=f"Source map is not valid JSON: {exc}",
                hint="Pass the parsed source map object or its JSON text.",
            ) from exc
    if not isinstance(payload, dict):
        raise SourceMapError(
            code="MAP005",
            message=f"Source map must be a JSON object, got {type(payload).__name__}.",
            hint="Pass the parsed source map object or its JSON text.",
        )
    return payload


def _join_source_root(root: str, source: str) -> str:
    if not root or source.startswith("/") or _URL_SCHEME.match(source):
        return source
    return f"{root.rstrip('/')}/{source}"
