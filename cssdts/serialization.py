"""File helpers for export records, source maps and declaration output."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from cssdts.errors import OptionsError, SourceMapError
from cssdts.exports import CSSExports


def read_json(path: str | Path) -> Any:
    """Read and parse a UTF-8 JSON file."""
    target = Path(path)
    try:
        payload = target.read_text(encoding="utf-8")
    except OSError as exc:
        raise OptionsError(
            code="OPT004",
            message=f"Cannot read '{target}': {exc.strerror or exc}",
            hint="Check the path and file permissions.",
        ) from exc
    try:
        return json.loads(payload)
    except json.JSONDecodeError as exc:
        raise OptionsError(
            code="OPT004",
            message=f"'{target}' is not valid JSON: {exc}",
            hint="Fix the JSON syntax.",
        ) from exc


def read_source_map(path: str | Path) -> str:
    """Read raw source map text; parsing happens in SourceMapIndex."""
    target = Path(path)
    try:
        return target.read_text(encoding="utf-8")
    except OSError as exc:
        raise SourceMapError(
            code="MAP005",
            message=f"Cannot read source map '{target}': {exc.strerror or exc}",
            hint="Check the --source-map path.",
        ) from exc


def load_exports(
    path: str | Path,
    css_path: str | Path | None = None,
    source_map_path: str | Path | None = None,
) -> CSSExports:
    """Load an exports JSON file, overriding css/sourceMap from sibling files."""
    data = read_json(path)
    if not isinstance(data, dict):
        raise OptionsError(
            code="OPT010",
            message=f"Exports file '{path}' must contain a JSON object.",
            hint="Use {\"classes\": {...}, \"css\": \"...\", \"sourceMap\": {...}}.",
        )
    if "classes" not in data:
        # A bare classname mapping is accepted as well.
        data = {"classes": data}
    if css_path is not None:
        target = Path(css_path)
        try:
            data["css"] = target.read_text(encoding="utf-8")
        except OSError as exc:
            raise OptionsError(
                code="OPT004",
                message=f"Cannot read CSS file '{target}': {exc.strerror or exc}",
                hint="Check the --css path.",
            ) from exc
    if source_map_path is not None:
        data["sourceMap"] = read_source_map(source_map_path)
    return CSSExports.from_dict(data)


def declaration_path(css_path: str | Path) -> Path:
    """`styles.module.css` -> `styles.module.css.d.ts`."""
    target = Path(css_path)
    return target.with_name(f"{target.name}.d.ts")


def write_declarations(text: str, path: str | Path) -> Path:
    """Write declaration text to path and return the path."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")
    return target
