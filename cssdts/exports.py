"""CSS module export records consumed by declaration generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from cssdts.errors import OptionsError


@dataclass(frozen=True)
class ClassEntry:
    """One exported classname and the literal name used in the CSS text."""

    generated: str
    original: str


@dataclass(frozen=True)
class CSSExports:
    """Ordered classname exports plus optional CSS text and source map."""

    classes: tuple[ClassEntry, ...] = field(default_factory=tuple)
    css: str | None = None
    source_map: dict[str, Any] | str | None = None

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, str],
        css: str | None = None,
        source_map: dict[str, Any] | str | None = None,
    ) -> "CSSExports":
        """Build exports from an ordered generated -> original mapping."""
        entries: list[ClassEntry] = []
        for generated, original in mapping.items():
            if not isinstance(generated, str) or not isinstance(original, str):
                raise OptionsError(
                    code="OPT010",
                    message=f"Class export {generated!r} -> {original!r} must map strings to strings.",
                    hint="Use {\"generatedName\": \"originalName\"} entries.",
                )
            entries.append(ClassEntry(generated=generated, original=original))
        return cls(classes=tuple(entries), css=css, source_map=source_map)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "CSSExports":
        """Build exports from a `{classes, css, sourceMap}` JSON object."""
        classes = payload.get("classes", {})
        if not isinstance(classes, dict):
            raise OptionsError(
                code="OPT010",
                message="'classes' must be a JSON object.",
                hint="Use {\"classes\": {\"generatedName\": \"originalName\"}}.",
            )
        css = payload.get("css")
        if css is not None and not isinstance(css, str):
            raise OptionsError(
                code="OPT010",
                message="'css' must be a string.",
                hint="Pass the generated CSS text.",
            )
        return cls.from_mapping(classes, css=css, source_map=payload.get("sourceMap"))

    def class_names(self) -> list[str]:
        """Generated classnames in export order."""
        return [entry.generated for entry in self.classes]

    def class_mapping(self) -> dict[str, str]:
        """Ordered generated -> original mapping."""
        return {entry.generated: entry.original for entry in self.classes}
