"""TypeScript declaration fragments emitted per classname."""

from __future__ import annotations

from typing import Final


DEFAULT_HEADER: Final[str] = "declare let _classes: {"
DEFAULT_FOOTER: Final[str] = "};\nexport default _classes;\n"
UNKNOWN_CLASSNAMES_SIGNATURE: Final[str] = "  [key: string]: string;"


def indexed_property(classname: str, possibly_undefined: bool = False) -> str:
    """Property line inside the default-export `_classes` object."""
    optional = "?" if possibly_undefined else ""
    return f"  '{classname}'{optional}: string;"


def named_export(classname: str, possibly_undefined: bool = False) -> str:
    """Standalone `export let` statement for a valid identifier."""
    suffix = " | undefined" if possibly_undefined else ""
    return f"export let {classname}: string{suffix};"
