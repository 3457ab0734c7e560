"""Classname transforms and identifier validation."""

from __future__ import annotations

from enum import Enum
import re
from typing import Final

from cssdts.errors import OptionsError


VALID_IDENTIFIER: Final[re.Pattern[str]] = re.compile(r"[_$a-zA-Z\u00a0-\U0010ffff][_$a-zA-Z0-9\u00a0-\U0010ffff]*")

_WORDS: Final[re.Pattern[str]] = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")
_DASHES: Final[re.Pattern[str]] = re.compile(r"-+(\w)", re.ASCII)


class ClassnameTransform(Enum):
    """How exported classnames are turned into TypeScript identifiers."""

    AS_IS = "asIs"
    CAMEL_CASE = "camelCase"
    CAMEL_CASE_ONLY = "camelCaseOnly"
    DASHES = "dashes"
    DASHES_ONLY = "dashesOnly"

    @classmethod
    def parse(cls, value: "str | ClassnameTransform | None") -> "ClassnameTransform":
        """Resolve a config value; None means asIs."""
        if value is None:
            return cls.AS_IS
        if isinstance(value, ClassnameTransform):
            return value
        for member in cls:
            if member.value == value:
                return member
        raise OptionsError(
            code="OPT002",
            message=f"Unknown classname transform {value!r}.",
            hint=f"Use one of: {', '.join(member.value for member in cls)}.",
        )


def is_valid_identifier(name: str) -> bool:
    """Return True when name can be used as a TypeScript binding."""
    return VALID_IDENTIFIER.fullmatch(name) is not None


def camel_case(name: str) -> str:
    """`foo-bar_baz` -> `fooBarBaz`, `FOOBar` -> `fooBar`."""
    words = _WORDS.findall(name)
    if not words:
        return ""
    head, *rest = words
    return head.lower() + "".join(word[:1].upper() + word[1:].lower() for word in rest)


def dashes_camel_case(name: str) -> str:
    """Only dashes are collapsed: `foo--bar_baz` -> `fooBar_baz`."""
    return _DASHES.sub(lambda match: match.group(1).upper(), name)


def transform_classname(classname: str, mode: "ClassnameTransform | str | None" = None) -> list[str]:
    """Return the output identifiers for one classname, original first where kept."""
    transform = ClassnameTransform.parse(mode)

    if transform is ClassnameTransform.CAMEL_CASE:
        converted = camel_case(classname)
        return [classname] if converted == classname else [classname, converted]
    if transform is ClassnameTransform.CAMEL_CASE_ONLY:
        return [camel_case(classname)]
    if transform is ClassnameTransform.DASHES:
        converted = dashes_camel_case(classname)
        return [classname] if converted == classname else [classname, converted]
    if transform is ClassnameTransform.DASHES_ONLY:
        return [dashes_camel_case(classname)]
    return [classname]


def transform_all(classnames: list[str], mode: "ClassnameTransform | str | None" = None) -> list[str]:
    """Flatten transform results for many classnames, preserving order."""
    processed: list[str] = []
    for classname in classnames:
        processed.extend(transform_classname(classname, mode))
    return processed
