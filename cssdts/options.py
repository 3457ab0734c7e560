"""Generation options and their JSON configuration layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from cssdts.errors import OptionsError
from cssdts.serialization import read_json
from cssdts.transforms import ClassnameTransform


PLUGIN_NAME = "typescript-plugin-css-modules"


class GoToDefinition(Enum):
    """Which declaration style is laid out along original source lines."""

    OFF = "off"
    NAMED = "named"
    DEFAULT = "default"

    @classmethod
    def parse(cls, value: Any) -> "GoToDefinition":
        """Accept `false`/`true`/`"named"`/`"default"` config values."""
        if isinstance(value, GoToDefinition):
            return value
        if value is None or value is False or value == "off":
            return cls.OFF
        if value is True or value == "named":
            return cls.NAMED
        if value == "default":
            return cls.DEFAULT
        raise OptionsError(
            code="OPT003",
            message=f"Unsupported goToDefinition value {value!r}.",
            hint="Use false, true, 'named' or 'default'.",
        )


@dataclass(frozen=True)
class Options:
    """Settings that shape generated declarations."""

    classname_transform: ClassnameTransform = ClassnameTransform.AS_IS
    go_to_definition: GoToDefinition = GoToDefinition.OFF
    named_exports: bool = True
    allow_unknown_classnames: bool = False
    no_unchecked_indexed_access: bool = False
    custom_template: str | Callable[..., Any] | None = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Options":
        """Build options from camelCase plugin config keys; unknown keys are ignored."""
        if not isinstance(payload, dict):
            raise OptionsError(
                code="OPT001",
                message=f"Options must be a JSON object, got {type(payload).__name__}.",
                hint="Pass the plugin 'options' object.",
            )
        template = payload.get("customTemplate")
        if template is not None and not isinstance(template, str):
            raise OptionsError(
                code="OPT001",
                message="'customTemplate' must be a string.",
                hint="Use a module[:symbol] spec or a path to a .py file.",
            )
        return cls(
            classname_transform=ClassnameTransform.parse(payload.get("classnameTransform")),
            go_to_definition=GoToDefinition.parse(payload.get("goToDefinition")),
            named_exports=_flag(payload, "namedExports", default=True),
            allow_unknown_classnames=_flag(payload, "allowUnknownClassnames"),
            no_unchecked_indexed_access=_flag(payload, "noUncheckedIndexedAccess"),
            custom_template=template,
        )


def load_options(path: str | Path) -> Options:
    """Load options from a JSON file.

    A tsconfig-style file is searched for the css-modules entry under
    `compilerOptions.plugins`; any other object is read as the options
    themselves.
    """
    data = read_json(path)
    if not isinstance(data, dict):
        raise OptionsError(
            code="OPT001",
            message=f"Options file '{path}' must contain a JSON object.",
            hint="Write the options as a JSON object.",
        )
    plugins = (data.get("compilerOptions") or {}).get("plugins")
    if isinstance(plugins, list):
        for plugin in plugins:
            if isinstance(plugin, dict) and plugin.get("name") == PLUGIN_NAME:
                return Options.from_dict(plugin.get("options") or {})
        return Options()
    return Options.from_dict(data)


def _flag(payload: dict[str, Any], key: str, default: bool = False) -> bool:
    value = payload.get(key, default)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise OptionsError(
            code="OPT001",
            message=f"'{key}' must be a boolean, got {value!r}.",
            hint="Use true or false.",
        )
    return value
