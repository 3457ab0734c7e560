"""Custom template hook resolution and invocation."""

from __future__ import annotations

from dataclasses import dataclass
import importlib
import importlib.util
import logging
from pathlib import Path
from types import ModuleType
from typing import Any, Callable

from cssdts.errors import TemplateError


DEFAULT_SYMBOL = "template"

TemplateHook = Callable[[str, "TemplateContext"], str]


@dataclass(frozen=True)
class TemplateContext:
    """Second argument passed to a custom template."""

    classes: dict[str, str]
    file_name: str
    logger: logging.Logger


def resolve_template(ref: str | Callable[..., Any]) -> TemplateHook:
    """Resolve a template reference into a callable.

    Accepted forms:
    - a callable, returned as-is
    - a path to a `.py` file exporting `template`
    - a `module[:symbol]` spec; `symbol` defaults to `template`
    """
    if callable(ref):
        return ref
    if not isinstance(ref, str) or not ref.strip():
        raise TemplateError(
            code="TPL001",
            message=f"Invalid custom template reference {ref!r}.",
            hint="Use module[:symbol] or a path to a .py file.",
        )

    spec = ref.strip()
    if spec.endswith(".py"):
        module = _load_file_module(Path(spec))
        symbol_name = DEFAULT_SYMBOL
    else:
        module_name, _, symbol = spec.partition(":")
        module = _import_module(module_name.strip(), spec)
        symbol_name = symbol.strip() or DEFAULT_SYMBOL

    hook = getattr(module, symbol_name, None)
    if hook is None:
        raise TemplateError(
            code="TPL003",
            message=f"Template symbol '{symbol_name}' not found in '{spec}'.",
            hint="Export a `template(dts, context)` function.",
        )
    if not callable(hook):
        raise TemplateError(
            code="TPL004",
            message=f"Template symbol '{symbol_name}' in '{spec}' is not callable.",
            hint="Export a `template(dts, context)` function.",
        )
    return hook


def apply_template(ref: str | Callable[..., Any], dts: str, context: TemplateContext) -> str:
    """Run the custom template once; its exceptions propagate unchanged."""
    hook = resolve_template(ref)
    result = hook(dts, context)
    if not isinstance(result, str):
        raise TemplateError(
            code="TPL005",
            message=f"Custom template returned {type(result).__name__}, expected str.",
            hint="Return the final declaration text from the template.",
        )
    return result


def _import_module(module_name: str, spec: str) -> ModuleType:
    try:
        return importlib.import_module(module_name)
    except Exception as exc:
        raise TemplateError(
            code="TPL002",
            message=f"Failed to import template module '{module_name}' from spec '{spec}': {exc}",
            hint="Ensure module is on PYTHONPATH and importable.",
        ) from exc


def _load_file_module(path: Path) -> ModuleType:
    if not path.is_file():
        raise TemplateError(
            code="TPL002",
            message=f"Template file not found: {path}",
            hint="Check the customTemplate path.",
        )
    module_spec = importlib.util.spec_from_file_location(f"_cssdts_template_{path.stem}", path)
    if module_spec is None or module_spec.loader is None:
        raise TemplateError(
            code="TPL002",
            message=f"Cannot load template file {path}.",
            hint="Use a Python source file.",
        )
    module = importlib.util.module_from_spec(module_spec)
    try:
        module_spec.loader.exec_module(module)
    except Exception as exc:
        raise TemplateError(
            code="TPL002",
            message=f"Failed to execute template file {path}: {exc}",
            hint="Inspect the template module for errors.",
        ) from exc
    return module
