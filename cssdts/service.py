"""Request/response layer for integrations.

Adapters (editors, build tools) call `dispatch` with JSON-compatible payloads
and get JSON-compatible results back, with `safe_dispatch` turning errors
into diagnostics.
"""

from __future__ import annotations

from typing import Any, Callable

from cssdts.errors import CLIError, DtsError
from cssdts.exports import CSSExports
from cssdts.main import create_dts_exports, select_modes
from cssdts.options import Options
from cssdts.placer import DeclarationPlacer, LineBuffer
from cssdts.scanner import CssLineScanner
from cssdts.source_map import SourceMapIndex
from cssdts.transforms import is_valid_identifier, transform_classname


VERSION = "0.1.0"


def generate_request(payload: dict[str, Any]) -> dict[str, Any]:
    """Generate declaration text for an exports payload."""
    exports = _resolve_exports(payload)
    options = Options.from_dict(payload.get("options") or {})
    file_name = str(payload.get("fileName", "<inline>"))
    modes = select_modes(options)
    return {
        "fileName": file_name,
        "dts": create_dts_exports(exports, file_name, options),
        "modes": {
            "positionalDefault": modes.positional_default,
            "positionalNamed": modes.positional_named,
            "simpleDefault": modes.simple_default,
            "simpleNamed": modes.simple_named,
        },
    }


def locate_request(payload: dict[str, Any]) -> dict[str, Any]:
    """Report where each classname is found and which output line it lands on."""
    exports = _resolve_exports(payload)
    options = Options.from_dict(payload.get("options") or {})
    if exports.source_map is None:
        raise CLIError(
            code="SRV010",
            message="locate requires a source map.",
            hint="Provide 'sourceMap' in the payload.",
        )

    index = SourceMapIndex(exports.source_map)
    scanner = CssLineScanner.from_css(exports.css)
    size = LineBuffer.slots_for(len(scanner))
    placer = DeclarationPlacer(scanner, index)

    located: list[dict[str, Any]] = []
    for entry in exports.classes:
        classname = transform_classname(entry.generated, options.classname_transform)[0]
        match = scanner.find(entry.original)
        generated = placer.query_position(match)
        original = index.original_position_for(generated)
        located.append(
            {
                "classname": classname,
                "original": entry.original,
                "validIdentifier": is_valid_identifier(classname),
                "match": match.to_dict() if match is not None else None,
                "generated": generated.to_dict(),
                "originalPosition": original.to_dict(),
                "outputLine": placer.line_index(original, entry.original, size),
            }
        )
    return {"lines": size, "classes": located}


def capabilities_request(payload: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return service capability metadata for automation clients."""
    return {
        "service": "cssdts",
        "version": VERSION,
        "methods": sorted(_METHODS.keys()),
        "goToDefinition": [False, True, "named", "default"],
        "classnameTransforms": ["asIs", "camelCase", "camelCaseOnly", "dashes", "dashesOnly"],
    }


_METHODS: dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
    "generate": generate_request,
    "locate": locate_request,
    "capabilities": capabilities_request,
}


def dispatch(method: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
    """Dispatch a method call for integration adapters."""
    fn = _METHODS.get(method)
    if fn is None:
        raise CLIError(
            code="SRV001",
            message=f"Unknown service method '{method}'.",
            hint=f"Available methods: {', '.join(sorted(_METHODS.keys()))}",
        )
    return fn(payload or {})


def safe_dispatch(method: str, payload: dict[str, Any] | None = None) -> tuple[bool, dict[str, Any]]:
    """Dispatch method and normalize errors for transport layers."""
    try:
        return True, dispatch(method, payload)
    except DtsError as err:
        return False, {"error": err.to_diagnostic().to_dict()}


def _resolve_exports(payload: dict[str, Any]) -> CSSExports:
    exports = payload.get("exports")
    if not isinstance(exports, dict):
        raise CLIError(
            code="SRV002",
            message="Missing 'exports' object.",
            hint="Provide {\"exports\": {\"classes\": {...}, \"css\": \"...\", \"sourceMap\": {...}}}.",
        )
    return CSSExports.from_dict(exports)
