"""Top-level declaration generation for CSS module exports."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from cssdts.declarations import (
    DEFAULT_FOOTER,
    DEFAULT_HEADER,
    UNKNOWN_CLASSNAMES_SIGNATURE,
    indexed_property,
    named_export,
)
from cssdts.errors import GenerationError
from cssdts.exports import CSSExports
from cssdts.options import GoToDefinition, Options
from cssdts.placer import DeclarationPlacer, ExportTarget, LineBuffer
from cssdts.scanner import CssLineScanner
from cssdts.serialization import declaration_path, load_exports, write_declarations
from cssdts.source_map import SourceMapIndex
from cssdts.template import TemplateContext, apply_template
from cssdts.transforms import is_valid_identifier, transform_all, transform_classname


DEFAULT_LOGGER = logging.getLogger("cssdts")


@dataclass(frozen=True)
class GenerationModes:
    """Which of the four output blocks are produced."""

    positional_default: bool
    positional_named: bool
    simple_default: bool
    simple_named: bool


@dataclass
class GenerateArtifacts:
    """Result of a file-level generation."""

    dts: str
    output_path: Path | None


def select_modes(options: Options) -> GenerationModes:
    """Resolve the active output blocks from options."""
    positional_default = options.go_to_definition is GoToDefinition.DEFAULT
    positional_named = options.go_to_definition is GoToDefinition.NAMED
    return GenerationModes(
        positional_default=positional_default,
        positional_named=positional_named,
        simple_default=not positional_default,
        simple_named=options.named_exports and not positional_named,
    )


def create_dts_exports(
    exports: CSSExports,
    file_name: str,
    options: Options | None = None,
    logger: logging.Logger | None = None,
) -> str:
    """Build declaration file text for one CSS module."""
    options = options or Options()
    log = logger or DEFAULT_LOGGER
    modes = select_modes(options)
    possibly_undefined = options.no_unchecked_indexed_access

    dts = ""

    if modes.positional_default or modes.positional_named:
        dts = positional_block(exports, options, modes, log)

    if modes.simple_default or modes.simple_named:
        processed = transform_all(exports.class_names(), options.classname_transform)
        if modes.simple_default:
            dts += simple_default_block(processed, possibly_undefined, options.allow_unknown_classnames)
        if modes.simple_named:
            dts += simple_named_block(processed, possibly_undefined)

    if options.custom_template is not None:
        log.debug("Applying custom template to %s.", file_name)
        context = TemplateContext(classes=exports.class_mapping(), file_name=file_name, logger=log)
        return apply_template(options.custom_template, dts, context)

    return dts


def positional_block(
    exports: CSSExports,
    options: Options,
    modes: GenerationModes,
    log: logging.Logger,
) -> str:
    """Lay out declarations along the original source's lines."""
    if exports.source_map is None:
        raise GenerationError(
            code="GEN001",
            message="goToDefinition requires a source map, but none was supplied.",
            hint="Enable source maps in the CSS pipeline or turn goToDefinition off.",
        )

    index = SourceMapIndex(exports.source_map)
    scanner = CssLineScanner.from_css(exports.css)
    buffer = LineBuffer(len(scanner))
    target = ExportTarget.DEFAULT if modes.positional_default else ExportTarget.NAMED

    if target is ExportTarget.DEFAULT:
        buffer.seed(DEFAULT_HEADER)

    # Only the first transform result of each classname is placed.
    entries = [
        (transform_classname(entry.generated, options.classname_transform)[0], entry.original)
        for entry in exports.classes
    ]
    placer = DeclarationPlacer(
        scanner,
        index,
        possibly_undefined=options.no_unchecked_indexed_access,
        log=log,
    )
    placer.place(entries, buffer, target)

    dts = buffer.render()
    if target is ExportTarget.DEFAULT:
        dts += "\n" + DEFAULT_FOOTER
    return dts


def simple_default_block(classnames: list[str], possibly_undefined: bool, allow_unknown: bool) -> str:
    lines = [DEFAULT_HEADER]
    lines.extend(indexed_property(classname, possibly_undefined) for classname in classnames)
    if allow_unknown:
        lines.append(UNKNOWN_CLASSNAMES_SIGNATURE)
    return "\n".join(lines) + "\n" + DEFAULT_FOOTER


def simple_named_block(classnames: list[str], possibly_undefined: bool) -> str:
    return "".join(
        named_export(classname, possibly_undefined) + "\n"
        for classname in classnames
        if is_valid_identifier(classname)
    )


def generate_file(
    exports_path: str | Path,
    *,
    css_path: str | Path | None = None,
    source_map_path: str | Path | None = None,
    options: Options | None = None,
    output_path: str | Path | None = None,
    file_name: str | None = None,
    write: bool = True,
    log: logging.Logger | None = None,
) -> GenerateArtifacts:
    """Generate declarations from files and write them when a target is known.

    Without `output_path` the declarations are written next to `css_path`;
    with neither, or with `write=False`, nothing is written.
    """
    exports = load_exports(exports_path, css_path=css_path, source_map_path=source_map_path)
    name = file_name or str(css_path or exports_path)
    dts = create_dts_exports(exports, name, options, logger=log)

    target: Path | None = None
    if write and output_path is not None:
        target = write_declarations(dts, output_path)
    elif write and css_path is not None:
        target = write_declarations(dts, declaration_path(css_path))
    if target is not None:
        (log or DEFAULT_LOGGER).info("Wrote %s.", target)
    return GenerateArtifacts(dts=dts, output_path=target)


if __name__ == "__main__":
    from cssdts.cli import run

    raise SystemExit(run())
