"""Command-line interface for cssdts."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys

from cssdts.errors import Diagnostic, DtsError, format_diagnostic
from cssdts.main import generate_file
from cssdts.options import GoToDefinition, Options, load_options
from cssdts.serialization import load_exports
from cssdts.service import locate_request
from cssdts.transforms import ClassnameTransform


def build_parser() -> argparse.ArgumentParser:
    """Build argparse command tree for cssdts CLI."""
    parser = argparse.ArgumentParser(prog="cssdts", description="TypeScript declarations for CSS modules")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser("generate", help="Generate a .d.ts body from class exports")
    _add_input_arguments(generate_parser)
    generate_parser.add_argument("-o", "--output", help="Output .d.ts path (default: next to --css, else stdout)")
    generate_parser.add_argument("--stdout", action="store_true", help="Print declarations instead of writing")
    generate_parser.add_argument("--file-name", help="File name reported to custom templates")
    generate_parser.add_argument("--no-named-exports", action="store_true", help="Skip named export statements")
    generate_parser.add_argument(
        "--allow-unknown-classnames",
        action="store_true",
        help="Add a catch-all index signature to the default export",
    )
    generate_parser.add_argument(
        "--no-unchecked-indexed-access",
        action="store_true",
        help="Type classnames as possibly undefined",
    )
    generate_parser.add_argument("--template", help="Custom template as module[:symbol] or path to .py")
    generate_parser.add_argument("--debug", action="store_true", help="Log debug info to stderr")

    locate_parser = subparsers.add_parser("locate", help="Print where each classname maps in the original source")
    _add_input_arguments(locate_parser)

    return parser


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("exports", help="JSON file with classes (and optionally css/sourceMap)")
    parser.add_argument("--css", help="Generated CSS file")
    parser.add_argument("--source-map", help="Source map JSON file")
    parser.add_argument("--options", help="Options JSON or tsconfig.json file")
    parser.add_argument(
        "--classname-transform",
        choices=[member.value for member in ClassnameTransform],
        help="Classname transform",
    )
    parser.add_argument(
        "--go-to-definition",
        choices=[member.value for member in GoToDefinition],
        help="Align declarations with original source lines",
    )


def run(argv: list[str] | None = None) -> int:
    """Run CLI and return shell exit code."""
    args = build_parser().parse_args(argv)

    try:
        options = _resolve_options(args)

        if args.command == "generate":
            if args.debug:
                logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")
            to_stdout = args.stdout or (args.output is None and args.css is None)
            artifacts = generate_file(
                args.exports,
                css_path=args.css,
                source_map_path=args.source_map,
                options=options,
                output_path=args.output,
                file_name=args.file_name,
                write=not to_stdout,
            )
            if to_stdout:
                sys.stdout.write(artifacts.dts)
            else:
                print(artifacts.output_path)
            return 0

        if args.command == "locate":
            exports = load_exports(args.exports, css_path=args.css, source_map_path=args.source_map)
            payload = {
                "exports": {
                    "classes": exports.class_mapping(),
                    "css": exports.css,
                    "sourceMap": exports.source_map,
                },
                "options": {"classnameTransform": options.classname_transform.value},
            }
            print(json.dumps(locate_request(payload), indent=2, sort_keys=True))
            return 0

        raise argparse.ArgumentTypeError(f"Unsupported command '{args.command}'.")

    except DtsError as err:
        print(format_diagnostic(err.to_diagnostic()), file=sys.stderr)
        return 1
    except argparse.ArgumentTypeError as err:
        diag = Diagnostic(code="CLI001", message=str(err), hint="Run cssdts --help for usage.")
        print(format_diagnostic(diag), file=sys.stderr)
        return 2
    except Exception as err:  # pragma: no cover - defensive fallback
        diag = Diagnostic(code="CLI999", message=f"Internal error: {err}", hint="Run with --debug")
        print(format_diagnostic(diag), file=sys.stderr)
        return 3


def _resolve_options(args: argparse.Namespace) -> Options:
    options = load_options(args.options) if args.options else Options()
    overrides: dict[str, object] = {}
    if args.classname_transform:
        overrides["classname_transform"] = ClassnameTransform.parse(args.classname_transform)
    if args.go_to_definition:
        overrides["go_to_definition"] = GoToDefinition.parse(args.go_to_definition)
    if getattr(args, "no_named_exports", False):
        overrides["named_exports"] = False
    if getattr(args, "allow_unknown_classnames", False):
        overrides["allow_unknown_classnames"] = True
    if getattr(args, "no_unchecked_indexed_access", False):
        overrides["no_unchecked_indexed_access"] = True
    if getattr(args, "template", None):
        overrides["custom_template"] = args.template
    return dataclasses.replace(options, **overrides) if overrides else options


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
