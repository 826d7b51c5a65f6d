"""CLI entrypoints for embedgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import CONFIG_FILENAME, load_config
from .encoding.constants import STYLES
from .errors import EmbedGenError
from .generator import GenerationSettings, Generator
from .logging import configure_logging
from .registry import DUPLICATE_POLICIES


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: '{value}'") from None
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: '{value}'")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="embedgen",
        description="Generate C++ source files embedding the content of external files.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Embed files (directories are iterated recursively) into a .h/.cpp pair.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "inputs",
        nargs="*",
        metavar="INPUT",
        help="File or directory to embed. Several inputs can be given.",
    )
    generate_parser.add_argument(
        "-d",
        "--output-dir",
        type=Path,
        default=None,
        help="Directory where the generated files are saved (created if missing).",
    )
    generate_parser.add_argument(
        "-o",
        "--output-base",
        default=None,
        help="Base name of the generated files: '-o generated' writes generated.h and generated.cpp.",
    )
    generate_parser.add_argument(
        "-n",
        "--namespace",
        default=None,
        help="C++ namespace wrapping the generated code (recommended).",
    )
    generate_parser.add_argument(
        "--style",
        choices=STYLES,
        default=None,
        help="Literal style for embedded data.",
    )
    generate_parser.add_argument(
        "--wrap-width",
        type=_positive_int,
        default=None,
        help="Column budget of one string literal segment.",
    )
    generate_parser.add_argument(
        "--row-size",
        type=_positive_int,
        default=None,
        help="Byte constants per line in array style.",
    )
    generate_parser.add_argument(
        "--on-duplicate",
        choices=DUPLICATE_POLICIES,
        default=None,
        help="What to do when two inputs share a file name.",
    )
    generate_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to a {CONFIG_FILENAME} file or its directory (defaults to the current directory).",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated documents instead of writing them.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing generation.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for embedgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "generate":
        _run_generate(parser, args)
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_generate(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    try:
        config = load_config(args.config or Path.cwd())
        settings = GenerationSettings.from_config(
            config,
            output_dir=args.output_dir,
            base_name=args.output_base,
            namespace=args.namespace,
            style=args.style,
            wrap_width=args.wrap_width,
            row_size=args.row_size,
            on_duplicate=args.on_duplicate,
        )
        result = Generator().run(args.inputs, settings, dry_run=bool(args.dry_run))
    except (EmbedGenError, ValueError) as exc:
        parser.exit(1, f"embedgen: {exc}\n")

    if result.dry_run:
        sys.stdout.write(f"// ----- {result.header_path.name} -----\n")
        sys.stdout.write(result.header_text or "")
        sys.stdout.write(f"// ----- {result.source_path.name} -----\n")
        sys.stdout.write(result.source_text or "")
    else:
        print(
            f"Embedded {result.file_count} file(s) into "
            f"{_relativize(result.header_path)} and {_relativize(result.source_path)}"
        )


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
