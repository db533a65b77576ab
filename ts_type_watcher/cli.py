"""CLI entrypoints for ts-type-watcher commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import DEFAULT_CONFIG_FILENAME, load_config
from .errors import ConfigurationError, DirectoryNotFoundError, WriteError
from .logging import configure_logging
from .pipeline import RegenerationPipeline
from .scheduler import RegenerationScheduler
from .watcher import watch_services


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


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ts-type-watcher",
        description="Generate TypeScript return type declarations from service files.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help=f"Path to the configuration file (defaults to ./{DEFAULT_CONFIG_FILENAME}).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Regenerate the types file once and exit.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)

    watch_parser = subparsers.add_parser(
        "watch",
        help="Regenerate the types file whenever a service file changes.",
    )
    _add_verbose_option(watch_parser, suppress_default=True)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for ts-type-watcher commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        log_file=args.log_file,
        timestamps=args.command == "watch",
    )

    try:
        config = load_config(args.config)
    except ConfigurationError as exc:
        parser.exit(1, f"{exc}\nFailed to load configuration.\n")

    pipeline = RegenerationPipeline(config)

    if args.command == "generate":
        try:
            report = pipeline.run()
        except (ConfigurationError, DirectoryNotFoundError, WriteError) as exc:
            parser.exit(1, f"{exc}\n")
        print(f"Types written to {_relativize(report.output_path)}")
        if report.skipped:
            names = ", ".join(record.function_name for record in report.skipped)
            print(f"Skipped {len(report.skipped)} function(s): {names}")
    elif args.command == "watch":
        scheduler = RegenerationScheduler(pipeline.run)
        try:
            watch_services(config, scheduler)
        except ConfigurationError as exc:
            parser.exit(1, f"{exc}\n")
        except KeyboardInterrupt:
            print("Stopped watching.")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
