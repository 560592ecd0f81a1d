"""Command line entry point for generating TypeScript command bindings.

`generate` reads per-file fact documents, resolves every custom type the
exported commands reach and writes a types module plus a commands module.
`init` writes a starter configuration.
"""

import argparse
import logging
from pathlib import Path

from cmdbind.configure_logging import configure_logging
from cmdbind.errors import ConfigError, TypeConflictError
from cmdbind.load_config import DEFAULT_CONFIG_FILE, load_config, write_default_config
from cmdbind.run_generate import run_generate

logger = logging.getLogger(__name__)


def _cmd_generate(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config)
        summary = run_generate(config, dry_run=args.dry_run, report_path=args.report)
    except TypeConflictError as e:
        logger.error(str(e))
        logger.error(
            "Rename the conflicting types or make the imports explicit so each "
            "name resolves to a single file."
        )
        return 1
    except ConfigError as e:
        logger.error(str(e))
        return 1

    if args.dry_run:
        print(f"Dry run complete: {summary.commands} commands, {summary.types} types")
    else:
        print(
            f"Generated bindings for {summary.commands} commands and "
            f"{summary.types} types into {len(summary.files_written)} files"
        )
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    try:
        path = write_default_config(args.output, force=args.force)
    except ConfigError as e:
        logger.error(str(e))
        return 1
    print(f"Wrote default configuration to {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the `cmdbind` command."""
    ap = argparse.ArgumentParser(
        prog="cmdbind",
        description="Generate typed TypeScript bindings for exported commands.",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate the types and commands files")
    gen.add_argument(
        "-c",
        "--config",
        default=DEFAULT_CONFIG_FILE,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_FILE})",
    )
    gen.add_argument(
        "-v", "--verbose", action="store_true", help="Log every resolution step"
    )
    gen.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve and render without writing files",
    )
    gen.add_argument(
        "--report",
        type=Path,
        help="Write a JSON resolution report to this path",
    )
    gen.add_argument("--log-file", type=Path, help="Also write logs to this file")
    gen.set_defaults(func=_cmd_generate)

    init = sub.add_parser("init", help="Write a default configuration file")
    init.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path(DEFAULT_CONFIG_FILE),
        help=f"Where to write the configuration (default: {DEFAULT_CONFIG_FILE})",
    )
    init.add_argument("--force", action="store_true", help="Overwrite an existing file")
    init.set_defaults(func=_cmd_init)
    return ap


def main(argv: list[str] | None = None) -> int:
    """Run the cmdbind command line."""
    args = build_parser().parse_args(argv)
    configure_logging(
        verbose=getattr(args, "verbose", False),
        log_file=getattr(args, "log_file", None),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
