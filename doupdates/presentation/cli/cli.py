"""
CLI Module

Architectural Intent:
- Command-line interface for doupdates
- Loads settings and deploy.json, then delegates to the RunUpdates use case
  via the composition root
- The only place that turns fatal errors into process exit codes
"""

import argparse
import asyncio
import logging
import sys
import traceback
from pathlib import Path
from doupdates import composition_root
from doupdates.domain.errors import DoUpdatesError
from doupdates.infrastructure.config import load_deploy_config, load_settings
from doupdates.infrastructure.logging import configure_logging

logger = logging.getLogger("doupdates.cli")

EXIT_FATAL = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doupdates",
        description="Build and deploy NixOS flake configurations to reachable remotes",
    )
    parser.add_argument(
        "--flake-dir",
        "-f",
        help="Directory holding flake.nix and deploy.json (default: ~/NixOS)",
    )
    parser.add_argument("--log-file", help="Append log messages to this file")
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true", help="Only show warnings and errors"
    )
    parser.add_argument(
        "--json-logs", action="store_true", help="Structured JSON console output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    deploy_parser = subparsers.add_parser(
        "deploy", help="Probe, refresh and deploy every online host (default)"
    )
    deploy_parser.add_argument(
        "--host",
        action="append",
        metavar="NAME",
        help="Only deploy this configuration (repeatable)",
    )
    deploy_parser.add_argument(
        "--verify",
        action="store_true",
        help="After each deploy, read the active system over SSH",
    )

    subparsers.add_parser("status", help="Probe remotes and report status only")
    return parser


def _log_level(args: argparse.Namespace, configured: str) -> int:
    if args.debug:
        return logging.DEBUG
    if args.quiet:
        return logging.WARNING
    level = logging.getLevelName(configured.upper())
    # getLevelName returns a string for unknown names
    return level if isinstance(level, int) else logging.INFO


async def async_main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    command = args.command or "deploy"

    try:
        settings = load_settings(flake_dir=args.flake_dir, log_file=args.log_file)
    except DoUpdatesError as e:
        print(f"[-] {e}", file=sys.stderr)
        return EXIT_FATAL

    configure_logging(
        level=_log_level(args, settings.log_level),
        log_file=Path(settings.log_file),
        json_format=args.json_logs,
    )

    try:
        config = load_deploy_config(settings.config_path)
        container = composition_root.create_container(
            settings, verify=getattr(args, "verify", False)
        )
        await container.telemetry.initialize()
        await container.run_updates.execute(
            config,
            settings.flake_path,
            status_only=command == "status",
            only=getattr(args, "host", None),
        )
    except DoUpdatesError as e:
        logger.error("%s", e)
        if args.debug:
            traceback.print_exc()
        return EXIT_FATAL

    return 0


def main():
    try:
        code = asyncio.run(async_main())
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        code = EXIT_INTERRUPTED
    sys.exit(code)


if __name__ == "__main__":
    main()
