"""
Command-line surface for verkeep.

Usage:
  verkeep                       print the current version
  verkeep write major=1 minor=0 patch=0 pre-release=rc.1
  verkeep set minor=5
  verkeep bump minor
  verkeep check
  verkeep init
"""
import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from ._version import __version__
from .config import ConfigManager
from .constants import LOG_LEVELS
from .controller import VersionController, parse_component_args
from .exceptions import UsageError, VerkeepError
from .logging_config import setup_logging

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='verkeep',
        description="Manage a project's version in resources/VERSION and its descriptor.",
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--root', default='.', help="Project root directory (default: current directory)")
    parser.add_argument('--log-level', type=str.upper, choices=LOG_LEVELS, help="Console log level (overrides .verkeep.json)")
    parser.add_argument('--log-file', type=Path, help="Also write a DEBUG log to this file")

    subparsers = parser.add_subparsers(dest='command', metavar='command')
    write_parser = subparsers.add_parser('write', help="Replace the whole version with the given components")
    write_parser.add_argument('components', nargs='*', metavar='component=value')
    set_parser = subparsers.add_parser('set', help="Override only the given components")
    set_parser.add_argument('components', nargs='*', metavar='component=value')
    bump_parser = subparsers.add_parser('bump', help="Bump major, minor or patch")
    bump_parser.add_argument('component', metavar='major|minor|patch')
    subparsers.add_parser('check', help="Fail if the descriptor and the version record differ")
    subparsers.add_parser('init', help="Create the version record from the descriptor")
    return parser


def run(controller: VersionController, args: argparse.Namespace) -> int:
    """Dispatches one parsed command to the controller."""
    settings = controller.settings
    if args.command is None:
        print(controller.current())
    elif args.command == 'write':
        controller.write(**parse_component_args(args.components))
    elif args.command == 'set':
        controller.set(**parse_component_args(args.components))
    elif args.command == 'bump':
        controller.bump(args.component)
    elif args.command == 'check':
        result = controller.check()
        if not result.matches:
            for line in result.report_lines(settings.descriptor_file, settings.version_file):
                print(line, file=sys.stderr)
            return EXIT_FAILURE
    elif args.command == 'init':
        version = controller.init()
        print(f"Created {settings.version_file} with version {version}")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the `verkeep` console script."""
    args = build_parser().parse_args(argv)
    root = Path(args.root).resolve()

    # Load settings before logging so the configured level applies.
    settings = ConfigManager(root).load()
    setup_logging(args.log_level or settings.log_level, args.log_file)
    logger = logging.getLogger(__name__)
    logger.debug(f"verkeep {__version__}: command={args.command!r} root={root}")

    controller = VersionController(root, settings)
    try:
        return run(controller, args)
    except UsageError as e:
        logger.debug(f"Usage error: {e}")
        print(e, file=sys.stderr)
        return EXIT_USAGE
    except VerkeepError as e:
        logger.debug(f"Command '{args.command}' aborted: {e}")
        print(e, file=sys.stderr)
        return EXIT_FAILURE
