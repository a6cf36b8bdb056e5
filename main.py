#!/usr/bin/env python3
"""
c-sync: AWS S3 backup and sync utility.

Main entry point for the c-sync command line.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from csync.aws_client import AwsCliClient
from csync.config import AppConfig, load_config
from csync.dispatcher import CommandDispatcher
from csync.exceptions import (
    ConfigurationError,
    ExternalClientError,
    InvalidPathError,
    UnknownCommandError,
)

CONFIG_ENV_VAR = "CSYNC_CONFIG"
DEFAULT_CONFIG_FILE = Path(__file__).resolve().parent / "config.env"


def default_config_path() -> Path:
    """
    Locate config.env when ``--config`` is not given.

    Checked in order: ``$CSYNC_CONFIG``, ``config.env`` next to this script,
    then ``$XDG_CONFIG_HOME/c-sync/config.env`` (``~/.config`` by default).
    The last location is returned when none exist.
    """
    if os.environ.get(CONFIG_ENV_VAR):
        return Path(os.environ[CONFIG_ENV_VAR])
    if DEFAULT_CONFIG_FILE.is_file():
        return DEFAULT_CONFIG_FILE

    config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(
        os.path.expanduser("~"), ".config"
    )
    return Path(config_home) / "c-sync" / "config.env"


EPILOG = """
Commands:
  bu [path]     Backup a file or directory to S3
  sync [path]   Sync cloud files with local copy
  ls [path]     List cloud directories
  rs [path]     Restore from cloud
  h             Show this help message

Examples:
  c-sync bu                # Backup current directory
  c-sync bu file.txt       # Backup a specific file
  c-sync bu directory/     # Backup a specific directory
  c-sync sync              # Sync current directory
  c-sync ls                # List contents of current directory in S3
  c-sync rs file.txt       # Restore a file from S3

Note:
  - Paths can be specified as:
    * Relative path (from current directory)
    * Absolute path (starting with /)
    * Home directory path (starting with ~)
  - If no path is provided, current directory is used
"""


def setup_logging(config: AppConfig, verbose: bool = False) -> logging.Logger:
    """Set up logging configuration."""
    logger = logging.getLogger("csync")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    formatter = logging.Formatter("%(asctime)s %(levelname)-8s %(message)s")

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else config.log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if config.log_file:
        log_file_path = Path(config.log_file).expanduser()
        log_file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
        file_handler.setLevel(config.log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="c-sync",
        usage="c-sync [options] <command> [path]",
        description="AWS S3 backup and sync utility",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )

    parser.add_argument(
        "arguments",
        nargs=argparse.REMAINDER,
        metavar="<command> [path]",
        help=(
            "Command to run (see below) and the file or directory to operate on "
            "(defaults to the current directory). Options must come before the "
            "command; everything after it is taken as given, extra arguments "
            "are ignored."
        ),
    )
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help=(
            f"Path to config.env (default: ${CONFIG_ENV_VAR}, config.env next to "
            "this script, or ~/.config/c-sync/config.env)"
        ),
    )
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Show what would be transferred without transferring",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log debug output to stderr"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = None

    command = args.arguments[0] if args.arguments else None
    path = args.arguments[1] if len(args.arguments) > 1 else ""
    config_path = args.config or default_config_path()

    try:
        config = load_config(config_path)
        logger = setup_logging(config, verbose=args.verbose)
        if len(args.arguments) > 2:
            logger.debug(f"Ignoring extra arguments: {args.arguments[2:]}")

        dispatcher = CommandDispatcher(
            config,
            AwsCliClient(config, dry_run=args.dry_run),
            cwd=os.getcwd(),
            home=os.path.expanduser("~"),
            usage=parser.format_help(),
        )
        return dispatcher.dispatch(command, path)

    except UnknownCommandError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1

    except ConfigurationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if "hint" in e.details:
            print(e.details["hint"], file=sys.stderr)
        if logger:
            logger.critical(f"Configuration error: {e.message}")
        return 1

    except InvalidPathError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if logger:
            logger.error(e.message)
        return 1

    except ExternalClientError as e:
        if logger:
            logger.error(e.message)
        return e.returncode

    except KeyboardInterrupt:
        print("\nINTERRUPTED: c-sync interrupted by user", file=sys.stderr)
        if logger:
            logger.warning("c-sync interrupted by user")
        return 130

    except Exception as e:
        error_msg = f"Unexpected error: {e}"
        print(f"ERROR: {error_msg}", file=sys.stderr)
        if logger:
            logger.critical(error_msg, exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
