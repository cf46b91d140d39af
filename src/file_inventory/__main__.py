"""Application entry point and CLI for file-inventory.

This module implements the main entry point for the file-inventory
application, providing CLI argument parsing, optional configuration
loading, logging setup, and running a single scan whose listing is printed
to stdout.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from file_inventory.app.listing import render_listing
from file_inventory.core.config import (
    ConfigurationError,
    MainConfig,
    load_main_config,
)
from file_inventory.core.data.filesystem.scanner import TreeScanner
from file_inventory.core.exceptions import InvalidScanArgumentError
from file_inventory.utils.logging import configure_logging

__all__ = ["main", "parse_arguments", "run"]

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_RUNTIME_ERROR = 1
EXIT_INVALID_ARGUMENT = 2


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for file-inventory application.

    Args:
        argv: Argument list, ``None`` for ``sys.argv[1:]``

    Returns:
        Parsed arguments namespace

    CLI Arguments:
        root: Directory to inventory
        --depth, -d: Depth limit (overrides config)
        --config, -c: Path to YAML configuration file
        --log-level: Override log level from config
        --syslog: Also log to syslog
        --workers: Worker threads for folder aggregation (overrides config)
        --follow-symlinks: Follow symbolic links (overrides config)
    """
    parser = argparse.ArgumentParser(
        prog="file-inventory",
        description="List a directory tree down to a depth limit with types and aggregated sizes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  file-inventory ~/Documents
  file-inventory ~/Documents --depth 2
  file-inventory /srv/share --config inventory.yaml --log-level DEBUG
        """,
    )

    _ = parser.add_argument(
        "root",
        type=Path,
        help="Directory to inventory",
        metavar="ROOT",
    )

    _ = parser.add_argument(
        "--depth",
        "-d",
        type=int,
        default=None,
        help="Depth limit below ROOT, 1 lists only its direct children (default: 1)",
        metavar="N",
    )

    _ = parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file",
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override log level from configuration",
        metavar="LEVEL",
    )

    _ = parser.add_argument(
        "--syslog",
        action="store_true",
        help="Also send log records to syslog",
    )

    _ = parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads for folder size aggregation",
        metavar="N",
    )

    _ = parser.add_argument(
        "--follow-symlinks",
        action="store_true",
        help="Follow symbolic links (no loop detection)",
    )

    return parser.parse_args(argv)


def run(
    *,
    root: Path,
    config: MainConfig,
    max_depth: int | None = None,
    max_workers: int | None = None,
    follow_symlinks: bool = False,
) -> str:
    """Run one scan and render its listing.

    Args:
        root: Directory to inventory
        config: Validated configuration
        max_depth: Depth limit override
        max_workers: Aggregation worker override
        follow_symlinks: Force following symbolic links

    Returns:
        Rendered listing text

    Raises:
        InvalidScanArgumentError: If root or depth is unusable
    """
    logger = logging.getLogger(__name__)

    depth = max_depth if max_depth is not None else config.scan.max_depth
    workers = max_workers if max_workers is not None else config.scan.max_workers
    if workers < 1:
        msg = f"--workers must be at least 1, got {workers}"
        raise InvalidScanArgumentError(msg)

    scanner = TreeScanner(
        config.exclusion_rules(),
        follow_symlinks=follow_symlinks or config.scan.follow_symlinks,
        max_workers=workers,
    )

    started = time.perf_counter()
    entries = scanner.scan(root, depth)
    elapsed = time.perf_counter() - started

    logger.debug("Rendering %d entries", len(entries), extra={"entries": len(entries)})
    return render_listing(entries, elapsed)


def main(argv: Sequence[str] | None = None) -> NoReturn:
    """Main entry point for file-inventory application.

    Exit Codes:
        0: Scan completed
        1: Configuration error or runtime error
        2: Invalid scan root, depth or worker count
    """
    args = parse_arguments(argv)

    # Extract args with type annotations to avoid reportAny at argparse boundary
    root_arg: Path = args.root  # pyright: ignore[reportAny]  # argparse boundary
    depth_arg: int | None = args.depth  # pyright: ignore[reportAny]  # argparse boundary
    config_arg: Path | None = args.config  # pyright: ignore[reportAny]  # argparse boundary
    log_level_arg: str | None = args.log_level  # pyright: ignore[reportAny]  # argparse boundary
    syslog_arg: bool = args.syslog  # pyright: ignore[reportAny]  # argparse boundary
    workers_arg: int | None = args.workers  # pyright: ignore[reportAny]  # argparse boundary
    follow_arg: bool = args.follow_symlinks  # pyright: ignore[reportAny]  # argparse boundary

    try:
        config = load_main_config(config_arg) if config_arg is not None else MainConfig()

        if log_level_arg is not None:
            config.application.log_level = log_level_arg

        configure_logging(
            log_level=config.application.log_level,
            enable_syslog=syslog_arg or config.application.syslog_enabled,
            enable_console=True,
        )

        listing = run(
            root=root_arg,
            config=config,
            max_depth=depth_arg,
            max_workers=workers_arg,
            follow_symlinks=follow_arg,
        )

    except ConfigurationError as exc:
        print(f"Configuration error:\n{exc}", file=sys.stderr)
        sys.exit(EXIT_CONFIG_ERROR)

    except InvalidScanArgumentError as exc:
        print(f"Invalid argument: {exc}", file=sys.stderr)
        sys.exit(EXIT_INVALID_ARGUMENT)

    except KeyboardInterrupt:
        print("\nScan interrupted", file=sys.stderr)
        sys.exit(EXIT_RUNTIME_ERROR)

    except Exception as exc:
        print(f"Unexpected error: {exc}", file=sys.stderr)
        logging.exception("Unexpected error during application execution")
        sys.exit(EXIT_RUNTIME_ERROR)

    print(listing)
    sys.exit(EXIT_SUCCESS)


if __name__ == "__main__":
    main()
