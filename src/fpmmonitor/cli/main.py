"""
Command-line interface for the fpmmonitor PHP-FPM listen queue agent.

This module provides the main CLI entry point: it parses arguments, sets up
logging, loads the configuration, wires the sampling pipeline to the metrics
sink and runs the reporting loop until SIGINT or SIGTERM.
"""

import argparse
import asyncio
import logging
import signal
import sys
import tomllib
from pathlib import Path
from typing import List, Optional

from .. import __version__
from ..collectors import SampleAggregator
from ..config import get_config, set_config_overrides, set_config_path
from ..metrics import create_sink
from ..monitoring import IntervalScheduler, ReportingLoop
from ..system import find_missing_tools
from ..validation import ValidationError, handle_cli_error, validate_path_exists

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def setup_logging(level: str = "INFO") -> None:
    """Configure process-wide logging to stdout."""
    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    # botocore is chatty at DEBUG and its retries are not ours to report.
    logging.getLogger("botocore").setLevel(max(logging.INFO, getattr(logging, level)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fpmmonitor",
        description="Report the PHP-FPM listen queue of local Docker containers to CloudWatch.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to a config.toml file. Defaults to /etc/fpmmonitor/config.toml if present.",
    )
    parser.add_argument(
        "-i",
        "--interval",
        type=int,
        help="Interval in seconds between samples (default: 10).",
    )
    parser.add_argument(
        "-r",
        "--region",
        type=str,
        help="AWS region (defaults to the environment or AWS config).",
    )
    parser.add_argument(
        "-n",
        "--namespace",
        type=str,
        help="CloudWatch namespace for metrics (default: PhpFpm).",
    )
    parser.add_argument(
        "-d",
        "--dimension",
        action="append",
        metavar="KEY=VALUE",
        help="Metric dimension as key=value. Can be given multiple times.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the metric instead of sending it to CloudWatch.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="INFO",
        help="Logging level (default: INFO).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def apply_cli_overrides(args: argparse.Namespace) -> None:
    """Register CLI values as configuration overrides. Unset options are skipped."""
    set_config_overrides(
        {
            "agent": {
                "interval_seconds": args.interval,
                "dry_run": True if args.dry_run else None,
            },
            "metrics": {
                "namespace": args.namespace,
                "region": args.region,
                "dimensions": args.dimension,
            },
        }
    )


async def run_agent(reporting_loop: ReportingLoop) -> None:
    """Run the reporting loop until SIGINT or SIGTERM."""
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def request_shutdown(signum: int) -> None:
        if stop_event.is_set():
            logger.warning("Shutdown already in progress. Please be patient.")
            return
        logger.info(f"Signal {signal.strsignal(signum)} received. Initiating graceful shutdown...")
        stop_event.set()

    for signum in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signum, request_shutdown, signum)

    try:
        await reporting_loop.run(stop_event)
    finally:
        for signum in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(signum)


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line interface for the fpmmonitor agent.

    Raises:
        SystemExit: On configuration errors or metrics client setup failures.
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    if args.config is not None:
        try:
            set_config_path(Path(validate_path_exists(args.config, field_name="--config")))
        except ValidationError as e:
            handle_cli_error(error=e, context="configuration path", exit_code=1, logger=logger)

    apply_cli_overrides(args)

    try:
        config = get_config()
    except (OSError, ValidationError, tomllib.TOMLDecodeError) as e:
        handle_cli_error(error=e, context="configuration loading", exit_code=1, logger=logger)

    logger.info("Starting PHP-FPM queue monitor")
    logger.info(f"Interval: {config.interval_seconds} seconds")
    logger.info(f"Namespace: {config.namespace}")
    logger.info(f"Dry run: {config.dry_run}")

    missing_tools = find_missing_tools([config.docker_binary, "nsenter", "ss"])
    if missing_tools:
        logger.warning(
            f"Required tools not found on PATH: {', '.join(missing_tools)}. "
            "Sampling will fail until they are installed."
        )

    try:
        sink = create_sink(config)
    except Exception as e:
        handle_cli_error(error=e, context="metrics client setup", exit_code=1, logger=logger)

    reporting_loop = ReportingLoop(
        aggregator=SampleAggregator.from_config(config),
        sink=sink,
        scheduler=IntervalScheduler(config.interval_seconds),
    )

    asyncio.run(run_agent(reporting_loop))
    logger.info("PHP-FPM queue monitor stopped")


if __name__ == "__main__":
    main_cli()
