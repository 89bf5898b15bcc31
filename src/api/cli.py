"""
CLI trigger for the NBN order pipeline.

Runs one dispatch cycle: selects every NBN application in ORDER status and
queues one submit_nbn_order task per application.

Usage:
    process-nbn-applications
    process-nbn-applications --verbose

Exit codes:
    0 - selection succeeded (including "nothing to process")
    1 - the eligible batch could not be read (SelectionFault), or the order
        pipeline configuration is invalid (nothing is dispatched)
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from src.application.commands.dispatch_nbn_orders import (
    DispatchNbnOrdersCommandHandler,
)
from src.domain.applications.order_config import OrderPipelineConfig
from src.domain.shared.exceptions import SelectionFault

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="process-nbn-applications",
        description="Process all NBN applications with order status",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def build_dispatch_handler() -> DispatchNbnOrdersCommandHandler:
    """Dispatcher wired to Redis and the Celery queue."""
    # Celery app is configured on import
    from src.application.tasks.order_tasks import build_dispatch_handler as build

    return build()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run one dispatch cycle and print the summary line.

    Returns:
        Process exit code
    """
    args = parse_args(argv)
    load_dotenv()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        OrderPipelineConfig.from_env()
    except ValueError as e:
        logger.error(f"Invalid order pipeline configuration: {e}")
        print(f"Invalid order pipeline configuration: {e}", file=sys.stderr)
        return 1

    try:
        result = build_dispatch_handler().handle()
    except SelectionFault as e:
        logger.error(f"NBN dispatch failed: {e}")
        print(f"Failed to select NBN applications: {e.message}", file=sys.stderr)
        return 1

    print(result.message)
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
