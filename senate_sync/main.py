#!/usr/bin/env python3
"""Main entry point for the Senate committee sync."""
import argparse
import dataclasses
import logging
import sys
from typing import List, Optional

from .config import MAIN_LOG_FILE, ConfigurationError, SyncConfig
from .sync import CommitteeSync, save_report
from .utils import setup_logging, setup_project_paths
from .webflow_client import SnapshotError


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Sync NY Senate committees and their members into Webflow CMS",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--data-dir', type=str, default=None,
                        help='Override base data directory for logs and reports (default: ./data)')
    parser.add_argument('--year', type=int, default=None,
                        help='Legislative session year (overrides SENATE_SESSION_YEAR)')
    parser.add_argument('--delay', type=float, default=None,
                        help='Seconds between Webflow writes (overrides SYNC_WRITE_DELAY_SECONDS)')
    parser.add_argument('--dry-run', action='store_true',
                        help='Reconcile and report without writing to Webflow')
    parser.add_argument('--no-report', action='store_true',
                        help='Skip writing the JSON/CSV run report')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable debug logging (per-member match details)')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    paths = setup_project_paths(args.data_dir)
    logger = setup_logging(MAIN_LOG_FILE, paths['log'],
                           level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = SyncConfig.from_env()
        overrides = {}
        if args.year is not None:
            overrides['session_year'] = args.year
        if args.delay is not None:
            overrides['write_delay_seconds'] = args.delay
        if overrides:
            config = dataclasses.replace(config, **overrides)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    logger.info(f"=== Starting Senate Committee Sync ({config}) ===")
    try:
        summary = CommitteeSync(config, dry_run=args.dry_run).run()
    except SnapshotError as e:
        logger.error(f"Sync aborted, Webflow snapshot incomplete: {e}")
        return 1
    except Exception as e:
        logger.error(f"Sync failed with error: {e}", exc_info=True)
        return 1

    if not args.no_report:
        json_path, csv_path = save_report(summary, paths['reports'])
        logger.info(f"Run report: {json_path} / {csv_path}")

    if summary.success:
        logger.info('All committees synced successfully!')
        return 0
    logger.warning(f"Some committees failed to sync ({summary.failed}/{summary.processed})")
    return 1


if __name__ == "__main__":
    sys.exit(main())
