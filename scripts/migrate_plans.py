"""Normalize stored workout plan documents.

ONE-TIME script for plans stored before normalization existed. Rows whose
document is `{"raw": "<model text>"}` (or any other non-canonical shape)
are run through the plan normalizer and rewritten as a DayPlan list.

Usage:
    From project root:
    python scripts/migrate_plans.py [--no-dry-run]

    Or as a module:
    python -m scripts.migrate_plans [--no-dry-run]

Safety:
    - Dry run by default
    - Documents that cannot be normalized are left untouched and reported
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent.resolve()
project_root_str = str(project_root)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

from loguru import logger

from app.config.settings import settings
from app.core.logger import setup_logger_from_settings
from app.plans.migration import migrate_raw_plans


def main() -> int:
    parser = argparse.ArgumentParser(description="Normalize stored workout plan documents")
    parser.add_argument(
        "--no-dry-run",
        action="store_true",
        help="Write normalized documents back (default is dry run)",
    )
    args = parser.parse_args()

    setup_logger_from_settings(settings)
    dry_run = not args.no_dry_run
    if dry_run:
        logger.info("Running in DRY RUN mode - no changes will be written")

    report = migrate_raw_plans(dry_run=dry_run)
    if report.failed_plan_ids:
        logger.warning("Plans left untouched", plan_ids=report.failed_plan_ids)

    logger.info("Migration complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
