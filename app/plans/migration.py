"""Rewrite stored plan documents into normalized day lists.

Older rows kept the model output as `{"raw": "<text>"}` (or other
non-canonical shapes). This pass runs every such document through the
normalizer and, outside dry-run mode, stores the normalized list instead.
Documents that cannot be normalized are left untouched.
"""

from dataclasses import dataclass, field
from typing import Any

from loguru import logger
from sqlalchemy import select

from app.db.models import WorkoutPlan
from app.db.session import get_session
from app.plans.normalizer import normalize
from app.plans.types import dump_plan


@dataclass
class MigrationReport:
    scanned: int = 0
    migrated: int = 0
    already_normalized: int = 0
    failed: int = 0
    failed_plan_ids: list[int] = field(default_factory=list)


def is_canonical_document(document: Any) -> bool:
    """Check whether a stored document is already a normalized day list."""
    days = normalize(document) if isinstance(document, list) else None
    return days is not None and dump_plan(days) == document


def migrate_raw_plans(*, dry_run: bool = True) -> MigrationReport:
    """Normalize every stored plan document that is not canonical yet.

    Args:
        dry_run: When True, only report what would change

    Returns:
        MigrationReport with per-outcome counts
    """
    report = MigrationReport()

    with get_session() as db:
        rows = list(db.execute(select(WorkoutPlan).order_by(WorkoutPlan.id)).scalars().all())
        for row in rows:
            report.scanned += 1
            if is_canonical_document(row.plan):
                report.already_normalized += 1
                continue

            days = normalize(row.plan)
            if days is None:
                report.failed += 1
                report.failed_plan_ids.append(row.id)
                logger.warning("Plan document could not be normalized, skipping", plan_id=row.id)
                continue

            report.migrated += 1
            if dry_run:
                logger.info("[DRY RUN] Would normalize plan document", plan_id=row.id, days=len(days))
            else:
                row.plan = dump_plan(days)
                logger.info("Plan document normalized", plan_id=row.id, days=len(days))

    logger.info(
        "Plan migration complete",
        dry_run=dry_run,
        scanned=report.scanned,
        migrated=report.migrated,
        already_normalized=report.already_normalized,
        failed=report.failed,
    )
    return report
