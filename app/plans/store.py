"""Plan store: persistence of normalized workout plans, keyed by client.

The plan itself is stored as an opaque JSON document (the dumped DayPlan
list). Reads run the document back through the normalizer, so rows written
before normalization existed (`{"raw": "..."}`) still come back typed when
they can be repaired.
"""

from datetime import datetime
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field
from sqlalchemy import select

from app.db.models import WorkoutPlan
from app.db.session import get_session
from app.plans.normalizer import normalize
from app.plans.types import DayPlan, NormalizedPlan, dump_plan


class StoredPlan(BaseModel):
    """A persisted workout plan.

    Attributes:
        days: Normalized days, or None if the stored document is unusable
        document: The JSON document exactly as stored
    """

    id: int
    client_id: int
    name: str
    description: str | None
    duration: str
    focus: str
    days: list[DayPlan] | None
    document: Any
    is_active: bool
    created_at: datetime

    @property
    def needs_regeneration(self) -> bool:
        return self.days is None


class PlanUpdate(BaseModel):
    """Metadata changes for a stored plan. The day list goes through `set_plan_document`."""

    name: str | None = Field(None, min_length=1)
    description: str | None = None
    duration: str | None = Field(None, min_length=1)
    focus: str | None = Field(None, min_length=1)
    is_active: bool | None = None


def load_plan_days(document: Any) -> NormalizedPlan | None:
    """Normalize a stored plan document."""
    return normalize(document)


def _to_stored_plan(row: WorkoutPlan) -> StoredPlan:
    return StoredPlan(
        id=row.id,
        client_id=row.client_id,
        name=row.name,
        description=row.description,
        duration=row.duration,
        focus=row.focus,
        days=load_plan_days(row.plan),
        document=row.plan,
        is_active=row.is_active,
        created_at=row.created_at,
    )


def create_plan(
    client_id: int,
    plan: NormalizedPlan | None,
    *,
    name: str,
    duration: str,
    focus: str,
    description: str | None = None,
    is_active: bool = True,
) -> StoredPlan:
    """Persist a normalized plan for a client.

    Args:
        client_id: Owning client
        plan: Normalized days (must not be None)
        name: Display name of the plan
        duration: Requested duration (1_week, 2_weeks, 4_weeks)
        focus: Requested focus (balanced, strength, cardio, flexibility)
        description: Optional description
        is_active: Whether the plan is the client's active plan

    Returns:
        Stored plan with its assigned ID

    Raises:
        ValueError: If plan is None or empty
    """
    if not plan:
        raise ValueError("Refusing to persist an empty or failed plan normalization result")

    with get_session() as db:
        row = WorkoutPlan(
            client_id=client_id,
            name=name,
            description=description,
            duration=duration,
            focus=focus,
            plan=dump_plan(plan),
            is_active=is_active,
        )
        db.add(row)
        db.flush()
        logger.info("Workout plan stored", plan_id=row.id, client_id=client_id, days=len(plan))
        return _to_stored_plan(row)


def get_plan(plan_id: int) -> StoredPlan | None:
    with get_session() as db:
        row = db.get(WorkoutPlan, plan_id)
        return _to_stored_plan(row) if row is not None else None


def list_plans(client_id: int | None = None) -> list[StoredPlan]:
    """List stored plans, newest first, optionally for one client."""
    query = select(WorkoutPlan)
    if client_id is not None:
        query = query.where(WorkoutPlan.client_id == client_id)
    query = query.order_by(WorkoutPlan.created_at.desc(), WorkoutPlan.id.desc())

    with get_session() as db:
        return [_to_stored_plan(row) for row in db.execute(query).scalars().all()]


def set_plan_document(plan_id: int, plan: NormalizedPlan) -> bool:
    """Overwrite the stored document of a plan with normalized days.

    Returns:
        True if the plan existed and was updated
    """
    if not plan:
        raise ValueError("Refusing to persist an empty or failed plan normalization result")

    with get_session() as db:
        row = db.get(WorkoutPlan, plan_id)
        if row is None:
            return False
        row.plan = dump_plan(plan)
        return True


def update_plan(plan_id: int, data: PlanUpdate) -> StoredPlan | None:
    """Apply the fields set on `data` to a stored plan.

    Only `description` can be cleared; None for any other field is ignored.

    Returns:
        Updated plan, or None if it does not exist
    """
    changes = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field == "description"
    }
    with get_session() as db:
        row = db.get(WorkoutPlan, plan_id)
        if row is None:
            return None
        for field, value in changes.items():
            setattr(row, field, value)
        db.flush()
        logger.info("Workout plan updated", plan_id=plan_id, fields=sorted(changes))
        return _to_stored_plan(row)


def delete_plan(plan_id: int) -> bool:
    with get_session() as db:
        row = db.get(WorkoutPlan, plan_id)
        if row is None:
            return False
        db.delete(row)
        logger.info("Workout plan deleted", plan_id=plan_id)
        return True
