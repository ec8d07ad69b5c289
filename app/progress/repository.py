"""Repository functions for exercise progress logs."""

from collections import defaultdict
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field
from sqlalchemy import select

from app.db.models import ExerciseProgress
from app.db.session import get_session


class ProgressCreate(BaseModel):
    """Input record for one logged exercise result.

    Attributes:
        weight: Load in kg
        duration: Minutes, for cardio exercises
    """

    client_id: int
    session_id: int | None = None
    exercise_name: str = Field(..., min_length=1)
    weight: int | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    sets: int | None = Field(None, ge=0)
    duration: int | None = Field(None, ge=0)
    notes: str | None = None


def log_progress(data: ProgressCreate) -> ExerciseProgress:
    with get_session() as db:
        entry = ExerciseProgress(**data.model_dump())
        db.add(entry)
        db.flush()
        logger.info(
            "Exercise progress logged",
            client_id=entry.client_id,
            exercise=entry.exercise_name,
        )
        return entry


def list_progress(client_id: int | None = None, exercise_name: str | None = None) -> list[ExerciseProgress]:
    query = select(ExerciseProgress)
    if client_id is not None:
        query = query.where(ExerciseProgress.client_id == client_id)
    if exercise_name is not None:
        query = query.where(ExerciseProgress.exercise_name == exercise_name)
    query = query.order_by(ExerciseProgress.date, ExerciseProgress.id)

    with get_session() as db:
        return list(db.execute(query).scalars().all())


def progress_summary(client_id: int) -> dict[str, Any]:
    """Group a client's progress entries by exercise name.

    Returns:
        {"totalExercises": <entry count>, "exercises": {name: [entries in date order]}}
    """
    entries = list_progress(client_id=client_id)
    grouped: dict[str, list[ExerciseProgress]] = defaultdict(list)
    for entry in entries:
        grouped[entry.exercise_name].append(entry)
    return {
        "totalExercises": len(entries),
        "exercises": dict(grouped),
    }
