"""Repository functions for scheduled training sessions."""

from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Literal

from loguru import logger
from pydantic import BaseModel, Field
from sqlalchemy import func, select

from app.db.models import Client, TrainingSession
from app.db.session import get_session

SessionStatus = Literal["scheduled", "in_progress", "completed", "cancelled"]


class SessionCreate(BaseModel):
    client_id: int
    workout_plan_id: int | None = None
    date: datetime
    start_time: str = Field(..., min_length=1)  # "HH:MM"
    end_time: str | None = None
    status: SessionStatus = "scheduled"
    notes: str | None = None


class SessionUpdate(BaseModel):
    workout_plan_id: int | None = None
    date: datetime | None = None
    start_time: str | None = Field(None, min_length=1)
    end_time: str | None = None
    status: SessionStatus | None = None
    notes: str | None = None


def create_session(data: SessionCreate) -> TrainingSession:
    with get_session() as db:
        training_session = TrainingSession(**data.model_dump())
        db.add(training_session)
        db.flush()
        logger.info(
            "Session scheduled",
            session_id=training_session.id,
            client_id=training_session.client_id,
        )
        return training_session


def get_training_session(session_id: int) -> TrainingSession | None:
    with get_session() as db:
        return db.get(TrainingSession, session_id)


def _on_day(on_date: date) -> tuple[Any, Any]:
    day_start = datetime.combine(on_date, time.min).replace(tzinfo=timezone.utc)
    day_end = day_start + timedelta(days=1)
    return TrainingSession.date >= day_start, TrainingSession.date < day_end


def list_sessions(client_id: int | None = None, on_date: date | None = None) -> list[TrainingSession]:
    """List sessions, optionally filtered by client and calendar day.

    Args:
        client_id: Only sessions for this client
        on_date: Only sessions whose start falls on this day (UTC)

    Returns:
        Sessions ordered by date
    """
    query = select(TrainingSession)
    if client_id is not None:
        query = query.where(TrainingSession.client_id == client_id)
    if on_date is not None:
        query = query.where(*_on_day(on_date))
    query = query.order_by(TrainingSession.date, TrainingSession.id)

    with get_session() as db:
        return list(db.execute(query).scalars().all())


def update_session(session_id: int, data: SessionUpdate) -> TrainingSession | None:
    with get_session() as db:
        training_session = db.get(TrainingSession, session_id)
        if training_session is None:
            return None
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(training_session, field, value)
        db.flush()
        return training_session


def delete_session(session_id: int) -> bool:
    with get_session() as db:
        training_session = db.get(TrainingSession, session_id)
        if training_session is None:
            return False
        db.delete(training_session)
        return True


def today_sessions_with_clients(today: date | None = None) -> list[tuple[TrainingSession, Client]]:
    """Sessions on the given day (UTC today by default), each paired with its client."""
    on_date = today or datetime.now(timezone.utc).date()
    query = (
        select(TrainingSession, Client)
        .join(Client, TrainingSession.client_id == Client.id)
        .where(*_on_day(on_date))
        .order_by(TrainingSession.date, TrainingSession.id)
    )
    with get_session() as db:
        return [(training_session, client) for training_session, client in db.execute(query).all()]


def dashboard_stats(today: date | None = None) -> dict[str, int]:
    """Headline counts for the coach dashboard.

    Returns:
        {"totalClients": <client count>, "sessionsToday": <sessions on the day>}
    """
    on_date = today or datetime.now(timezone.utc).date()
    with get_session() as db:
        total_clients = db.execute(select(func.count()).select_from(Client)).scalar_one()
        sessions_today = db.execute(
            select(func.count()).select_from(TrainingSession).where(*_on_day(on_date))
        ).scalar_one()
    return {"totalClients": total_clients, "sessionsToday": sessions_today}
