"""Tests for plan persistence.

Tests verify that the plan store:
- Persists normalized plans as JSON documents
- Refuses to persist a failed normalization result
- Lists plans per client
- Re-normalizes legacy raw documents on read
- Updates plan metadata
- Deletes plans
"""

import pytest

from app.db.models import WorkoutPlan
from app.plans.normalizer import normalize
from app.plans.store import (
    PlanUpdate,
    create_plan,
    delete_plan,
    get_plan,
    list_plans,
    set_plan_document,
    update_plan,
)


@pytest.fixture
def sample_days():
    days = normalize(
        '[{"day":"Monday","focus":"Legs","exercises":[{"name":"Squat","sets":3,"reps":"8-12"}]},'
        '{"day":"Tuesday","focus":"Rest","exercises":[]}]'
    )
    assert days is not None
    return days


def test_create_and_get_plan(sample_client, sample_days):
    stored = create_plan(sample_client.id, sample_days, name="Legs Plan", duration="1_week", focus="strength")

    fetched = get_plan(stored.id)

    assert fetched is not None
    assert fetched.client_id == sample_client.id
    assert fetched.days == sample_days
    assert fetched.document[1] == {"day": "Tuesday", "focus": "Rest", "exercises": [], "isRest": True}
    assert fetched.is_active is True
    assert fetched.needs_regeneration is False


@pytest.mark.parametrize("plan", [None, []])
def test_create_plan_refuses_failed_normalization(sample_client, plan):
    with pytest.raises(ValueError):
        create_plan(sample_client.id, plan, name="Broken", duration="1_week", focus="balanced")

    assert list_plans(sample_client.id) == []


def test_list_plans_filters_by_client(db_session, sample_client, sample_days):
    from app.clients.repository import create_client
    from app.clients.schemas import ClientCreate

    other = create_client(
        ClientCreate(
            name="Luis",
            age=41,
            weight=80,
            height=180,
            goal="strength",
            experience="advanced",
            equipment="home_basic",
        )
    )
    create_plan(sample_client.id, sample_days, name="A", duration="1_week", focus="balanced")
    create_plan(sample_client.id, sample_days, name="B", duration="2_weeks", focus="cardio")
    create_plan(other.id, sample_days, name="C", duration="1_week", focus="strength")

    assert sorted(p.name for p in list_plans(sample_client.id)) == ["A", "B"]
    assert [p.name for p in list_plans(other.id)] == ["C"]
    assert len(list_plans()) == 3


def test_legacy_raw_document_is_normalized_on_read(db_session, sample_client):
    row = WorkoutPlan(
        client_id=sample_client.id,
        name="Legacy",
        duration="1_week",
        focus="balanced",
        plan={"raw": '```json\n[{"dia":"Lunes","enfoque":"Descanso","ejercicios":[]}]\n```'},
    )
    db_session.add(row)
    db_session.commit()

    fetched = get_plan(row.id)

    assert fetched is not None
    assert fetched.days is not None
    assert fetched.days[0].day == "Lunes"
    assert fetched.days[0].is_rest is True
    assert fetched.document == row.plan


def test_unusable_document_needs_regeneration(db_session, sample_client):
    row = WorkoutPlan(
        client_id=sample_client.id,
        name="Garbage",
        duration="1_week",
        focus="balanced",
        plan={"raw": "I could not create a plan"},
    )
    db_session.add(row)
    db_session.commit()

    fetched = get_plan(row.id)

    assert fetched is not None
    assert fetched.days is None
    assert fetched.needs_regeneration is True


def test_set_plan_document(sample_client, sample_days):
    stored = create_plan(sample_client.id, sample_days, name="A", duration="1_week", focus="balanced")

    assert set_plan_document(stored.id, sample_days[:1]) is True
    assert set_plan_document(9999, sample_days) is False

    fetched = get_plan(stored.id)
    assert fetched is not None
    assert fetched.days == sample_days[:1]


def test_delete_plan(sample_client, sample_days):
    stored = create_plan(sample_client.id, sample_days, name="A", duration="1_week", focus="balanced")

    assert delete_plan(stored.id) is True
    assert get_plan(stored.id) is None
    assert delete_plan(stored.id) is False


def test_update_plan_metadata(sample_client, sample_days):
    stored = create_plan(
        sample_client.id, sample_days, name="A", duration="1_week", focus="balanced", description="First draft"
    )

    updated = update_plan(stored.id, PlanUpdate(name="Spring Block", is_active=False))

    assert updated is not None
    assert updated.name == "Spring Block"
    assert updated.is_active is False
    assert updated.description == "First draft"
    assert updated.days == sample_days

    fetched = get_plan(stored.id)
    assert fetched is not None
    assert fetched.name == "Spring Block"
    assert fetched.is_active is False


def test_update_plan_clears_description_only(sample_client, sample_days):
    stored = create_plan(
        sample_client.id, sample_days, name="A", duration="1_week", focus="balanced", description="First draft"
    )

    updated = update_plan(stored.id, PlanUpdate(name=None, description=None))

    assert updated is not None
    assert updated.name == "A"
    assert updated.description is None


def test_update_missing_plan_returns_none(db_session):
    assert update_plan(9999, PlanUpdate(is_active=False)) is None


def test_stored_document_with_non_finite_sets_is_readable(db_session, sample_client):
    row = WorkoutPlan(
        client_id=sample_client.id,
        name="Odd",
        duration="1_week",
        focus="balanced",
        plan={"raw": '[{"day":"Day 1","focus":"Legs","exercises":[{"name":"Squat","sets":Infinity,"reps":"5"}]}]'},
    )
    db_session.add(row)
    db_session.commit()

    fetched = get_plan(row.id)

    assert fetched is not None
    assert fetched.days is not None
    assert fetched.days[0].exercises[0].sets == 0
    assert [p.id for p in list_plans(sample_client.id)] == [row.id]
