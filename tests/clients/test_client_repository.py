import pytest
from pydantic import ValidationError

from app.clients.repository import (
    ClientNotFoundError,
    delete_client,
    get_client,
    list_clients,
    require_client,
    update_client,
)
from app.clients.schemas import ClientCreate, ClientUpdate


def test_create_and_get_client(sample_client):
    fetched = get_client(sample_client.id)

    assert fetched is not None
    assert fetched.name == "Ana García"
    assert fetched.available_days == ["Monday", "Wednesday", "Friday"]
    assert fetched.created_at is not None


def test_client_input_is_validated():
    with pytest.raises(ValidationError):
        ClientCreate(
            name="",
            age=0,
            weight=70,
            height=175,
            goal="get_huge",
            experience="beginner",
            equipment="full_gym",
        )


def test_update_client_only_touches_set_fields(sample_client):
    updated = update_client(sample_client.id, ClientUpdate(weight=60, limitations=None))

    assert updated is not None
    assert updated.weight == 60
    assert updated.limitations is None
    assert updated.goal == "muscle_gain"
    assert update_client(9999, ClientUpdate(weight=60)) is None


def test_require_client_raises_for_unknown_id(db_session):
    with pytest.raises(ClientNotFoundError) as exc_info:
        require_client(9999)

    assert exc_info.value.code == "CLIENT_NOT_FOUND"


def test_list_and_delete_clients(sample_client):
    assert [c.id for c in list_clients()] == [sample_client.id]

    assert delete_client(sample_client.id) is True
    assert delete_client(sample_client.id) is False
    assert list_clients() == []
