"""Repository functions for gym clients."""

from loguru import logger
from sqlalchemy import select

from app.clients.schemas import ClientCreate, ClientUpdate
from app.db.models import Client
from app.db.session import get_session


class ClientNotFoundError(LookupError):
    """Raised when a client ID does not exist."""

    def __init__(self, client_id: int):
        self.code = "CLIENT_NOT_FOUND"
        self.client_id = client_id
        super().__init__(f"Client {client_id} not found")


def create_client(data: ClientCreate) -> Client:
    """Insert a new client and return it with its assigned ID."""
    with get_session() as db:
        client = Client(**data.model_dump())
        db.add(client)
        db.flush()
        logger.info("Client created", client_id=client.id)
        return client


def get_client(client_id: int) -> Client | None:
    with get_session() as db:
        return db.get(Client, client_id)


def require_client(client_id: int) -> Client:
    """Get a client, raising ClientNotFoundError if it does not exist."""
    client = get_client(client_id)
    if client is None:
        raise ClientNotFoundError(client_id)
    return client


def list_clients() -> list[Client]:
    with get_session() as db:
        return list(db.execute(select(Client).order_by(Client.id)).scalars().all())


def update_client(client_id: int, data: ClientUpdate) -> Client | None:
    """Apply the fields set on `data` to an existing client.

    Returns:
        Updated client, or None if it does not exist
    """
    with get_session() as db:
        client = db.get(Client, client_id)
        if client is None:
            return None
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(client, field, value)
        db.flush()
        return client


def delete_client(client_id: int) -> bool:
    with get_session() as db:
        client = db.get(Client, client_id)
        if client is None:
            return False
        db.delete(client)
        logger.info("Client deleted", client_id=client_id)
        return True
