"""Client repository for database operations."""

from typing import Optional

from sqlalchemy.orm import Session, selectinload

from rfi_tracker.models.client import Client
from .base import BaseRepository


class ClientRepository(BaseRepository[Client]):
    """Repository for Client model operations."""

    def __init__(self):
        super().__init__(Client)

    def get_with_contacts(self, db: Session, client_id: str) -> Optional[Client]:
        """Get a client with its contacts loaded.

        Soft-deleted clients and contacts are included.

        Args:
            db: Database session
            client_id: Client ID

        Returns:
            Client or None if not found
        """
        return (
            db.query(Client)
            .options(selectinload(Client.contacts))
            .filter(Client.id == client_id)
            .first()
        )
