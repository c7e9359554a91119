"""Contact repositories: contacts and their project access records."""

from typing import List

from sqlalchemy.orm import Session

from rfi_tracker.models.contact import Contact
from rfi_tracker.models.stakeholder import ProjectStakeholder, AccessRequest, RegistrationToken
from rfi_tracker.core.soft_delete import active_only_filter
from .base import BaseRepository


class ContactRepository(BaseRepository[Contact]):
    """Repository for Contact model operations."""
    
    def __init__(self):
        super().__init__(Contact)
    
    def list_for_client(
        self,
        db: Session,
        client_id: str,
        include_deleted: bool = True
    ) -> List[Contact]:
        """List a client's contacts."""
        query = db.query(Contact).filter(Contact.client_id == client_id)
        if not include_deleted:
            query = query.filter(active_only_filter(Contact))
        return query.order_by(Contact.name).all()


class ProjectStakeholderRepository(BaseRepository[ProjectStakeholder]):
    """Repository for ProjectStakeholder link operations."""
    
    def __init__(self):
        super().__init__(ProjectStakeholder)


class AccessRequestRepository(BaseRepository[AccessRequest]):
    """Repository for AccessRequest model operations."""
    
    def __init__(self):
        super().__init__(AccessRequest)


class RegistrationTokenRepository(BaseRepository[RegistrationToken]):
    """Repository for RegistrationToken model operations."""
    
    def __init__(self):
        super().__init__(RegistrationToken)
