"""RFI repositories: RFIs and the records an RFI owns."""

import re
from typing import Optional, List, Iterable

from sqlalchemy.orm import Session
from sqlalchemy import or_
import structlog

from rfi_tracker.models.rfi import RFI
from rfi_tracker.models.attachment import Attachment
from rfi_tracker.models.response import Response
from rfi_tracker.models.email import EmailLog, EmailQueue
from rfi_tracker.models.project import Project
from rfi_tracker.core.error_handling import ValidationError
from rfi_tracker.core.soft_delete import active_only_filter
from .base import BaseRepository

logger = structlog.get_logger(__name__)


class RFIRepository(BaseRepository[RFI]):
    """Repository for RFI model operations."""
    
    def __init__(self):
        super().__init__(RFI)
    
    def list_for_project(
        self,
        db: Session,
        project_id: str,
        include_deleted: bool = True
    ) -> List[RFI]:
        """List a project's RFIs in creation order."""
        query = db.query(RFI).filter(RFI.project_id == project_id)
        if not include_deleted:
            query = query.filter(active_only_filter(RFI))
        return query.order_by(RFI.created_at, RFI.id).all()
    
    def list_direct_for_client(
        self,
        db: Session,
        client_id: str,
        owned_project_ids: Iterable[str] = ()
    ) -> List[RFI]:
        """List a client's RFIs that no project of that client owns.
        
        These are RFIs with no project at all, or RFIs pointing at a project
        outside ``owned_project_ids``. Soft-deleted RFIs are included.
        
        Args:
            db: Database session
            client_id: Client ID
            owned_project_ids: IDs of the client's own projects
            
        Returns:
            List of RFIs
        """
        owned = list(owned_project_ids)
        query = db.query(RFI).filter(RFI.client_id == client_id)
        if owned:
            query = query.filter(or_(RFI.project_id.is_(None), RFI.project_id.notin_(owned)))
        return query.order_by(RFI.created_at, RFI.id).all()
    
    def is_rfi_number_available(
        self,
        db: Session,
        project_id: str,
        rfi_number: str,
        exclude_rfi_id: Optional[str] = None
    ) -> bool:
        """Check whether no active RFI of the project holds ``rfi_number``.
        
        Soft-deleted RFIs do not hold their number.
        
        Args:
            db: Database session
            project_id: Project ID
            rfi_number: Candidate RFI number
            exclude_rfi_id: RFI to ignore (the one being renumbered or restored)
            
        Returns:
            True if the number is free
        """
        query = db.query(RFI.id).filter(
            RFI.project_id == project_id,
            RFI.rfi_number == rfi_number,
            active_only_filter(RFI),
        )
        if exclude_rfi_id:
            query = query.filter(RFI.id != exclude_rfi_id)
        return query.first() is None
    
    def next_rfi_number(self, db: Session, project: Project) -> str:
        """Next sequential RFI number for a project, ``{project_number}-{n}``.
        
        The sequence continues from the highest number held by an active RFI,
        so numbers freed by soft deletion at the top of the sequence are reused.
        
        Args:
            db: Database session
            project: Project the RFI will belong to
            
        Returns:
            RFI number string
            
        Raises:
            ValidationError: If the project has no project number
        """
        if not project.project_number:
            raise ValidationError(
                "Project must have a project number to create RFIs",
                field="project_number"
            )
        
        pattern = re.compile(rf"^{re.escape(project.project_number)}-(\d+)$")
        numbers = (
            db.query(RFI.rfi_number)
            .filter(RFI.project_id == project.id, active_only_filter(RFI))
            .all()
        )
        sequences = []
        for (number,) in numbers:
            match = pattern.match(number)
            if match:
                sequences.append(int(match.group(1)))
        next_sequence = max(sequences, default=0) + 1
        
        logger.debug(
            "Next RFI number computed",
            project_id=project.id,
            next_sequence=next_sequence
        )
        return f"{project.project_number}-{next_sequence}"


class AttachmentRepository(BaseRepository[Attachment]):
    """Repository for Attachment model operations."""
    
    def __init__(self):
        super().__init__(Attachment)
    
    def list_for_rfi(self, db: Session, rfi_id: str) -> List[Attachment]:
        """List the attachments of an RFI."""
        return db.query(Attachment).filter(Attachment.rfi_id == rfi_id).all()


class ResponseRepository(BaseRepository[Response]):
    """Repository for Response model operations."""
    
    def __init__(self):
        super().__init__(Response)


class EmailLogRepository(BaseRepository[EmailLog]):
    """Repository for EmailLog model operations."""
    
    def __init__(self):
        super().__init__(EmailLog)


class EmailQueueRepository(BaseRepository[EmailQueue]):
    """Repository for EmailQueue model operations."""
    
    def __init__(self):
        super().__init__(EmailQueue)
