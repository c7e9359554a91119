"""Project repository for database operations."""

from typing import Optional, List

from sqlalchemy.orm import Session, selectinload

from rfi_tracker.models.project import Project
from rfi_tracker.models.rfi import RFI
from rfi_tracker.core.soft_delete import active_only_filter
from .base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project model operations."""
    
    def __init__(self):
        super().__init__(Project)
    
    def get_with_children(self, db: Session, project_id: str) -> Optional[Project]:
        """Get a project with RFIs (and their attachments), stakeholders and access requests loaded.
        
        Soft-deleted projects and RFIs are included.
        """
        return (
            db.query(Project)
            .options(
                selectinload(Project.rfis).selectinload(RFI.attachments),
                selectinload(Project.stakeholders),
                selectinload(Project.access_requests),
            )
            .filter(Project.id == project_id)
            .first()
        )
    
    def list_for_client(
        self,
        db: Session,
        client_id: str,
        include_deleted: bool = True
    ) -> List[Project]:
        """List a client's projects in creation order.
        
        Args:
            db: Database session
            client_id: Client ID
            include_deleted: Include soft-deleted projects
            
        Returns:
            List of projects
        """
        query = db.query(Project).filter(Project.client_id == client_id)
        if not include_deleted:
            query = query.filter(active_only_filter(Project))
        return query.order_by(Project.created_at, Project.id).all()
