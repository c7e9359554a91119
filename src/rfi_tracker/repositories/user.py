"""User repository for database operations."""

from typing import Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from rfi_tracker.models.user import User
from rfi_tracker.models.project import Project
from rfi_tracker.models.rfi import RFI
from rfi_tracker.models.response import Response
from rfi_tracker.models.stakeholder import ProjectStakeholder
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model operations."""
    
    def __init__(self):
        super().__init__(User)
    
    def get_by_email(self, db: Session, email: str, include_deleted: bool = False) -> Optional[User]:
        """Get user by email address (case-insensitive).
        
        Args:
            db: Database session
            email: Email address
            include_deleted: Also match a soft-deleted user
            
        Returns:
            User if found, None otherwise
        """
        return (
            self._query(db, include_deleted=include_deleted)
            .filter(func.lower(User.email) == email.strip().lower())
            .first()
        )
    
    def get_activity_counts(self, db: Session, user_id: str) -> Dict[str, int]:
        """Count the rows that reference a user.
        
        Soft-deleted rows are counted too; they still hold the reference.
        
        Args:
            db: Database session
            user_id: User ID
            
        Returns:
            Counts keyed ``projects``, ``rfis``, ``responses``, ``stakeholders``
        """
        return {
            "projects": db.query(Project).filter(Project.manager_id == user_id).count(),
            "rfis": db.query(RFI).filter(RFI.created_by_id == user_id).count(),
            "responses": db.query(Response).filter(Response.author_id == user_id).count(),
            "stakeholders": db.query(ProjectStakeholder).filter(
                ProjectStakeholder.added_by_id == user_id
            ).count(),
        }
    
    def is_active_user(self, db: Session, user_id: str) -> bool:
        """Whether a user exists, is active and is not soft deleted."""
        user = self.get_by_id(db, user_id, include_deleted=False)
        return user is not None and bool(user.active)
