"""Soft delete and restore of clients, projects, RFIs, contacts and users.

A cascading soft delete stamps the root and its soft-deletable descendants
with one shared ``deleted_at``. Restoring the root brings back exactly the
descendants carrying that same stamp, leaving rows that were soft deleted
on their own beforehand untouched.
"""

from datetime import datetime
from typing import Dict, List

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import structlog

from rfi_tracker.core.error_handling import (
    DatabaseError,
    DependencyConflictError,
    EntityNotFoundError,
    ErrorContext,
    ValidationError,
)
from rfi_tracker.core.soft_delete import active_only_filter, deleted_only_filter, mark_deleted
from rfi_tracker.models import Client, Contact, Project, RFI, User
from rfi_tracker.repositories import (
    ContactRepository,
    ProjectRepository,
    RFIRepository,
)
from rfi_tracker.schemas.deletion import SoftDeletionResult

logger = structlog.get_logger(__name__)

SOFT_DELETABLE = {
    "Client": Client,
    "Project": Project,
    "RFI": RFI,
    "Contact": Contact,
    "User": User,
}


class SoftDeleteService:
    """Marks entities deleted without removing data, and brings them back."""

    def __init__(self, db: Session):
        self.db = db
        self.projects = ProjectRepository()
        self.rfis = RFIRepository()
        self.contacts = ContactRepository()

    def _load(self, entity_type: str, entity_id: str):
        model = SOFT_DELETABLE.get(entity_type)
        if model is None:
            raise ValidationError(
                f"Entity type {entity_type} does not support soft delete",
                field="entity_type",
                value=entity_type
            )

        instance = self.db.query(model).filter(model.id == entity_id).first()
        if instance is None:
            logger.warning("Entity not found", entity_type=entity_type, entity_id=entity_id)
            raise EntityNotFoundError(entity_type, entity_id)
        return instance

    def _commit(self, operation: str, entity_type: str, entity_id: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                "Soft delete commit failed",
                operation=operation,
                entity_type=entity_type,
                entity_id=entity_id,
                error=str(e)
            )
            raise DatabaseError(
                f"Failed to {operation} {entity_type} {entity_id}: {e}",
                context=ErrorContext(
                    operation=operation,
                    component="soft_delete",
                    entity_type=entity_type,
                    entity_id=entity_id,
                ),
                original_error=e
            ) from e

    def _client_rfi_scope(self, client_id: str):
        project_ids = select(Project.id).where(Project.client_id == client_id)
        return or_(RFI.client_id == client_id, RFI.project_id.in_(project_ids))

    def soft_delete_client(self, client_id: str) -> SoftDeletionResult:
        """Soft delete a client with its contacts, projects and RFIs.

        Args:
            client_id: Client ID

        Returns:
            Rows newly marked per entity type (all zero if already soft deleted)

        Raises:
            EntityNotFoundError: If the client does not exist
            DatabaseError: If the update fails
        """
        client = self._load("Client", client_id)
        result = SoftDeletionResult(entity_type="Client", entity_id=client_id)
        if client.is_deleted:
            logger.info("Client already soft deleted", client_id=client_id)
            return result

        now = datetime.utcnow()
        values = mark_deleted(now)
        try:
            result.marked["contacts"] = self.contacts.update_where(
                self.db, [Contact.client_id == client_id, active_only_filter(Contact)], values
            )
            result.marked["rfis"] = self.rfis.update_where(
                self.db, [self._client_rfi_scope(client_id), active_only_filter(RFI)], values
            )
            result.marked["projects"] = self.projects.update_where(
                self.db, [Project.client_id == client_id, active_only_filter(Project)], values
            )
            client.soft_delete(now)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError(f"Failed to soft delete Client {client_id}: {e}", original_error=e) from e

        result.marked["client"] = 1
        self._commit("soft_delete", "Client", client_id)

        logger.info("Client soft deleted", client_id=client_id, marked=result.marked)
        return result

    def soft_delete_project(self, project_id: str) -> SoftDeletionResult:
        """Soft delete a project and its RFIs.

        Raises:
            EntityNotFoundError: If the project does not exist
            DatabaseError: If the update fails
        """
        project = self._load("Project", project_id)
        result = SoftDeletionResult(entity_type="Project", entity_id=project_id)
        if project.is_deleted:
            logger.info("Project already soft deleted", project_id=project_id)
            return result

        now = datetime.utcnow()
        try:
            result.marked["rfis"] = self.rfis.update_where(
                self.db, [RFI.project_id == project_id, active_only_filter(RFI)], mark_deleted(now)
            )
            project.soft_delete(now)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError(f"Failed to soft delete Project {project_id}: {e}", original_error=e) from e

        result.marked["project"] = 1
        self._commit("soft_delete", "Project", project_id)

        logger.info("Project soft deleted", project_id=project_id, marked=result.marked)
        return result

    def soft_delete_rfi(self, rfi_id: str) -> SoftDeletionResult:
        """Soft delete an RFI. Its number becomes free for new RFIs of the project."""
        return self._soft_delete_single("RFI", rfi_id)

    def soft_delete_contact(self, contact_id: str) -> SoftDeletionResult:
        """Soft delete a contact, which also blocks their login."""
        return self._soft_delete_single("Contact", contact_id)

    def soft_delete_user(self, user_id: str) -> SoftDeletionResult:
        """Soft delete a staff user. References to the user stay in place."""
        return self._soft_delete_single("User", user_id)

    def _soft_delete_single(self, entity_type: str, entity_id: str) -> SoftDeletionResult:
        instance = self._load(entity_type, entity_id)
        result = SoftDeletionResult(entity_type=entity_type, entity_id=entity_id)
        if instance.is_deleted:
            logger.info("Entity already soft deleted", entity_type=entity_type, entity_id=entity_id)
            return result

        instance.soft_delete()
        result.marked[entity_type.lower()] = 1
        self._commit("soft_delete", entity_type, entity_id)

        logger.info("Entity soft deleted", entity_type=entity_type, entity_id=entity_id)
        return result

    def restore(self, entity_type: str, entity_id: str, cascade: bool = True) -> SoftDeletionResult:
        """Restore a soft-deleted entity.

        With ``cascade`` a client or project also gets back the descendants
        that were soft deleted together with it.

        Args:
            entity_type: One of Client, Project, RFI, Contact, User
            entity_id: Entity ID
            cascade: Restore descendants sharing the root's deletion stamp

        Returns:
            Rows restored per entity type (all zero if the entity was not deleted)

        Raises:
            ValidationError: If the entity type is not soft-deletable
            EntityNotFoundError: If the entity does not exist
            DependencyConflictError: If an RFI number to restore is now held by an active RFI
            DatabaseError: If the update fails
        """
        instance = self._load(entity_type, entity_id)
        result = SoftDeletionResult(entity_type=entity_type, entity_id=entity_id)
        if not instance.is_deleted:
            logger.info("Entity is not deleted", entity_type=entity_type, entity_id=entity_id)
            return result

        stamp = instance.deleted_at
        descendants: Dict[str, list] = {}
        if cascade and entity_type == "Client":
            descendants = {
                "contacts": [Contact.client_id == entity_id],
                "rfis": [self._client_rfi_scope(entity_id)],
                "projects": [Project.client_id == entity_id],
            }
        elif cascade and entity_type == "Project":
            descendants = {"rfis": [RFI.project_id == entity_id]}

        rfis_to_restore: List[RFI] = []
        if entity_type == "RFI":
            rfis_to_restore = [instance]
        elif "rfis" in descendants:
            rfis_to_restore = (
                self.db.query(RFI)
                .filter(*descendants["rfis"], RFI.deleted_at == stamp)
                .all()
            )
        self._check_rfi_numbers(rfis_to_restore)

        repositories = {"contacts": self.contacts, "rfis": self.rfis, "projects": self.projects}
        restored_values = {"deleted_at": None, "active": True}
        try:
            for key, criteria in descendants.items():
                model = repositories[key].model
                result.marked[key] = repositories[key].update_where(
                    self.db, [*criteria, model.deleted_at == stamp], restored_values
                )
            instance.restore()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError(f"Failed to restore {entity_type} {entity_id}: {e}", original_error=e) from e

        result.marked[entity_type.lower()] = 1
        self._commit("restore", entity_type, entity_id)

        logger.info("Entity restored", entity_type=entity_type, entity_id=entity_id, restored=result.marked)
        return result

    def _check_rfi_numbers(self, rfis: List[RFI]) -> None:
        """Refuse a restore that would put two active RFIs of a project on one number."""
        claimed = set()
        for rfi in rfis:
            if rfi.project_id is None:
                continue
            key = (rfi.project_id, rfi.rfi_number)
            available = self.rfis.is_rfi_number_available(
                self.db, rfi.project_id, rfi.rfi_number, exclude_rfi_id=rfi.id
            )
            if not available or key in claimed:
                raise DependencyConflictError(
                    f"Cannot restore RFI {rfi.rfi_number}: the number is already used by an "
                    f"active RFI of the project",
                    blocking={"rfi_number": rfi.rfi_number},
                    context=ErrorContext(
                        operation="restore",
                        component="soft_delete",
                        entity_type="RFI",
                        entity_id=rfi.id,
                    )
                )
            claimed.add(key)

    def list_deleted(self, entity_type: str, skip: int = 0, limit: int = 100) -> list:
        """Soft-deleted entities of one type, for a recycle-bin view."""
        model = SOFT_DELETABLE.get(entity_type)
        if model is None:
            raise ValidationError(
                f"Entity type {entity_type} does not support soft delete",
                field="entity_type",
                value=entity_type
            )
        return (
            self.db.query(model)
            .filter(deleted_only_filter(model))
            .order_by(model.deleted_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

