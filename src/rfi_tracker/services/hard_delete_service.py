"""Cascading hard delete of clients, projects, RFIs and users.

Every entry point follows the same shape: load the root and its dependents,
delete children before parents (files first, then rows), delete the root,
return a report. There is no transaction around a whole cascade. Each RFI
deletion commits on its own, so a later database failure leaves earlier
deletions in place. File deletions cannot be undone anyway.

Failure semantics:
    * a file that cannot be removed is recorded in the report and skipped;
    * a missing root raises ``EntityNotFoundError`` before anything is touched;
    * a root that vanishes mid-cascade rolls back the current step and raises
      ``EntityNotFoundError``;
    * a user who still created RFIs cannot be orphaned
      (``DependencyConflictError``, raised before any write);
    * a database error rolls back the current step and raises ``DatabaseError``,
      aborting the remaining steps.
"""

from typing import Optional

from sqlalchemy import or_
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
from rfi_tracker.core.logging import performance_logger
from rfi_tracker.models import (
    AccessRequest,
    Attachment,
    Client,
    Contact,
    EmailLog,
    EmailQueue,
    Project,
    ProjectStakeholder,
    RegistrationToken,
    Response,
    RFI,
    User,
)
from rfi_tracker.repositories import (
    AccessRequestRepository,
    AttachmentRepository,
    ClientRepository,
    ContactRepository,
    EmailLogRepository,
    EmailQueueRepository,
    ProjectRepository,
    ProjectStakeholderRepository,
    RegistrationTokenRepository,
    ResponseRepository,
    RFIRepository,
    UserRepository,
)
from rfi_tracker.schemas.deletion import (
    ClientDeletionReport,
    DeletionImpact,
    ProjectDeletionReport,
    RFIDeletionReport,
    UserAffectedRecords,
    UserDeletionReport,
)
from rfi_tracker.storage.file_store import AttachmentFileStore

logger = structlog.get_logger(__name__)


class HardDeleteService:
    """Permanently removes a root entity and everything that depends on it.

    The service performs no permission checks; callers authorize first.
    """

    def __init__(self, db: Session, file_store: AttachmentFileStore):
        self.db = db
        self.file_store = file_store

        self.clients = ClientRepository()
        self.projects = ProjectRepository()
        self.rfis = RFIRepository()
        self.attachments = AttachmentRepository()
        self.responses = ResponseRepository()
        self.email_logs = EmailLogRepository()
        self.email_queue = EmailQueueRepository()
        self.contacts = ContactRepository()
        self.stakeholders = ProjectStakeholderRepository()
        self.access_requests = AccessRequestRepository()
        self.registration_tokens = RegistrationTokenRepository()
        self.users = UserRepository()

    def _database_error(
        self,
        operation: str,
        entity_type: str,
        entity_id: str,
        error: SQLAlchemyError
    ) -> DatabaseError:
        """Roll back the current step and build the error to raise."""
        self.db.rollback()
        logger.error(
            "Hard delete database step failed",
            operation=operation,
            entity_type=entity_type,
            entity_id=entity_id,
            error=str(error)
        )
        return DatabaseError(
            f"Failed to delete {entity_type} {entity_id}: {error}",
            context=ErrorContext(
                operation=operation,
                component="hard_delete",
                entity_type=entity_type,
                entity_id=entity_id,
            ),
            original_error=error
        )

    def _delete_root(self, repository, criterion, entity_type: str, entity_id: str) -> int:
        """Delete the root row of a cascade.

        Raises:
            EntityNotFoundError: If the row vanished after it was loaded
        """
        deleted = repository.delete_where(self.db, criterion)
        if deleted == 0:
            self.db.rollback()
            logger.warning("Root row vanished during hard delete", entity_type=entity_type, entity_id=entity_id)
            raise EntityNotFoundError(entity_type, entity_id)
        return deleted

    def delete_rfi(self, rfi_id: str) -> RFIDeletionReport:
        """Hard delete an RFI, its attachment files and every row it owns.

        Deletion order:
        1. Attachment files (failures recorded, never fatal)
        2. Email logs, email queue entries, responses, attachment rows
        3. The RFI

        Args:
            rfi_id: RFI ID

        Returns:
            Report with file outcomes and per-table row counts

        Raises:
            EntityNotFoundError: If the RFI does not exist
            DatabaseError: If a row deletion fails
        """
        with performance_logger.log_operation_time("hard_delete_rfi", rfi_id=rfi_id):
            rfi = self.rfis.get_by_id(self.db, rfi_id)
            if rfi is None:
                logger.warning("RFI not found for hard delete", rfi_id=rfi_id)
                raise EntityNotFoundError("RFI", rfi_id)

            report = RFIDeletionReport(rfi_id=rfi.id, rfi_number=rfi.rfi_number, title=rfi.title)

            attachments = self.attachments.list_for_rfi(self.db, rfi_id)
            logger.info("Hard deleting RFI", rfi_id=rfi_id, rfi_number=rfi.rfi_number, attachments=len(attachments))

            for attachment in attachments:
                report.record_file(
                    self.file_store.delete_file(attachment.stored_name, attachment.filename)
                )

            records = report.deleted_records
            try:
                records.email_logs = self.email_logs.delete_where(self.db, EmailLog.rfi_id == rfi_id)
                records.email_queue = self.email_queue.delete_where(self.db, EmailQueue.rfi_id == rfi_id)
                records.responses = self.responses.delete_where(self.db, Response.rfi_id == rfi_id)
                records.attachments = self.attachments.delete_where(self.db, Attachment.rfi_id == rfi_id)
                records.rfi = self._delete_root(self.rfis, RFI.id == rfi_id, "RFI", rfi_id)
                self.db.commit()
            except SQLAlchemyError as e:
                raise self._database_error("delete_rfi", "RFI", rfi_id, e) from e

            logger.info(
                "RFI hard deleted",
                rfi_id=rfi_id,
                deleted_records=records.model_dump(),
                deleted_files=len(report.deleted_files),
                file_errors=len(report.file_errors)
            )
            return report

    def delete_project(self, project_id: str) -> ProjectDeletionReport:
        """Hard delete a project with all its RFIs, stakeholder links and access requests.

        An RFI deletion that fails aborts the project deletion; RFIs deleted
        before the failure stay deleted.

        Args:
            project_id: Project ID

        Returns:
            Report folding every RFI deletion plus the project's own rows

        Raises:
            EntityNotFoundError: If the project (or one of its RFIs, concurrently) is gone
            DatabaseError: If a row deletion fails
        """
        with performance_logger.log_operation_time("hard_delete_project", project_id=project_id):
            project = self.projects.get_with_children(self.db, project_id)
            if project is None:
                logger.warning("Project not found for hard delete", project_id=project_id)
                raise EntityNotFoundError("Project", project_id)

            report = ProjectDeletionReport(project_id=project.id, project_name=project.name)
            rfi_ids = [rfi.id for rfi in project.rfis]

            logger.info(
                "Hard deleting project",
                project_id=project_id,
                project_name=project.name,
                rfis=len(rfi_ids),
                stakeholders=len(project.stakeholders),
                access_requests=len(project.access_requests)
            )

            records = report.deleted_records
            for rfi_id in rfi_ids:
                rfi_report = self.delete_rfi(rfi_id)
                report.absorb_files(rfi_report)
                records.add_rfi(rfi_report.deleted_records)

            try:
                records.access_requests = self.access_requests.delete_where(
                    self.db, AccessRequest.project_id == project_id
                )
                records.stakeholders = self.stakeholders.delete_where(
                    self.db, ProjectStakeholder.project_id == project_id
                )
                records.project = self._delete_root(self.projects, Project.id == project_id, "Project", project_id)
                self.db.commit()
            except SQLAlchemyError as e:
                raise self._database_error("delete_project", "Project", project_id, e) from e

            logger.info(
                "Project hard deleted",
                project_id=project_id,
                deleted_records=records.model_dump(),
                file_errors=len(report.file_errors)
            )
            return report

    def delete_user(self, user_id: str, reassign_to_user_id: Optional[str] = None) -> UserDeletionReport:
        """Hard delete a staff user, reassigning or orphaning the rows that reference them.

        With ``reassign_to_user_id`` every managed project, created RFI,
        authored response and added stakeholder link moves to that user.
        Without it the weak references are set to null, which is impossible
        for ``RFI.created_by_id``: a user who still created RFIs is refused
        before anything is written.

        Args:
            user_id: User to delete
            reassign_to_user_id: Active user inheriting the references

        Returns:
            Report with the user's identity and the rows that referenced them

        Raises:
            EntityNotFoundError: If the user does not exist
            ValidationError: If the reassignment target is the user itself or not an active user
            DependencyConflictError: If orphaning is requested but the user created RFIs
            DatabaseError: If an update or the deletion fails
        """
        with performance_logger.log_operation_time(
            "hard_delete_user", user_id=user_id, reassign_to_user_id=reassign_to_user_id
        ):
            user = self.users.get_by_id(self.db, user_id)
            if user is None:
                logger.warning("User not found for hard delete", user_id=user_id)
                raise EntityNotFoundError("User", user_id)

            user_name, user_email = user.name, user.email
            counts = self.users.get_activity_counts(self.db, user_id)

            if reassign_to_user_id:
                if reassign_to_user_id == user_id:
                    raise ValidationError(
                        "Cannot reassign a user's data to the same user",
                        field="reassign_to_user_id",
                        value=reassign_to_user_id
                    )
                if not self.users.is_active_user(self.db, reassign_to_user_id):
                    raise ValidationError(
                        f"Reassignment target {reassign_to_user_id} must be an existing active user",
                        field="reassign_to_user_id",
                        value=reassign_to_user_id
                    )
            elif counts["rfis"] > 0:
                logger.warning("User deletion blocked by created RFIs", user_id=user_id, rfis=counts["rfis"])
                raise DependencyConflictError(
                    f"Cannot delete user: {counts['rfis']} RFIs were created by this user. "
                    f"Reassign them to another user or delete the RFIs first.",
                    blocking={"rfis": counts["rfis"]},
                    context=ErrorContext(
                        operation="delete_user",
                        component="hard_delete",
                        entity_type="User",
                        entity_id=user_id,
                    )
                )

            # None orphans the weak references
            target = reassign_to_user_id or None
            try:
                self.projects.update_where(self.db, [Project.manager_id == user_id], {"manager_id": target})
                if target:
                    self.rfis.update_where(self.db, [RFI.created_by_id == user_id], {"created_by_id": target})
                self.responses.update_where(self.db, [Response.author_id == user_id], {"author_id": target})
                self.stakeholders.update_where(
                    self.db, [ProjectStakeholder.added_by_id == user_id], {"added_by_id": target}
                )
                self._delete_root(self.users, User.id == user_id, "User", user_id)
                self.db.commit()
            except SQLAlchemyError as e:
                raise self._database_error("delete_user", "User", user_id, e) from e

            logger.info(
                "User hard deleted",
                user_id=user_id,
                reassigned_to=target,
                affected_records=counts
            )
            return UserDeletionReport(
                user_id=user_id,
                user_name=user_name,
                user_email=user_email,
                reassigned_to=target,
                affected_records=UserAffectedRecords(**counts)
            )

    def delete_client(self, client_id: str) -> ClientDeletionReport:
        """Hard delete a client with its projects, RFIs, contacts and their access records.

        Deletion order:
        1. Every project of the client (see :meth:`delete_project`)
        2. Direct RFIs: the client's RFIs no deleted project owned
        3. Registration tokens, stakeholder links and access requests of the client's contacts
        4. Contacts
        5. The client

        Args:
            client_id: Client ID

        Returns:
            Report folding every nested deletion plus the client's own rows

        Raises:
            EntityNotFoundError: If the client (or a nested entity, concurrently) is gone
            DatabaseError: If a row deletion fails
        """
        with performance_logger.log_operation_time("hard_delete_client", client_id=client_id):
            client = self.clients.get_with_contacts(self.db, client_id)
            if client is None:
                logger.warning("Client not found for hard delete", client_id=client_id)
                raise EntityNotFoundError("Client", client_id)

            report = ClientDeletionReport(client_id=client.id, client_name=client.name)
            project_ids = [project.id for project in self.projects.list_for_client(self.db, client_id)]
            contact_ids = [contact.id for contact in client.contacts]
            direct_rfi_ids = [
                rfi.id for rfi in self.rfis.list_direct_for_client(self.db, client_id, project_ids)
            ]

            logger.info(
                "Hard deleting client",
                client_id=client_id,
                client_name=client.name,
                projects=len(project_ids),
                contacts=len(contact_ids),
                direct_rfis=len(direct_rfi_ids)
            )

            records = report.deleted_records
            for project_id in project_ids:
                project_report = self.delete_project(project_id)
                report.absorb_files(project_report)
                records.add_project(project_report.deleted_records)

            for rfi_id in direct_rfi_ids:
                rfi_report = self.delete_rfi(rfi_id)
                report.absorb_files(rfi_report)
                records.add_rfi(rfi_report.deleted_records)

            try:
                if contact_ids:
                    records.registration_tokens = self.registration_tokens.delete_where(
                        self.db, RegistrationToken.contact_id.in_(contact_ids)
                    )
                    # Links to projects of other clients survive the project loop above
                    records.stakeholders += self.stakeholders.delete_where(
                        self.db, ProjectStakeholder.contact_id.in_(contact_ids)
                    )
                    records.access_requests += self.access_requests.delete_where(
                        self.db, AccessRequest.contact_id.in_(contact_ids)
                    )
                records.contacts = self.contacts.delete_where(self.db, Contact.client_id == client_id)
                records.client = self._delete_root(self.clients, Client.id == client_id, "Client", client_id)
                self.db.commit()
            except SQLAlchemyError as e:
                raise self._database_error("delete_client", "Client", client_id, e) from e

            logger.info(
                "Client hard deleted",
                client_id=client_id,
                deleted_records=records.model_dump(),
                file_errors=len(report.file_errors)
            )
            return report

    def preview_rfi(self, rfi_id: str) -> DeletionImpact:
        """Rows a hard delete of the RFI would remove. Writes nothing."""
        rfi = self.rfis.get_by_id(self.db, rfi_id)
        if rfi is None:
            raise EntityNotFoundError("RFI", rfi_id)

        return DeletionImpact(
            entity_type="RFI",
            entity_id=rfi_id,
            name=rfi.rfi_number,
            counts={
                "attachments": self.attachments.count_where(self.db, Attachment.rfi_id == rfi_id),
                "responses": self.responses.count_where(self.db, Response.rfi_id == rfi_id),
                "email_logs": self.email_logs.count_where(self.db, EmailLog.rfi_id == rfi_id),
                "email_queue": self.email_queue.count_where(self.db, EmailQueue.rfi_id == rfi_id),
            }
        )

    def preview_project(self, project_id: str) -> DeletionImpact:
        """Rows a hard delete of the project would remove. Writes nothing."""
        project = self.projects.get_by_id(self.db, project_id)
        if project is None:
            raise EntityNotFoundError("Project", project_id)

        return DeletionImpact(
            entity_type="Project",
            entity_id=project_id,
            name=project.name,
            counts={
                "rfis": self.rfis.count_where(self.db, RFI.project_id == project_id),
                "attachments": (
                    self.db.query(Attachment)
                    .join(RFI, Attachment.rfi_id == RFI.id)
                    .filter(RFI.project_id == project_id)
                    .count()
                ),
                "stakeholders": self.stakeholders.count_where(
                    self.db, ProjectStakeholder.project_id == project_id
                ),
                "access_requests": self.access_requests.count_where(
                    self.db, AccessRequest.project_id == project_id
                ),
            }
        )

    def preview_client(self, client_id: str) -> DeletionImpact:
        """Rows a hard delete of the client would remove. Writes nothing."""
        client = self.clients.get_by_id(self.db, client_id)
        if client is None:
            raise EntityNotFoundError("Client", client_id)

        project_ids = self.db.query(Project.id).filter(Project.client_id == client_id)
        rfi_scope = or_(RFI.client_id == client_id, RFI.project_id.in_(project_ids.scalar_subquery()))

        return DeletionImpact(
            entity_type="Client",
            entity_id=client_id,
            name=client.name,
            counts={
                "projects": self.projects.count_where(self.db, Project.client_id == client_id),
                "rfis": self.rfis.count_where(self.db, rfi_scope),
                "attachments": (
                    self.db.query(Attachment)
                    .join(RFI, Attachment.rfi_id == RFI.id)
                    .filter(rfi_scope)
                    .count()
                ),
                "contacts": self.contacts.count_where(self.db, Contact.client_id == client_id),
            }
        )

    def preview_user(self, user_id: str) -> DeletionImpact:
        """Rows that reference the user and would be reassigned or orphaned. Writes nothing."""
        user = self.users.get_by_id(self.db, user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id)

        return DeletionImpact(
            entity_type="User",
            entity_id=user_id,
            name=user.name,
            counts=self.users.get_activity_counts(self.db, user_id)
        )
