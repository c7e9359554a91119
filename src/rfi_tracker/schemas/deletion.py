"""Pydantic schemas for hard-delete reports.

A report is returned only when a deletion ran to completion. File problems
are soft errors collected in ``file_errors``; anything worse is raised.
"""

from typing import List, Optional, Dict

from pydantic import BaseModel, Field


class FileDeletionResult(BaseModel):
    """Outcome of removing one attachment file from the upload directory."""

    stored_name: str
    filename: Optional[str] = None
    deleted: bool
    error: Optional[str] = None


class RFIDeletedRecords(BaseModel):
    """Rows removed by one RFI deletion."""

    rfi: int = 0
    responses: int = 0
    attachments: int = 0
    email_logs: int = 0
    email_queue: int = 0


class ProjectDeletedRecords(BaseModel):
    """Rows removed by one project deletion, RFI subtrees included."""

    project: int = 0
    rfis: int = 0
    responses: int = 0
    attachments: int = 0
    email_logs: int = 0
    email_queue: int = 0
    stakeholders: int = 0
    access_requests: int = 0

    def add_rfi(self, records: RFIDeletedRecords) -> None:
        """Fold one RFI deletion into the totals."""
        self.rfis += records.rfi
        self.responses += records.responses
        self.attachments += records.attachments
        self.email_logs += records.email_logs
        self.email_queue += records.email_queue


class ClientDeletedRecords(BaseModel):
    """Rows removed by one client deletion, project and RFI subtrees included."""

    client: int = 0
    contacts: int = 0
    registration_tokens: int = 0
    projects: int = 0
    rfis: int = 0
    responses: int = 0
    attachments: int = 0
    email_logs: int = 0
    email_queue: int = 0
    stakeholders: int = 0
    access_requests: int = 0

    def add_project(self, records: ProjectDeletedRecords) -> None:
        """Fold one project deletion into the totals."""
        self.projects += records.project
        self.rfis += records.rfis
        self.responses += records.responses
        self.attachments += records.attachments
        self.email_logs += records.email_logs
        self.email_queue += records.email_queue
        self.stakeholders += records.stakeholders
        self.access_requests += records.access_requests

    def add_rfi(self, records: RFIDeletedRecords) -> None:
        """Fold one direct (project-less) RFI deletion into the totals."""
        self.rfis += records.rfi
        self.responses += records.responses
        self.attachments += records.attachments
        self.email_logs += records.email_logs
        self.email_queue += records.email_queue


class FileCarryingReport(BaseModel):
    """Report part shared by every deletion that removes attachment files."""

    success: bool = True
    deleted_files: List[str] = Field(default_factory=list)
    file_errors: List[str] = Field(default_factory=list)

    @property
    def has_file_errors(self) -> bool:
        """Whether some files could not be removed and may need manual cleanup."""
        return bool(self.file_errors)

    def record_file(self, result: FileDeletionResult) -> None:
        """Record the outcome of one file deletion."""
        if result.deleted:
            self.deleted_files.append(result.stored_name)
        else:
            self.file_errors.append(result.error or f"Failed to delete file {result.stored_name}")

    def absorb_files(self, other: "FileCarryingReport") -> None:
        """Append another report's file outcomes to this one."""
        self.deleted_files.extend(other.deleted_files)
        self.file_errors.extend(other.file_errors)

    def _file_summary(self) -> str:
        text = f"{len(self.deleted_files)} file(s) removed"
        if self.file_errors:
            text += f", {len(self.file_errors)} file warning(s)"
        return text


class RFIDeletionReport(FileCarryingReport):
    """Result of ``HardDeleteService.delete_rfi``."""

    rfi_id: str
    rfi_number: str
    title: Optional[str] = None
    deleted_records: RFIDeletedRecords = Field(default_factory=RFIDeletedRecords)

    def summary(self) -> str:
        """Human-readable confirmation line."""
        records = self.deleted_records
        return (
            f"RFI {self.rfi_number} deleted: {records.responses} response(s), "
            f"{records.attachments} attachment(s), {self._file_summary()}"
        )


class ProjectDeletionReport(FileCarryingReport):
    """Result of ``HardDeleteService.delete_project``."""

    project_id: str
    project_name: str
    deleted_records: ProjectDeletedRecords = Field(default_factory=ProjectDeletedRecords)

    def summary(self) -> str:
        """Human-readable confirmation line."""
        records = self.deleted_records
        return (
            f"Project '{self.project_name}' deleted: {records.rfis} RFI(s), "
            f"{records.attachments} attachment(s), {records.stakeholders} stakeholder link(s), "
            f"{self._file_summary()}"
        )


class ClientDeletionReport(FileCarryingReport):
    """Result of ``HardDeleteService.delete_client``."""

    client_id: str
    client_name: str
    deleted_records: ClientDeletedRecords = Field(default_factory=ClientDeletedRecords)

    def summary(self) -> str:
        """Human-readable confirmation line."""
        records = self.deleted_records
        return (
            f"Client '{self.client_name}' deleted: {records.projects} project(s), "
            f"{records.rfis} RFI(s), {records.contacts} contact(s), {self._file_summary()}"
        )


class UserAffectedRecords(BaseModel):
    """Rows that referenced the user before deletion."""

    projects: int = 0
    rfis: int = 0
    responses: int = 0
    stakeholders: int = 0


class UserDeletionReport(BaseModel):
    """Result of ``HardDeleteService.delete_user``."""

    success: bool = True
    user_id: str
    user_name: str
    user_email: str
    reassigned_to: Optional[str] = None
    affected_records: UserAffectedRecords = Field(default_factory=UserAffectedRecords)

    def summary(self) -> str:
        """Human-readable confirmation line."""
        records = self.affected_records
        action = f"reassigned to {self.reassigned_to}" if self.reassigned_to else "orphaned"
        return (
            f"User {self.user_email} deleted: {records.projects} project(s), "
            f"{records.rfis} RFI(s), {records.responses} response(s) {action}"
        )


class DeletionImpact(BaseModel):
    """What a hard delete would remove, for confirmation prompts."""

    entity_type: str
    entity_id: str
    name: str
    counts: Dict[str, int] = Field(default_factory=dict)

    @property
    def total(self) -> int:
        """Dependent rows the deletion would touch."""
        return sum(self.counts.values())


class SoftDeletionResult(BaseModel):
    """Rows marked by a cascading soft delete."""

    entity_type: str
    entity_id: str
    marked: Dict[str, int] = Field(default_factory=dict)

    @property
    def changed(self) -> bool:
        """Whether anything was marked (False when already soft deleted)."""
        return any(self.marked.values())
