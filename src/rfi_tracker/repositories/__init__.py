"""Repository pattern implementations for data access."""

from .base import BaseRepository
from .client import ClientRepository
from .project import ProjectRepository
from .rfi import (
    RFIRepository,
    AttachmentRepository,
    ResponseRepository,
    EmailLogRepository,
    EmailQueueRepository,
)
from .contact import (
    ContactRepository,
    ProjectStakeholderRepository,
    AccessRequestRepository,
    RegistrationTokenRepository,
)
from .user import UserRepository

__all__ = [
    "BaseRepository",
    "ClientRepository",
    "ProjectRepository",
    "RFIRepository",
    "AttachmentRepository",
    "ResponseRepository",
    "EmailLogRepository",
    "EmailQueueRepository",
    "ContactRepository",
    "ProjectStakeholderRepository",
    "AccessRequestRepository",
    "RegistrationTokenRepository",
    "UserRepository",
]
