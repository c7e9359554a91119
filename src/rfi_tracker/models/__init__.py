"""Database models for the RFI tracker."""

from .user import User, Role
from .client import Client
from .contact import Contact, StakeholderRole
from .project import Project
from .rfi import RFI, RFIStatus, Priority
from .attachment import Attachment
from .response import Response
from .email import EmailLog, EmailQueue
from .stakeholder import ProjectStakeholder, AccessRequest, RegistrationToken

__all__ = [
    "User", "Role", "Client", "Contact", "StakeholderRole", "Project",
    "RFI", "RFIStatus", "Priority", "Attachment", "Response",
    "EmailLog", "EmailQueue", "ProjectStakeholder", "AccessRequest", "RegistrationToken",
]
