"""Pydantic schemas for deletion reports and update payloads."""

from .deletion import (
    FileDeletionResult,
    RFIDeletedRecords,
    ProjectDeletedRecords,
    ClientDeletedRecords,
    UserAffectedRecords,
    RFIDeletionReport,
    ProjectDeletionReport,
    ClientDeletionReport,
    UserDeletionReport,
    DeletionImpact,
    SoftDeletionResult,
)
from .updates import ClientUpdate, ProjectUpdate, RFIUpdate, ContactUpdate, UserUpdate

__all__ = [
    "FileDeletionResult",
    "RFIDeletedRecords",
    "ProjectDeletedRecords",
    "ClientDeletedRecords",
    "UserAffectedRecords",
    "RFIDeletionReport",
    "ProjectDeletionReport",
    "ClientDeletionReport",
    "UserDeletionReport",
    "DeletionImpact",
    "SoftDeletionResult",
    "ClientUpdate",
    "ProjectUpdate",
    "RFIUpdate",
    "ContactUpdate",
    "UserUpdate",
]
