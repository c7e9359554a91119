"""Service layer for deletion workflows."""

from .hard_delete_service import HardDeleteService
from .soft_delete_service import SoftDeleteService

__all__ = [
    "HardDeleteService",
    "SoftDeleteService",
]
