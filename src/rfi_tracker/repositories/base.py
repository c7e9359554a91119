"""Base repository class with common CRUD and bulk operations."""

from typing import Generic, TypeVar, Type, List, Optional, Dict, Any, Iterable

from pydantic import BaseModel
from sqlalchemy.orm import Session, Query
from sqlalchemy.exc import IntegrityError
import structlog

from rfi_tracker.core.base import Base
from rfi_tracker.core.soft_delete import soft_delete_filter, values_for

logger = structlog.get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository class with common CRUD operations.

    Reads of soft-deletable models exclude soft-deleted rows unless asked
    otherwise. Bulk writes do not commit; the caller owns the transaction.
    """

    def __init__(self, model: Type[ModelType]):
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class
        """
        self.model = model

    @property
    def soft_deletable(self) -> bool:
        """Whether the model carries a ``deleted_at`` marker."""
        return "deleted_at" in self.model.__table__.columns

    def _query(
        self,
        db: Session,
        include_deleted: bool = False,
        deleted_only: bool = False
    ) -> Query:
        query = db.query(self.model)
        if self.soft_deletable:
            criterion = soft_delete_filter(self.model, include_deleted, deleted_only)
            if criterion is not None:
                query = query.filter(criterion)
        return query

    def _apply_filters(self, query: Query, filters: Optional[Dict[str, Any]]) -> Query:
        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    query = query.filter(getattr(self.model, field) == value)
        return query

    def create(self, db: Session, **kwargs) -> ModelType:
        """Create a new record.

        Args:
            db: Database session
            **kwargs: Model field values

        Returns:
            Created model instance

        Raises:
            ValueError: If creation fails due to constraint violations
        """
        try:
            instance = self.model(**kwargs)
            db.add(instance)
            db.commit()
            db.refresh(instance)

            logger.info(
                "Record created",
                model=self.model.__name__,
                id=str(instance.id)
            )
            return instance

        except IntegrityError as e:
            db.rollback()
            logger.error(
                "Record creation failed",
                model=self.model.__name__,
                error=str(e)
            )
            raise ValueError(f"Failed to create {self.model.__name__}: {str(e)}")

    def get_by_id(self, db: Session, id: str, include_deleted: bool = True) -> Optional[ModelType]:
        """Get record by ID.

        Args:
            db: Database session
            id: Record ID
            include_deleted: Also return a soft-deleted record

        Returns:
            Model instance if found, None otherwise
        """
        return (
            self._query(db, include_deleted=include_deleted)
            .filter(self.model.id == id)
            .first()
        )

    def get_multi(
        self,
        db: Session,
        skip: int = 0,
        limit: int = 100,
        filters: Optional[Dict[str, Any]] = None,
        include_deleted: bool = False,
        deleted_only: bool = False
    ) -> List[ModelType]:
        """Get multiple records with pagination and filtering.

        Args:
            db: Database session
            skip: Number of records to skip
            limit: Maximum number of records to return
            filters: Optional equality filters to apply
            include_deleted: Include soft-deleted records
            deleted_only: Return only soft-deleted records

        Returns:
            List of model instances
        """
        query = self._apply_filters(self._query(db, include_deleted, deleted_only), filters)
        return query.offset(skip).limit(limit).all()

    def update(self, db: Session, id: str, payload: BaseModel) -> Optional[ModelType]:
        """Apply an explicit update schema to a record.

        Only the fields set on ``payload`` are written.

        Args:
            db: Database session
            id: Record ID
            payload: Pydantic update schema for this model

        Returns:
            Updated model instance if found, None otherwise

        Raises:
            ValueError: If update fails due to constraint violations
        """
        instance = self.get_by_id(db, id, include_deleted=False)
        if not instance:
            logger.warning(
                "Record not found for update",
                model=self.model.__name__,
                id=str(id)
            )
            return None

        changes = payload.model_dump(exclude_unset=True)
        try:
            for field, value in changes.items():
                setattr(instance, field, value)

            db.commit()
            db.refresh(instance)

            logger.info(
                "Record updated",
                model=self.model.__name__,
                id=str(id),
                fields=sorted(changes)
            )
            return instance

        except IntegrityError as e:
            db.rollback()
            logger.error(
                "Record update failed",
                model=self.model.__name__,
                id=str(id),
                error=str(e)
            )
            raise ValueError(f"Failed to update {self.model.__name__}: {str(e)}")

    def count(
        self,
        db: Session,
        filters: Optional[Dict[str, Any]] = None,
        include_deleted: bool = False
    ) -> int:
        """Count records with optional filtering.

        Args:
            db: Database session
            filters: Optional equality filters to apply
            include_deleted: Count soft-deleted records too

        Returns:
            Number of records matching criteria
        """
        return self._apply_filters(self._query(db, include_deleted), filters).count()

    def count_where(self, db: Session, *criteria) -> int:
        """Count every row matching ``criteria``, soft deleted or not."""
        return db.query(self.model).filter(*criteria).count()

    def exists(self, db: Session, id: str) -> bool:
        """Check if a record (soft deleted or not) exists by ID."""
        return db.query(self.model.id).filter(self.model.id == id).first() is not None

    def delete_where(self, db: Session, *criteria) -> int:
        """Bulk hard delete every row matching ``criteria``.

        Args:
            db: Database session
            *criteria: SQLAlchemy filter expressions

        Returns:
            Number of rows deleted
        """
        return (
            db.query(self.model)
            .filter(*criteria)
            .delete(synchronize_session=False)
        )

    def update_where(self, db: Session, criteria: Iterable, values: Dict[str, Any]) -> int:
        """Bulk update every row matching ``criteria``.

        Args:
            db: Database session
            criteria: SQLAlchemy filter expressions
            values: Column values to set

        Returns:
            Number of rows updated
        """
        return (
            db.query(self.model)
            .filter(*criteria)
            .update(values_for(self.model, values), synchronize_session=False)
        )

    def soft_delete(self, db: Session, id: str) -> bool:
        """Soft delete a record by setting its deletion marker.

        Args:
            db: Database session
            id: Record ID

        Returns:
            True if soft deleted (or already was), False if not found
        """
        instance = self.get_by_id(db, id)
        if not instance:
            logger.warning("Record not found for soft delete", model=self.model.__name__, id=str(id))
            return False

        if instance.is_deleted:
            logger.warning("Record already soft deleted", model=self.model.__name__, id=str(id))
            return True

        instance.soft_delete()
        db.commit()

        logger.info("Record soft deleted", model=self.model.__name__, id=str(id))
        return True

    def restore(self, db: Session, id: str) -> bool:
        """Restore a soft-deleted record.

        Args:
            db: Database session
            id: Record ID

        Returns:
            True if restored (or was not deleted), False if not found
        """
        instance = self.get_by_id(db, id)
        if not instance:
            logger.warning("Record not found for restore", model=self.model.__name__, id=str(id))
            return False

        if not instance.is_deleted:
            logger.warning("Record is not deleted", model=self.model.__name__, id=str(id))
            return True

        instance.restore()
        db.commit()

        logger.info("Record restored", model=self.model.__name__, id=str(id))
        return True
