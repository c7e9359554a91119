"""Soft-delete policy.

A soft-deleted row keeps its data but carries a ``deleted_at`` timestamp and
is excluded from default reads. Entities with an ``active`` flag are also
deactivated. These helpers are pure: they build values and predicates, and
never touch a session.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, TypeVar

from sqlalchemy import and_
from sqlalchemy.sql.elements import ColumnElement

T = TypeVar("T")


def mark_deleted(now: Optional[datetime] = None) -> Dict[str, Any]:
    """Values that mark a row as soft deleted.

    Args:
        now: Deletion time, defaults to the current UTC time

    Returns:
        Column values to apply to the row
    """
    return {"deleted_at": now or datetime.utcnow(), "active": False}


def mark_restored() -> Dict[str, Any]:
    """Values that clear the soft-delete marker."""
    return {"deleted_at": None}


def values_for(model, values: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys the model has no column for (RFIs have no ``active`` flag)."""
    columns = model.__table__.columns
    return {key: value for key, value in values.items() if key in columns}


def active_only_filter(model) -> ColumnElement:
    """Predicate matching rows that are not soft deleted."""
    return model.deleted_at.is_(None)


def deleted_only_filter(model) -> ColumnElement:
    """Predicate matching soft-deleted rows only."""
    return model.deleted_at.isnot(None)


def soft_delete_filter(
    model,
    include_deleted: bool = False,
    deleted_only: bool = False
) -> Optional[ColumnElement]:
    """Predicate for a read that honours soft deletion.

    Args:
        model: Soft-deletable model class
        include_deleted: Return every row
        deleted_only: Return soft-deleted rows only (wins over include_deleted)

    Returns:
        Predicate to AND into the query, or None for no filtering
    """
    if deleted_only:
        return deleted_only_filter(model)
    if include_deleted:
        return None
    return active_only_filter(model)


def active_and_delete_filter(
    model,
    active: Optional[bool] = None,
    include_deleted: bool = False,
    deleted_only: bool = False
) -> Optional[ColumnElement]:
    """Combine the ``active`` flag with the soft-delete predicate.

    Args:
        model: Model with both ``active`` and ``deleted_at`` columns
        active: Required value of the active flag, None for either
        include_deleted: Return soft-deleted rows too
        deleted_only: Return soft-deleted rows only

    Returns:
        Predicate to AND into the query, or None for no filtering
    """
    criteria = []
    delete_criterion = soft_delete_filter(model, include_deleted, deleted_only)
    if delete_criterion is not None:
        criteria.append(delete_criterion)
    if active is not None:
        criteria.append(model.active.is_(active))

    if not criteria:
        return None
    if len(criteria) == 1:
        return criteria[0]
    return and_(*criteria)


def is_deleted(record: Any) -> bool:
    """Whether an in-memory record carries the soft-delete marker."""
    return getattr(record, "deleted_at", None) is not None


def filter_deleted(
    records: Iterable[T],
    include_deleted: bool = False,
    deleted_only: bool = False
) -> List[T]:
    """In-memory counterpart of :func:`soft_delete_filter`."""
    if deleted_only:
        return [record for record in records if is_deleted(record)]
    if include_deleted:
        return list(records)
    return [record for record in records if not is_deleted(record)]
