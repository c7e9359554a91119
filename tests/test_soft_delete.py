"""Tests for the soft-delete policy helpers."""

from datetime import datetime
from types import SimpleNamespace

from rfi_tracker.core.soft_delete import (
    active_and_delete_filter,
    filter_deleted,
    is_deleted,
    mark_deleted,
    mark_restored,
    soft_delete_filter,
    values_for,
)
from rfi_tracker.models import Client, RFI
from rfi_tracker.repositories import ClientRepository, UserRepository


class TestSoftDeleteValues:
    """Test deletion marker values."""

    def test_mark_deleted_uses_given_time(self):
        """Test that the marker carries the given timestamp and deactivates."""
        now = datetime(2024, 5, 1, 12, 0)

        assert mark_deleted(now) == {"deleted_at": now, "active": False}

    def test_mark_deleted_defaults_to_now(self):
        """Test that the marker defaults to the current time."""
        before = datetime.utcnow()
        values = mark_deleted()
        assert values["deleted_at"] >= before

    def test_mark_restored(self):
        """Test that restore clears the marker."""
        assert mark_restored() == {"deleted_at": None}

    def test_values_for_drops_unknown_columns(self):
        """Test that RFIs, which have no active flag, only get the timestamp."""
        values = mark_deleted()

        assert set(values_for(RFI, values)) == {"deleted_at"}
        assert set(values_for(Client, values)) == {"deleted_at", "active"}


class TestSoftDeleteFilters:
    """Test soft-delete query predicates."""

    def test_default_excludes_deleted(self):
        """Test the default predicate."""
        assert "deleted_at IS NULL" in str(soft_delete_filter(Client))

    def test_include_deleted_means_no_filter(self):
        """Test that including deleted rows disables filtering."""
        assert soft_delete_filter(Client, include_deleted=True) is None

    def test_deleted_only_wins(self):
        """Test that deleted_only takes precedence."""
        criterion = soft_delete_filter(Client, include_deleted=True, deleted_only=True)
        assert "deleted_at IS NOT NULL" in str(criterion)

    def test_combined_with_active_flag(self):
        """Test combining the active flag with the deletion predicate."""
        assert active_and_delete_filter(Client, include_deleted=True) is None
        combined = str(active_and_delete_filter(Client, active=True))
        assert "deleted_at IS NULL" in combined
        assert "active" in combined

    def test_in_memory_filtering(self):
        """Test the in-memory counterpart of the predicates."""
        live = SimpleNamespace(deleted_at=None)
        gone = SimpleNamespace(deleted_at=datetime.utcnow())

        assert is_deleted(gone) and not is_deleted(live)
        assert filter_deleted([live, gone]) == [live]
        assert filter_deleted([live, gone], include_deleted=True) == [live, gone]
        assert filter_deleted([live, gone], deleted_only=True) == [gone]


class TestRepositoryReads:
    """Test that repository reads honour soft deletion."""

    def test_get_multi_excludes_deleted_by_default(self, factory, db_session):
        """Test default and explicit inclusion of soft-deleted rows."""
        repository = ClientRepository()
        live = factory.client()
        gone = factory.client()
        assert repository.soft_delete(db_session, gone.id) is True

        assert [c.id for c in repository.get_multi(db_session)] == [live.id]
        assert len(repository.get_multi(db_session, include_deleted=True)) == 2
        assert [c.id for c in repository.get_multi(db_session, deleted_only=True)] == [gone.id]
        assert repository.count(db_session) == 1

    def test_soft_delete_and_restore(self, factory, db_session):
        """Test repository-level soft delete and restore of a single row."""
        repository = UserRepository()
        user = factory.user(email="Lead@Example.com")

        repository.soft_delete(db_session, user.id)
        assert repository.get_by_email(db_session, "lead@example.com") is None
        assert repository.get_by_email(db_session, "lead@example.com", include_deleted=True) is not None

        assert repository.restore(db_session, user.id) is True
        restored = repository.get_by_email(db_session, " LEAD@example.com ")
        assert restored is not None
        assert restored.active is True

    def test_missing_record(self, db_session):
        """Test soft delete of a missing record."""
        assert ClientRepository().soft_delete(db_session, "missing") is False
