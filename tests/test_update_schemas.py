"""Tests for explicit update schemas."""

import pytest
from hypothesis import given
from pydantic import ValidationError

from rfi_tracker.schemas.updates import (
    ClientUpdate,
    ContactUpdate,
    ProjectUpdate,
    RFIUpdate,
    UserUpdate,
)
from tests.property_based.generators import email_addresses


class TestUpdateSchemas:
    """Test which fields callers may change."""

    @pytest.mark.parametrize("field", ["id", "client_id", "deleted_at", "rfi_number", "created_by_id"])
    def test_protected_fields_rejected(self, field):
        """Test that ownership keys, markers and RFI numbers cannot be updated."""
        with pytest.raises(ValidationError):
            RFIUpdate(**{field: "x"})

    def test_only_set_fields_are_dumped(self):
        """Test that unset fields stay out of the change set."""
        payload = ProjectUpdate(manager_id=None)

        assert payload.model_dump(exclude_unset=True) == {"manager_id": None}

    def test_enum_values_dump_as_strings(self):
        """Test that enum fields bind as plain column values."""
        assert RFIUpdate(priority="HIGH").model_dump(exclude_unset=True) == {"priority": "HIGH"}
        assert ContactUpdate(role="STAKEHOLDER_L2").model_dump(exclude_unset=True) == {
            "role": "STAKEHOLDER_L2"
        }

    def test_invalid_enum_rejected(self):
        """Test that unknown statuses are rejected."""
        with pytest.raises(ValidationError):
            RFIUpdate(status="REOPENED")
        with pytest.raises(ValidationError):
            ProjectUpdate(status="PAUSED")

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_names_cannot_be_blank(self, value):
        """Test that required text cannot be cleared."""
        with pytest.raises(ValidationError):
            ClientUpdate(name=value)

    def test_names_are_stripped(self):
        """Test that surrounding whitespace is removed."""
        assert UserUpdate(name="  Dana  ").name == "Dana"

    @given(email=email_addresses())
    def test_valid_emails_accepted(self, email):
        """Test that well-formed addresses pass validation."""
        assert ContactUpdate(email=email).email.lower() == email.lower()

    def test_invalid_email_rejected(self):
        """Test that malformed addresses are rejected."""
        with pytest.raises(ValidationError):
            UserUpdate(email="not-an-email")
