"""Test data generators for property-based deletion tests using Hypothesis."""

import string
from typing import Any, Dict

from hypothesis import strategies as st
from hypothesis.strategies import composite


@composite
def email_addresses(draw) -> str:
    """Generate valid email addresses."""
    username = draw(st.text(
        alphabet=string.ascii_lowercase + string.digits + "._-",
        min_size=1,
        max_size=20
    ).filter(lambda x: x[0].isalnum() and x[-1].isalnum() and ".." not in x))

    domain = draw(st.text(
        alphabet=string.ascii_lowercase + string.digits,
        min_size=1,
        max_size=15
    ))

    tld = draw(st.sampled_from(["com", "org", "net", "io", "co.uk"]))

    return f"{username}@{domain}.{tld}"


@composite
def names(draw) -> str:
    """Generate display names for clients, projects and people."""
    first = draw(st.sampled_from(["Harbor", "Summit", "Granite", "Cedar", "Atlas", "Northgate"]))
    second = draw(st.sampled_from(["Builders", "Holdings", "Tower", "Works", "Partners", "Civic"]))
    suffix = draw(st.integers(min_value=1, max_value=999))
    return f"{first} {second} {suffix}"


@composite
def rfi_shape(draw) -> Dict[str, Any]:
    """Generate the dependents of one RFI.

    ``missing_files`` attachments have a database row but no file on disk.
    """
    attachments = draw(st.integers(min_value=0, max_value=4))
    return {
        "attachments": attachments,
        "missing_files": draw(st.integers(min_value=0, max_value=attachments)),
        "responses": draw(st.integers(min_value=0, max_value=3)),
        "email_logs": draw(st.integers(min_value=0, max_value=2)),
        "email_queue": draw(st.integers(min_value=0, max_value=2)),
        "soft_deleted": draw(st.booleans()),
    }


@composite
def project_shape(draw) -> Dict[str, Any]:
    """Generate a project's RFIs and access records."""
    return {
        "rfis": draw(st.lists(rfi_shape(), min_size=0, max_size=4)),
        "stakeholders": draw(st.integers(min_value=0, max_value=3)),
        "access_requests": draw(st.integers(min_value=0, max_value=2)),
        "soft_deleted": draw(st.booleans()),
    }


@composite
def client_shape(draw) -> Dict[str, Any]:
    """Generate a client's projects, direct RFIs and contacts."""
    return {
        "name": draw(names()),
        "projects": draw(st.lists(project_shape(), min_size=0, max_size=3)),
        "direct_rfis": draw(st.lists(rfi_shape(), min_size=0, max_size=3)),
        "contacts": draw(st.integers(min_value=0, max_value=3)),
        "tokens_per_contact": draw(st.integers(min_value=0, max_value=2)),
        "soft_deleted": draw(st.booleans()),
    }


@composite
def user_activity(draw) -> Dict[str, int]:
    """Generate how many rows reference a user."""
    return {
        "projects": draw(st.integers(min_value=0, max_value=3)),
        "rfis": draw(st.integers(min_value=0, max_value=3)),
        "responses": draw(st.integers(min_value=0, max_value=3)),
        "stakeholders": draw(st.integers(min_value=0, max_value=2)),
    }
