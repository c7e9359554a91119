"""Declarative base shared by all ORM models."""

from uuid import uuid4

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def generate_id() -> str:
    """Primary keys are string UUIDs."""
    return str(uuid4())
