"""Shared declarative base for all ORM models."""

import uuid

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""


def new_id() -> str:
    return str(uuid.uuid4())
