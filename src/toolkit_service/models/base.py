"""
Base model definitions for the Toolkit Service.

This module defines the declarative base and the common mixins used by
every table in the service.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Uuid, func
from sqlalchemy.orm import declarative_base

# The single declarative base for all models in the service.
Base = declarative_base()


def utc_now() -> datetime:
    """Timezone-aware current time, used for every timestamp the service writes."""
    return datetime.now(timezone.utc)


class UUIDMixin:
    """Mixin to provide a UUID primary key for models."""

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True,
        nullable=False,
    )


class TimestampMixin:
    """
    Mixin to provide created_at and updated_at columns for models.

    Both columns are stamped from Python so a freshly inserted row carries
    identical values for the two.
    """

    created_at = Column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
        nullable=False,
    )
