# src/dartmodel/infrastructure/database/models/base.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Declarative Base and persistence mixins for DartModel.

This module defines:
    - A project-wide SQLAlchemy Declarative Base with deterministic naming
      conventions (stable constraint names across environments).
    - A timestamp mixin with UTC audit columns.
    - Portable column types (JSON that becomes JSONB on PostgreSQL).

Design Goals:
    * UTC everywhere.
    * Persistence-only; no domain/business behavior.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import JSON, MetaData
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func
from sqlalchemy.types import DateTime

__all__ = [
    "metadata",
    "Base",
    "TimestampMixin",
    "JSONType",
    "now_utc",
]

#: Deterministic naming conventions for constraint and index names.
NAMING_CONVENTIONS: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTIONS)

#: JSON column type: JSONB on PostgreSQL, generic JSON elsewhere.
JSONType = JSON().with_variant(JSONB(), "postgresql")


def now_utc() -> datetime:
    """Return the current UTC time with timezone info."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Declarative Base for all ORM models."""

    metadata = metadata


class TimestampMixin:
    """Mixin providing immutable ``created_at`` and mutable ``updated_at`` timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
        onupdate=now_utc,
        server_default=func.now(),
    )
