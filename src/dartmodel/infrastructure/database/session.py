# src/dartmodel/infrastructure/database/session.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Async SQLAlchemy engine/session factory.

This module owns the process-global async SQLAlchemy engine and
`async_sessionmaker` used by the Unit of Work.

Lifecycle:
    * Call `init_engine_and_sessionmaker(settings)` at startup.
    * Use `get_sessionmaker()` when wiring Units of Work.
    * Call `dispose_engine()` during shutdown.

Notes:
    * No business logic here; repositories consume the session.
    * `pool_pre_ping=True` helps surface dead connections before use.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from dartmodel.config.settings import Settings
from dartmodel.infrastructure.database.models.base import Base

_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None


def init_engine_and_sessionmaker(settings: Settings) -> None:
    """Initialize the global async engine and sessionmaker.

    Args:
        settings: Application settings providing `database_url`.

    Raises:
        ValueError: If `database_url` is empty.
    """
    global _engine, _sessionmaker

    if not settings.database_url:
        raise ValueError("database_url must be configured")
    if _engine is not None:
        # Already initialized (idempotent).
        return

    _engine = create_async_engine(
        url=settings.database_url,
        pool_pre_ping=True,
        echo=settings.db_echo,
    )
    _sessionmaker = async_sessionmaker(bind=_engine, expire_on_commit=False, class_=AsyncSession)


async def create_schema() -> None:
    """Create all tables that do not exist yet on the initialized engine."""
    if _engine is None:
        raise RuntimeError("DB engine not initialized (call init_engine_and_sessionmaker)")
    # Import models so their tables register on the metadata.
    from dartmodel.infrastructure.database.models import curation, modeling  # noqa: F401

    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Dispose the global engine at shutdown."""
    global _engine, _sessionmaker
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _sessionmaker = None


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Return the initialized async sessionmaker.

    Returns:
        async_sessionmaker[AsyncSession]: The global session factory.

    Raises:
        RuntimeError: If the sessionmaker is not yet initialized.
    """
    if _sessionmaker is None:
        raise RuntimeError("DB sessionmaker not initialized (call init_engine_and_sessionmaker)")
    return _sessionmaker
