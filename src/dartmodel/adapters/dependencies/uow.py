# src/dartmodel/adapters/dependencies/uow.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""UnitOfWork dependency wiring.

Purpose:
    Provide a concrete, SQLAlchemy-backed UnitOfWork instance for curation
    and modeling use cases, backed by the core async_sessionmaker.

Layer:
    adapters/dependencies
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dartmodel.adapters.uow import SqlAlchemyUnitOfWork
from dartmodel.config.settings import get_settings
from dartmodel.infrastructure.database.session import (
    get_sessionmaker,
    init_engine_and_sessionmaker,
)


def get_uow() -> SqlAlchemyUnitOfWork:
    """Construct a UnitOfWork instance.

    Behavior:
        - Ensures the global engine/sessionmaker are initialized
          (idempotent, safe to call multiple times).
        - Returns a fresh SqlAlchemyUnitOfWork bound to the global factory.
    """
    init_engine_and_sessionmaker(get_settings())

    session_factory: async_sessionmaker[AsyncSession] = get_sessionmaker()
    return SqlAlchemyUnitOfWork(session_factory=session_factory)
