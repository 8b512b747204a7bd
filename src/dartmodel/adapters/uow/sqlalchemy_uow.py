# src/dartmodel/adapters/uow/sqlalchemy_uow.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""SQLAlchemy-backed Unit of Work implementation.

Purpose:
    Provide a concrete implementation of the application-layer UnitOfWork
    protocol using SQLAlchemy's AsyncSession. This UoW coordinates the
    curation and modeling repositories within a single transactional scope.

Layer:
    adapters/uow

Notes:
    - An instance may be entered again after it exits; each entry opens a
      fresh session. Nested entry is rejected.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from contextlib import AbstractAsyncContextManager
from types import TracebackType
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dartmodel.adapters.repositories.curated_facts_repository import (
    SqlAlchemyCuratedFactsRepository,
)
from dartmodel.adapters.repositories.mapping_rules_repository import (
    SqlAlchemyMappingRulesRepository,
)
from dartmodel.adapters.repositories.model_entities_repository import (
    SqlAlchemyModelEntitiesRepository,
)
from dartmodel.adapters.repositories.model_snapshots_repository import (
    SqlAlchemyModelSnapshotsRepository,
)
from dartmodel.adapters.repositories.raw_filing_rows_repository import (
    SqlAlchemyRawFilingRowsRepository,
)
from dartmodel.application.uow import UnitOfWork
from dartmodel.domain.interfaces.repositories.curated_facts_repository import (
    CuratedFactsRepository,
)
from dartmodel.domain.interfaces.repositories.mapping_rules_repository import (
    MappingRulesRepository,
)
from dartmodel.domain.interfaces.repositories.model_entities_repository import (
    ModelEntitiesRepository,
)
from dartmodel.domain.interfaces.repositories.model_snapshots_repository import (
    ModelSnapshotsRepository,
)
from dartmodel.domain.interfaces.repositories.raw_filing_rows_repository import (
    RawFilingRowsRepository,
)

RepoFactory = Callable[[AsyncSession], Any]


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy-based UnitOfWork implementation.

    Coordinates a single AsyncSession and a set of repositories within a
    transactional context. Intended to be used via:

        async with SqlAlchemyUnitOfWork(session_factory=...) as uow:
            repo = uow.get_repository(CuratedFactsRepository)
            ...
            await uow.commit()
    """

    def __init__(
        self,
        *,
        session_factory: async_sessionmaker[AsyncSession],
        repo_factories: Mapping[type[Any], RepoFactory] | None = None,
    ) -> None:
        """Initialize the UnitOfWork.

        Args:
            session_factory:
                Factory for creating new AsyncSession instances.
            repo_factories:
                Optional mapping from repository protocol type to a factory
                taking an AsyncSession. Entries override the defaults.
        """
        self._session_factory = session_factory
        self._session: AsyncSession | None = None

        default_factories: dict[type[Any], RepoFactory] = {
            RawFilingRowsRepository: lambda s: SqlAlchemyRawFilingRowsRepository(session=s),
            MappingRulesRepository: lambda s: SqlAlchemyMappingRulesRepository(session=s),
            CuratedFactsRepository: lambda s: SqlAlchemyCuratedFactsRepository(session=s),
            ModelEntitiesRepository: lambda s: SqlAlchemyModelEntitiesRepository(session=s),
            ModelSnapshotsRepository: lambda s: SqlAlchemyModelSnapshotsRepository(session=s),
        }

        self._repo_factories: dict[type[Any], RepoFactory] = {
            **default_factories,
            **(dict(repo_factories) if repo_factories is not None else {}),
        }

        self._repos: dict[type[Any], Any] = {}
        self._committed = False
        self._rolled_back = False

    # ------------------------------------------------------------------
    # Async context manager
    # ------------------------------------------------------------------

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        """Open a new AsyncSession.

        Raises:
            RuntimeError: If a session is already active (nested usage).
        """
        if self._session is not None:
            raise RuntimeError("UnitOfWork is already active; nested usage is not supported.")

        self._session = self._session_factory()
        self._committed = False
        self._rolled_back = False
        self._repos.clear()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool | None:
        """Roll back on error, then close the session.

        Uncommitted work is discarded when the session closes.

        Returns:
            Always returns None; exceptions are propagated.
        """
        try:
            if exc_type is not None and not self._rolled_back:
                await self.rollback()
        finally:
            if self._session is not None:
                await self._session.close()
                self._session = None
            self._repos.clear()
        return None

    # ------------------------------------------------------------------
    # Transaction control
    # ------------------------------------------------------------------

    async def commit(self) -> None:
        """Commit the current transaction.

        Raises:
            RuntimeError: If called without an active session.
        """
        if self._session is None:
            raise RuntimeError("Cannot commit: UnitOfWork has no active session.")
        if self._rolled_back:
            return

        await self._session.commit()
        self._committed = True

    async def rollback(self) -> None:
        """Roll back the current transaction if active."""
        if self._session is None or self._rolled_back:
            return

        await self._session.rollback()
        self._rolled_back = True

    def savepoint(self) -> AbstractAsyncContextManager[Any]:
        """Return a SAVEPOINT scope on the active session.

        Raises:
            RuntimeError: If called without an active session.
        """
        if self._session is None:
            raise RuntimeError("Cannot open a savepoint: UnitOfWork has no active session.")
        return self._session.begin_nested()

    # ------------------------------------------------------------------
    # Repository resolution
    # ------------------------------------------------------------------

    def get_repository(self, repo_type: type[Any]) -> Any:
        """Return a repository instance bound to the active session.

        Instances are cached for the lifetime of the current scope.

        Raises:
            RuntimeError: If called outside of an active UnitOfWork context.
            KeyError: If no factory is registered for the given repo_type.
        """
        if self._session is None:
            raise RuntimeError(
                "get_repository() called outside of an active UnitOfWork scope. "
                "Use 'async with uow:' before requesting repositories.",
            )

        if repo_type in self._repos:
            return self._repos[repo_type]

        try:
            factory = self._repo_factories[repo_type]
        except KeyError as exc:
            raise KeyError(f"No repository factory registered for type {repo_type!r}.") from exc

        repo = factory(self._session)
        self._repos[repo_type] = repo
        return repo
