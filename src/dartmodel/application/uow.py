# src/dartmodel/application/uow.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Transaction boundary for curation and modeling use cases.

A transform job reads raw filing rows, upserts curated facts and registers
the model entity in one transaction; a snapshot build reads curated facts
and stores one model snapshot. Both go through :class:`UnitOfWork`, which
hands out repositories by their ``domain.interfaces`` protocol type and
owns commit and rollback.

Per-fact writes inside a transform job use :meth:`UnitOfWork.savepoint`
so a rejected fact is dropped on its own while the job keeps going.

The SQLAlchemy implementation lives in ``adapters/uow``; tests use an
in-memory double.

Layer:
    application
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from contextlib import AbstractAsyncContextManager
from types import TracebackType
from typing import Any, Protocol, TypeVar, runtime_checkable

TResult = TypeVar("TResult")


@runtime_checkable
class UnitOfWork(Protocol, AbstractAsyncContextManager["UnitOfWork"]):
    """One database transaction shared by the repositories of a job."""

    async def __aenter__(self) -> UnitOfWork:
        """Start the transaction."""
        raise NotImplementedError

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool | None:
        """End the transaction; anything not committed is discarded."""
        raise NotImplementedError

    async def commit(self) -> None:
        """Persist curated facts, entities and snapshots written so far."""
        raise NotImplementedError

    async def rollback(self) -> None:
        """Discard every write of the current transaction."""
        raise NotImplementedError

    def savepoint(self) -> AbstractAsyncContextManager[Any]:
        """Open a nested scope inside the current transaction.

        An exception raised inside the scope undoes only the writes made in
        it and is re-raised; earlier writes stay pending for :meth:`commit`.
        """
        raise NotImplementedError

    def get_repository(self, repo_type: type[Any]) -> Any:
        """Resolve a repository bound to the current transaction.

        Args:
            repo_type: Repository protocol, e.g. ``CuratedFactsRepository``
                or ``ModelSnapshotsRepository``.
        """
        raise NotImplementedError


async def run_in_uow(  # noqa: UP047
    uow: UnitOfWork,
    fn: Callable[[UnitOfWork], Awaitable[TResult]],
) -> TResult:
    """Run ``fn`` in a transaction, committing its writes only if it returns.

    Adding a mapping rule goes through here: the rule row is either stored
    in full or not at all.

    Args:
        uow: Transaction boundary to enter.
        fn: Coroutine function receiving the entered unit of work.

    Returns:
        TResult: Whatever ``fn`` returned.

    Raises:
        Exception: Whatever ``fn`` raised, after the rollback.
    """
    async with uow as tx:
        try:
            result = await fn(tx)
        except Exception:
            await tx.rollback()
            raise
        else:
            await tx.commit()
            return result
