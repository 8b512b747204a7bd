# src/dartmodel/domain/interfaces/repositories/curated_facts_repository.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Curated facts repository interface.

Purpose:
    Idempotent write access and model-oriented read access to curated facts.

Layer:
    domain/interfaces/repositories

Notes:
    - ``upsert_fact`` is keyed by ``CuratedFact.fact_key``. Writing the same
      fact twice must be a no-op (``UpsertOutcome.UNCHANGED``).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from dartmodel.domain.entities.curated_fact import CuratedFact
from dartmodel.domain.enums.dart import PeriodKind, UpsertOutcome

__all__ = ["CuratedFactsRepository"]


class CuratedFactsRepository(Protocol):
    """Repository interface for curated facts."""

    async def upsert_fact(self, fact: CuratedFact) -> UpsertOutcome:
        """Create or update a fact by its identity key.

        Args:
            fact: Fact to write.

        Returns:
            UpsertOutcome: CREATED for new keys, UPDATED when a stored field
            changed, UNCHANGED otherwise.
        """
        ...

    async def list_mapped_facts(
        self,
        *,
        entity_id: str,
        fiscal_years: Iterable[int],
        period_kind: PeriodKind = PeriodKind.ANNUAL,
    ) -> Sequence[CuratedFact]:
        """Return mapped facts for an entity and set of fiscal years.

        Args:
            entity_id: Model entity id.
            fiscal_years: Fiscal years to include.
            period_kind: Period kind filter.

        Returns:
            Sequence[CuratedFact]: Facts with a standard line id, ordered by
            fiscal year then ordering.
        """
        ...
