# src/dartmodel/domain/interfaces/repositories/mapping_rules_repository.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Account mapping rules repository interface.

Layer:
    domain/interfaces/repositories
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from dartmodel.domain.entities.mapping_rule import MappingRule

__all__ = ["MappingRulesRepository"]


class MappingRulesRepository(Protocol):
    """Repository interface for account mapping rules."""

    async def list_rules(self) -> Sequence[MappingRule]:
        """Return all rules ordered by priority ascending, then confidence descending."""
        ...

    async def add_rule(self, rule: MappingRule) -> None:
        """Persist a new rule.

        Args:
            rule: Rule to insert. ``rule_id`` must be unique.
        """
        ...

    async def list_rule_ids(self) -> set[str]:
        """Return the ids of all stored rules."""
        ...
