# src/dartmodel/domain/interfaces/repositories/model_entities_repository.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Model entities repository interface."""

from __future__ import annotations

from typing import Protocol

from dartmodel.domain.entities.model_entity import ModelEntity

__all__ = ["ModelEntitiesRepository"]


class ModelEntitiesRepository(Protocol):
    """Repository interface for model entities."""

    async def get(self, entity_id: str) -> ModelEntity | None:
        """Return the entity with ``entity_id``, or None."""
        ...

    async def ensure(self, entity: ModelEntity) -> ModelEntity:
        """Insert ``entity`` if missing and return the stored entity.

        Existing entities are returned unchanged.
        """
        ...
