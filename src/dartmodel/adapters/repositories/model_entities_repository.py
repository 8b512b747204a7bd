# src/dartmodel/adapters/repositories/model_entities_repository.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""SQLAlchemy implementation of the model entities repository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dartmodel.adapters.repositories.base_repository import BaseRepository
from dartmodel.domain.entities.model_entity import ModelEntity
from dartmodel.domain.enums.dart import ConsolidationScope
from dartmodel.domain.interfaces.repositories.model_entities_repository import (
    ModelEntitiesRepository as ModelEntitiesRepositoryPort,
)
from dartmodel.infrastructure.database.models.modeling import ModelEntityRow

__all__ = ["SqlAlchemyModelEntitiesRepository"]


class SqlAlchemyModelEntitiesRepository(
    BaseRepository[ModelEntityRow],
    ModelEntitiesRepositoryPort,
):
    """SQLAlchemy-backed model entities repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with an async session."""
        super().__init__(session)

    async def get(self, entity_id: str) -> ModelEntity | None:
        """Return the entity with ``entity_id``, or None."""
        stmt = select(ModelEntityRow).where(ModelEntityRow.entity_id == entity_id)
        row = await self.fetch_optional(stmt)
        return None if row is None else self._to_domain(row)

    async def ensure(self, entity: ModelEntity) -> ModelEntity:
        """Insert ``entity`` if missing and return the stored entity."""
        existing = await self.get(entity.entity_id)
        if existing is not None:
            return existing

        self._session.add(
            ModelEntityRow(
                entity_id=entity.entity_id,
                company_code=entity.company_code,
                stock_code=entity.stock_code,
                display_name=entity.display_name,
                default_scope=entity.default_scope.value,
            )
        )
        await self._session.flush()
        return entity

    @staticmethod
    def _to_domain(row: Any) -> ModelEntity:
        if isinstance(row, ModelEntity):
            return row
        return ModelEntity(
            entity_id=row.entity_id,
            company_code=row.company_code,
            display_name=row.display_name,
            stock_code=row.stock_code,
            default_scope=ConsolidationScope(row.default_scope),
        )
