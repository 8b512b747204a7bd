# src/dartmodel/domain/entities/model_entity.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Model entity (the company a snapshot is built for)."""

from __future__ import annotations

from dataclasses import dataclass

from dartmodel.domain.enums.dart import ConsolidationScope

__all__ = ["ModelEntity", "entity_id_for_company"]


def entity_id_for_company(company_code: str) -> str:
    """Return the model entity id for an OpenDART corporation code."""
    return f"entity-{company_code}"


@dataclass(frozen=True, slots=True)
class ModelEntity:
    """Company registered for modeling.

    Attributes:
        entity_id: Entity id (``entity-{company_code}``).
        company_code: OpenDART corporation code.
        display_name: Company name, falling back to the corporation code.
        stock_code: Listed stock code, if any.
        default_scope: Scope preferred when loading facts.
    """

    entity_id: str
    company_code: str
    display_name: str
    stock_code: str | None = None
    default_scope: ConsolidationScope = ConsolidationScope.CONSOLIDATED
