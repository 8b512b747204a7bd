# src/dartmodel/application/use_cases/curation/manage_mapping_rules.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Use cases: add a mapping rule, seed the default rule set.

Purpose:
    Persist account mapping rules and invalidate the mapper's rule cache so
    the next classification sees them.

Layer:
    application/use_cases/curation
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal

from dartmodel.application.schemas.dto.curation import MappingRuleDTO, SeedMappingRulesResultDTO
from dartmodel.application.services.account_mapper import AccountMapper
from dartmodel.application.uow import UnitOfWork, run_in_uow
from dartmodel.domain.entities.mapping_rule import MappingRule
from dartmodel.domain.exceptions.curation import MappingRuleError
from dartmodel.domain.interfaces.repositories.mapping_rules_repository import (
    MappingRulesRepository,
)
from dartmodel.domain.services.chart_of_accounts import STATEMENT_LINES, line_id
from dartmodel.domain.services.default_mapping_rules import DEFAULT_MAPPING_RULES

logger = logging.getLogger(__name__)

__all__ = [
    "AddMappingRuleRequest",
    "AddMappingRuleUseCase",
    "SeedMappingRulesUseCase",
]

_KNOWN_LINE_IDS = frozenset(
    line_id(statement, definition.code)
    for statement, definitions in STATEMENT_LINES.items()
    for definition in definitions
)


@dataclass(slots=True)
class AddMappingRuleRequest:
    """Request parameters for adding a mapping rule.

    Attributes:
        standard_line_id: Target standard line id.
        account_name: Exact account name or regular expression.
        account_source_id: Taxonomy account id to match exactly.
        statement_category: Statement the rule applies to (None for any).
        priority: Evaluation priority, lower first.
        confidence: Rule confidence in [0, 1].
        mapping_version: Rule set version.
        rule_id: Optional explicit id; a random one is generated otherwise.
    """

    standard_line_id: str
    account_name: str | None = None
    account_source_id: str | None = None
    statement_category: str | None = None
    priority: int = 10
    confidence: Decimal = Decimal("1.0")
    mapping_version: int = 1
    rule_id: str | None = None


class AddMappingRuleUseCase:
    """Validate and persist a single mapping rule."""

    def __init__(
        self,
        *,
        uow: UnitOfWork,
        mapper: AccountMapper,
        rules_repo_type: type[MappingRulesRepository] = MappingRulesRepository,
    ) -> None:
        """Initialize the use case.

        Args:
            uow: Unit of work exposing the mapping rules repository.
            mapper: Mapper whose cache is invalidated after the insert.
            rules_repo_type: Repository key for mapping rules.
        """
        self._uow = uow
        self._mapper = mapper
        self._rules_repo_type = rules_repo_type

    async def execute(self, req: AddMappingRuleRequest) -> MappingRuleDTO:
        """Add the rule.

        Raises:
            MappingRuleError: If the rule definition is invalid.
        """
        rule = self._build_rule(req)

        async def _add(tx: UnitOfWork) -> None:
            repo: MappingRulesRepository = tx.get_repository(self._rules_repo_type)
            await repo.add_rule(rule)

        await run_in_uow(self._uow, _add)
        self._mapper.invalidate()
        logger.info(
            "curation.rules.added",
            extra={"extra": {"rule_id": rule.rule_id, "standard_line_id": rule.standard_line_id}},
        )
        return MappingRuleDTO.from_rule(rule)

    @staticmethod
    def _build_rule(req: AddMappingRuleRequest) -> MappingRule:
        name = (req.account_name or "").strip() or None
        source_id = (req.account_source_id or "").strip() or None
        details = {"standard_line_id": req.standard_line_id, "account_name": req.account_name}

        if name is None and source_id is None:
            raise MappingRuleError(
                "A mapping rule needs an account name pattern or an account source id.",
                details=details,
            )
        if source_id is not None and req.statement_category is None:
            raise MappingRuleError(
                "Source-id rules must be scoped to a statement category.",
                details=details,
            )
        if req.standard_line_id not in _KNOWN_LINE_IDS:
            raise MappingRuleError("Unknown standard line id.", details=details)
        confidence = Decimal(str(req.confidence))
        if not confidence.is_finite() or not Decimal("0") <= confidence <= Decimal("1"):
            raise MappingRuleError("Confidence must be between 0 and 1.", details=details)

        return MappingRule(
            rule_id=req.rule_id or f"rule-{uuid.uuid4().hex}",
            standard_line_id=req.standard_line_id,
            account_source_id=source_id,
            account_name=name,
            statement_category=req.statement_category,
            confidence=confidence,
            priority=req.priority,
            mapping_version=req.mapping_version,
        )


class SeedMappingRulesUseCase:
    """Insert the default OpenDART rules that are not stored yet."""

    def __init__(
        self,
        *,
        uow: UnitOfWork,
        mapper: AccountMapper,
        rules_repo_type: type[MappingRulesRepository] = MappingRulesRepository,
    ) -> None:
        """Initialize the use case."""
        self._uow = uow
        self._mapper = mapper
        self._rules_repo_type = rules_repo_type

    async def execute(self) -> SeedMappingRulesResultDTO:
        """Seed the rule store; existing rule ids are skipped."""
        inserted = 0
        async with self._uow as tx:
            repo: MappingRulesRepository = tx.get_repository(self._rules_repo_type)
            existing = await repo.list_rule_ids()
            for rule in DEFAULT_MAPPING_RULES:
                if rule.rule_id in existing:
                    continue
                await repo.add_rule(rule)
                inserted += 1
            await tx.commit()
        self._mapper.invalidate()
        skipped = len(DEFAULT_MAPPING_RULES) - inserted
        logger.info(
            "curation.rules.seeded",
            extra={"extra": {"inserted": inserted, "skipped": skipped}},
        )
        return SeedMappingRulesResultDTO(inserted=inserted, skipped=skipped)
