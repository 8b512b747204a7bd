# src/dartmodel/adapters/dependencies/use_cases.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Use-case wiring.

Purpose:
    Build curation and modeling use cases from Settings. Every collaborator
    that opens a transaction gets its own UnitOfWork instance so scopes
    never nest.

Layer:
    adapters/dependencies

Notes:
    - The account mapper (and its rule cache) is process-wide; rule writes
      invalidate it.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache

from dartmodel.adapters.dependencies.uow import get_uow
from dartmodel.application.services.account_mapper import AccountMapper, MappingRuleCache
from dartmodel.application.services.coverage_service import CoverageService
from dartmodel.application.services.historical_loader import HistoricalLoader
from dartmodel.application.use_cases.curation.batch_transform import BatchTransformUseCase
from dartmodel.application.use_cases.curation.generate_coverage_report import (
    GenerateCoverageReportUseCase,
)
from dartmodel.application.use_cases.curation.manage_mapping_rules import (
    AddMappingRuleUseCase,
    SeedMappingRulesUseCase,
)
from dartmodel.application.use_cases.curation.run_transform import RunTransformUseCase
from dartmodel.application.use_cases.modeling.build_model_snapshot import (
    BuildModelSnapshotUseCase,
)
from dartmodel.application.use_cases.modeling.get_model_snapshot import GetModelSnapshotUseCase
from dartmodel.application.use_cases.modeling.save_model_snapshot import SaveModelSnapshotUseCase
from dartmodel.config.settings import Settings, get_settings
from dartmodel.domain.entities.mapping_rule import MappingRule
from dartmodel.domain.interfaces.repositories.mapping_rules_repository import (
    MappingRulesRepository,
)
from dartmodel.domain.services.model_builder import ModelBuilder, ModelBuilderConfig
from dartmodel.domain.services.row_normalizer import NormalizerOptions

__all__ = [
    "load_mapping_rules",
    "get_account_mapper",
    "build_run_transform",
    "build_batch_transform",
    "build_generate_coverage_report",
    "build_add_mapping_rule",
    "build_seed_mapping_rules",
    "build_build_model_snapshot",
    "build_get_model_snapshot",
]


async def load_mapping_rules() -> Sequence[MappingRule]:
    """Load all rules in a dedicated read-only scope."""
    async with get_uow() as tx:
        repo: MappingRulesRepository = tx.get_repository(MappingRulesRepository)
        return await repo.list_rules()


@lru_cache(maxsize=1)
def get_account_mapper() -> AccountMapper:
    """Return the process-wide account mapper."""
    settings = get_settings()
    cache = MappingRuleCache(load_mapping_rules, ttl_seconds=settings.mapping_cache_ttl_seconds)
    return AccountMapper(cache)


def _coverage_service() -> CoverageService:
    return CoverageService(uow=get_uow(), mapper=get_account_mapper())


def build_run_transform(settings: Settings | None = None) -> RunTransformUseCase:
    """Wire a single-job transform use case."""
    settings = settings or get_settings()
    options = NormalizerOptions(
        prefer_period_flow=settings.prefer_period_flow,
        source_priority=settings.source_priority,
        default_currency=settings.default_currency,
    )
    return RunTransformUseCase(
        uow=get_uow(),
        mapper=get_account_mapper(),
        coverage_service=_coverage_service(),
        options=options,
        coverage_top_n=settings.coverage_top_n,
        timeout_seconds=settings.transform_timeout_seconds,
    )


def build_batch_transform(settings: Settings | None = None) -> BatchTransformUseCase:
    """Wire the batch transform use case."""
    return BatchTransformUseCase(transform=build_run_transform(settings))


def build_generate_coverage_report() -> GenerateCoverageReportUseCase:
    """Wire the coverage report use case."""
    return GenerateCoverageReportUseCase(coverage_service=_coverage_service())


def build_add_mapping_rule() -> AddMappingRuleUseCase:
    """Wire the add-rule use case."""
    return AddMappingRuleUseCase(uow=get_uow(), mapper=get_account_mapper())


def build_seed_mapping_rules() -> SeedMappingRulesUseCase:
    """Wire the seed-rules use case."""
    return SeedMappingRulesUseCase(uow=get_uow(), mapper=get_account_mapper())


def build_build_model_snapshot(settings: Settings | None = None) -> BuildModelSnapshotUseCase:
    """Wire the build-snapshot use case, with saving enabled."""
    settings = settings or get_settings()
    builder = ModelBuilder(
        ModelBuilderConfig(
            engine_version=settings.engine_version,
            unit=settings.default_currency,
            check_tolerance=settings.balance_tolerance,
        )
    )
    return BuildModelSnapshotUseCase(
        uow=get_uow(),
        loader=HistoricalLoader(uow=get_uow()),
        builder=builder,
        saver=SaveModelSnapshotUseCase(uow=get_uow()),
    )


def build_get_model_snapshot() -> GetModelSnapshotUseCase:
    """Wire the snapshot retrieval use case."""
    return GetModelSnapshotUseCase(uow=get_uow())
