# src/dartmodel/application/services/account_mapper.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Account mapper with a time-bounded rule cache.

Purpose:
    Classify raw accounts against the stored mapping rules. Rules are loaded
    through an injected async loader, compiled once and cached in-process for
    a configurable TTL (5 minutes by default).

Layer:
    application/services

Notes:
    - The cache is owned by the mapper instance (no module-level state). The
      dependency wiring shares one mapper per process.
    - Reloads are serialized with an ``asyncio.Lock`` so concurrent callers
      trigger a single load.
    - Rules added while a batch is running may not be seen until the next
      reload; callers that add rules call :meth:`AccountMapper.invalidate`.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from dartmodel.domain.entities.mapping_rule import MappingResult, MappingRule
from dartmodel.domain.services.account_matching import CompiledRuleSet, compile_rule_set

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_RULE_CACHE_TTL_SECONDS",
    "RuleLoader",
    "ClassifiableAccount",
    "BatchMappingSummary",
    "MappingRuleCache",
    "AccountMapper",
]

DEFAULT_RULE_CACHE_TTL_SECONDS = 300.0

RuleLoader = Callable[[], Awaitable[Sequence[MappingRule]]]


class ClassifiableAccount(Protocol):
    """Anything carrying the fields the matcher reads."""

    @property
    def account_source_id(self) -> str | None: ...

    @property
    def account_name(self) -> str: ...

    @property
    def account_detail(self) -> str | None: ...

    @property
    def statement_category(self) -> str: ...


@dataclass(slots=True)
class BatchMappingSummary:
    """Result of classifying a batch of accounts.

    Attributes:
        total_count: Accounts classified.
        mapped_count: Accounts with a standard line.
        unmapped_count: Accounts without one (including failed ones).
        unmapped_accounts: Distinct unmapped account names, first-seen order.
        errors: ``"{account}: {message}"`` for accounts that raised.
    """

    total_count: int = 0
    mapped_count: int = 0
    unmapped_count: int = 0
    unmapped_accounts: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


class MappingRuleCache:
    """TTL cache of the compiled rule set."""

    def __init__(
        self,
        loader: RuleLoader,
        *,
        ttl_seconds: float = DEFAULT_RULE_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            loader: Coroutine function returning rules in evaluation order.
            ttl_seconds: Maximum age of a loaded rule set.
            clock: Monotonic clock, injectable for tests.
        """
        self._loader = loader
        self._ttl = ttl_seconds
        self._clock = clock
        self._rule_set: CompiledRuleSet | None = None
        self._loaded_at: float = 0.0
        self._lock = asyncio.Lock()

    def _is_fresh(self) -> bool:
        return self._rule_set is not None and (self._clock() - self._loaded_at) < self._ttl

    async def get(self) -> CompiledRuleSet:
        """Return the cached rule set, reloading it when stale or invalidated."""
        if self._is_fresh():
            assert self._rule_set is not None
            return self._rule_set
        async with self._lock:
            if self._is_fresh():
                assert self._rule_set is not None
                return self._rule_set
            rules = await self._loader()
            rule_set = compile_rule_set(rules)
            for invalid in rule_set.invalid_rules:
                logger.warning(
                    "curation.mapping.invalid_rule_pattern",
                    extra={
                        "extra": {
                            "rule_id": invalid.rule_id,
                            "pattern": invalid.pattern,
                            "error": invalid.error,
                        }
                    },
                )
            logger.debug(
                "curation.mapping.rules_loaded",
                extra={"extra": {"rules": len(rule_set), "invalid": len(rule_set.invalid_rules)}},
            )
            self._rule_set = rule_set
            self._loaded_at = self._clock()
            return rule_set

    def invalidate(self) -> None:
        """Drop the cached rule set; the next :meth:`get` reloads."""
        self._rule_set = None
        self._loaded_at = 0.0


class AccountMapper:
    """Classify raw accounts to standard line ids."""

    def __init__(self, cache: MappingRuleCache) -> None:
        """Initialize the mapper.

        Args:
            cache: Rule cache providing the compiled rule set.
        """
        self._cache = cache

    async def classify(
        self,
        account_source_id: str | None,
        account_name: str,
        account_detail: str | None,
        statement_category: str,
    ) -> MappingResult:
        """Classify one account.

        Args:
            account_source_id: Taxonomy account id, if any.
            account_name: Raw account name.
            account_detail: Detail path, if any.
            statement_category: Statement category code.

        Returns:
            MappingResult: Mapping decision.
        """
        rule_set = await self._cache.get()
        return rule_set.match(account_source_id, account_name, account_detail, statement_category)

    async def classify_all(self, accounts: Iterable[ClassifiableAccount]) -> BatchMappingSummary:
        """Classify a batch of accounts without short-circuiting on failures.

        Args:
            accounts: Rows to classify.

        Returns:
            BatchMappingSummary: Counts, distinct unmapped names and errors.
        """
        summary = BatchMappingSummary()
        seen_unmapped: set[str] = set()
        for account in accounts:
            summary.total_count += 1
            try:
                result = await self.classify(
                    account.account_source_id,
                    account.account_name,
                    account.account_detail,
                    account.statement_category,
                )
            except Exception as exc:
                summary.unmapped_count += 1
                summary.errors.append(f"{account.account_name}: {exc}")
                continue
            if result.is_mapped:
                summary.mapped_count += 1
                continue
            summary.unmapped_count += 1
            if account.account_name not in seen_unmapped:
                seen_unmapped.add(account.account_name)
                summary.unmapped_accounts.append(account.account_name)
        return summary

    def invalidate(self) -> None:
        """Invalidate the rule cache."""
        self._cache.invalidate()
