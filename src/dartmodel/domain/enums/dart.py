# src/dartmodel/domain/enums/dart.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""
OpenDART-specific enumerations.

Purpose:
    Provide stable internal tokens for the codes found in OpenDART
    single-company full financial statement rows (``fnlttSinglAcntAll``)
    and for the normalized period/scope vocabulary derived from them.

Layer:
    domain

Notes:
    - Raw rows carry these codes as plain strings. Normalization maps them
      onto the enums below; unknown values are handled by explicit policy in
      the period resolver rather than by enum explosion.
"""

from __future__ import annotations

from enum import Enum


class ReportCode(str, Enum):
    """Regulator report codes (``reprt_code``)."""

    ANNUAL = "11011"
    HALF_YEAR = "11012"
    Q1 = "11013"
    Q3 = "11014"


class ConsolidationFlag(str, Enum):
    """Raw consolidation flag (``fs_div``) as published by OpenDART."""

    CFS = "CFS"
    OFS = "OFS"


class StatementCategory(str, Enum):
    """Statement category codes (``sj_div``).

    ``BS`` is a point-in-time statement; all others are flow statements.
    """

    BS = "BS"
    IS = "IS"
    CIS = "CIS"
    CF = "CF"
    SCE = "SCE"


class ConsolidationScope(str, Enum):
    """Normalized consolidation scope."""

    CONSOLIDATED = "CONSOLIDATED"
    SEPARATE = "SEPARATE"


class PeriodKind(str, Enum):
    """Normalized period kind."""

    ANNUAL = "ANNUAL"
    QUARTER = "QUARTER"
    HALF_YEAR = "HALF_YEAR"
    YTD = "YTD"


class MatchMethod(str, Enum):
    """How an account mapping decision was reached."""

    ACCOUNT_ID = "ACCOUNT_ID"
    NAME_EXACT = "NAME_EXACT"
    NAME_REGEX = "NAME_REGEX"
    UNMAPPED = "UNMAPPED"


class UpsertOutcome(str, Enum):
    """Result of an idempotent curated-fact write."""

    CREATED = "CREATED"
    UPDATED = "UPDATED"
    UNCHANGED = "UNCHANGED"
