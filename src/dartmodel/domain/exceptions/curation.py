# src/dartmodel/domain/exceptions/curation.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Curation domain exceptions.

Purpose:
    Error types raised while validating raw filing rows and mapping rules.

Layer:
    domain

Notes:
    - Amount parse failures are NOT exceptions: they are recorded on the
      normalized row (``parse_success=False``) so one bad cell never aborts
      a job.
"""

from __future__ import annotations

from dartmodel.domain.exceptions.base import DomainError


class CurationError(DomainError):
    """Base class for curation-related errors."""

    code = "CURATION_ERROR"


class RawRowValidationError(CurationError):
    """Raised when a raw filing row is missing a required field or is malformed."""

    code = "CURATION_RAW_ROW_INVALID"


class MappingRuleError(CurationError):
    """Raised when a mapping rule definition is invalid."""

    code = "CURATION_MAPPING_RULE_INVALID"
