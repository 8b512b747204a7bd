# src/dartmodel/domain/exceptions/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Domain exceptions."""

from __future__ import annotations

from .base import DomainError
from .curation import CurationError, MappingRuleError, RawRowValidationError
from .modeling import (
    EntityNotFound,
    ModelingError,
    NoCuratedFactsError,
    SnapshotNotFound,
    TimelineConfigurationError,
)

__all__ = [
    "DomainError",
    "CurationError",
    "RawRowValidationError",
    "MappingRuleError",
    "ModelingError",
    "TimelineConfigurationError",
    "EntityNotFound",
    "NoCuratedFactsError",
    "SnapshotNotFound",
]
