# src/dartmodel/domain/exceptions/modeling.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Modeling domain exceptions.

Purpose:
    Error types for timeline construction, snapshot preconditions and
    snapshot lookup.

Layer:
    domain
"""

from __future__ import annotations

from dartmodel.domain.exceptions.base import DomainError


class ModelingError(DomainError):
    """Base class for modeling-related errors."""

    code = "MODEL_ERROR"


class TimelineConfigurationError(ModelingError):
    """Raised when a timeline cannot be built from the requested configuration."""

    code = "MODEL_TIMELINE_INVALID"


class EntityNotFound(ModelingError):
    """Raised when a model entity does not exist."""

    code = "MODEL_ENTITY_NOT_FOUND"


class NoCuratedFactsError(ModelingError):
    """Raised when no mapped annual facts exist for the historical window."""

    code = "MODEL_NO_CURATED_FACTS"


class SnapshotNotFound(ModelingError):
    """Raised when a model snapshot id is unknown."""

    code = "MODEL_SNAPSHOT_NOT_FOUND"
