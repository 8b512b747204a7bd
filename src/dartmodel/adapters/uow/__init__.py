# src/dartmodel/adapters/uow/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""
Unit of Work implementations (Adapters Layer)

Application-layer code depends only on the `UnitOfWork` protocol from
`dartmodel.application.uow`.

Exports:
    - SqlAlchemyUnitOfWork: SQLAlchemy-backed UnitOfWork.
"""

from __future__ import annotations

from .sqlalchemy_uow import SqlAlchemyUnitOfWork

__all__ = ["SqlAlchemyUnitOfWork"]
