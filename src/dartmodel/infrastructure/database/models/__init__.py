# src/dartmodel/infrastructure/database/models/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""SQLAlchemy ORM models."""
