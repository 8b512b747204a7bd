# src/dartmodel/adapters/repositories/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""SQLAlchemy repository implementations."""
