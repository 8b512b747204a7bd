# src/dartmodel/infrastructure/database/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Database engine, session and ORM models."""
