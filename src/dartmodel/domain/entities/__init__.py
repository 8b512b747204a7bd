# src/dartmodel/domain/entities/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Domain entities."""
