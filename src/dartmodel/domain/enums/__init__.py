# src/dartmodel/domain/enums/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Domain enumerations."""
