# src/dartmodel/domain/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Domain layer: pure entities, enums, exceptions and services."""
