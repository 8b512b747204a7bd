# src/dartmodel/application/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Application layer: use cases, services and DTOs."""
