# src/dartmodel/domain/interfaces/repositories/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Repository protocols implemented by adapters."""
