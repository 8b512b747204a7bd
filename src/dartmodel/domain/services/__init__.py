# src/dartmodel/domain/services/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Pure domain services."""
