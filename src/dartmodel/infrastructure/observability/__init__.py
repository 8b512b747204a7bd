# src/dartmodel/infrastructure/observability/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Prometheus metrics."""
