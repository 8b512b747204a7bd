# src/dartmodel/infrastructure/logging/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Structured JSON logging."""
