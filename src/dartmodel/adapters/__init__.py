# src/dartmodel/adapters/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Adapters layer: repositories, Unit of Work and dependency wiring."""
