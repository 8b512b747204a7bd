# src/dartmodel/adapters/dependencies/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Dependency wiring for use cases."""
