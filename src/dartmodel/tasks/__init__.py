# src/dartmodel/tasks/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Operational command-line entrypoints."""
