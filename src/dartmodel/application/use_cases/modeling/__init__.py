# src/dartmodel/application/use_cases/modeling/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Modeling use cases: build, save and load snapshots."""
