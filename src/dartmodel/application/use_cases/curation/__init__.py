# src/dartmodel/application/use_cases/curation/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Curation use cases: transform, coverage and mapping rules."""
