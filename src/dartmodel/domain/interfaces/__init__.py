# src/dartmodel/domain/interfaces/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Domain ports."""
