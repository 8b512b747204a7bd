# src/dartmodel/application/schemas/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Application schemas."""
