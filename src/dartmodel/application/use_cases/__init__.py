# src/dartmodel/application/use_cases/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Application use cases."""
