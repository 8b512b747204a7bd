# src/dartmodel/application/services/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Application services shared by use cases."""
