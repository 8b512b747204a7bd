# src/dartmodel/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""DartModel: curate OpenDART financial rows and build three-statement models."""
