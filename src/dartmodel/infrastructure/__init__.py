# src/dartmodel/infrastructure/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Infrastructure layer: database, logging and observability."""
