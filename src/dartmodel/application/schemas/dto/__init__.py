# src/dartmodel/application/schemas/dto/__init__.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Data transfer objects returned by use cases."""
