# tests/conftest.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
from __future__ import annotations

from collections.abc import Generator

import pytest

from dartmodel.adapters.dependencies.use_cases import get_account_mapper
from dartmodel.config.settings import get_settings


@pytest.fixture(autouse=True)
def _reset_process_singletons() -> Generator[None, None, None]:
    """Drop cached settings and the shared account mapper around each test."""
    get_settings.cache_clear()
    get_account_mapper.cache_clear()
    yield
    get_settings.cache_clear()
    get_account_mapper.cache_clear()
