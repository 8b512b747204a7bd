# src/dartmodel/domain/enums/modeling.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Enumerations for the three-statement model."""

from __future__ import annotations

from enum import Enum


class ModelStatementType(str, Enum):
    """Statements produced by the model builder."""

    IS = "IS"
    BS = "BS"
    CF = "CF"


class Provenance(str, Enum):
    """Origin of a model line's values.

    SOURCE lines come straight from curated facts (forecasts are carried
    forward from them). DERIVED and PLUG are reserved for computed lines.
    """

    SOURCE = "SOURCE"
    DERIVED = "DERIVED"
    PLUG = "PLUG"


class ModelCheckName(str, Enum):
    """Integrity checks evaluated on every snapshot."""

    BALANCE = "BALANCE"
    CASH_TIE_OUT = "CASH_TIE_OUT"
