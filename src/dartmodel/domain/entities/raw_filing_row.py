# src/dartmodel/domain/entities/raw_filing_row.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Raw OpenDART filing row entity.

Purpose:
    Represent one account line of an OpenDART full financial statement
    response exactly as stored by the ingestion collector. Amounts are kept
    as the original display strings; parsing happens during curation.

Layer:
    domain/entities

Notes:
    - Field names are descriptive rather than the terse OpenDART keys. The
      mapping is: ``thstrm_amount`` -> ``current_amount``,
      ``thstrm_add_amount`` -> ``current_cumulative_amount``,
      ``frmtrm_amount`` -> ``prior_amount``, ``bfefrmtrm_amount`` ->
      ``prior_prior_amount``, ``fs_div`` -> ``consolidation_flag``,
      ``sj_div`` -> ``statement_category``, ``ord`` -> ``ordinal``,
      ``rcept_no`` -> ``receipt_no``.
"""

from __future__ import annotations

from dataclasses import dataclass

from dartmodel.domain.exceptions.curation import RawRowValidationError

__all__ = ["RawFilingRow"]

_REQUIRED_FIELDS = (
    "company_code",
    "fiscal_year",
    "report_code",
    "consolidation_flag",
    "statement_category",
    "account_name",
)


@dataclass(frozen=True, slots=True)
class RawFilingRow:
    """Raw filing row as fetched from the regulator API.

    Attributes:
        company_code:
            Eight-digit OpenDART corporation code.
        fiscal_year:
            Business year (``YYYY``) as a string.
        report_code:
            Report code (``11011`` annual, ``11012`` half-year, ``11013`` Q1,
            ``11014`` Q3). Unknown codes are tolerated here.
        consolidation_flag:
            ``CFS`` (consolidated) or ``OFS`` (separate).
        statement_category:
            Statement category code (``BS``, ``IS``, ``CIS``, ``CF``, ``SCE``).
        account_name:
            Account name as printed in the filing.
        account_source_id:
            Optional taxonomy account id (e.g. ``ifrs-full_Revenue``).
        account_detail:
            Optional account detail path.
        current_amount:
            Current-period amount string.
        current_cumulative_amount:
            Current cumulative (year-to-date) amount string.
        prior_amount:
            Prior-period amount string.
        prior_prior_amount:
            Prior-prior-period amount string.
        currency:
            Optional currency label (``원``, ``KRW``, ``USD``...).
        ordinal:
            Optional display ordinal as published.
        receipt_no:
            Optional filing receipt number used as the source report reference.
        stock_code:
            Optional listed stock code.
        company_name:
            Optional company display name.
    """

    company_code: str
    fiscal_year: str
    report_code: str
    consolidation_flag: str
    statement_category: str
    account_name: str
    account_source_id: str | None = None
    account_detail: str | None = None
    current_amount: str | None = None
    current_cumulative_amount: str | None = None
    prior_amount: str | None = None
    prior_prior_amount: str | None = None
    currency: str | None = None
    ordinal: str | None = None
    receipt_no: str | None = None
    stock_code: str | None = None
    company_name: str | None = None

    def __post_init__(self) -> None:
        """Validate that required identifiers are present.

        Raises:
            RawRowValidationError: If a required field is None or blank.
        """
        missing = [
            name
            for name in _REQUIRED_FIELDS
            if getattr(self, name) is None or not str(getattr(self, name)).strip()
        ]
        if missing:
            raise RawRowValidationError(
                "Raw filing row is missing required fields.",
                details={"missing": missing, "account_name": self.account_name},
            )
