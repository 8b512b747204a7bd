# src/dartmodel/tasks/cli.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""DartModel CLI: curation and modeling commands.

Commands:
    db init              Create missing tables.
    curate transform     Curate one (company, year, report, scope) job.
    curate batch         Curate several years, report codes and scopes.
    curate coverage      Print the mapping coverage of raw rows.
    rules add            Add a mapping rule.
    rules seed           Insert the default OpenDART mapping rules.
    model build          Build (and save) a three-statement snapshot.
    model show           Print a stored snapshot.

Environment:
    DATABASE_URL         Async SQLAlchemy URL (e.g. postgresql+asyncpg://...).
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from decimal import Decimal
from typing import Any

import typer
from pydantic import BaseModel

from dartmodel.adapters.dependencies.use_cases import (
    build_add_mapping_rule,
    build_batch_transform,
    build_build_model_snapshot,
    build_generate_coverage_report,
    build_get_model_snapshot,
    build_run_transform,
    build_seed_mapping_rules,
)
from dartmodel.application.use_cases.curation.batch_transform import BatchTransformRequest
from dartmodel.application.use_cases.curation.generate_coverage_report import (
    CoverageReportRequest,
)
from dartmodel.application.use_cases.curation.manage_mapping_rules import AddMappingRuleRequest
from dartmodel.application.use_cases.curation.run_transform import TransformJobRequest
from dartmodel.application.use_cases.modeling.build_model_snapshot import BuildSnapshotRequest
from dartmodel.config.settings import get_settings
from dartmodel.domain.exceptions.base import DomainError
from dartmodel.infrastructure.database.session import (
    create_schema,
    dispose_engine,
    init_engine_and_sessionmaker,
)
from dartmodel.infrastructure.logging.logger import configure_root_logging, get_json_logger

configure_root_logging()
log = get_json_logger(__name__)

app = typer.Typer(add_completion=False, no_args_is_help=True)
db_app = typer.Typer(no_args_is_help=True)
curate_app = typer.Typer(no_args_is_help=True)
rules_app = typer.Typer(no_args_is_help=True)
model_app = typer.Typer(no_args_is_help=True)
app.add_typer(db_app, name="db")
app.add_typer(curate_app, name="curate")
app.add_typer(rules_app, name="rules")
app.add_typer(model_app, name="model")


def _run(fn: Callable[[], Awaitable[BaseModel | None]]) -> None:
    """Run ``fn`` on a fresh event loop and print its DTO as JSON.

    Domain errors are reported on stderr with exit code 1.
    """

    async def _main() -> BaseModel | None:
        try:
            return await fn()
        finally:
            await dispose_engine()

    try:
        result = asyncio.run(_main())
    except DomainError as exc:
        payload: dict[str, Any] = {"code": exc.code, "message": exc.message}
        if exc.details:
            payload["details"] = exc.details
        log.error("cli.domain_error", extra={"extra": payload})
        typer.echo(f"{exc.code}: {exc.message}", err=True)
        raise typer.Exit(code=1) from exc

    if result is not None:
        typer.echo(result.model_dump_json(indent=2))


@db_app.command("init")
def db_init() -> None:
    """Create all missing tables on the configured database."""

    async def _go() -> None:
        init_engine_and_sessionmaker(get_settings())
        await create_schema()
        log.info("db.schema.created")
        return None

    _run(_go)


@curate_app.command("transform")
def curate_transform(
    company_code: str = typer.Argument(..., help="OpenDART corporation code."),  # noqa: B008
    fiscal_year: str = typer.Argument(..., help="Business year, e.g. 2024."),  # noqa: B008
    report_code: str = typer.Option("11011", help="OpenDART report code."),  # noqa: B008
    consolidation_flag: str = typer.Option("CFS", help="CFS or OFS."),  # noqa: B008
) -> None:
    """Curate the raw rows of one filing into facts."""
    req = TransformJobRequest(
        company_code=company_code,
        fiscal_year=fiscal_year,
        report_code=report_code,
        consolidation_flag=consolidation_flag,
    )

    async def _go() -> BaseModel:
        return await build_run_transform().execute(req)

    _run(_go)


@curate_app.command("batch")
def curate_batch(
    company_code: str = typer.Argument(...),  # noqa: B008
    fiscal_years: list[str] = typer.Option(..., "--year", help="Repeatable."),  # noqa: B008
    report_codes: list[str] = typer.Option(["11011"], "--report-code"),  # noqa: B008
    consolidation_flags: list[str] = typer.Option(["CFS", "OFS"], "--flag"),  # noqa: B008
) -> None:
    """Curate every combination of years, report codes and flags."""
    req = BatchTransformRequest(
        company_code=company_code,
        fiscal_years=tuple(fiscal_years),
        report_codes=tuple(report_codes),
        consolidation_flags=tuple(consolidation_flags),
    )

    async def _go() -> BaseModel:
        return await build_batch_transform().execute(req)

    _run(_go)


@curate_app.command("coverage")
def curate_coverage(
    company_code: str = typer.Argument(...),  # noqa: B008
    fiscal_year: str = typer.Argument(...),  # noqa: B008
    top_n: int | None = typer.Option(None, min=0, help="Unmapped accounts to list."),  # noqa: B008
) -> None:
    """Report how many raw rows the current rules map."""
    req = CoverageReportRequest(
        company_code=company_code,
        fiscal_year=fiscal_year,
        top_n=get_settings().coverage_top_n if top_n is None else top_n,
    )

    async def _go() -> BaseModel:
        return await build_generate_coverage_report().execute(req)

    _run(_go)


@rules_app.command("add")
def rules_add(
    standard_line_id: str = typer.Argument(..., help="e.g. IS.REVENUE"),  # noqa: B008
    account_name: str | None = typer.Option(None, help="Name or regex pattern."),  # noqa: B008
    account_source_id: str | None = typer.Option(None),  # noqa: B008
    statement_category: str | None = typer.Option(None),  # noqa: B008
    priority: int = typer.Option(10),  # noqa: B008
    confidence: str = typer.Option("1.0"),  # noqa: B008
    rule_id: str | None = typer.Option(None),  # noqa: B008
) -> None:
    """Add a mapping rule and invalidate the rule cache."""
    req = AddMappingRuleRequest(
        standard_line_id=standard_line_id,
        account_name=account_name,
        account_source_id=account_source_id,
        statement_category=statement_category,
        priority=priority,
        confidence=Decimal(confidence),
        rule_id=rule_id,
    )

    async def _go() -> BaseModel:
        return await build_add_mapping_rule().execute(req)

    _run(_go)


@rules_app.command("seed")
def rules_seed() -> None:
    """Insert the default OpenDART rules that are not stored yet."""

    async def _go() -> BaseModel:
        return await build_seed_mapping_rules().execute()

    _run(_go)


@model_app.command("build")
def model_build(
    entity_id: str = typer.Argument(..., help="e.g. entity-00126380"),  # noqa: B008
    base_year: int = typer.Argument(...),  # noqa: B008
    historical_years: int | None = typer.Option(None, min=1),  # noqa: B008
    forecast_years: int | None = typer.Option(None, min=0),  # noqa: B008
    save: bool = typer.Option(True, "--save/--no-save"),  # noqa: B008
) -> None:
    """Build a snapshot from curated facts."""
    settings = get_settings()
    req = BuildSnapshotRequest(
        entity_id=entity_id,
        base_year=base_year,
        historical_years=(
            settings.default_historical_years if historical_years is None else historical_years
        ),
        forecast_years=(
            settings.default_forecast_years if forecast_years is None else forecast_years
        ),
        save=save,
    )

    async def _go() -> BaseModel:
        return await build_build_model_snapshot().execute(req)

    _run(_go)


@model_app.command("show")
def model_show(snapshot_id: str = typer.Argument(...)) -> None:  # noqa: B008
    """Print a stored snapshot."""

    async def _go() -> BaseModel:
        return await build_get_model_snapshot().execute(snapshot_id)

    _run(_go)


if __name__ == "__main__":
    app()
