# src/dartmodel/infrastructure/observability/metrics_curation.py
# Copyright (c) DartModel.
# SPDX-License-Identifier: MIT
"""Curation and modeling observability helpers and Prometheus metrics.

Exports
-------
Core collectors (names are part of the public contract and must remain stable):

* ``dartmodel_curation_jobs_total`` (Counter, ``status``)
* ``dartmodel_curation_rows_total`` (Counter, ``outcome``)
* ``dartmodel_curation_transform_duration_seconds`` (Histogram)
* ``dartmodel_curation_mapping_coverage_percent`` (Gauge, ``company_code``)
* ``dartmodel_modeling_checks_total`` (Counter, ``check``, ``outcome``)

Helpers:

* :func:`observe_transform_job` - context manager timing one transform job.
* :func:`record_row_outcomes` - bulk-increment row outcome counters.
* :func:`record_coverage` - publish the coverage gauge for a company.
* :func:`record_model_check` - count one integrity check result.

Design
------
Collectors are created lazily against the *current* default registry
(:data:`prometheus_client.REGISTRY`). If a collector with the same name
already exists, the existing instance is reused instead of registering a
duplicate, which keeps tests that import modules repeatedly safe.
"""

from __future__ import annotations

from collections.abc import Generator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from time import perf_counter
from typing import TypeVar

import prometheus_client as prom
from prometheus_client import Counter, Gauge, Histogram
from prometheus_client.registry import CollectorRegistry

__all__ = [
    "get_curation_jobs_total",
    "get_curation_rows_total",
    "get_transform_duration_seconds",
    "get_mapping_coverage_percent",
    "get_modeling_checks_total",
    "observe_transform_job",
    "record_row_outcomes",
    "record_coverage",
    "record_model_check",
]

TCollector = TypeVar("TCollector", Counter, Gauge, Histogram)


def _get_or_create(
    kind: type[TCollector],
    name: str,
    doc: str,
    labelnames: Sequence[str] | None = None,
) -> TCollector:
    """Return a collector bound to the current default registry.

    1. Look up an existing collector with the given name in the current
       :data:`prom.REGISTRY` and reuse it if it has the expected type.
    2. Otherwise, register a new collector on the same registry.
    3. If a concurrent registration caused a ``Duplicated timeseries`` error,
       look up the collector again and reuse it.

    Args:
        kind: Collector class (Counter, Gauge or Histogram).
        name: Metric name.
        doc: Human-readable metric description.
        labelnames: Optional iterable of label names.

    Returns:
        The collector bound to the current :data:`prom.REGISTRY`.
    """
    registry: CollectorRegistry = prom.REGISTRY
    mapping = getattr(registry, "_names_to_collectors", {})
    # Counters register under both ``name`` and ``name_total``.
    existing = mapping.get(name) or mapping.get(f"{name}_total")
    if isinstance(existing, kind):
        return existing

    labels = tuple(labelnames) if labelnames is not None else ()
    try:
        return kind(name, doc, labels, registry=registry)
    except ValueError as exc:
        if "Duplicated timeseries" in str(exc):
            mapping = getattr(registry, "_names_to_collectors", {})
            again = mapping.get(name) or mapping.get(f"{name}_total")
            if isinstance(again, kind):
                return again
        raise


def get_curation_jobs_total() -> Counter:
    """Return (and lazily create) the transform job counter."""
    return _get_or_create(
        Counter,
        "dartmodel_curation_jobs_total",
        "Transform jobs by terminal status.",
        ["status"],
    )


def get_curation_rows_total() -> Counter:
    """Return (and lazily create) the curated row outcome counter."""
    return _get_or_create(
        Counter,
        "dartmodel_curation_rows_total",
        "Raw rows processed by outcome (created, unchanged, superseded, skipped, parse_error, unmapped, failed).",
        ["outcome"],
    )


def get_transform_duration_seconds() -> Histogram:
    """Return (and lazily create) the transform duration histogram."""
    return _get_or_create(
        Histogram,
        "dartmodel_curation_transform_duration_seconds",
        "Wall-clock duration of transform jobs in seconds.",
    )


def get_mapping_coverage_percent() -> Gauge:
    """Return (and lazily create) the mapping coverage gauge."""
    return _get_or_create(
        Gauge,
        "dartmodel_curation_mapping_coverage_percent",
        "Latest account mapping coverage percentage per company.",
        ["company_code"],
    )


def get_modeling_checks_total() -> Counter:
    """Return (and lazily create) the model integrity check counter."""
    return _get_or_create(
        Counter,
        "dartmodel_modeling_checks_total",
        "Model integrity checks by check name and outcome.",
        ["check", "outcome"],
    )


@dataclass
class TransformObservation:
    """Mutable handle yielded by :func:`observe_transform_job`."""

    status: str = "success"

    def mark_failed(self) -> None:
        """Mark the observed job as failed."""
        self.status = "failed"


@contextmanager
def observe_transform_job() -> Generator[TransformObservation, None, None]:
    """Time one transform job and count its terminal status.

    An exception escaping the block is counted as ``failed`` and re-raised.
    """
    obs = TransformObservation()
    start = perf_counter()
    try:
        yield obs
    except BaseException:
        obs.mark_failed()
        raise
    finally:
        get_transform_duration_seconds().observe(perf_counter() - start)
        get_curation_jobs_total().labels(status=obs.status).inc()


def record_row_outcomes(outcomes: Mapping[str, int]) -> None:
    """Increment the row outcome counter for every non-zero outcome."""
    counter = get_curation_rows_total()
    for outcome, count in outcomes.items():
        if count:
            counter.labels(outcome=outcome).inc(count)


def record_coverage(company_code: str, percent: float) -> None:
    """Publish the coverage gauge for ``company_code``."""
    get_mapping_coverage_percent().labels(company_code=company_code).set(percent)


def record_model_check(check: str, passed: bool) -> None:
    """Count one integrity check result."""
    get_modeling_checks_total().labels(check=check, outcome="pass" if passed else "fail").inc()
