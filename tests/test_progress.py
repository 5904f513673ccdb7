"""Unit tests for progress derivation.

Covers the round-half-up percentage, the empty-scope guard, stray ids in the
completed set, and the rule that global totals are the sum of stage totals.
"""

from __future__ import annotations

import itertools
import typing as typ

import pytest

from ip_journey.progress import (
    Progress,
    catalog_progress,
    global_progress,
    percentage,
    stage_progress,
)

if typ.TYPE_CHECKING:
    from ip_journey.catalog import Catalog


@pytest.mark.parametrize(
    ("completed", "total", "expected"),
    [
        (0, 0, 0),
        (0, 6, 0),
        (1, 6, 17),
        (2, 6, 33),
        (1, 2, 50),
        (2, 2, 100),
        (1, 8, 13),
        (1, 200, 1),
        (1, 201, 0),
        (3, 8, 38),
    ],
)
def test_percentage_rounds_half_up(completed: int, total: int, expected: int) -> None:
    """Exact halves round up; everything else rounds to the nearest integer."""
    actual = percentage(completed, total)
    assert actual == expected, (
        f"expected {completed}/{total} -> {expected}%, got {actual}%"
    )


def test_global_progress_ignores_unknown_ids(catalog: Catalog) -> None:
    """Identifiers that are not catalog steps never inflate the count."""
    result = global_progress(catalog, frozenset({"name-search", "ghost", "other"}))
    assert result == Progress(completed=1, total=6, percentage=17), (
        f"expected 1/6 (17%), got {result!r}"
    )


def test_empty_scopes_report_zero(tiny_catalog: Catalog) -> None:
    """Stages without tasks or steps are valid and report 0%."""
    gamma = tiny_catalog.stages["gamma"]
    result = stage_progress(gamma, frozenset({"s1"}))
    assert result == Progress(completed=0, total=0, percentage=0), (
        f"expected empty stage progress, got {result!r}"
    )


def test_stage_progress_is_scoped(tiny_catalog: Catalog) -> None:
    """Only the stage's own steps count towards its progress."""
    alpha = tiny_catalog.stages["alpha"]
    result = stage_progress(alpha, frozenset({"s1", "s3"}))
    assert (result.completed, result.total, result.percentage) == (1, 2, 50), (
        f"expected alpha at 1/2 (50%), got {result!r}"
    )
    assert result.label == "1/2 steps (50%)", f"unexpected label {result.label!r}"


def test_progress_is_bounded_and_consistent(catalog: Catalog) -> None:
    """Every subset of steps yields bounded, additive progress values."""
    step_ids = sorted(catalog.step_ids()) + ["not-a-step"]
    for size in range(len(step_ids) + 1):
        for chosen in itertools.combinations(step_ids, size):
            completed = frozenset(chosen)
            overall = global_progress(catalog, completed)
            per_stage = catalog_progress(catalog, completed)
            assert 0 <= overall.percentage <= 100, (
                f"global percentage out of range for {sorted(completed)}"
            )
            assert all(0 <= p.percentage <= 100 for p in per_stage.values()), (
                f"stage percentage out of range for {sorted(completed)}"
            )
            assert overall.total == sum(p.total for p in per_stage.values()), (
                "expected global total to equal the sum of stage totals"
            )
            assert overall.completed == sum(p.completed for p in per_stage.values()), (
                "expected global completed count to equal the sum over stages"
            )


def test_catalog_progress_preserves_stage_order(catalog: Catalog) -> None:
    """Per-stage results follow catalog order."""
    assert list(catalog_progress(catalog, frozenset())) == list(catalog.stages), (
        "expected catalog_progress keys in catalog order"
    )
