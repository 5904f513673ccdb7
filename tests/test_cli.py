"""Tests for the ``journey`` command functions."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest
from bs4 import BeautifulSoup

from ip_journey import cli
from ip_journey.catalog import CatalogError

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_progress_prints_overall_and_stages(capsys: pytest.CaptureFixture[str]) -> None:
    """Progress output lists the overall line then one line per stage."""
    cli.progress(complete=["name-search", "basic-agreement", "ghost"])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Overall Progress: 2/6 steps (33%)", (
        f"unexpected overall line {lines[0]!r}"
    )
    assert lines[1] == "Band Formation: 2/2 steps (100%)", (
        f"unexpected formation line {lines[1]!r}"
    )
    assert len(lines) == 6, f"expected six lines, got {len(lines)}"


def test_repeated_complete_toggles_back(capsys: pytest.CaptureFixture[str]) -> None:
    """Passing a step twice returns it to pending."""
    cli.progress(complete=["name-search", "name-search"])
    first_line = capsys.readouterr().out.splitlines()[0]
    assert first_line == "Overall Progress: 0/6 steps (0%)", (
        f"unexpected overall line {first_line!r}"
    )


def test_render_writes_selected_stage(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """The render command replays interactions before writing the page."""
    output = tmp_path / "index.html"
    cli.render(
        output=output,
        stage="recording",
        complete=["producer-contract"],
        expand=["producer-agreement"],
        template="producer-contract",
        section=0,
    )
    assert capsys.readouterr().out.strip().startswith("wrote "), (
        "expected the written path to be reported"
    )
    soup = BeautifulSoup(output.read_text(encoding="utf-8"), "html.parser")
    main = soup.select_one("main.journey")
    assert main is not None, "expected the journey root element"
    assert main["data-stage"] == "recording", "expected recording to be selected"
    assert soup.select_one("[data-test='template-producer-contract']") is not None, (
        "expected the producer template to be open"
    )
    section = soup.select_one("[data-test='section-0']")
    assert section is not None, "expected the recording section"
    assert section["data-open"] == "true", "expected section 0 open"


def test_render_ignores_unknown_stage(tmp_path: Path) -> None:
    """An unknown stage leaves the default stage selected."""
    output = tmp_path / "index.html"
    cli.render(output=output, stage="nonexistent")
    soup = BeautifulSoup(output.read_text(encoding="utf-8"), "html.parser")
    main = soup.select_one("main.journey")
    assert main is not None, "expected the journey root element"
    assert main["data-stage"] == "formation", "expected formation to stay selected"


def test_check_summarizes_catalog(capsys: pytest.CaptureFixture[str]) -> None:
    """The check command prints counts and marks the default stage."""
    cli.check()
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "5 stages, 6 tasks, 6 steps", f"unexpected summary {lines[0]!r}"
    assert lines[1] == "* formation: Band Formation", (
        f"expected formation marked as default, got {lines[1]!r}"
    )


def test_check_reports_invalid_catalog(tmp_path: Path) -> None:
    """Invalid catalogs surface the CatalogError."""
    path = tmp_path / "catalog.yaml"
    path.write_text(
        dedent(
            """
            stages:
              one:
                title: One
                tasks:
                  - id: a
                    title: A
                    steps:
                      - {id: dup, title: First}
                      - {id: dup, title: Second}
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )
    with pytest.raises(CatalogError, match="Duplicate step id 'dup'"):
        cli.check(catalog=path)
