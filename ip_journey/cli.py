"""Cyclopts CLI entrypoint for inspecting and rendering the IP journey.

The ``journey`` console script replays a sequence of interactions (stage
selection, step completion, task expansion, template and section toggles)
against a fresh session, then prints the resulting progress or writes the
journey page. Nothing is persisted between runs: every invocation starts
from the catalog's default state.

Examples
--------
Print progress after completing two formation steps:

>>> from ip_journey.cli import app
>>> app(
...     ["progress", "--complete", "name-search", "--complete", "basic-agreement"]
... )  # doctest: +SKIP
Overall Progress: 2/6 steps (33%)

Render the recording stage with its producer template open:

>>> app.run(
...     [
...         "render",
...         "--stage",
...         "recording",
...         "--expand",
...         "producer-agreement",
...         "--template",
...         "producer-contract",
...     ]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_OUTPUT, ENV_PREFIX
from .catalog import load_catalog, load_default_catalog
from .controller import JourneySession
from .page import JourneyPageBuilder
from .progress import catalog_progress

if typ.TYPE_CHECKING:
    from .catalog import Catalog

app = App(name="journey", config=cyclopts.config.Env(ENV_PREFIX, command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load(catalog: Path | None) -> Catalog:
    return load_default_catalog() if catalog is None else load_catalog(catalog)


def _replay(
    session: JourneySession,
    *,
    stage: str | None = None,
    complete: typ.Sequence[str] = (),
    expand: typ.Sequence[str] = (),
    template: str | None = None,
    section: int | None = None,
) -> None:
    """Apply the requested interactions in the order a reader would click."""
    if stage:
        session.select_stage(stage)
    for step_id in complete:
        session.toggle_step_completion(step_id)
    for task_id in expand:
        session.toggle_task_expansion(task_id)
    if template:
        session.toggle_template_visibility(template)
    if section is not None:
        session.toggle_section_visibility(section)


@app.command(help="Print overall and per-stage progress.")
def progress(
    *,
    catalog: typ.Annotated[
        Path | None, Parameter(help="Path to a catalog YAML file")
    ] = None,
    complete: typ.Annotated[
        list[str] | None, Parameter(help="Step id to toggle complete (repeatable)")
    ] = None,
) -> None:
    """Print the progress summary after toggling the given steps.

    Parameters
    ----------
    catalog : Path or None, optional
        Catalog to load; the bundled band catalog is used when ``None``
        (overridable via ``JOURNEY_CATALOG``).
    complete : list[str] or None, optional
        Step identifiers toggled in order. Unknown ids are ignored and
        repeating an id toggles it back to pending.

    Returns
    -------
    None
        Writes one overall line followed by one line per stage.
    """
    session = JourneySession(_load(catalog))
    _replay(session, complete=complete or ())
    view = session.view()
    print(f"Overall Progress: {view.overall.label}")
    per_stage = catalog_progress(session.catalog, session.state.completed_steps)
    for key, stage in session.catalog.stages.items():
        print(f"{stage.title}: {per_stage[key].label}")


@app.command(help="Render the journey page after replaying interactions.")
def render(
    *,
    catalog: typ.Annotated[
        Path | None, Parameter(help="Path to a catalog YAML file")
    ] = None,
    output: typ.Annotated[
        Path, Parameter(help="Where to write the HTML page")
    ] = DEFAULT_OUTPUT,
    stage: typ.Annotated[str | None, Parameter(help="Stage id to select")] = None,
    complete: typ.Annotated[
        list[str] | None, Parameter(help="Step id to toggle complete (repeatable)")
    ] = None,
    expand: typ.Annotated[
        list[str] | None, Parameter(help="Task id to expand (repeatable)")
    ] = None,
    template: typ.Annotated[
        str | None, Parameter(help="Step id whose template example is opened")
    ] = None,
    section: typ.Annotated[
        int | None, Parameter(help="Index of the content section to open")
    ] = None,
    trust_templates: typ.Annotated[
        bool,
        Parameter(help="Emit template payloads of a custom catalog as markup"),
    ] = False,
) -> None:
    """Replay interactions and write the journey page.

    Parameters
    ----------
    catalog : Path or None, optional
        Catalog to load; the bundled catalog when ``None``.
    output : Path, optional
        HTML destination; defaults to ``public/index.html``.
    stage : str or None, optional
        Stage to select first. Unknown keys leave the default stage selected.
    complete, expand : list[str] or None, optional
        Step ids to toggle complete and task ids to expand.
    template : str or None, optional
        Step whose template example is opened.
    section : int or None, optional
        Content section of the selected stage to open.
    trust_templates : bool, optional
        Template payloads from the bundled catalog are always emitted as
        markup; custom catalogs are escaped unless this flag is set.

    Returns
    -------
    None
        Writes the page and prints its path.
    """
    session = JourneySession(_load(catalog))
    _replay(
        session,
        stage=stage,
        complete=complete or (),
        expand=expand or (),
        template=template,
        section=section,
    )
    builder = JourneyPageBuilder(
        session.view(),
        output=output,
        trusted_templates=catalog is None or trust_templates,
    )
    written = builder.run()
    print(f"wrote {_format_path(written)}")


@app.command(help="Validate a catalog file and summarize its contents.")
def check(
    *,
    catalog: typ.Annotated[
        Path | None, Parameter(help="Path to a catalog YAML file")
    ] = None,
) -> None:
    """Load ``catalog`` and print stage, task and step counts.

    Raises
    ------
    CatalogError
        If the catalog fails validation (duplicate ids, missing fields).
    """
    loaded = _load(catalog)
    tasks = sum(len(stage.tasks) for stage in loaded.stages.values())
    steps = len(loaded.step_ids())
    print(f"{len(loaded.stages)} stages, {tasks} tasks, {steps} steps")
    for key, stage in loaded.stages.items():
        marker = "*" if key == loaded.default_stage else " "
        print(f"{marker} {key}: {stage.title}")


def main() -> None:
    """Invoke the Cyclopts application behind the ``journey`` console command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
