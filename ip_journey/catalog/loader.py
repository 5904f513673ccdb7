"""Load the guidance catalog YAML into frozen dataclasses."""

from __future__ import annotations

import logging
import types
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _cost_table,
    _ensure_unique,
    _optional_str,
    _require_str,
    _string_list,
    _text,
)
from .models import (
    Catalog,
    CatalogError,
    Resource,
    Section,
    SectionDetails,
    Stage,
    StageContent,
    Step,
    Task,
    TemplateExample,
)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "catalog.yaml"

logger = logging.getLogger(__name__)


def load_catalog(path: Path) -> Catalog:
    """Load and validate the catalog describing stages, tasks and steps.

    Parameters
    ----------
    path : Path
        Filesystem path to the catalog YAML file (for example, the bundled
        ``ip_journey/data/catalog.yaml``).

    Returns
    -------
    Catalog
        Immutable catalog with stages in declaration order and a validated
        default stage.

    Raises
    ------
    FileNotFoundError
        If the catalog file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    CatalogError
        If required fields are missing, no stages are defined, an identifier
        is reused, or ``default_stage`` names an unknown stage.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from ip_journey.catalog import load_catalog
    >>> catalog = load_catalog(DEFAULT_CATALOG_PATH)
    >>> list(catalog.stages)[:2]
    ['formation', 'recording']
    """
    if not path.exists():
        msg = f"Catalog file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    catalog = build_catalog(loaded)
    logger.debug("Loaded %d stages from %s", len(catalog.stages), path)
    return catalog


def load_default_catalog() -> Catalog:
    """Load the band IP catalog shipped with the package."""
    return load_catalog(DEFAULT_CATALOG_PATH)


def build_catalog(raw: typ.Mapping[str, typ.Any]) -> Catalog:
    """Build a Catalog from an already parsed mapping."""
    stage_entries = _stage_entries(raw.get("stages"))
    if not stage_entries:
        msg = "No stages defined in catalog."
        raise CatalogError(msg)

    stages: dict[str, Stage] = {}
    seen_tasks: dict[str, str] = {}
    seen_steps: dict[str, str] = {}
    for key, payload in stage_entries:
        stage = _build_stage(
            key=key, payload=payload, seen_tasks=seen_tasks, seen_steps=seen_steps
        )
        if stage.id in stages:
            msg = f"Duplicate stage id '{stage.id}'."
            raise CatalogError(msg)
        stages[stage.id] = stage

    default_stage = _optional_str(raw.get("default_stage")) or next(iter(stages))
    if default_stage not in stages:
        available = ", ".join(stages)
        msg = f"Unknown default_stage '{default_stage}'. Known stages: {available}"
        raise CatalogError(msg)

    return Catalog(
        stages=types.MappingProxyType(stages),
        default_stage=default_stage,
        title=_optional_str(raw.get("title")) or "Your Band's IP Journey",
        tagline=_text(raw.get("tagline")),
        disclaimer=_string_list(raw.get("disclaimer"), "Catalog disclaimer"),
        resources=_build_resources(raw.get("resources")),
    )


def _stage_entries(
    value: object,
) -> list[tuple[str | None, typ.Mapping[str, typ.Any]]]:
    """Return ``(key, payload)`` pairs for stages given as a mapping or list."""
    match value:
        case dict() as mapping:
            entries: list[tuple[str | None, typ.Mapping[str, typ.Any]]] = []
            for key, payload in mapping.items():
                if not isinstance(payload, dict):
                    msg = f"Stage '{key}' must be a mapping."
                    raise CatalogError(msg)
                entries.append((str(key), payload))
            return entries
        case list() as items:
            for item in items:
                if not isinstance(item, dict):
                    msg = "Stage entries must be mappings."
                    raise CatalogError(msg)
            return [(None, item) for item in items]
        case None:
            return []
        case _:
            msg = "Catalog 'stages' must be a mapping or a list."
            raise CatalogError(msg)


def _build_stage(
    *,
    key: str | None,
    payload: typ.Mapping[str, typ.Any],
    seen_tasks: dict[str, str],
    seen_steps: dict[str, str],
) -> Stage:
    """Build a Stage, recording task and step ids for uniqueness checks."""
    stage_id = _optional_str(payload.get("id")) or key
    if not stage_id:
        msg = "Stage entries require an 'id'."
        raise CatalogError(msg)
    where = f"stage '{stage_id}'"
    title = _require_str(payload, "title", where.capitalize())

    tasks_raw = payload.get("tasks") or []
    if not isinstance(tasks_raw, list):
        msg = f"Tasks of {where} must be a list."
        raise CatalogError(msg)
    tasks: list[Task] = []
    for entry in tasks_raw:
        match entry:
            case dict():
                task = _build_task(entry, stage_id=stage_id, seen_steps=seen_steps)
            case _:
                msg = f"Task entries of {where} must be mappings."
                raise CatalogError(msg)
        _ensure_unique(seen_tasks, task.id, kind="task", where=where)
        tasks.append(task)

    return Stage(
        id=stage_id,
        title=title,
        description=_text(payload.get("description")),
        tasks=tuple(tasks),
        content=_build_content(payload.get("content"), where),
    )


def _build_task(
    payload: typ.Mapping[str, typ.Any], *, stage_id: str, seen_steps: dict[str, str]
) -> Task:
    """Build a Task and its steps for the given stage."""
    task_id = _require_str(payload, "id", f"A task in stage '{stage_id}'")
    where = f"task '{task_id}'"
    steps_raw = payload.get("steps") or []
    if not isinstance(steps_raw, list):
        msg = f"Steps of {where} must be a list."
        raise CatalogError(msg)
    steps: list[Step] = []
    for entry in steps_raw:
        match entry:
            case dict():
                step = _build_step(entry, where)
            case _:
                msg = f"Step entries of {where} must be mappings."
                raise CatalogError(msg)
        _ensure_unique(seen_steps, step.id, kind="step", where=where)
        steps.append(step)
    return Task(
        id=task_id,
        title=_require_str(payload, "title", where.capitalize()),
        description=_text(payload.get("description")),
        priority=_optional_str(payload.get("priority")),
        steps=tuple(steps),
    )


def _build_step(payload: typ.Mapping[str, typ.Any], where: str) -> Step:
    step_id = _require_str(payload, "id", f"A step in {where}")
    return Step(
        id=step_id,
        title=_require_str(payload, "title", f"Step '{step_id}'"),
        detail=_text(payload.get("detail")),
        warning=_optional_str(payload.get("warning")),
        template_example=_build_template(payload.get("template_example"), step_id),
    )


def _build_template(value: object, step_id: str) -> TemplateExample | None:
    """Build the optional template example; content is kept verbatim."""
    match value:
        case None:
            return None
        case {"title": title, "content": content, **_rest} if title and content:
            return TemplateExample(title=str(title).strip(), content=str(content))
        case _:
            msg = (
                f"Template example of step '{step_id}' requires "
                "'title' and 'content'."
            )
            raise CatalogError(msg)


def _build_content(value: object, where: str) -> StageContent:
    match value:
        case None:
            return StageContent()
        case dict() as data:
            pass
        case _:
            msg = f"Content of {where} must be a mapping."
            raise CatalogError(msg)
    sections_raw = data.get("sections") or []
    if not isinstance(sections_raw, list):
        msg = f"Sections of {where} must be a list."
        raise CatalogError(msg)
    sections = tuple(_build_section(entry, where) for entry in sections_raw)
    return StageContent(
        what_is_it=_text(data.get("what_is_it")),
        why_it_matters=_text(data.get("why_it_matters")),
        sections=sections,
    )


def _build_section(entry: object, where: str) -> Section:
    match entry:
        case {"title": title, **rest} if title:
            pass
        case _:
            msg = f"Sections of {where} require a 'title'."
            raise CatalogError(msg)
    label = f"Section '{title}' of {where}"
    details_raw = rest.get("details")
    details = None
    match details_raw:
        case None:
            pass
        case dict() as data:
            details = SectionDetails(
                steps=_string_list(data.get("steps"), f"{label} steps"),
                components=_string_list(data.get("components"), f"{label} components"),
                costs=_cost_table(data.get("costs"), f"{label} costs"),
                warnings=_string_list(data.get("warnings"), f"{label} warnings"),
            )
        case _:
            msg = f"{label} details must be a mapping."
            raise CatalogError(msg)
    return Section(
        title=str(title).strip(),
        description=_text(rest.get("description")),
        details=details,
    )


def _build_resources(value: object) -> tuple[Resource, ...]:
    resources: list[Resource] = []
    match value:
        case list() as items:
            iterable = items
        case None:
            return ()
        case _:
            msg = "Catalog 'resources' must be a list."
            raise CatalogError(msg)
    for entry in iterable:
        match entry:
            case {"label": label, "href": href, **_rest} if label and href:
                resources.append(Resource(label=str(label), href=str(href)))
            case _:
                msg = "Catalog resources require 'label' and 'href'."
                raise CatalogError(msg)
    return tuple(resources)


__all__ = [
    "DEFAULT_CATALOG_PATH",
    "build_catalog",
    "load_catalog",
    "load_default_catalog",
]
