"""Typed dataclasses describing the read-only guidance catalog."""

from __future__ import annotations

import dataclasses as dc
import typing as typ


class CatalogError(ValueError):
    """Raised when the catalog definition is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class TemplateExample:
    """Illustrative contract attached to a step.

    ``content`` is an opaque formatted-text payload. It is never interpreted
    here and reaches the page builder verbatim.
    """

    title: str
    content: str


@dc.dataclass(frozen=True, slots=True)
class Step:
    """Smallest trackable unit; completion is recorded per step."""

    id: str
    title: str
    detail: str = ""
    warning: str | None = None
    template_example: TemplateExample | None = None


@dc.dataclass(frozen=True, slots=True)
class Task:
    """A grouped unit of actionable work within a stage."""

    id: str
    title: str
    description: str = ""
    priority: str | None = None
    steps: tuple[Step, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class SectionDetails:
    """Optional bullet lists and cost table shown inside a content section."""

    steps: tuple[str, ...] = ()
    components: tuple[str, ...] = ()
    costs: tuple[tuple[str, str], ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.steps or self.components or self.costs or self.warnings)


@dc.dataclass(frozen=True, slots=True)
class Section:
    """Informational accordion entry; not part of progress tracking."""

    title: str
    description: str = ""
    details: SectionDetails | None = None


@dc.dataclass(frozen=True, slots=True)
class StageContent:
    """Explanatory copy shown alongside a stage's tasks."""

    what_is_it: str = ""
    why_it_matters: str = ""
    sections: tuple[Section, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class Stage:
    """Top-level phase in the guidance flow."""

    id: str
    title: str
    description: str = ""
    tasks: tuple[Task, ...] = ()
    content: StageContent = dc.field(default_factory=StageContent)

    def iter_steps(self) -> typ.Iterator[Step]:
        """Yield every step of the stage in task order."""
        for task in self.tasks:
            yield from task.steps


@dc.dataclass(frozen=True, slots=True)
class Resource:
    """External reference listed beneath the disclaimer."""

    label: str
    href: str


@dc.dataclass(frozen=True, slots=True)
class Catalog:
    """The fixed collection of stages, tasks and steps.

    ``stages`` preserves the declaration order of the source file; every
    query below is a read-only walk over that mapping.
    """

    stages: typ.Mapping[str, Stage]
    default_stage: str
    title: str = "Your Band's IP Journey"
    tagline: str = ""
    disclaimer: tuple[str, ...] = ()
    resources: tuple[Resource, ...] = ()

    def has_stage(self, stage_id: object) -> bool:
        return isinstance(stage_id, str) and stage_id in self.stages

    def get_stage(self, stage_id: object) -> Stage | None:
        """Return the stage keyed by ``stage_id`` or ``None`` when unknown."""
        if not self.has_stage(stage_id):
            return None
        return self.stages[typ.cast("str", stage_id)]

    def iter_steps(self) -> typ.Iterator[Step]:
        for stage in self.stages.values():
            yield from stage.iter_steps()

    def iter_tasks(self) -> typ.Iterator[Task]:
        for stage in self.stages.values():
            yield from stage.tasks

    def step_ids(self) -> frozenset[str]:
        """Return the identifiers of every step in the catalog."""
        return frozenset(step.id for step in self.iter_steps())

    def task_ids(self) -> frozenset[str]:
        return frozenset(task.id for task in self.iter_tasks())

    def find_step(self, step_id: object) -> Step | None:
        """Return the step with ``step_id`` or ``None`` when absent."""
        for step in self.iter_steps():
            if step.id == step_id:
                return step
        return None


__all__ = [
    "Catalog",
    "CatalogError",
    "Resource",
    "Section",
    "SectionDetails",
    "Stage",
    "StageContent",
    "Step",
    "Task",
    "TemplateExample",
]
