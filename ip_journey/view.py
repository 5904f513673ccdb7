"""Project the catalog and a state snapshot into a presentation-ready model.

:func:`assemble_view` is stateless: the same catalog and snapshot always give
an equal :class:`JourneyView`. The page builder and any other renderer read
only these dataclasses and never touch the state sets directly.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .progress import Progress, catalog_progress, global_progress

if typ.TYPE_CHECKING:
    from .catalog import (
        Catalog,
        Resource,
        SectionDetails,
        Stage,
        Step,
        Task,
        TemplateExample,
    )
    from .state import JourneyState

StepStatus = typ.Literal["completed", "pending"]


@dc.dataclass(frozen=True, slots=True)
class StageSummaryView:
    """Timeline/sidebar entry for one stage."""

    id: str
    title: str
    description: str
    progress: Progress
    selected: bool

    @property
    def percentage(self) -> int:
        """Return the stage completion percentage."""
        return self.progress.percentage


@dc.dataclass(frozen=True, slots=True)
class SectionView:
    """Accordion entry of the selected stage with its open flag."""

    index: int
    title: str
    description: str
    details: SectionDetails | None
    open: bool


@dc.dataclass(frozen=True, slots=True)
class StepView:
    """Step row annotated with completion status and template slot state."""

    id: str
    title: str
    detail: str
    warning: str | None
    status: StepStatus
    template: TemplateExample | None
    template_open: bool

    @property
    def completed(self) -> bool:
        """Return whether the step is marked done."""
        return self.status == "completed"

    @property
    def has_template(self) -> bool:
        """Return whether the step carries a template example."""
        return self.template is not None


@dc.dataclass(frozen=True, slots=True)
class TaskView:
    """Task card with its expanded flag and annotated steps."""

    id: str
    title: str
    description: str
    priority: str | None
    expanded: bool
    steps: tuple[StepView, ...]


@dc.dataclass(frozen=True, slots=True)
class StageDetailView:
    """Fully resolved detail panel for the selected stage."""

    id: str
    title: str
    description: str
    what_is_it: str
    why_it_matters: str
    sections: tuple[SectionView, ...]
    tasks: tuple[TaskView, ...]
    progress: Progress

    @property
    def has_tasks(self) -> bool:
        """Return whether the stage has tasks; false shows the coming-soon notice."""
        return bool(self.tasks)


@dc.dataclass(frozen=True, slots=True)
class JourneyView:
    """Everything a renderer needs for one frame.

    Attributes
    ----------
    title : str
        Catalog heading.
    tagline : str
        Sub-heading shown under the title.
    stages : tuple[StageSummaryView, ...]
        Stages in catalog order with their progress and selection flag.
    detail : StageDetailView
        The selected stage's info text, sections and tasks.
    overall : Progress
        Catalog-wide progress, independent of the selected stage.
    disclaimer : tuple[str, ...]
        Disclaimer paragraphs.
    resources : tuple[Resource, ...]
        External references listed with the disclaimer.
    """

    title: str
    tagline: str
    stages: tuple[StageSummaryView, ...]
    detail: StageDetailView
    overall: Progress
    disclaimer: tuple[str, ...]
    resources: tuple[Resource, ...]


def assemble_view(catalog: Catalog, state: JourneyState) -> JourneyView:
    """Build the view model for ``state`` over ``catalog``.

    Parameters
    ----------
    catalog : Catalog
        Read-only content.
    state : JourneyState
        Snapshot produced by the controller.

    Returns
    -------
    JourneyView
        Stage summaries, the selected stage's detail and the global summary.
    """
    per_stage = catalog_progress(catalog, state.completed_steps)
    stages = tuple(
        StageSummaryView(
            id=key,
            title=stage.title,
            description=stage.description,
            progress=per_stage[key],
            selected=key == state.selected_stage,
        )
        for key, stage in catalog.stages.items()
    )
    selected = catalog.stages[state.selected_stage]
    return JourneyView(
        title=catalog.title,
        tagline=catalog.tagline,
        stages=stages,
        detail=_stage_detail(selected, state, per_stage[selected.id]),
        overall=global_progress(catalog, state.completed_steps),
        disclaimer=catalog.disclaimer,
        resources=catalog.resources,
    )


def _stage_detail(
    stage: Stage, state: JourneyState, progress: Progress
) -> StageDetailView:
    sections = tuple(
        SectionView(
            index=index,
            title=section.title,
            description=section.description,
            details=section.details,
            open=state.open_section_index == index,
        )
        for index, section in enumerate(stage.content.sections)
    )
    return StageDetailView(
        id=stage.id,
        title=stage.title,
        description=stage.description,
        what_is_it=stage.content.what_is_it,
        why_it_matters=stage.content.why_it_matters,
        sections=sections,
        tasks=tuple(_task_view(task, state) for task in stage.tasks),
        progress=progress,
    )


def _task_view(task: Task, state: JourneyState) -> TaskView:
    return TaskView(
        id=task.id,
        title=task.title,
        description=task.description,
        priority=task.priority,
        expanded=state.is_expanded(task.id),
        steps=tuple(_step_view(step, state) for step in task.steps),
    )


def _step_view(step: Step, state: JourneyState) -> StepView:
    return StepView(
        id=step.id,
        title=step.title,
        detail=step.detail,
        warning=step.warning,
        status="completed" if state.is_completed(step.id) else "pending",
        template=step.template_example,
        template_open=(
            step.template_example is not None and state.open_template_id == step.id
        ),
    )


__all__ = [
    "JourneyView",
    "SectionView",
    "StageDetailView",
    "StageSummaryView",
    "StepStatus",
    "StepView",
    "TaskView",
    "assemble_view",
]
