"""Progress metrics derived from the catalog and the completed step set.

Every function here is pure: the same catalog and completed set always give
the same counts. Identifiers in the completed set that do not name a step in
the scope being measured are ignored, so stray ids never inflate progress.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .catalog import Catalog, Stage, Step


@dc.dataclass(frozen=True, slots=True)
class Progress:
    """Completed and total step counts with the rounded percentage."""

    completed: int
    total: int
    percentage: int

    @property
    def label(self) -> str:
        """Return the ``c/t steps (p%)`` summary used by the CLI and page."""
        return f"{self.completed}/{self.total} steps ({self.percentage}%)"


def percentage(completed: int, total: int) -> int:
    """Return ``100 * completed / total`` rounded half up, or 0 for no steps.

    Integer arithmetic keeps exact halves exact.

    >>> percentage(1, 6), percentage(1, 8), percentage(0, 0)
    (17, 13, 0)
    """
    if total <= 0:
        return 0
    completed = max(0, min(completed, total))
    return (200 * completed + total) // (2 * total)


def _measure(steps: cabc.Iterable[Step], completed_steps: cabc.Set[str]) -> Progress:
    ids = {step.id for step in steps}
    done = len(ids & set(completed_steps))
    total = len(ids)
    return Progress(completed=done, total=total, percentage=percentage(done, total))


def stage_progress(stage: Stage, completed_steps: cabc.Set[str]) -> Progress:
    """Return progress over one stage's steps, summed across its tasks."""
    return _measure(stage.iter_steps(), completed_steps)


def global_progress(catalog: Catalog, completed_steps: cabc.Set[str]) -> Progress:
    """Return progress over every step of every stage in the catalog."""
    return _measure(catalog.iter_steps(), completed_steps)


def catalog_progress(
    catalog: Catalog, completed_steps: cabc.Set[str]
) -> dict[str, Progress]:
    """Return ``stage id -> Progress`` in catalog order."""
    return {
        key: stage_progress(stage, completed_steps)
        for key, stage in catalog.stages.items()
    }


__all__ = [
    "Progress",
    "catalog_progress",
    "global_progress",
    "percentage",
    "stage_progress",
]
