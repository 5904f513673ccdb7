"""Immutable snapshot of the journey's selection and interaction state.

A :class:`JourneyState` holds the five independent pieces of UI state: the
selected stage, the completed step ids, the expanded task ids, the open
template slot and the open section slot. Snapshots are frozen; the
controller produces a new one for every change so consumers can compare the
previous and current values between renders.

Examples
--------
>>> from ip_journey.catalog import load_default_catalog
>>> state = initial_state(load_default_catalog())
>>> state.selected_stage, state.completed_steps
('formation', frozenset())
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from .catalog import Catalog


@dc.dataclass(frozen=True, slots=True)
class JourneyState:
    """Selection, completion and expansion state for one journey view.

    Attributes
    ----------
    selected_stage : str
        Key of the stage shown in the detail panel; always a catalog key.
    completed_steps : frozenset[str]
        Step identifiers the user has marked done.
    expanded_tasks : frozenset[str]
        Task identifiers currently shown expanded.
    open_template_id : str or None
        Step whose template example is open. Single slot.
    open_section_index : int or None
        Index of the open content section within the selected stage. Single
        slot.
    """

    selected_stage: str
    completed_steps: frozenset[str] = frozenset()
    expanded_tasks: frozenset[str] = frozenset()
    open_template_id: str | None = None
    open_section_index: int | None = None

    def is_completed(self, step_id: str) -> bool:
        """Return whether ``step_id`` is marked done."""
        return step_id in self.completed_steps

    def is_expanded(self, task_id: str) -> bool:
        """Return whether ``task_id`` is shown expanded."""
        return task_id in self.expanded_tasks


def initial_state(catalog: Catalog) -> JourneyState:
    """Return the startup snapshot: default stage, empty sets, slots closed."""
    return JourneyState(selected_stage=catalog.default_stage)


__all__ = ["JourneyState", "initial_state"]
