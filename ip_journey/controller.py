"""Interaction operations that turn one journey snapshot into the next.

The five toggles are plain functions of ``(catalog, state, argument)``. They
never mutate their inputs and never raise for bad identifiers: an operation
that cannot correspond to real catalog content returns the snapshot it was
given. :class:`JourneySession` is the single writer that holds the latest
snapshot and notifies read-only listeners with a freshly assembled view.

Examples
--------
>>> from ip_journey.catalog import load_default_catalog
>>> session = JourneySession(load_default_catalog())
>>> _ = session.toggle_step_completion("name-search")
>>> session.view().overall.label
'1/6 steps (17%)'
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from .state import JourneyState, initial_state
from .view import assemble_view

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .catalog import Catalog
    from .view import JourneyView

logger = logging.getLogger(__name__)

Listener = typ.Callable[["JourneyView"], None]


def _toggle_member(members: frozenset[str], item: str) -> frozenset[str]:
    return members - {item} if item in members else members | {item}


def toggle_step_completion(
    catalog: Catalog, state: JourneyState, step_id: str
) -> JourneyState:
    """Mark ``step_id`` done, or pending again when it is already done."""
    if not isinstance(step_id, str) or step_id not in catalog.step_ids():
        logger.debug("Ignoring completion toggle for unknown step %r", step_id)
        return state
    return dc.replace(
        state, completed_steps=_toggle_member(state.completed_steps, step_id)
    )


def toggle_task_expansion(
    catalog: Catalog, state: JourneyState, task_id: str
) -> JourneyState:
    """Expand ``task_id``, or collapse it when it is already expanded."""
    if not isinstance(task_id, str) or task_id not in catalog.task_ids():
        logger.debug("Ignoring expansion toggle for unknown task %r", task_id)
        return state
    return dc.replace(
        state, expanded_tasks=_toggle_member(state.expanded_tasks, task_id)
    )


def select_stage(catalog: Catalog, state: JourneyState, stage_id: str) -> JourneyState:
    """Show ``stage_id`` in the detail panel.

    Unknown keys are rejected and leave the selection unchanged. Selecting
    the current stage is a no-op. Moving to another stage closes the open
    section, whose index is scoped to the stage it was opened on.
    """
    if not catalog.has_stage(stage_id):
        logger.debug("Rejecting selection of unknown stage %r", stage_id)
        return state
    if stage_id == state.selected_stage:
        return state
    return dc.replace(state, selected_stage=stage_id, open_section_index=None)


def toggle_template_visibility(
    catalog: Catalog, state: JourneyState, step_id: str
) -> JourneyState:
    """Open the template example of ``step_id``, closing any other one.

    Calling it again for the open step closes it. Steps that are unknown or
    carry no template example are ignored.
    """
    if state.open_template_id == step_id:
        return dc.replace(state, open_template_id=None)
    step = catalog.find_step(step_id)
    if step is None or step.template_example is None:
        logger.debug("Ignoring template toggle for step %r", step_id)
        return state
    return dc.replace(state, open_template_id=step_id)


def toggle_section_visibility(
    catalog: Catalog, state: JourneyState, index: int
) -> JourneyState:
    """Open content section ``index`` of the selected stage, or close it."""
    valid = isinstance(index, int) and not isinstance(index, bool)
    if valid and state.open_section_index == index:
        return dc.replace(state, open_section_index=None)
    stage = catalog.get_stage(state.selected_stage)
    if not valid or stage is None or not 0 <= index < len(stage.content.sections):
        logger.debug(
            "Ignoring section toggle %r for stage %r", index, state.selected_stage
        )
        return state
    return dc.replace(state, open_section_index=index)


ACTIONS: dict[str, typ.Callable[[Catalog, JourneyState, typ.Any], JourneyState]] = {
    "toggle_step_completion": toggle_step_completion,
    "toggle_task_expansion": toggle_task_expansion,
    "select_stage": select_stage,
    "toggle_template_visibility": toggle_template_visibility,
    "toggle_section_visibility": toggle_section_visibility,
}


def _conform(catalog: Catalog, state: JourneyState) -> JourneyState:
    """Return ``state`` restricted to identifiers ``catalog`` defines."""
    conformed = dc.replace(
        state,
        completed_steps=frozenset(state.completed_steps) & catalog.step_ids(),
        expanded_tasks=frozenset(state.expanded_tasks) & catalog.task_ids(),
    )
    if not catalog.has_stage(state.selected_stage):
        conformed = dc.replace(
            conformed, selected_stage=catalog.default_stage, open_section_index=None
        )
    step = catalog.find_step(state.open_template_id or "")
    if step is None or step.template_example is None:
        conformed = dc.replace(conformed, open_template_id=None)
    stage = catalog.stages[conformed.selected_stage]
    index = conformed.open_section_index
    if index is not None and not 0 <= index < len(stage.content.sections):
        conformed = dc.replace(conformed, open_section_index=None)
    if conformed != state:
        logger.debug("Conformed starting state %r to the catalog", state)
    return conformed


class JourneySession:
    """Hold the latest snapshot for one view and notify its listeners."""

    def __init__(self, catalog: Catalog, state: JourneyState | None = None) -> None:
        """Start a session on ``catalog``.

        Parameters
        ----------
        catalog : Catalog
            Read-only content the session tracks progress against.
        state : JourneyState, optional
            Starting snapshot. Defaults to :func:`initial_state`. A supplied
            snapshot is conformed to ``catalog``: an unknown stage falls back
            to the default stage and ids the catalog does not define are
            dropped.
        """
        self.catalog = catalog
        self._state = (
            initial_state(catalog) if state is None else _conform(catalog, state)
        )
        self._listeners: list[Listener] = []

    @property
    def state(self) -> JourneyState:
        """Return the latest snapshot."""
        return self._state

    def view(self) -> JourneyView:
        """Return the view model for the current snapshot."""
        return assemble_view(self.catalog, self._state)

    def subscribe(self, listener: Listener) -> cabc.Callable[[], None]:
        """Register ``listener`` for view updates; return an unsubscribe hook."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def apply(self, action: str, argument: object) -> JourneyState:
        """Run the operation named ``action`` and publish the resulting view.

        Listeners are notified after every call, including calls that leave
        the snapshot unchanged.

        Raises
        ------
        ValueError
            If ``action`` does not name one of the five operations.
        """
        try:
            operation = ACTIONS[action]
        except KeyError as exc:
            available = ", ".join(sorted(ACTIONS))
            msg = f"Unknown action '{action}'. Known actions: {available}"
            raise ValueError(msg) from exc
        self._state = operation(self.catalog, self._state, argument)
        self._publish()
        return self._state

    def toggle_step_completion(self, step_id: str) -> JourneyState:
        return self.apply("toggle_step_completion", step_id)

    def toggle_task_expansion(self, task_id: str) -> JourneyState:
        return self.apply("toggle_task_expansion", task_id)

    def select_stage(self, stage_id: str) -> JourneyState:
        return self.apply("select_stage", stage_id)

    def toggle_template_visibility(self, step_id: str) -> JourneyState:
        return self.apply("toggle_template_visibility", step_id)

    def toggle_section_visibility(self, index: int) -> JourneyState:
        return self.apply("toggle_section_visibility", index)

    def _publish(self) -> None:
        if not self._listeners:
            return
        snapshot = self.view()
        for listener in list(self._listeners):
            listener(snapshot)


__all__ = [
    "ACTIONS",
    "JourneySession",
    "select_stage",
    "toggle_section_visibility",
    "toggle_step_completion",
    "toggle_task_expansion",
    "toggle_template_visibility",
]
