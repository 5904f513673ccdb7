"""Track progress through a band's IP-protection journey.

This package loads the stage -> task -> step guidance catalog, keeps the
selection, completion and expansion state as immutable snapshots, derives
per-stage and global progress, and assembles a view model that the page
builder and the ``journey`` CLI render.

Exports
-------
- ``JourneySession``: single writer that applies interactions and publishes
  view snapshots.
- ``load_default_catalog``: load the bundled band catalog.
- ``app`` / ``main``: Cyclopts application behind the ``journey`` command.

Examples
--------
>>> from ip_journey import JourneySession, load_default_catalog
>>> session = JourneySession(load_default_catalog())
>>> session.select_stage("recording").selected_stage
'recording'
"""

from __future__ import annotations

from .catalog import load_catalog, load_default_catalog
from .cli import app, main
from .controller import JourneySession
from .state import JourneyState, initial_state
from .view import JourneyView, assemble_view

__all__ = [
    "JourneySession",
    "JourneyState",
    "JourneyView",
    "app",
    "assemble_view",
    "initial_state",
    "load_catalog",
    "load_default_catalog",
    "main",
]
