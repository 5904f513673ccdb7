"""Shared fixtures for the ip_journey test suite."""

from __future__ import annotations

import typing as typ

import pytest

from ip_journey.catalog import Catalog, build_catalog, load_default_catalog
from ip_journey.state import JourneyState, initial_state


def _tiny_catalog_payload() -> dict[str, typ.Any]:
    """Return a small catalog mapping with an empty task and an empty stage."""
    return {
        "title": "Tiny Journey",
        "stages": {
            "alpha": {
                "title": "Alpha",
                "description": "First stage",
                "content": {
                    "what_is_it": "Alpha basics",
                    "why_it_matters": "It comes first",
                    "sections": [
                        {"title": "One", "description": "First section"},
                        {
                            "title": "Two",
                            "details": {
                                "steps": ["search"],
                                "costs": {"Filing": "$10"},
                            },
                        },
                    ],
                },
                "tasks": [
                    {
                        "id": "t1",
                        "title": "Task one",
                        "priority": "High",
                        "steps": [
                            {
                                "id": "s1",
                                "title": "Step one",
                                "warning": "Do this first",
                                "template_example": {
                                    "title": "Example one",
                                    "content": "<p><em>Clause</em> one</p>",
                                },
                            },
                            {"id": "s2", "title": "Step two"},
                        ],
                    },
                    {"id": "t-empty", "title": "Nothing to do"},
                ],
            },
            "beta": {
                "title": "Beta",
                "tasks": [
                    {
                        "id": "t2",
                        "title": "Task two",
                        "steps": [
                            {
                                "id": "s3",
                                "title": "Step three",
                                "template_example": {
                                    "title": "Example three",
                                    "content": "<p>three</p>",
                                },
                            }
                        ],
                    }
                ],
            },
            "gamma": {"title": "Gamma"},
        },
    }


@pytest.fixture
def tiny_payload() -> dict[str, typ.Any]:
    """Return a fresh, mutable copy of the small catalog mapping."""
    return _tiny_catalog_payload()


@pytest.fixture
def catalog() -> Catalog:
    """Return the bundled band catalog."""
    return load_default_catalog()


@pytest.fixture
def tiny_catalog(tiny_payload: dict[str, typ.Any]) -> Catalog:
    """Return the small three-stage catalog used by unit tests."""
    return build_catalog(tiny_payload)


@pytest.fixture
def tiny_state(tiny_catalog: Catalog) -> JourneyState:
    """Return the startup snapshot for ``tiny_catalog``."""
    return initial_state(tiny_catalog)
