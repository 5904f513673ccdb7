"""Load and validate the band IP-protection guidance catalog.

This subpackage parses the catalog YAML (the bundled
``ip_journey/data/catalog.yaml`` or a user-supplied file), checks that every
stage, task and step identifier is unique, and produces frozen dataclasses
(:class:`Catalog`, :class:`Stage`, :class:`Task`, :class:`Step`) that the
state, progress and view modules consume. The catalog is built once at
startup and never mutated afterwards.

Examples
--------
>>> from ip_journey.catalog import load_default_catalog
>>> catalog = load_default_catalog()
>>> catalog.default_stage
'formation'
>>> sorted(catalog.stages["formation"].iter_steps(), key=lambda s: s.id)[0].id
'basic-agreement'
"""

from .loader import (
    DEFAULT_CATALOG_PATH,
    build_catalog,
    load_catalog,
    load_default_catalog,
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

__all__ = [
    "DEFAULT_CATALOG_PATH",
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
    "build_catalog",
    "load_catalog",
    "load_default_catalog",
]
