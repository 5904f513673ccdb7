"""Journey page rendering pipeline.

This module turns one :class:`~ip_journey.view.JourneyView` snapshot into a
static HTML file. It wires the view model, the Jinja environment and the
filesystem write; it holds no journey state of its own. The main entry point
is :class:`JourneyPageBuilder`.

Typical usage mirrors the ``journey render`` command:

>>> from ip_journey.catalog import load_default_catalog
>>> from ip_journey.controller import JourneySession
>>> session = JourneySession(load_default_catalog())  # doctest: +SKIP
>>> JourneyPageBuilder(session.view()).run()  # doctest: +SKIP
PosixPath('public/index.html')

Template example payloads are formatted text supplied by the catalog. They
are emitted as markup only when the builder is told the catalog is trusted;
otherwise Jinja's autoescape renders them as text.
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from ._constants import DEFAULT_OUTPUT, PAGE_TEMPLATE

if typ.TYPE_CHECKING:
    from .view import JourneyView


class JourneyPageBuilder:
    """Render the journey page from a view-model snapshot."""

    def __init__(
        self,
        view: JourneyView,
        *,
        output: Path = DEFAULT_OUTPUT,
        templates_dir: Path | None = None,
        trusted_templates: bool = True,
    ) -> None:
        """Initialize the builder and Jinja environment.

        Parameters
        ----------
        view : JourneyView
            Snapshot produced by :func:`ip_journey.view.assemble_view`.
        output : Path, optional
            Destination HTML file. Defaults to ``public/index.html``.
        templates_dir : Path, optional
            Directory containing Jinja templates. Defaults to
            ``ip_journey/templates``.
        trusted_templates : bool, optional
            Emit template example payloads as markup. Leave ``True`` only for
            catalogs whose payloads are static and reviewed, such as the
            bundled one.
        """
        self.view = view
        self.output = output
        self.trusted_templates = trusted_templates
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["template_payload"] = self._template_payload
        self.template = self.env.get_template(PAGE_TEMPLATE)

    def render(self) -> str:
        """Return the rendered HTML, always ending with a newline."""
        context = {
            "view": self.view,
            "generated_at": dt.datetime.now(dt.UTC),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return html

    def run(self) -> Path:
        """Render and write the page HTML, returning the output path.

        Parent directories are created as needed and filesystem errors
        propagate to the caller.
        """
        output_path = self.output
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(), encoding="utf-8")
        return output_path

    def _template_payload(self, content: str) -> str | Markup:
        if self.trusted_templates:
            return Markup(content)
        return content


__all__ = ["JourneyPageBuilder"]
