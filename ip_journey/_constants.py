"""Common literal values used across ip_journey.

These constants keep file names and default paths centralized so the CLI,
the page builder and tests import the same values without drifting.

Examples
--------
>>> from ip_journey import _constants
>>> _constants.PAGE_TEMPLATE
'journey_page.jinja'
>>> str(_constants.DEFAULT_OUTPUT)
'public/index.html'
"""

from pathlib import Path

PAGE_TEMPLATE = "journey_page.jinja"
DEFAULT_OUTPUT = Path("public/index.html")
ENV_PREFIX = "JOURNEY_"
