"""Common literal values used across sp8d_pages.

These constants keep the output-format suffix, the generator artifact removed
from rendered titles, and default file locations centralized so the CLI,
sanitizer, and tests import the same values without drifting.

Examples
--------
>>> from sp8d_pages import _constants
>>> _constants.HTML_SUFFIX
'.html'
>>> "Nextra" in _constants.NEXTRA_TITLE_MARKER
True
"""

HTML_SUFFIX = ".html"
# UTF-8 " – Nextra" decoded as cp1252 by the page generator.
NEXTRA_TITLE_MARKER = " â€“ Nextra"
SITEMAP_FILENAME = "sitemap.xml"
ROBOTS_FILENAME = "robots.txt"
