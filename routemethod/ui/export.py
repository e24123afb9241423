"""Standalone printable HTML for an itinerary."""

from __future__ import annotations

import re
from typing import Any

from routemethod.domains.markdown.normalizer import escape_html
from routemethod.domains.markdown.renderer import render_markdown

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def export_filename(trip_data: dict[str, Any] | None = None) -> str:
    """File name for the downloaded itinerary, e.g. `routemethod-mexico-city.html`."""
    destination = (trip_data or {}).get("destination") or ""
    slug = _SLUG_RE.sub("-", str(destination).lower()).strip("-")
    return f"routemethod-{slug}.html" if slug else "routemethod-itinerary.html"


def build_export_document(content: str, title: str = "RouteMethod Itinerary") -> str:
    """Render itinerary markdown into a complete HTML document ready to print or save."""
    body = render_markdown(content) or "<p>No itinerary content available.</p>"
    return f"""<!DOCTYPE html>
<html><head><meta charset='UTF-8'>
<title>{escape_html(title)}</title>
<style>
* {{ box-sizing: border-box; margin: 0; padding: 0; }}
body {{ font-family: 'Jost', Arial, sans-serif; font-weight: 300; color: #0E0E0E; background: #fff; padding: 48px; max-width: 680px; margin: 0 auto; }}
.header {{ display: flex; align-items: center; justify-content: space-between; margin-bottom: 40px; padding-bottom: 20px; border-bottom: 1px solid #C9A96E; }}
.logo {{ font-family: 'Cormorant Garamond', Georgia, serif; font-size: 1.5rem; letter-spacing: 0.08em; }}
.tagline {{ font-size: 0.65rem; letter-spacing: 0.18em; text-transform: uppercase; color: #C9A96E; }}
h1 {{ font-family: 'Cormorant Garamond', Georgia, serif; font-size: 2rem; font-weight: 400; margin-bottom: 0.5rem; }}
h2 {{ font-family: 'Cormorant Garamond', Georgia, serif; font-size: 1.3rem; font-weight: 500; color: #2C3E50; margin: 2rem 0 0.75rem; padding-bottom: 0.5rem; border-bottom: 1px solid #C9A96E; }}
h3 {{ font-size: 0.65rem; font-weight: 500; letter-spacing: 0.14em; text-transform: uppercase; color: #C9A96E; margin: 1.25rem 0 0.4rem; }}
p {{ font-size: 0.875rem; line-height: 1.75; color: #2C3E50; margin-bottom: 0.5rem; }}
ul, ol {{ padding-left: 1.25rem; margin-bottom: 0.75rem; }}
li {{ font-size: 0.875rem; line-height: 1.7; color: #2C3E50; }}
strong {{ font-weight: 500; color: #0E0E0E; }}
em {{ font-style: italic; color: #8C9BAB; }}
@media print {{ body {{ padding: 24px; }} }}
</style></head>
<body>
<div class="header"><div class="logo">RouteMethod</div><div class="tagline">Travel, Engineered.</div></div>
<div class="itinerary">
{body}
</div>
</body></html>"""
