"""
Route Table - Frozen pages and the per-request render path.

At request time a route:
1. Applies its dynamic rules, in the order they were added
2. Wraps the body with the shared header and footer

Nothing else is transformed. Routes are immutable, so concurrent
requests need no locking.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Iterator, Mapping, Sequence

from ..site_model.state import DynamicKind, DynamicRule, Layout, SiteModel

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPE = "text/html; charset=utf-8"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

FALLBACK_PATH = "/"
FALLBACK_CONTENT = (
    '<!doctype html><html><head><meta charset="utf-8"><title>plainweb</title></head>'
    "<body><h1>Compilation produced no pages</h1>"
    "<p>Check the model API key and model name, or adjust app.txt.</p></body></html>"
)


def format_time(now: datetime) -> str:
    return now.strftime(TIME_FORMAT)


def apply_dynamic(content: str, rules: Sequence[DynamicRule], now: datetime) -> str:
    """
    Substitute dynamic placeholders. Literal substring replacement,
    every occurrence.
    """
    out = content
    for rule in rules:
        if rule.kind == DynamicKind.CURRENT_TIME:
            out = out.replace(rule.placeholder, format_time(now))
    return out


def stitch(layout: Layout, body: str) -> str:
    """header + body + footer; exactly the body when the layout is empty."""
    if layout.is_empty:
        return body
    return f"{layout.header_html}{body}{layout.footer_html}"


@dataclass(frozen=True)
class Route:
    """A compiled page ready to render."""
    path: str
    content: str
    dynamic: tuple[DynamicRule, ...] = ()
    layout: Layout = Layout()

    def render(self, now: datetime | None = None) -> str:
        """Render the full document. Time is taken fresh unless given."""
        if now is None:
            now = datetime.now()
        return stitch(self.layout, apply_dynamic(self.content, self.dynamic, now))


class RouteTable(Mapping[str, Route]):
    """
    Immutable mapping from URL path to Route.

    Handed to the serving layer once a build is complete.
    """

    def __init__(self, routes: Mapping[str, Route]):
        self._routes = MappingProxyType(dict(routes))

    @classmethod
    def from_site(cls, site: SiteModel) -> RouteTable:
        """
        Freeze a Site Model into routes.

        An empty site yields a single diagnostic page at "/".
        """
        layout = site.layout
        if site.is_empty:
            logger.warning("Site has no pages; serving diagnostic page at %s", FALLBACK_PATH)
            return cls({FALLBACK_PATH: Route(path=FALLBACK_PATH, content=FALLBACK_CONTENT, layout=layout)})

        return cls({
            path: Route(
                path=path,
                content=page.content,
                dynamic=tuple(page.dynamic),
                layout=layout,
            )
            for path, page in site.pages.items()
        })

    def paths(self) -> list[str]:
        return list(self._routes)

    def __getitem__(self, path: str) -> Route:
        return self._routes[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)
