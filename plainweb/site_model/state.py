"""
Site Model - Build-time pages and layout.

The Site Model is the only mutable state of a build:
- Created empty at the start of a build
- Populated by replaying tool calls (see interpreter.py)
- Frozen into a RouteTable once replay is done

Pages are materialized lazily: any tool call targeting a path
creates the page with empty defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


class DynamicKind(Enum):
    """Supported dynamic content types. Closed set."""
    CURRENT_TIME = "CURRENT_TIME"


@dataclass(frozen=True)
class DynamicRule:
    """
    A placeholder to substitute at request time.

    Describes which literal substring to replace and how;
    it carries no value until render time.
    """
    placeholder: str
    kind: DynamicKind


@dataclass(frozen=True)
class Layout:
    """Shared header and footer wrapped around every page body."""
    header_html: str = ""
    footer_html: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.header_html and not self.footer_html


@dataclass
class Page:
    """A page body keyed by its URL path."""
    path: str
    content: str = ""
    dynamic: list[DynamicRule] = field(default_factory=list)


@dataclass
class SiteModel:
    """
    Mutable build state: pages by path plus the layout.

    Usage:
        site = SiteModel()
        site.page("/").content = "<h1>Hello</h1>"
        site.layout = Layout(header_html="<header/>")
    """
    pages: dict[str, Page] = field(default_factory=dict)
    layout: Layout = field(default_factory=Layout)

    def page(self, path: str) -> Page:
        """Get the page at path, creating it on first reference."""
        page = self.pages.get(path)
        if page is None:
            page = Page(path=path)
            self.pages[path] = page
        return page

    @property
    def is_empty(self) -> bool:
        return not self.pages
