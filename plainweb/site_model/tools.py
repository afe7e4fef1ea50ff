"""
Tool Registry - The fixed set of operations the model may call.

Tools:
- create_page: set a page body
- add_dynamic_content: mark a placeholder for request-time substitution
- add_asset: insert an image from the local assets directory
- set_layout: set the shared header and footer

Tool design principles:
1. Tools are deterministic - same site + same arguments -> same result
2. Tools never do I/O
3. Tools validate their own arguments and raise InvalidArgument
"""

from __future__ import annotations
import html
from dataclasses import dataclass
from typing import Any, Callable

from ..errors import InvalidArgument
from .state import DynamicKind, DynamicRule, Layout, SiteModel

# Public URL prefix the asset directory is mounted at
ASSET_URL_PREFIX = "/assets"
# Subfolder assumed for bare filenames
DEFAULT_IMAGE_DIR = "images"

PLACEMENT_APPEND = "append"
PLACEMENT_PREPEND = "prepend"
PLACEMENT_REPLACE = "replace_placeholder"


ToolHandler = Callable[[SiteModel, dict[str, Any]], None]


def _require_path(tool_name: str, args: dict[str, Any]) -> str:
    path = args.get("path")
    if not isinstance(path, str) or not path.startswith("/"):
        raise InvalidArgument(tool_name, '"path" must be a string that starts with "/"')
    return path


# =============================================================================
# Tools
# =============================================================================

def create_page(site: SiteModel, args: dict[str, Any]) -> None:
    """Store the BODY content for a route path. Dynamic rules are kept."""
    path = _require_path("create_page", args)
    content = args.get("content")
    if not isinstance(content, str):
        raise InvalidArgument("create_page", '"content" must be a string')

    site.page(path).content = content


def add_dynamic_content(site: SiteModel, args: dict[str, Any]) -> None:
    """Register a placeholder to be replaced on every request."""
    path = _require_path("add_dynamic_content", args)
    placeholder = args.get("placeholder")
    if not isinstance(placeholder, str) or not placeholder:
        raise InvalidArgument("add_dynamic_content", '"placeholder" must be a non-empty string')

    kind_value = args.get("type", args.get("kind"))
    try:
        kind = DynamicKind(kind_value)
    except ValueError:
        supported = ", ".join(k.value for k in DynamicKind)
        raise InvalidArgument(
            "add_dynamic_content",
            f"unsupported type {kind_value!r} (supported: {supported})",
        ) from None

    site.page(path).dynamic.append(DynamicRule(placeholder=placeholder, kind=kind))


def resolve_asset_url(asset: str) -> str:
    """
    Map an asset reference to its public URL.

    "assets/images/a.png" -> "/assets/images/a.png"
    "images/a.png"        -> "/assets/images/a.png"
    "a.png"               -> "/assets/images/a.png"
    """
    ref = asset.replace("\\", "/").lstrip("/")
    root = ASSET_URL_PREFIX.strip("/") + "/"
    if ref.startswith(root):
        return "/" + ref
    if ref.startswith(DEFAULT_IMAGE_DIR + "/"):
        return f"{ASSET_URL_PREFIX}/{ref}"
    return f"{ASSET_URL_PREFIX}/{DEFAULT_IMAGE_DIR}/{ref}"


def _img_tag(src: str, alt: Any, class_name: Any, width: Any, height: Any) -> str:
    """
    Build a self-closing <img>. Attribute values are HTML-escaped, so a
    quote in alt text cannot break out of the attribute.
    """
    attrs = [("src", src), ("alt", "" if alt is None else str(alt))]
    if class_name:
        attrs.append(("class", str(class_name)))
    if width:
        attrs.append(("width", str(width)))
    if height:
        attrs.append(("height", str(height)))
    rendered = " ".join(f'{name}="{html.escape(value, quote=True)}"' for name, value in attrs)
    return f"<img {rendered} />"


def add_asset(site: SiteModel, args: dict[str, Any]) -> None:
    """
    Insert an image into a page body.

    Placement:
    - append (default): after the existing content
    - prepend: before the existing content
    - replace_placeholder: first literal occurrence of `placeholder`;
      no-op when the placeholder is not found
    """
    path = _require_path("add_asset", args)
    asset = args.get("asset")
    if not isinstance(asset, str) or not asset:
        raise InvalidArgument("add_asset", '"asset" must be a non-empty string')

    fragment = _img_tag(
        resolve_asset_url(asset),
        alt=args.get("alt"),
        class_name=args.get("className"),
        width=args.get("width"),
        height=args.get("height"),
    )

    page = site.page(path)
    placement = args.get("placement") or PLACEMENT_APPEND
    placeholder = args.get("placeholder")
    if placement == PLACEMENT_REPLACE and isinstance(placeholder, str) and placeholder:
        page.content = page.content.replace(placeholder, fragment, 1)
    elif placement == PLACEMENT_PREPEND:
        page.content = fragment + page.content
    else:
        page.content = page.content + fragment


def set_layout(site: SiteModel, args: dict[str, Any]) -> None:
    """Replace the shared layout. Missing fields become empty strings."""
    header = args.get("header_html")
    footer = args.get("footer_html")
    site.layout = Layout(
        header_html="" if header is None else str(header),
        footer_html="" if footer is None else str(footer),
    )


# =============================================================================
# Model-facing definitions (OpenAI-compatible function tools)
# =============================================================================

_PATH_PROPERTY = {"type": "string", "description": "The URL path of the page to modify."}

CREATE_PAGE_DEFINITION = {
    "name": "create_page",
    "description": (
        "Create a page BODY at a specific URL path. Generate the HTML from the plain-English "
        "description. Do NOT include the shared header/footer; define those via set_layout(). "
        "The body may contain placeholders like {{CURRENT_TIME}}."
    ),
    "parameters": {
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": 'The URL path to mount the page at, e.g. "/" or "/about".'},
            "content": {
                "type": "string",
                "description": (
                    "HTML for the page BODY (unique content only). Placeholders like "
                    "{{CURRENT_TIME}} can be marked with add_dynamic_content."
                ),
            },
        },
        "required": ["path", "content"],
        "additionalProperties": False,
    },
}

ADD_DYNAMIC_CONTENT_DEFINITION = {
    "name": "add_dynamic_content",
    "description": (
        "Mark a placeholder in a page as dynamic so it is replaced at request time. "
        "Only CURRENT_TIME is supported."
    ),
    "parameters": {
        "type": "object",
        "properties": {
            "path": _PATH_PROPERTY,
            "placeholder": {
                "type": "string",
                "description": 'The exact placeholder text to replace, e.g. "{{CURRENT_TIME}}".',
            },
            "type": {
                "type": "string",
                "enum": [k.value for k in DynamicKind],
                "description": "The dynamic type. Only CURRENT_TIME is supported.",
            },
        },
        "required": ["path", "placeholder", "type"],
        "additionalProperties": False,
    },
}

ADD_ASSET_DEFINITION = {
    "name": "add_asset",
    "description": (
        "Insert an image from the local assets/ directory into a page BODY. "
        "Use a placeholder when precise placement is needed."
    ),
    "parameters": {
        "type": "object",
        "properties": {
            "path": _PATH_PROPERTY,
            "asset": {
                "type": "string",
                "description": 'File name or relative path under assets/, e.g. "test.png" or "images/test.png".',
            },
            "alt": {"type": "string", "description": "Alt text for accessibility."},
            "placement": {
                "type": "string",
                "enum": [PLACEMENT_APPEND, PLACEMENT_PREPEND, PLACEMENT_REPLACE],
                "description": "Where to insert the asset. Default is append.",
            },
            "placeholder": {
                "type": "string",
                "description": 'With replace_placeholder, the exact text to replace, e.g. "{{HERO_IMAGE}}".',
            },
            "className": {"type": "string", "description": "Optional CSS class name."},
            "width": {"type": "string", "description": 'Optional width attribute, e.g. "600".'},
            "height": {"type": "string", "description": 'Optional height attribute, e.g. "400".'},
        },
        "required": ["path", "asset"],
        "additionalProperties": False,
    },
}

SET_LAYOUT_DEFINITION = {
    "name": "set_layout",
    "description": (
        "Define the shared header and footer applied to all pages. Call once per site. "
        "Use create_page() for body content only."
    ),
    "parameters": {
        "type": "object",
        "properties": {
            "header_html": {
                "type": "string",
                "description": (
                    "HTML prepended to every page: document declaration, head metadata, "
                    "title, opening body and navigation."
                ),
            },
            "footer_html": {
                "type": "string",
                "description": "HTML appended to every page: footer note, closing body and document end.",
            },
        },
        "required": [],
        "additionalProperties": False,
    },
}


# =============================================================================
# Registry
# =============================================================================

@dataclass(frozen=True)
class Tool:
    """A registered tool: handler plus its model-facing definition."""
    name: str
    handler: ToolHandler
    definition: dict[str, Any]

    def schema(self) -> dict[str, Any]:
        """OpenAI-compatible function tool entry."""
        return {"type": "function", "function": self.definition}


class ToolRegistry:
    """
    Registry of tools by name.

    The compiler uses it to describe tools to the model.
    The interpreter uses it to dispatch tool calls.
    """

    def __init__(self, tools: list[Tool] | None = None):
        self._tools: dict[str, Tool] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: Tool):
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def list_tools(self) -> list[str]:
        return list(self._tools)

    def definitions(self) -> list[dict[str, Any]]:
        """Tool schemas for the model request, in registration order."""
        return [tool.schema() for tool in self._tools.values()]

    def __contains__(self, name: str) -> bool:
        return name in self._tools


def default_registry() -> ToolRegistry:
    """The four site-building tools."""
    return ToolRegistry([
        Tool("create_page", create_page, CREATE_PAGE_DEFINITION),
        Tool("add_dynamic_content", add_dynamic_content, ADD_DYNAMIC_CONTENT_DEFINITION),
        Tool("add_asset", add_asset, ADD_ASSET_DEFINITION),
        Tool("set_layout", set_layout, SET_LAYOUT_DEFINITION),
    ])
