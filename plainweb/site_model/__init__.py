"""
Site Model - Deterministic build-time state and the tools that mutate it.

The site model:
1. Holds pages (by URL path) and the shared layout
2. Is mutated only by replaying tool calls through the Interpreter
3. Is frozen into a RouteTable once replay is done
"""

from .state import SiteModel, Page, Layout, DynamicRule, DynamicKind
from .tool_call import ToolCall, normalize_arguments
from .tools import Tool, ToolRegistry, default_registry, resolve_asset_url
from .interpreter import Interpreter, ReplayResult, SkippedCall, ToolResult, replay

__all__ = [
    "SiteModel",
    "Page",
    "Layout",
    "DynamicRule",
    "DynamicKind",
    "ToolCall",
    "normalize_arguments",
    "Tool",
    "ToolRegistry",
    "default_registry",
    "resolve_asset_url",
    "Interpreter",
    "ReplayResult",
    "SkippedCall",
    "ToolResult",
    "replay",
]
