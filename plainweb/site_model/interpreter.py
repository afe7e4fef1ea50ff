"""
Interpreter - Replays tool calls onto a Site Model.

The interpreter is the single point of Site Model mutation.
All build state changes flow through apply().

Design principles:
- Replay is a pure function of the ordered call list
- Arguments are normalized once, here, before dispatch
- Best effort: an unknown tool or bad arguments skip that call only
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable

from ..errors import InvalidArgument
from .state import SiteModel
from .tool_call import ToolCall, normalize_arguments
from .tools import ToolRegistry, default_registry

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    """Result of applying one tool call."""
    success: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> ToolResult:
        return cls(success=True)

    @classmethod
    def failure(cls, error: str) -> ToolResult:
        return cls(success=False, error=error)


@dataclass
class SkippedCall:
    """A tool call that was not applied, with the reason."""
    index: int
    name: str
    reason: str


@dataclass
class ReplayResult:
    """Outcome of replaying a full tool-call list."""
    site: SiteModel
    applied: int = 0
    skipped: list[SkippedCall] = field(default_factory=list)


class Interpreter:
    """
    Applies tool calls in order.

    Usage:
        result = Interpreter().replay(plan.tool_calls)
        routes = RouteTable.from_site(result.site)
    """

    def __init__(self, registry: ToolRegistry | None = None):
        self.registry = registry or default_registry()

    def apply(self, site: SiteModel, call: ToolCall) -> ToolResult:
        """Apply a single call. Never raises for bad input."""
        if not isinstance(call.name, str) or not call.name:
            return ToolResult.failure("tool call has no name")

        tool = self.registry.get(call.name)
        if tool is None:
            return ToolResult.failure(f"unknown tool '{call.name}'")

        try:
            args = normalize_arguments(call.name, call.arguments)
            tool.handler(site, args)
        except InvalidArgument as e:
            return ToolResult.failure(str(e))
        return ToolResult.ok()

    def replay(self, calls: Iterable[ToolCall]) -> ReplayResult:
        """Replay every call against a fresh SiteModel."""
        result = ReplayResult(site=SiteModel())
        for index, call in enumerate(calls):
            outcome = self.apply(result.site, call)
            if outcome.success:
                result.applied += 1
                continue
            name = call.name if isinstance(call.name, str) else ""
            logger.warning("Skipping tool call #%d (%s): %s", index, name or "?", outcome.error)
            result.skipped.append(SkippedCall(index=index, name=name, reason=outcome.error or ""))
        return result


def replay(calls: Iterable[ToolCall], registry: ToolRegistry | None = None) -> ReplayResult:
    """
    Convenience function to replay calls with the default registry.
    """
    return Interpreter(registry).replay(calls)
