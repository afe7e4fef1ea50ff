"""
Tool Calls - Named, argument-bearing instructions from the model.

A tool call is stored exactly as received (arguments may be an object
or a JSON-encoded string) so the persisted plan replays identically.
Arguments are normalized once, when the interpreter applies the call.
"""

from __future__ import annotations
import json
from dataclasses import dataclass
from typing import Any

from ..errors import InvalidArgument


@dataclass(frozen=True)
class ToolCall:
    """
    A single tool invocation.

    `arguments` is opaque until normalize_arguments() is applied.
    """
    name: str
    arguments: Any = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ToolCall:
        """
        Build from either the chat-completions shape
        ({"function": {"name", "arguments"}}) or the flat plan shape
        ({"name", "arguments"}).

        A name that is not a string is dropped, so the call is skipped
        as nameless on replay.
        """
        function = data.get("function")
        source = function if isinstance(function, dict) else data
        name = source.get("name")
        return cls(name=name if isinstance(name, str) else "", arguments=source.get("arguments"))

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "arguments": self.arguments}


def normalize_arguments(tool_name: str, raw: Any) -> dict[str, Any]:
    """
    Turn raw tool arguments into a dict.

    None -> {}, dict -> as-is, str -> JSON-decoded object.
    Anything else raises InvalidArgument.
    """
    if raw is None:
        return {}
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, str):
        if not raw.strip():
            return {}
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            raise InvalidArgument(tool_name, f"arguments are not valid JSON: {e}") from e
        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise InvalidArgument(tool_name, "arguments must decode to a JSON object")
        return parsed
    raise InvalidArgument(tool_name, f"unsupported arguments type: {type(raw).__name__}")
