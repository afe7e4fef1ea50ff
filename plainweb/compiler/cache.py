"""
Plan Cache - Persists the compiled tool-call plan.

The cache:
- Is a single JSON file (default .cache/compiled-plan.json)
- Stores the ordered tool calls plus the build fingerprint
- Is reused only while the fingerprint still matches
- Is optional: absence or corruption means "no cache", never a failure

Design decisions:
- The source fingerprint is the source mtime (ns) captured when the
  source was read, not when the plan was written
- The assets signature is compared by equality
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..errors import CacheIOError
from ..site_model.tool_call import ToolCall

logger = logging.getLogger(__name__)


@dataclass
class CompiledPlan:
    """
    The ordered tool calls that reproduce a Site Model,
    plus what they were compiled from.
    """
    tool_calls: list[ToolCall]
    source_fingerprint: int
    assets_signature: str
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    model: str = ""
    api_base: str = ""

    def is_reusable(self, source_fingerprint: int, assets_signature: str) -> bool:
        """Valid iff not older than the source and built from the same assets."""
        return (
            self.source_fingerprint >= source_fingerprint
            and self.assets_signature == assets_signature
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "toolCalls": [call.to_dict() for call in self.tool_calls],
            "sourceFingerprint": self.source_fingerprint,
            "assetsSignature": self.assets_signature,
            "createdAt": self.created_at,
            "model": self.model,
            "apiBase": self.api_base,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CompiledPlan:
        """
        Parse a persisted plan.

        Raises ValueError if the document does not have the plan shape.
        """
        if not isinstance(data, dict):
            raise ValueError("plan must be a JSON object")
        calls = data.get("toolCalls")
        if not isinstance(calls, list) or not all(isinstance(c, dict) for c in calls):
            raise ValueError("toolCalls must be a list of objects")
        fingerprint = data.get("sourceFingerprint")
        if not isinstance(fingerprint, int) or isinstance(fingerprint, bool):
            raise ValueError("sourceFingerprint must be an integer")
        signature = data.get("assetsSignature")
        if not isinstance(signature, str):
            raise ValueError("assetsSignature must be a string")

        return cls(
            tool_calls=[ToolCall.from_dict(c) for c in calls],
            source_fingerprint=fingerprint,
            assets_signature=signature,
            created_at=str(data.get("createdAt") or ""),
            model=str(data.get("model") or ""),
            api_base=str(data.get("apiBase") or ""),
        )


class PlanCache:
    """
    File-based cache for a compiled plan.

    Usage:
        cache = PlanCache(".cache/compiled-plan.json")

        plan = cache.load()
        if plan and plan.is_reusable(fingerprint, signature):
            return plan

        plan = compile(...)
        cache.save(plan)
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> CompiledPlan | None:
        """
        Load the cached plan.

        Returns None if missing, unreadable or malformed.
        """
        if not self.path.exists():
            return None

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return CompiledPlan.from_dict(data)
        except (OSError, ValueError) as e:
            logger.info("Ignoring unusable plan cache %s: %s", self.path, e)
            return None

    def save(self, plan: CompiledPlan):
        """
        Write the plan.

        Raises CacheIOError on failure.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(plan.to_dict(), f, indent=2)
        except (OSError, TypeError, ValueError) as e:
            raise CacheIOError(f"Failed to write plan cache {self.path}: {e}") from e

    def clear(self) -> bool:
        """
        Remove the cached plan. Returns True if a file was removed.
        """
        if not self.path.exists():
            return False
        self.path.unlink()
        return True
