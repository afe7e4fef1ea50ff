"""
Site Service - Owns the route table being served.

The service:
1. Runs builds through the SiteCompiler
2. Swaps in a new RouteTable only after a build completes
3. Keeps serving the previous table when a build fails

This layer is framework-agnostic.
"""

from __future__ import annotations
import logging
import threading
import time
from dataclasses import dataclass, field

from ..compiler import BuildResult, SiteCompiler
from ..render.routes import RouteTable
from .schemas import BuildResponse, BuildState, SkippedCallInfo

logger = logging.getLogger(__name__)


@dataclass
class SiteService:
    """
    Holds the current RouteTable for a project.

    Usage:
        service = SiteService(SiteCompiler(config))
        service.rebuild()
        html = service.routes["/"].render()
    """
    compiler: SiteCompiler
    routes: RouteTable | None = None
    last_result: BuildResult | None = None
    last_built_at: float | None = None
    last_error: str | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def rebuild(self, force: bool = False) -> BuildResult:
        """
        Build a complete new route table, then swap it in.

        Raises whatever the build raises; the previous table stays live.
        """
        with self._lock:
            try:
                result = self.compiler.build(force=force)
            except Exception as e:
                self.last_error = str(e)
                logger.error("Build failed; keeping previous routes: %s", e)
                raise
            self.routes = result.routes
            self.last_result = result
            self.last_built_at = time.time()
            self.last_error = None
            return result

    @property
    def is_built(self) -> bool:
        return self.routes is not None

    def build_info(self) -> BuildResponse:
        """Describe the table being served and the last attempt."""
        result = self.last_result
        if result is None:
            return BuildResponse(success=False, state=BuildState.FAILED, error=self.last_error)

        return BuildResponse(
            success=self.last_error is None,
            state=BuildState(result.status.value) if self.last_error is None else BuildState.FAILED,
            routes=result.routes.paths(),
            tool_call_count=len(result.plan.tool_calls),
            skipped_calls=[SkippedCallInfo.model_validate(s) for s in result.skipped],
            model=result.plan.model or None,
            plan_created_at=result.plan.created_at or None,
            built_at=self.last_built_at,
            elapsed_ms=result.elapsed_ms,
            error=self.last_error,
        )
