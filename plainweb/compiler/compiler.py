"""
Site Compiler - Compiles app.txt into a route table.

The compiler:
1. Reads the plain-text source and scans the asset inventory
2. Reuses the cached plan when the fingerprint still matches
3. Otherwise asks the model for tool calls and caches the new plan
4. Replays the plan onto a fresh Site Model
5. Freezes the result into a RouteTable

IMPORTANT: The model is used at BUILD-TIME only.
Requests are served from the frozen RouteTable.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field
from enum import Enum

from ..errors import CacheIOError, MissingCredential
from ..render.routes import RouteTable
from ..site_model.interpreter import Interpreter, SkippedCall
from ..site_model.tools import ToolRegistry, default_registry
from .assets import AssetInventory
from .cache import CompiledPlan, PlanCache
from .config import CompilerConfig
from .model_client import ChatCompletionsClient, ModelClient
from .prompts import CompilerPrompts

logger = logging.getLogger(__name__)


class BuildStatus(Enum):
    """Where the plan for a build came from."""
    COMPILED = "compiled"
    CACHED = "cached"


@dataclass
class BuildResult:
    """
    Result of one build.
    """
    routes: RouteTable
    plan: CompiledPlan
    status: BuildStatus
    skipped: list[SkippedCall] = field(default_factory=list)
    elapsed_ms: int = 0

    @property
    def from_cache(self) -> bool:
        return self.status == BuildStatus.CACHED


class SiteCompiler:
    """
    Runs builds for one project.

    Usage:
        compiler = SiteCompiler(CompilerConfig.load("."))
        result = compiler.build()
        page = result.routes["/"].render()
    """

    def __init__(
        self,
        config: CompilerConfig,
        client: ModelClient | None = None,
        cache: PlanCache | None = None,
        registry: ToolRegistry | None = None,
    ):
        self.config = config
        self.client = client
        self.cache = cache or PlanCache(config.cache_path)
        self.registry = registry or default_registry()

    def build(self, force: bool = False) -> BuildResult:
        """
        Run one full build.

        Args:
            force: Skip the cache and always ask the model

        Raises:
            OSError: If the source file cannot be read
            MissingCredential: If a compile is needed but no API key is set
            UpstreamError: If the model call fails
        """
        start_time = time.time()

        # mtime first: an edit during the read then only makes the plan look stale
        source_fingerprint = self.config.source_path.stat().st_mtime_ns
        source_text = self.config.source_path.read_text(encoding="utf-8")
        inventory = AssetInventory.scan(self.config.assets_dir)

        plan = None if force else self._cached_plan(source_fingerprint, inventory)
        status = BuildStatus.CACHED
        if plan is None:
            plan = self._compile(source_text, source_fingerprint, inventory)
            status = BuildStatus.COMPILED
            self._persist(plan)

        replayed = Interpreter(self.registry).replay(plan.tool_calls)
        routes = RouteTable.from_site(replayed.site)

        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.info(
            "Build %s: %d route(s), %d call(s) applied, %d skipped",
            status.value, len(routes), replayed.applied, len(replayed.skipped),
        )
        return BuildResult(
            routes=routes,
            plan=plan,
            status=status,
            skipped=replayed.skipped,
            elapsed_ms=elapsed_ms,
        )

    def _cached_plan(self, source_fingerprint: int, inventory: AssetInventory) -> CompiledPlan | None:
        plan = self.cache.load()
        if plan is None:
            return None
        if plan.is_reusable(source_fingerprint, inventory.signature):
            logger.info("Using cached compiled plan (%d tool calls)", len(plan.tool_calls))
            return plan
        if plan.assets_signature != inventory.signature:
            logger.info("Cached plan found but the asset inventory changed; recompiling")
        else:
            logger.info("Cached plan is older than the source; recompiling")
        return None

    def _compile(self, source_text: str, source_fingerprint: int, inventory: AssetInventory) -> CompiledPlan:
        client = self._model_client()
        tool_calls = client.request_tool_calls(
            CompilerPrompts.system_prompt(inventory),
            source_text,
            self.registry.definitions(),
        )
        logger.info("Model returned %d tool call(s)", len(tool_calls))
        return CompiledPlan(
            tool_calls=tool_calls,
            source_fingerprint=source_fingerprint,
            assets_signature=inventory.signature,
            model=self.config.model,
            api_base=self.config.api_base,
        )

    def _model_client(self) -> ModelClient:
        if self.client is not None:
            return self.client
        if not self.config.api_key:
            raise MissingCredential(
                "Model API key is missing. Provide it in config.json under gemini.apiKey "
                "or set GEMINI_API_KEY."
            )
        return ChatCompletionsClient(
            api_key=self.config.api_key,
            model=self.config.model,
            api_base=self.config.api_base,
        )

    def _persist(self, plan: CompiledPlan):
        try:
            self.cache.save(plan)
        except CacheIOError as e:
            logger.warning("%s", e)
            return
        logger.info("Cached compiled plan at %s", self.cache.path)


def build_site(project_root: str | None = None, force: bool = False) -> BuildResult:
    """
    Convenience function to build a project with its own configuration.
    """
    compiler = SiteCompiler(CompilerConfig.load(project_root))
    return compiler.build(force=force)
