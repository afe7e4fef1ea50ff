"""
Compiler - Compiles a plain-text site description into routes.

The compiler:
1. Takes the source text (app.txt) and the asset inventory
2. Uses the model at BUILD-TIME to obtain an ordered tool-call plan
3. Caches the plan by source mtime and asset signature
4. Replays the plan into a RouteTable

The model is NEVER used at request time.
"""

from .assets import AssetInventory
from .cache import CompiledPlan, PlanCache
from .config import CompilerConfig
from .model_client import ModelClient, ChatCompletionsClient, parse_tool_calls
from .prompts import CompilerPrompts
from .compiler import SiteCompiler, BuildResult, BuildStatus, build_site

__all__ = [
    "AssetInventory",
    "CompiledPlan",
    "PlanCache",
    "CompilerConfig",
    "ModelClient",
    "ChatCompletionsClient",
    "parse_tool_calls",
    "CompilerPrompts",
    "SiteCompiler",
    "BuildResult",
    "BuildStatus",
    "build_site",
]
