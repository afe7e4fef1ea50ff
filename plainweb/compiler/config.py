"""
Configuration for the site compiler.

Sources, highest priority first:
1. config.json in the project root ({"gemini": {"apiKey", "model", "openAIBase"}})
2. Environment variables (GEMINI_API_KEY, GEMINI_MODEL, GEMINI_OPENAI_BASE),
   including those loaded from a .env file
3. Defaults

A missing API key is not an error here; it only matters when a
fresh compile is actually needed.
"""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-pro"
DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta/openai"

SOURCE_FILE = "app.txt"
CONFIG_FILE = "config.json"
ASSETS_DIR = "assets"
CACHE_FILE = Path(".cache") / "compiled-plan.json"


@dataclass
class CompilerConfig:
    """Paths and model settings for one project."""
    project_root: Path
    source_path: Path
    assets_dir: Path
    cache_path: Path
    api_key: str | None = None
    model: str = DEFAULT_MODEL
    api_base: str = DEFAULT_API_BASE

    @classmethod
    def for_project(cls, project_root: str | Path, **overrides: Any) -> CompilerConfig:
        """Default layout under project_root, without reading any settings."""
        root = Path(project_root).resolve()
        values: dict[str, Any] = {
            "project_root": root,
            "source_path": root / SOURCE_FILE,
            "assets_dir": root / ASSETS_DIR,
            "cache_path": root / CACHE_FILE,
        }
        values.update(overrides)
        return cls(**values)

    @classmethod
    def load(cls, project_root: str | Path | None = None) -> CompilerConfig:
        """Resolve settings for a project (defaults to the working directory)."""
        root = Path(project_root or Path.cwd()).resolve()
        load_dotenv(root / ".env")

        gemini = _read_config_file(root / CONFIG_FILE).get("gemini") or {}
        if not isinstance(gemini, dict):
            gemini = {}

        api_base = gemini.get("openAIBase") or os.getenv("GEMINI_OPENAI_BASE") or DEFAULT_API_BASE
        return cls.for_project(
            root,
            api_key=gemini.get("apiKey") or os.getenv("GEMINI_API_KEY") or None,
            model=gemini.get("model") or os.getenv("GEMINI_MODEL") or DEFAULT_MODEL,
            api_base=str(api_base).rstrip("/"),
        )


def _read_config_file(path: Path) -> dict[str, Any]:
    """config.json is optional; missing or invalid files read as empty."""
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring invalid %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}
