"""
API Module - HTTP serving for a compiled site.

Serves compiled pages, the assets directory, and a small build
admin API. The serving layer only reads the frozen RouteTable.
"""

from .schemas import (
    BuildState,
    ErrorCode,
    BuildResponse,
    RoutesResponse,
    HealthResponse,
    ErrorResponse,
    SkippedCallInfo,
)
from .service import SiteService
from .app import create_app, create_app_from_env

__all__ = [
    "BuildState",
    "ErrorCode",
    "BuildResponse",
    "RoutesResponse",
    "HealthResponse",
    "ErrorResponse",
    "SkippedCallInfo",
    "SiteService",
    "create_app",
    "create_app_from_env",
]
