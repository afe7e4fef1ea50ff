"""
Render - Request-time substitution and layout stitching.
"""

from .routes import (
    Route,
    RouteTable,
    apply_dynamic,
    stitch,
    format_time,
    HTML_CONTENT_TYPE,
    FALLBACK_PATH,
)

__all__ = [
    "Route",
    "RouteTable",
    "apply_dynamic",
    "stitch",
    "format_time",
    "HTML_CONTENT_TYPE",
    "FALLBACK_PATH",
]
