"""
Error taxonomy for the compile pipeline.

Containment:
- InvalidArgument is caught per tool call; the call is skipped
- MissingCredential and UpstreamError abort the build
- CacheIOError never aborts a build
"""

from __future__ import annotations


class PlainwebError(Exception):
    """Base class for all plainweb errors."""


class InvalidArgument(PlainwebError):
    """Raised when a tool call carries malformed arguments."""

    def __init__(self, tool_name: str, message: str):
        self.tool_name = tool_name
        super().__init__(f"{tool_name}: {message}")


class MissingCredential(PlainwebError):
    """Raised when compilation is required but no model API key is configured."""


class UpstreamError(PlainwebError):
    """Raised when the model API call fails or its response cannot be parsed."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class CacheIOError(PlainwebError):
    """Raised when the compiled plan cannot be written."""
