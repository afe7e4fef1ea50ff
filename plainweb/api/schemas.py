"""
Pydantic Schemas for the build admin API.

Error Codes:
- MISSING_CREDENTIAL: A compile was needed but no model API key is configured
- UPSTREAM_ERROR: The model API call failed or returned an unusable response
- SOURCE_UNREADABLE: app.txt could not be read
- NOT_BUILT: No successful build has completed yet
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class BuildState(str, Enum):
    """Outcome of the most recent build attempt."""
    COMPILED = "compiled"
    CACHED = "cached"
    FAILED = "failed"


class ErrorCode(str, Enum):
    """Structured error codes."""
    MISSING_CREDENTIAL = "MISSING_CREDENTIAL"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    SOURCE_UNREADABLE = "SOURCE_UNREADABLE"
    NOT_BUILT = "NOT_BUILT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Responses
# =============================================================================

class SkippedCallInfo(BaseModel):
    """A tool call that was skipped during replay."""
    index: int
    name: str
    reason: str

    model_config = {"from_attributes": True}


class BuildResponse(BaseModel):
    """State of the route table currently being served."""
    success: bool
    state: BuildState
    routes: list[str] = Field(default_factory=list)
    tool_call_count: int = 0
    skipped_calls: list[SkippedCallInfo] = Field(default_factory=list)
    model: Optional[str] = None
    plan_created_at: Optional[str] = None
    built_at: Optional[float] = Field(default=None, description="Unix timestamp of the build")
    elapsed_ms: int = 0
    error: Optional[str] = Field(default=None, description="Last build error, if the last attempt failed")


class RoutesResponse(BaseModel):
    """Paths currently served."""
    routes: list[str]
    count: int


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    version: str
    built: bool


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None
