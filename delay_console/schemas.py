"""
API Schema Definitions for the Delay Reporter console

This module defines Pydantic models for structured API responses.
"""

from pydantic import BaseModel, Field


# ===== Report Models =====

class DelayReportResponse(BaseModel):
    """JSON form of a single delayed report."""
    tag: str = Field(..., description="Fixed report tag, 'ver1'")
    status: str = Field(default="SUCCEEDED")
    slept_for_seconds: float = Field(..., description="Configured target duration")
    elapsed_seconds: float = Field(..., description="Measured wait, never below slept_for_seconds")
    cwd: str = Field(..., description="Working directory read after the wait, empty if it no longer exists")
    line: str = Field(..., description="The exact text line the plain endpoint returns")


class HealthResponse(BaseModel):
    status: str = "ok"
    policy_version: str
    policy_digest: str
