"""Response models for daemon status endpoints."""

from pydantic import BaseModel
from pydantic import Field


class StatusResponse(BaseModel):
    """Response for daemon status.

    Attributes:
        status: Status string (e.g., 'running')
        version: Daemon version
        uptime_seconds: Uptime in seconds
        root_dir: Library root path
    """

    status: str = Field(..., description="Daemon status")
    version: str = Field(..., description="Daemon version")
    uptime_seconds: float = Field(..., description="Uptime in seconds")
    root_dir: str = Field(..., description="Library root path")
