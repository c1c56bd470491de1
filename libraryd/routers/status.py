"""Status router for the libraryd API.

Provides health check and status information.
"""

import logging
import time

from fastapi import APIRouter
from fastapi import Depends

from library_core.config.settings import LibrarySettings

from .. import __version__
from ..dependencies import get_settings
from ..models.responses import StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["status"])

# Track daemon start time for uptime calculation
_start_time = time.time()


@router.get("/status", response_model=StatusResponse)
async def get_status(settings: LibrarySettings = Depends(get_settings)) -> StatusResponse:
    """Get daemon status.

    Returns:
        Daemon status information including version, uptime, and library root
    """
    return StatusResponse(
        status="running",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        root_dir=str(settings.root_path),
    )


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Simple health status
    """
    return {"status": "healthy"}
