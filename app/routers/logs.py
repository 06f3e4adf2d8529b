"""Recent proxy log lines for the dashboard's Logs page."""
from fastapi import APIRouter, Query

from app.log_buffer import get_log_lines
from app.models import LogLinesResponse

router = APIRouter(prefix="/api", tags=["Logs"])


@router.get("/logs", response_model=LogLinesResponse)
async def get_logs(limit: int = Query(500, ge=1, le=5000, description="Most recent lines to return")):
    """Return the newest log lines, oldest first."""
    lines = get_log_lines()[-limit:]
    return LogLinesResponse(lines=lines, total=len(lines))
