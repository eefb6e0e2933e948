from fastapi import APIRouter
import subprocess

from app.core.config import settings
from app.schemas.common import HealthResponse

router = APIRouter()

SERVICE_NAME = "budget-tracker-service"
SERVICE_VERSION = "0.1.0"


def get_git_sha() -> str:
    """Get git SHA, fallback to 'unknown' if not in git repo."""
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "HEAD"], stderr=subprocess.DEVNULL
            )
            .decode()
            .strip()[:7]
        )
    except (subprocess.CalledProcessError, FileNotFoundError):
        return "unknown"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="ok",
        name=SERVICE_NAME,
        version=SERVICE_VERSION,
        environment=settings.service_env,
        git_sha=get_git_sha(),
    )
