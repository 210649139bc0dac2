from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version

from fastapi import APIRouter

router = APIRouter(tags=["health"])


def get_version() -> str:
    try:
        return version("imgurl")
    except PackageNotFoundError:
        return "unknown"


@router.get("/health", summary="Check service health")
def health():
    """Report that the service is up."""
    return {
        "status": "ok",
        "version": get_version(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
