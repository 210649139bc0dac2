from fastapi import APIRouter

from imgurl.core.config import settings
from imgurl.core.logging import get_logger
from imgurl.schemas.url import UrlRequest, UrlResponse
from imgurl.services.url_builder import UrlBuilder

# Create router
router = APIRouter(tags=["urls"])
logger = get_logger("url_api")


@router.post(
    "/url",
    response_model=UrlResponse,
    summary="Generate an image URL",
    description="Build a transformation URL for an image, optionally signed with the configured private key"
)
def create_url(request: UrlRequest) -> UrlResponse:
    """Generate an image URL from the request options."""
    options = request.to_options()
    if request.signed and request.expire_seconds is None:
        options["expire_seconds"] = settings.default_expire_seconds

    url = UrlBuilder().generate_url(options)
    logger.info(f"Generated URL for {request.path or request.src} (signed: {request.signed})")
    return UrlResponse(url=url)
