from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from imgurl.api.health import router as health_router
from imgurl.api.url import router as url_router
from imgurl.core.config import settings
from imgurl.core.errors import ImageUrlError, get_error_response
from imgurl.core.logging import get_logger, setup_logging
from imgurl.core.middleware import RequestLoggingMiddleware

logger = get_logger("main")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="imgurl API",
        description="""
        # imgurl API

        Generates transformation URLs for an image delivery endpoint,
        optionally signed with an HMAC signature and expiry.
        """,
        version="1.0.0",
        openapi_tags=[
            {
                "name": "urls",
                "description": "Operations for generating image URLs"
            },
            {
                "name": "health",
                "description": "Operations for checking the health of the service"
            }
        ],
    )

    app.add_middleware(RequestLoggingMiddleware)

    @app.exception_handler(ImageUrlError)
    async def image_url_error_handler(request: Request, exc: ImageUrlError):
        request_id = getattr(request.state, "request_id", "unknown")
        exc.context.update({
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        })
        logger.warning(f"{type(exc).__name__}: {exc.message} (request_id={request_id})")

        error_response = exc.to_dict()
        error_response["request_id"] = request_id
        return JSONResponse(
            status_code=exc.http_status,
            content=error_response,
            headers={"X-Request-ID": request_id}
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        request_id = getattr(request.state, "request_id", "unknown")
        error_response = {
            "error": True,
            "error_code": "validation_error",
            "message": "Invalid request parameters",
            "details": {"errors": [
                {"loc": list(error["loc"]), "msg": error["msg"]} for error in exc.errors()
            ]},
            "request_id": request_id,
        }
        return JSONResponse(status_code=422, content=error_response)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        request_id = getattr(request.state, "request_id", "unknown")
        logger.exception(f"Unhandled exception in request handler (request_id={request_id})")

        error_response = get_error_response(exc)
        error_response["request_id"] = request_id
        return JSONResponse(
            status_code=500,
            content=error_response,
            headers={"X-Request-ID": request_id}
        )

    app.include_router(url_router, prefix=settings.api_prefix)
    app.include_router(health_router, prefix=settings.api_prefix)

    return app


setup_logging()
app = create_app()
