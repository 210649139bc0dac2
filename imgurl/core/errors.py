from typing import Dict, Any, Optional


HTTP_400_BAD_REQUEST = 400
HTTP_500_INTERNAL_SERVER_ERROR = 500

# Context keys never echoed back in error responses
SENSITIVE_CONTEXT_KEYS = frozenset({"private_key", "public_key", "secret", "key", "signature"})


class ImageUrlError(Exception):
    """Base exception class for imgurl.

    This provides a standardized way to handle errors with detailed context.
    """
    def __init__(self,
                 message: str,
                 error_code: str = "internal_error",
                 http_status: int = HTTP_500_INTERNAL_SERVER_ERROR,
                 context: Optional[Dict[str, Any]] = None,
                 original_exception: Optional[Exception] = None):
        self.message = message
        self.error_code = error_code
        self.http_status = http_status
        self.context = context or {}
        self.original_exception = original_exception

        if original_exception:
            self.context.update({
                "original_error_type": type(original_exception).__name__,
                "original_error": str(original_exception)
            })

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary for API responses."""
        result = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }

        safe_context = {
            key: value for key, value in self.context.items()
            if key not in SENSITIVE_CONTEXT_KEYS and value is not None
        }
        if safe_context:
            result["details"] = safe_context

        return result


class InvalidArgumentError(ImageUrlError, ValueError):
    """Error for an option value outside its allowed set."""
    def __init__(self, message: str, field: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        if field:
            context = context or {}
            context["field"] = field

        super().__init__(
            message=message,
            error_code="invalid_argument",
            http_status=HTTP_400_BAD_REQUEST,
            context=context
        )


def get_error_response(error: Exception) -> Dict[str, Any]:
    """Convert any exception to a standardized API response.

    Args:
        error: The exception to convert

    Returns:
        A dictionary with error details suitable for API responses
    """
    if isinstance(error, ImageUrlError):
        return error.to_dict()

    return ImageUrlError(
        message=str(error),
        error_code="internal_error",
        original_exception=error
    ).to_dict()
