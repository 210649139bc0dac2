"""
URL string helpers
Single-character slash trimming used while assembling image URLs
"""

SLASH = "/"


def ensure_trailing_slash(value: str) -> str:
    """Return value ending with a trailing slash.

    Args:
        value: String to normalize, may be empty

    Returns:
        ``value`` with a single ``/`` appended when it does not end with one
    """
    if value.endswith(SLASH):
        return value
    return value + SLASH


def strip_leading_slash(value: str) -> str:
    """Remove one leading slash, if present."""
    return value[1:] if value.startswith(SLASH) else value


def strip_trailing_slash(value: str) -> str:
    """Remove one trailing slash, if present."""
    return value[:-1] if value.endswith(SLASH) else value


def trim_slash(value: str) -> str:
    """Trim one slash from each end of a string.

    Examples:
        ``trim_slash("/abc/")`` returns ``"abc"``
        ``trim_slash("/")`` returns ``""``
    """
    return strip_trailing_slash(strip_leading_slash(value))


def strip_prefix(value: str, prefix: str) -> str:
    """Remove prefix from value only when value starts with it."""
    if prefix and value.startswith(prefix):
        return value[len(prefix):]
    return value
