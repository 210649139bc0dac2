import hashlib
import hmac
import time
from typing import Optional

from imgurl.core.constants import DEFAULT_TIMESTAMP
from imgurl.utils.url_helpers import ensure_trailing_slash, strip_prefix


def signature_timestamp(expire_seconds: Optional[int] = 0) -> int:
    """Return the expiry timestamp to embed in a signed URL.

    Args:
        expire_seconds: Lifetime of the URL in seconds, 0 for no expiry

    Returns:
        ``DEFAULT_TIMESTAMP`` when there is no expiry, otherwise the current
        Unix time plus ``expire_seconds``
    """
    seconds = int(expire_seconds or 0)
    if seconds == 0:
        return DEFAULT_TIMESTAMP
    return int(time.time()) + seconds


def canonical_string(url: str, url_endpoint: str, expiry_timestamp: int) -> str:
    """Build the message signed for a URL.

    The endpoint is removed only when the URL starts with it.
    """
    endpoint = ensure_trailing_slash(url_endpoint or "")
    return strip_prefix(url, endpoint) + str(expiry_timestamp)


def signature(private_key: Optional[str], url: str, url_endpoint: str, expiry_timestamp: int) -> str:
    """Sign a URL using HMAC-SHA1 with the private key.

    Args:
        private_key: Signing key, an empty key is used when missing
        url: Fully rendered URL to sign
        url_endpoint: Endpoint prefix excluded from the signed message
        expiry_timestamp: Value from ``signature_timestamp``; 0 is treated as no expiry

    Returns:
        Hex encoded signature
    """
    if expiry_timestamp == 0:
        expiry_timestamp = DEFAULT_TIMESTAMP

    message = canonical_string(url, url_endpoint, expiry_timestamp)
    h = hmac.new((private_key or "").encode(), message.encode(), hashlib.sha1)
    return h.hexdigest()
