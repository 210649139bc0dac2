"""
Image URL builder
Resolves host, path and query from a relative path or an absolute source URL,
applies the transformation chain and signs the result when requested.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote, unquote_plus, urlsplit, urlunsplit

from imgurl.core.constants import (
    DEFAULT_SCHEME,
    DEFAULT_TIMESTAMP,
    INVALID_TRANSFORMATION_POSITION,
    QUERY_TRANSFORMATION_POSITION,
    SIGNATURE_PARAMETER,
    TIMESTAMP_PARAMETER,
    TRANSFORMATION_PARAMETER,
    VALID_TRANSFORMATION_POSITIONS,
)
from imgurl.core.errors import InvalidArgumentError
from imgurl.core.logging import get_logger
from imgurl.models.request import UrlRequestContext
from imgurl.services.signer import signature, signature_timestamp
from imgurl.services.transformation import transformation_to_str
from imgurl.utils.url_helpers import (
    ensure_trailing_slash,
    strip_leading_slash,
    strip_trailing_slash,
    trim_slash,
)

logger = get_logger("url_builder")

# Characters left as-is when encoding a relative resource path
PATH_SAFE_CHARS = "/%:@!$&'()*+,;=~"

# Decoded query characters that must be escaped again to keep the query intact
QUERY_RESERVED_ESCAPES = str.maketrans({"&": "%26", "#": "%23", " ": "%20"})


@dataclass
class ResultUrlParts:
    """URL components collected while building, rendered once at the end."""
    scheme: str = DEFAULT_SCHEME
    host: str = ""
    path: str = ""
    query: str = ""

    def render(self) -> str:
        url = f"{self.scheme}://{self.host}{self.path}"
        if self.query:
            url = f"{url}?{self.query}"
        return url


def extend_url_options(request_context: UrlRequestContext, options: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge request context defaults with caller options, caller values winning."""
    extended = request_context.defaults()
    extended.update(options)
    return extended


def parse_query(query: str) -> Dict[str, str]:
    """Decode a query string into an ordered mapping of first values.

    Keys that never carry a value (``?flag``) are dropped.
    """
    params: Dict[str, str] = {}
    if not query:
        return params
    for pair in query.split("&"):
        key, sep, value = pair.partition("=")
        if not key or not sep:
            continue
        params.setdefault(unquote_plus(key), unquote_plus(value))
    return params


def _encode_query_component(value: Any) -> str:
    return str(value).translate(QUERY_RESERVED_ESCAPES)


def render_query(params: Mapping[str, Any]) -> str:
    """Join parameters as ``key=value`` pairs, or a bare ``key`` for empty values.

    Characters that would split or end the query are escaped; everything else,
    including the ``,`` and ``:`` of transformation strings, is written as-is.
    """
    parts = []
    for key, value in params.items():
        key = _encode_query_component(key)
        value = "" if value is None else _encode_query_component(value)
        parts.append(f"{key}={value}" if value else key)
    return "&".join(parts)


def _strip_query_and_fragment(url: str) -> str:
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


class UrlBuilder:
    """Builds image URLs against one request context."""

    def __init__(self, request_context: Optional[UrlRequestContext] = None):
        self.request_context = request_context or UrlRequestContext.from_settings()

    def generate_url(self, options: Mapping[str, Any]) -> str:
        """Generate a (optionally signed) image URL.

        Args:
            options: URL options (path or src, url_endpoint, transformation,
                transformation_position, query_parameters, signed, private_key,
                expire_seconds)

        Returns:
            The URL, or an empty string when neither path nor src is given

        Raises:
            InvalidArgumentError: If transformation_position is not path or query
        """
        options = dict(options)
        if "src" in options:
            options["transformation_position"] = QUERY_TRANSFORMATION_POSITION
        extended_options = extend_url_options(self.request_context, options)
        return self.build_url(extended_options)

    def build_url(self, options: Mapping[str, Any]) -> str:
        """Build the URL from fully merged options."""
        path = options.get("path") or ""
        src = options.get("src") or ""
        url_endpoint = options.get("url_endpoint") or ""
        transformation_position = options.get("transformation_position")

        if transformation_position not in VALID_TRANSFORMATION_POSITIONS:
            raise InvalidArgumentError(
                INVALID_TRANSFORMATION_POSITION,
                field="transformation_position",
                context={"value": transformation_position},
            )

        src_param_used_for_url = bool(src) or transformation_position == QUERY_TRANSFORMATION_POSITION

        if not path and not src:
            return ""

        parsed_endpoint = urlsplit(url_endpoint)
        result = ResultUrlParts(scheme=parsed_endpoint.scheme or DEFAULT_SCHEME)

        if path:
            parsed_url = urlsplit(path)
            result.host = ensure_trailing_slash(
                strip_trailing_slash(parsed_endpoint.netloc) + strip_trailing_slash(parsed_endpoint.path)
            )
            resource_path = trim_slash(_strip_query_and_fragment(path))
            if not parsed_url.netloc:
                resource_path = quote(resource_path, safe=PATH_SAFE_CHARS)
            result.path = resource_path
        else:
            parsed_url = urlsplit(src)
            # netloc keeps userinfo and port
            result.host = parsed_url.netloc
            result.path = parsed_url.path
            src_param_used_for_url = True

        query_params = parse_query(parsed_url.query)
        query_params.update(options.get("query_parameters") or {})

        transformation_str = strip_trailing_slash(transformation_to_str(options.get("transformation")))
        if transformation_str.strip():
            if transformation_position == QUERY_TRANSFORMATION_POSITION or src_param_used_for_url:
                query_params[TRANSFORMATION_PARAMETER] = transformation_str
            else:
                result.path = f"{TRANSFORMATION_PARAMETER}:{transformation_str}/{result.path}"

        result.host = strip_leading_slash(result.host)
        result.path = strip_trailing_slash(result.path)
        result.query = render_query(query_params)
        url = result.render()

        if options.get("signed"):
            expire_timestamp = signature_timestamp(options.get("expire_seconds"))
            url_signature = signature(options.get("private_key"), url, url_endpoint, expire_timestamp)
            signed_params = {SIGNATURE_PARAMETER: url_signature}
            if expire_timestamp != DEFAULT_TIMESTAMP:
                signed_params[TIMESTAMP_PARAMETER] = expire_timestamp
            # Appended after the signed query, never merged into it
            result.query = "&".join(filter(None, [result.query, render_query(signed_params)]))
            url = result.render()

        logger.debug(f"Generated URL for {'path' if path else 'src'} "
                     f"(position={transformation_position}, signed={bool(options.get('signed'))})")
        return url


def generate_url(options: Mapping[str, Any], request_context: Optional[UrlRequestContext] = None) -> str:
    """Convenience function to generate a URL with the given or configured defaults."""
    return UrlBuilder(request_context).generate_url(options)
