"""
Transformation chain serializer
Turns an ordered list of transformation steps into the compact
``h-300,w-400:rt-90`` grammar understood by the image endpoint.
"""

from collections.abc import Mapping
from typing import Any, List, Sequence

from imgurl.core.constants import (
    CHAIN_TRANSFORM_DELIMITER,
    FLAG_VALUE,
    PATH_SEPARATOR,
    PATH_SEPARATOR_ESCAPE,
    PATH_VALUE_CODES,
    RAW_TRANSFORM_KEY,
    SUPPORTED_TRANSFORMS,
    TRANSFORM_DELIMITER,
    TRANSFORM_KEY_VALUE_DELIMITER,
)
from imgurl.utils.url_helpers import strip_leading_slash


def escape_path_value(value: Any) -> str:
    """Flatten a nested image path so it fits inside a single transform token.

    ``/folder/overlay.png`` becomes ``folder@@overlay.png``.
    """
    return strip_leading_slash(str(value)).replace(PATH_SEPARATOR, PATH_SEPARATOR_ESCAPE)


def step_to_str(step: Mapping) -> str:
    """Serialize one transformation step, preserving key order."""
    tokens: List[str] = []
    for key, value in step.items():
        transform_key = SUPPORTED_TRANSFORMS.get(key, key)

        if transform_key in PATH_VALUE_CODES:
            value = escape_path_value(value)

        if value == FLAG_VALUE:
            tokens.append(str(transform_key))
        elif transform_key == RAW_TRANSFORM_KEY:
            tokens.append(str(value))
        else:
            tokens.append(f"{transform_key}{TRANSFORM_KEY_VALUE_DELIMITER}{value}")
    return TRANSFORM_DELIMITER.join(tokens)


def transformation_to_str(transformation: Sequence[Mapping]) -> str:
    """Build the transformation string for a chain of steps.

    Args:
        transformation: Ordered steps, each a mapping of transform name to value.
            Anything that is not a list or tuple yields an empty string.

    Returns:
        Serialized chain, e.g. ``"h-300,w-400:rt-90"``, or ``""``
    """
    if not isinstance(transformation, (list, tuple)):
        return ""

    parsed_transforms = [
        step_to_str(step) if isinstance(step, Mapping) else ""
        for step in transformation
    ]
    # Trailing empty steps leave no delimiter behind
    return CHAIN_TRANSFORM_DELIMITER.join(parsed_transforms).rstrip(CHAIN_TRANSFORM_DELIMITER)
