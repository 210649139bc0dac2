"""
Protocol constants for the image delivery URL grammar.

These values are part of the wire format and must not change.
"""

from types import MappingProxyType

# Transformation positions
PATH_TRANSFORMATION_POSITION = "path"
QUERY_TRANSFORMATION_POSITION = "query"
DEFAULT_TRANSFORMATION_POSITION = PATH_TRANSFORMATION_POSITION
VALID_TRANSFORMATION_POSITIONS = frozenset(
    {PATH_TRANSFORMATION_POSITION, QUERY_TRANSFORMATION_POSITION}
)

# Transformation string grammar
TRANSFORMATION_PARAMETER = "tr"
CHAIN_TRANSFORM_DELIMITER = ":"
TRANSFORM_DELIMITER = ","
TRANSFORM_KEY_VALUE_DELIMITER = "-"
FLAG_VALUE = "-"
RAW_TRANSFORM_KEY = "raw"

# Codes whose values are nested paths
OVERLAY_IMAGE_CODE = "oi"
OVERLAY_IMAGE_AT_PATH_CODE = "di"
PATH_VALUE_CODES = frozenset({OVERLAY_IMAGE_CODE, OVERLAY_IMAGE_AT_PATH_CODE})
PATH_SEPARATOR = "/"
PATH_SEPARATOR_ESCAPE = "@@"

# Signing
SIGNATURE_PARAMETER = "signature"
TIMESTAMP_PARAMETER = "expires"
DEFAULT_TIMESTAMP = 9999999999

DEFAULT_SCHEME = "https"

INVALID_TRANSFORMATION_POSITION = "Invalid transformationPosition parameter"

SUPPORTED_TRANSFORMS = MappingProxyType({
    "height": "h",
    "width": "w",
    "aspect_ratio": "ar",
    "quality": "q",
    "crop": "c",
    "crop_mode": "cm",
    "x": "x",
    "y": "y",
    "focus": "fo",
    "format": "f",
    "radius": "r",
    "background": "bg",
    "border": "b",
    "rotation": "rt",
    "rotate": "rt",
    "blur": "bl",
    "named": "n",
    "overlay_image": OVERLAY_IMAGE_CODE,
    "overlay_image_aspect_ratio": "oiar",
    "overlay_image_background": "oibg",
    "overlay_image_border": "oib",
    "overlay_image_dpr": "oidpr",
    "overlay_image_quality": "oiq",
    "overlay_image_cropping": "oic",
    "overlay_image_trim": "oit",
    "overlay_x": "ox",
    "overlay_y": "oy",
    "overlay_focus": "ofo",
    "overlay_height": "oh",
    "overlay_width": "ow",
    "overlay_text": "ot",
    "overlay_text_font_size": "ots",
    "overlay_text_font_family": "otf",
    "overlay_text_color": "otc",
    "overlay_text_transparency": "oa",
    "overlay_alpha": "oa",
    "overlay_text_typography": "ott",
    "overlay_background": "obg",
    "overlay_text_encoded": "ote",
    "overlay_text_width": "otw",
    "overlay_text_background": "otbg",
    "overlay_text_padding": "otp",
    "overlay_text_inner_alignment": "otia",
    "overlay_radius": "or",
    "progressive": "pr",
    "lossless": "lo",
    "trim": "t",
    "metadata": "md",
    "color_profile": "cp",
    "default_image": OVERLAY_IMAGE_AT_PATH_CODE,
    "overlay_image_at_path": OVERLAY_IMAGE_AT_PATH_CODE,
    "dpr": "dpr",
    "effect_sharpen": "e-sharpen",
    "effect_usm": "e-usm",
    "effect_contrast": "e-contrast",
    "effect_gray": "e-grayscale",
    "original": "orig",
    "raw": RAW_TRANSFORM_KEY,
})
