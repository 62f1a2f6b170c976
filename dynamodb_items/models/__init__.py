"""
Typed attribute value models.

Explicit variants for the attribute tags the codec supports, plus the
inference helper that maps native Python values onto them.
"""

from .values import (
    AttributeType,
    AttributeValue,
    FloatValue,
    IntValue,
    NumberSetValue,
    TextSetValue,
    TextValue,
    format_number,
    infer_value,
    is_number,
    parse_number,
)

__all__ = [
    # Tags
    "AttributeType",

    # Variants
    "AttributeValue",
    "IntValue",
    "FloatValue",
    "TextValue",
    "TextSetValue",
    "NumberSetValue",

    # Helpers
    "infer_value",
    "is_number",
    "format_number",
    "parse_number",
]
