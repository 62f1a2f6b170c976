"""
dynamodb_items Utilities - Consolidated Module

Key Features:
- Item formatting: native record -> typed DynamoDB attributes
- Item unformatting: typed DynamoDB attributes -> native record
- Key building for single partition-key tables
- Package logging setup

So this native record::

    {'key': 'value', 'num': 123, 'strings': ['a', 'b'], 'nrs': [1, 2]}

is converted to/from::

    {'key': {'S': 'value'}, 'num': {'N': '123'},
     'strings': {'SS': ['a', 'b']}, 'nrs': {'NS': ['1', '2']}}
"""

import logging
from typing import Any, Dict, Mapping, Optional

from .exceptions import UnsupportedTypeError
from .models import AttributeType, TextValue, infer_value, parse_number

PACKAGE_LOGGER = "dynamodb_items"


# =============================================================================
# Item Formatting (native -> typed attributes)
# =============================================================================

def format_value(value: Any, field: Optional[str] = None) -> Dict[str, Any]:
    """Convert one native value into its single-entry typed attribute.

    Args:
        value: int, float, str, homogeneous list of str or numbers,
            or an AttributeValue variant
        field: Field name, used in error context

    Returns:
        Typed attribute such as ``{'N': '123'}``

    Raises:
        UnsupportedTypeError: If the value has no supported representation
    """
    return infer_value(value, field=field).to_attribute()


def format_item(record: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Convert a native record into a typed DynamoDB item.

    Pure transform; the input record is not modified.

    Raises:
        UnsupportedTypeError: If any field holds an unsupported value
    """
    return {field: format_value(value, field) for field, value in record.items()}


# =============================================================================
# Item Unformatting (typed attributes -> native)
# =============================================================================

def unformat_value(attribute: Mapping[str, Any], field: Optional[str] = None) -> Any:
    """Convert one typed attribute back into a native value.

    ``N`` text is parsed with ``parse_number`` (decimal point -> float,
    otherwise int). ``NS`` elements get the same treatment. Every other tag's
    value is returned unchanged.

    Raises:
        UnsupportedTypeError: If the attribute does not hold exactly one tag
    """
    if not isinstance(attribute, Mapping) or len(attribute) != 1:
        raise UnsupportedTypeError(
            f"Malformed typed attribute: {attribute!r}",
            field=field,
            value_type=type(attribute).__name__
        )

    tag, value = next(iter(attribute.items()))
    if tag == AttributeType.NUMBER.value:
        return parse_number(value)
    if tag == AttributeType.NUMBER_SET.value:
        return [parse_number(v) for v in value]
    return value


def unformat_item(item: Mapping[str, Mapping[str, Any]]) -> Dict[str, Any]:
    """Convert a typed DynamoDB item into a native record."""
    return {field: unformat_value(attribute, field) for field, attribute in item.items()}


# =============================================================================
# Key Building
# =============================================================================

def build_key(partition_key: str, identifier: str) -> Dict[str, Dict[str, Any]]:
    """Build a GetItem key for a table keyed by one string partition key.

    Example:
        >>> build_key('email_address', 'jelle@defekt.nl')
        {'email_address': {'S': 'jelle@defekt.nl'}}

    Raises:
        UnsupportedTypeError: If the identifier is not a string
    """
    if not isinstance(identifier, str):
        raise UnsupportedTypeError(
            "Partition key value must be a string",
            field=partition_key,
            value_type=type(identifier).__name__
        )
    return {partition_key: TextValue(value=identifier).to_attribute()}


# =============================================================================
# Logging
# =============================================================================

def configure_logging(enable_debug_logging: bool = False) -> logging.Logger:
    """Set the package logger level from configuration.

    Handlers are left to the application; this only adjusts verbosity.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG if enable_debug_logging else logging.INFO)
    return package_logger


__all__ = [
    # Item Formatting
    "format_value",
    "format_item",

    # Item Unformatting
    "unformat_value",
    "unformat_item",

    # Keys
    "build_key",

    # Logging
    "configure_logging",
]
