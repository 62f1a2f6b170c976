"""
Typed Attribute Value Variants

DynamoDB's low-level API carries every attribute as a single-entry mapping
from a type tag to a value::

    {"email_address": {"S": "jelle@defekt.nl"},
     "logins":        {"N": "12"},
     "roles":         {"SS": ["admin", "editor"]},
     "scores":        {"NS": ["1", "2.5"]}}

This module models the supported tags as explicit variants so the encoder
is a plain dispatch over ``to_attribute()`` instead of inspecting values.
Variants can be built directly, or inferred from a native value with
``infer_value()``; inference is the only place that looks at runtime shape.

Numbers travel as text. Binary (``B``/``BS``), boolean, null, list and map
attributes are not supported.
"""

import math
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..exceptions import UnsupportedTypeError

Number = Union[int, float]


class AttributeType(str, Enum):
    """Type tags understood by the codec."""
    NUMBER = "N"
    STRING = "S"
    STRING_SET = "SS"
    NUMBER_SET = "NS"


def is_number(value: Any) -> bool:
    """True for int and float values; bool is excluded."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_number(value: Number) -> str:
    """Render a number in DynamoDB's textual form (123 -> "123", 1.50 -> "1.5")."""
    if isinstance(value, float) and not math.isfinite(value):
        raise UnsupportedTypeError(f"Non-finite number unsupported: {value!r}", value_type="float")
    return str(value)


def parse_number(text: str) -> Number:
    """Parse DynamoDB's textual number.

    Text containing a decimal point always becomes a float, so "10.0" -> 10.0.
    Anything else is read as a base-10 integer, falling back to float for
    exponent forms such as "1e+20".
    """
    if "." in text:
        return float(text)
    try:
        return int(text, 10)
    except ValueError:
        return float(text)


def _dedupe(values: List[Any]) -> List[Any]:
    seen = set()
    result = []
    for v in values:
        if v not in seen:
            seen.add(v)
            result.append(v)
    return result


class AttributeValue(BaseModel):
    """Base class for typed attribute variants."""

    model_config = ConfigDict(frozen=True)

    tag: ClassVar[AttributeType]

    def to_attribute(self) -> Dict[str, Any]:
        """Return the single-entry wire mapping for this value."""
        raise NotImplementedError


class IntValue(AttributeValue):
    tag: ClassVar[AttributeType] = AttributeType.NUMBER
    value: int

    @field_validator('value', mode='before')
    @classmethod
    def validate_int(cls, v):
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError(f"IntValue requires an int, got {type(v).__name__}")
        return v

    def to_attribute(self) -> Dict[str, Any]:
        return {self.tag.value: format_number(self.value)}


class FloatValue(AttributeValue):
    tag: ClassVar[AttributeType] = AttributeType.NUMBER
    value: float

    @field_validator('value', mode='before')
    @classmethod
    def validate_float(cls, v):
        if not isinstance(v, float):
            raise ValueError(f"FloatValue requires a float, got {type(v).__name__}")
        if not math.isfinite(v):
            raise ValueError("FloatValue requires a finite number")
        return v

    def to_attribute(self) -> Dict[str, Any]:
        return {self.tag.value: format_number(self.value)}


class TextValue(AttributeValue):
    tag: ClassVar[AttributeType] = AttributeType.STRING
    value: str

    @field_validator('value', mode='before')
    @classmethod
    def validate_text(cls, v):
        if not isinstance(v, str):
            raise ValueError(f"TextValue requires a str, got {type(v).__name__}")
        return v

    def to_attribute(self) -> Dict[str, Any]:
        return {self.tag.value: self.value}


class TextSetValue(AttributeValue):
    """String set. Duplicates are dropped, first occurrence wins."""

    tag: ClassVar[AttributeType] = AttributeType.STRING_SET
    values: List[str]

    @field_validator('values', mode='before')
    @classmethod
    def validate_values(cls, v):
        v = list(v)
        if not v:
            raise ValueError("A string set needs at least one element")
        for element in v:
            if not isinstance(element, str):
                raise ValueError(f"String set elements must be str, got {type(element).__name__}")
        return _dedupe(v)

    def to_attribute(self) -> Dict[str, Any]:
        return {self.tag.value: list(self.values)}


class NumberSetValue(AttributeValue):
    """Number set. Duplicates are dropped by numeric value, first occurrence wins."""

    tag: ClassVar[AttributeType] = AttributeType.NUMBER_SET
    values: List[Number]

    @field_validator('values', mode='before')
    @classmethod
    def validate_values(cls, v):
        v = list(v)
        if not v:
            raise ValueError("A number set needs at least one element")
        for element in v:
            if not is_number(element):
                raise ValueError(f"Number set elements must be int or float, got {type(element).__name__}")
            if isinstance(element, float) and not math.isfinite(element):
                raise ValueError("Number set elements must be finite")
        return _dedupe(v)

    def to_attribute(self) -> Dict[str, Any]:
        return {self.tag.value: [format_number(n) for n in self.values]}


def infer_value(value: Any, field: Optional[str] = None) -> AttributeValue:
    """Pick the attribute variant for a native value by its runtime shape.

    Args:
        value: Native value, or an AttributeValue which is returned as-is
        field: Record field name, used in error context

    Returns:
        The matching AttributeValue variant

    Raises:
        UnsupportedTypeError: For binary data, booleans, None, mappings,
            empty lists, and lists that are not homogeneous text or numbers
    """
    if isinstance(value, AttributeValue):
        return value

    if isinstance(value, (list, tuple)):
        first = value[0] if value else None
        try:
            if isinstance(first, str):
                return TextSetValue(values=value)
            if is_number(first):
                return NumberSetValue(values=value)
        except ValidationError as e:
            raise UnsupportedTypeError(
                f"Mixed-type list unsupported: {e.errors()[0]['msg']}",
                field=field,
                value_type=type(value).__name__
            ) from e
        raise UnsupportedTypeError(
            "binary set unsupported",
            field=field,
            value_type=type(first).__name__ if value else "empty list"
        )

    if isinstance(value, bool):
        raise UnsupportedTypeError("binary type unsupported", field=field, value_type="bool")
    if isinstance(value, int):
        return IntValue(value=value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise UnsupportedTypeError(f"Non-finite number unsupported: {value!r}", field=field, value_type="float")
        return FloatValue(value=value)
    if isinstance(value, str):
        return TextValue(value=value)

    raise UnsupportedTypeError("binary type unsupported", field=field, value_type=type(value).__name__)
