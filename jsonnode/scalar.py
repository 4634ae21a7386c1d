"""Typed scalar values for the edit form.

The form works with strings; the recorded row type decides which JSON
primitive the string turns back into when the edit is saved.
"""

import logging
import math
from typing import Optional, Union

from attrs import define, field

from jsonnode.constants import (
    ROW_TYPE_BOOLEAN,
    ROW_TYPE_NULL,
    ROW_TYPE_NUMBER,
)

logger = logging.getLogger(__name__)

# Largest integer a double holds exactly.
_MAX_EXACT_INT = 2**53


@define(frozen=True)
class NumberScalar:
    """A JSON number."""

    value: Union[int, float]

    def to_json(self) -> Union[int, float]:
        return self.value


@define(frozen=True)
class BoolScalar:
    """A JSON boolean."""

    value: bool

    def to_json(self) -> bool:
        return self.value


@define(frozen=True)
class NullScalar:
    """The JSON null value."""

    def to_json(self) -> None:
        return None


@define(frozen=True)
class StringScalar:
    """A JSON string."""

    value: str = field(default="")

    def to_json(self) -> str:
        return self.value


Scalar = Union[NumberScalar, BoolScalar, NullScalar, StringScalar]


def parse_number(text: str) -> Optional[Union[int, float]]:
    """Parse the text of a number field.

    Integers are preferred over reals, and reals with no fractional part
    (`1e3`, `42.0`) within the exactly representable range become integers.
    Empty text, digit group separators and values that JSON cannot
    represent (`nan`, `inf`) are rejected.

    Returns:
        The number or None if the text is not a valid number.
    """
    candidate = text.strip()
    if not candidate or "_" in candidate:
        return None
    try:
        return int(candidate)
    except ValueError:
        pass
    try:
        result = float(candidate)
    except ValueError:
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    if result.is_integer() and abs(result) <= _MAX_EXACT_INT:
        return int(result)
    return result


def parse_by_type(text: str, kind: Optional[str]) -> Scalar:
    """Convert the string from a form control back into a typed scalar.

    Args:
        text: The content of the input control.
        kind: The recorded type of the field. Unknown or absent types are
            treated as strings.

    Returns:
        - `number`: the parsed number; if the text is not a number it is
          kept unchanged as a string;
        - `boolean`: true only for the exact text `true`;
        - `null`: null, whatever the text is;
        - anything else: the text unchanged.
    """
    if kind == ROW_TYPE_NUMBER:
        number = parse_number(text)
        if number is None:
            logger.debug("%r is not a number; keeping it as a string", text)
            return StringScalar(text)
        return NumberScalar(number)
    if kind == ROW_TYPE_BOOLEAN:
        return BoolScalar(text == "true")
    if kind == ROW_TYPE_NULL:
        return NullScalar()
    return StringScalar(text)
