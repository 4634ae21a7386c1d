import logging
from enum import StrEnum
from typing import Any, Iterable, List, Mapping, Optional, Union

from attrs import define, field

from jsonnode.constants import (
    CONTAINER_TYPES,
    ROW_TYPE_ARRAY,
    ROW_TYPE_BOOLEAN,
    ROW_TYPE_NULL,
    ROW_TYPE_NUMBER,
    ROW_TYPE_OBJECT,
    ROW_TYPE_STRING,
)

logger = logging.getLogger(__name__)


class RowType(StrEnum):
    """The original JSON type of a field.

    Attributes:
        STRING: A JSON string.
        NUMBER: A JSON number (integer or real).
        BOOLEAN: `true` or `false`.
        NULL: The `null` value.
        ARRAY: A JSON array; the row only summarizes it.
        OBJECT: A JSON object; the row only summarizes it.
    """

    STRING = ROW_TYPE_STRING
    NUMBER = ROW_TYPE_NUMBER
    BOOLEAN = ROW_TYPE_BOOLEAN
    NULL = ROW_TYPE_NULL
    ARRAY = ROW_TYPE_ARRAY
    OBJECT = ROW_TYPE_OBJECT


class _Missing:
    """Marks a row that carries no value at all (not even null)."""

    _instance: Optional["_Missing"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@define
class Row:
    """One field of a node as shown by the tree renderer.

    Attributes:
        key: The name of the field. Absent for a node that is itself a bare
            scalar.
        value: The value of the field or a placeholder for container types.
            `MISSING` if the renderer did not provide one.
        type: The original JSON type of the field (see `RowType`). Kept as
            a plain string so unknown tags survive the round trip.
    """

    key: Optional[str] = field(default=None)
    value: Any = field(default=MISSING)
    type: Optional[str] = field(default=None)

    @property
    def is_container(self) -> bool:
        """Whether the row stands for an array or an object."""
        return self.type in CONTAINER_TYPES

    @property
    def has_value(self) -> bool:
        """Whether the renderer provided a value for this row."""
        return self.value is not MISSING

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Row":
        """Create a row from a loosely shaped mapping.

        Any of the `key`, `value` and `type` members may be missing; unknown
        members are ignored.
        """
        key = data.get("key", None)
        kind = data.get("type", None)
        return cls(
            key=None if key is None else str(key),
            value=data.get("value", MISSING),
            type=None if kind is None else str(kind),
        )


RowLike = Union[Row, Mapping[str, Any]]


def as_rows(rows: Optional[Iterable[RowLike]]) -> List[Row]:
    """Normalize the input into a list of `Row` instances.

    Mappings are converted with `Row.from_dict()`; anything else that is not
    a `Row` is skipped with a warning.
    """
    result: List[Row] = []
    for row in rows or []:
        if isinstance(row, Row):
            result.append(row)
        elif isinstance(row, Mapping):
            result.append(Row.from_dict(row))
        else:
            logger.warning("Ignoring malformed row %r", row)
    return result


def is_bare_scalar(rows: List[Row]) -> bool:
    """A node is a bare scalar if it has a single row without a key."""
    return len(rows) == 1 and not rows[0].key


def type_of_value(value: Any) -> RowType:
    """Compute the row type of a parsed JSON value."""
    if value is None:
        return RowType.NULL
    if isinstance(value, bool):
        return RowType.BOOLEAN
    if isinstance(value, (int, float)):
        return RowType.NUMBER
    if isinstance(value, dict):
        return RowType.OBJECT
    if isinstance(value, list):
        return RowType.ARRAY
    return RowType.STRING


def rows_from_value(value: Any) -> List[Row]:
    """Project a JSON value into the rows the tree renderer shows.

    A scalar becomes a single row without a key. An object becomes one row
    per member; nested containers get a `None` placeholder value. Arrays
    have no inline fields: each element is a node of its own.
    """
    if isinstance(value, list):
        return []
    if not isinstance(value, dict):
        return [Row(value=value, type=type_of_value(value))]

    rows = []
    for key, member in value.items():
        kind = type_of_value(member)
        rows.append(
            Row(
                key=str(key),
                value=None if kind in CONTAINER_TYPES else member,
                type=kind,
            )
        )
    return rows
