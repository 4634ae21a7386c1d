import logging
from typing import Any, Dict, Iterable, Optional

from attrs import define, evolve, field

from jsonnode.constants import ROW_TYPE_STRING
from jsonnode.rows import RowLike, as_rows, is_bare_scalar
from jsonnode.scalar import Scalar, parse_by_type
from jsonnode.summary import value_to_text

logger = logging.getLogger(__name__)


@define
class EditableField:
    """The form counterpart of a non-container row.

    Attributes:
        value: The text shown in the input control.
        type: The original type of the field, used to parse the text back.
    """

    value: str = field(default="")
    type: str = field(default=ROW_TYPE_STRING)

    def to_scalar(self) -> Scalar:
        """Parse the text according to the recorded type."""
        return parse_by_type(self.value, self.type)


def _text_of(value: Any) -> str:
    # Missing values and null both seed an empty control.
    if value is None:
        return ""
    return value_to_text(value)


def _field_of(value: Any, kind: Optional[str]) -> EditableField:
    return EditableField(value=_text_of(value), type=kind or ROW_TYPE_STRING)


@define
class EditState:
    """The per-session state of the edit form.

    Exactly one of `single` and `fields` is in use: `single` for a node that
    is a bare scalar and `fields` for a record node.

    Attributes:
        editing: Whether the form is shown instead of the preview.
        single: The field of a bare scalar node.
        fields: The fields of a record node, by key.
    """

    editing: bool = field(default=False)
    single: Optional[EditableField] = field(default=None)
    fields: Dict[str, EditableField] = field(factory=dict)

    @property
    def is_single(self) -> bool:
        """Whether the state edits a bare scalar."""
        return self.single is not None

    def build_value(self) -> Any:
        """Create the JSON value from the edited fields."""
        if self.single is not None:
            return self.single.to_scalar().to_json()
        return {
            key: fld.to_scalar().to_json() for key, fld in self.fields.items()
        }


def seed_state(rows: Optional[Iterable[RowLike]]) -> EditState:
    """Create a fresh state in viewing mode from the rows of a node."""
    items = as_rows(rows)
    if is_bare_scalar(items):
        row = items[0]
        return EditState(single=_field_of(row.value, row.type))

    fields: Dict[str, EditableField] = {}
    for row in items:
        if row.is_container or not row.key:
            continue
        fields[row.key] = _field_of(row.value, row.type)
    logger.debug("Seeded %d editable field(s)", len(fields))
    return EditState(fields=fields)


def start_editing(state: EditState) -> EditState:
    """Switch to the edit form keeping the field values."""
    return evolve(state, editing=True)


def cancel_editing(rows: Optional[Iterable[RowLike]]) -> EditState:
    """Drop the edits and go back to the preview."""
    return seed_state(rows)


def node_changed(rows: Optional[Iterable[RowLike]]) -> EditState:
    """React to a different node being selected."""
    return seed_state(rows)


def set_field(state: EditState, key: str, text: str) -> EditState:
    """Change the text of a record field.

    Raises:
        KeyError: The state has no such field.
    """
    if key not in state.fields:
        raise KeyError(f"Field {key} is not editable")
    fields = dict(state.fields)
    fields[key] = evolve(fields[key], value=text)
    return evolve(state, fields=fields)


def set_single(state: EditState, text: str) -> EditState:
    """Change the text of a bare scalar node.

    Raises:
        ValueError: The state edits a record node.
    """
    if not state.is_single:
        raise ValueError("The node is not a bare scalar")
    return evolve(state, single=evolve(state.single, value=text))
