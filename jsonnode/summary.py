import json
from typing import Any, Dict, Iterable, Optional

from jsonnode.constants import DEFAULT_INDENT, EMPTY_RECORD_TEXT
from jsonnode.rows import MISSING, RowLike, as_rows, is_bare_scalar


def value_to_text(value: Any) -> str:
    """Render a scalar the way it is spelled in JSON, without quotes.

    Strings are returned unchanged; `True`, `False` and `None` use their
    JSON spelling and integral floats lose the `.0` suffix.
    """
    if value is MISSING:
        return ""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def record_of(rows: Optional[Iterable[RowLike]]) -> Dict[str, Any]:
    """Collect the inline members of a record node.

    Container rows, rows without a key and rows without a value are left
    out.
    """
    record: Dict[str, Any] = {}
    for row in as_rows(rows):
        if row.is_container or not row.key or not row.has_value:
            continue
        record[row.key] = row.value
    return record


def summarize(rows: Optional[Iterable[RowLike]]) -> str:
    """Create the preview text for a node.

    Args:
        rows: The rows of the node. Mappings with `key`, `value` and `type`
            members are accepted as well as `Row` instances.

    Returns:
        `{}` for a node without rows, the bare text of the value for a
        scalar node and the indented JSON text of the inline members for a
        record node.
    """
    items = as_rows(rows)
    if not items:
        return EMPTY_RECORD_TEXT
    if is_bare_scalar(items):
        return value_to_text(items[0].value)

    text = json.dumps(
        record_of(items),
        indent=DEFAULT_INDENT,
        ensure_ascii=False,
        default=str,
    )
    return text.rstrip("\n")
