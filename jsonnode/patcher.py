import copy
import logging
from typing import Any

from jsonnode.constants import Path, Step
from jsonnode.exceptions import PatchError

logger = logging.getLogger(__name__)


def _is_index(step: Step) -> bool:
    return isinstance(step, int) and not isinstance(step, bool)


def _is_record(value: Any) -> bool:
    """True for objects that can be merged into (JSON objects)."""
    return isinstance(value, dict)


def _slot(container: Any, step: Step, path: Path) -> Any:
    """Translate a step into the key/index used by the container."""
    if isinstance(container, dict):
        return str(step) if _is_index(step) else step
    if isinstance(container, list):
        if not _is_index(step):
            raise PatchError(
                f"Cannot use key {step!r} on an array in path {list(path)}",
                path,
                step,
                container,
            )
        return step
    raise PatchError(
        f"Cannot descend with {step!r} into a {type(container).__name__} "
        f"value in path {list(path)}",
        path,
        step,
        container,
    )


def _get(container: Any, slot: Any, default: Any = None) -> Any:
    if isinstance(container, dict):
        return container.get(slot, default)
    if 0 <= slot < len(container):
        return container[slot]
    return default


def _set(container: Any, slot: Any, value: Any) -> None:
    if isinstance(container, list) and slot >= len(container):
        container.extend([None] * (slot - len(container) + 1))
    container[slot] = value


def value_at(document: Any, path: Path, default: Any = None) -> Any:
    """Read the value located at a path.

    Args:
        document: The full document.
        path: The steps from the root. The empty path returns the document.
        default: What to return if the path does not exist.
    """
    cursor = document
    for step in path:
        if isinstance(cursor, dict):
            slot = str(step) if _is_index(step) else step
            if slot not in cursor:
                return default
            cursor = cursor[slot]
        elif isinstance(cursor, list) and _is_index(step):
            if not 0 <= step < len(cursor):
                return default
            cursor = cursor[step]
        else:
            return default
    return cursor


def patch(document: Any, path: Path, new_value: Any) -> Any:
    """Create a new document with the value at `path` updated.

    The input document is never modified. Missing containers on the way to
    the target are created: an array if the next step is an index, an
    object otherwise. If both the current value at the target and
    `new_value` are objects, the members of `new_value` are merged into the
    current value and the other members are kept. In all other cases the
    target is replaced.

    Args:
        document: The full document.
        path: The location of the node to update.
        new_value: The value created from the edited fields.

    Returns:
        The new document. For the empty path this is `new_value` itself.

    Raises:
        PatchError: The path runs into a scalar or uses a key on an array.
    """
    if not path:
        logger.debug("Replacing the whole document")
        return new_value

    result = copy.deepcopy(document)
    cursor = result
    for i, step in enumerate(path[:-1]):
        slot = _slot(cursor, step, path)
        child = _get(cursor, slot)
        if child is None and not _has(cursor, slot):
            child = [] if _is_index(path[i + 1]) else {}
            logger.debug(
                "Creating %s at step %d (%r)",
                type(child).__name__,
                i,
                step,
            )
            _set(cursor, slot, child)
        cursor = child

    last = path[-1]
    slot = _slot(cursor, last, path)
    existing = _get(cursor, slot)
    if _is_record(existing) and _is_record(new_value):
        logger.debug("Merging %d member(s) at %r", len(new_value), last)
        for key, value in new_value.items():
            existing[_member_key(existing, key)] = copy.deepcopy(value)
    else:
        logger.debug("Replacing the value at %r", last)
        _set(cursor, slot, copy.deepcopy(new_value))
    return result


def _has(container: Any, slot: Any) -> bool:
    if isinstance(container, dict):
        return slot in container
    return 0 <= slot < len(container)


def _member_key(record: dict, key: Any) -> Any:
    """The key of `record` that a form field named `key` stands for.

    Form fields are named by the text of the key. YAML mappings can use
    other key types (`1: one`), so a field that has no exact match goes
    to the existing key with the same text.
    """
    if key in record:
        return key
    for existing in record:
        if not isinstance(existing, str) and str(existing) == str(key):
            return existing
    return key
