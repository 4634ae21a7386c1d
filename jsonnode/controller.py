import logging
from enum import StrEnum
from typing import Any, Awaitable, Callable, List, Optional, Tuple

from attrs import define, field

from jsonnode.constants import DEFAULT_INDENT, FORMAT_JSON
from jsonnode.exceptions import JsonNodeError
from jsonnode.patcher import patch
from jsonnode.path import format_path
from jsonnode.selection import NodeSelection, SelectedNode
from jsonnode.state import (
    EditState,
    cancel_editing,
    node_changed,
    set_field,
    set_single,
    start_editing,
)
from jsonnode.store import DocumentStore, content_to_json, dump_content
from jsonnode.summary import summarize

logger = logging.getLogger(__name__)

Converter = Callable[[str, str], Awaitable[Any]]


class Mode(StrEnum):
    """The two states of the node dialog.

    Attributes:
        VIEWING: The preview of the node is shown.
        EDITING: The edit form is shown.
    """

    VIEWING = "viewing"
    EDITING = "editing"


@define
class EditController:
    """Ties the edit form of a node to the document store.

    The controller owns the `EditState` of one dialog. It re-seeds the state
    each time the dialog is opened, the edit is cancelled or a different
    node is selected, and on save it merges the edited fields into the full
    document and hands the new text to the store.

    Attributes:
        store: The owner of the raw text of the document.
        selection: Provides the node being edited.
        converter: Turns the raw text into a value; awaited on save.
        fmt: The format of the raw text (json or yaml).
        indent: Indentation used for the text written to the store.
        state: The current edit state.
        is_open: Whether the dialog is shown.
        is_saving: Whether a save is in progress.
        locked_size: The size of the preview captured when the edit started
            so that the dialog does not resize.
        last_error: The error of the last failed save.
        on_close: Callbacks invoked when the dialog should close.
        on_state_changed: Callbacks invoked with the new state after each
            change.
    """

    store: DocumentStore
    selection: NodeSelection
    converter: Converter = field(default=content_to_json, repr=False)
    fmt: str = field(default=FORMAT_JSON)
    indent: int = field(default=DEFAULT_INDENT)

    state: EditState = field(factory=EditState, init=False)
    is_open: bool = field(default=False, init=False)
    is_saving: bool = field(default=False, init=False)
    locked_size: Optional[Tuple[int, int]] = field(default=None, init=False)
    last_error: Optional[Exception] = field(default=None, init=False)

    on_close: List[Callable[[], None]] = field(factory=list, repr=False)
    on_state_changed: List[Callable[[EditState], None]] = field(
        factory=list, repr=False
    )

    def __attrs_post_init__(self):
        self.selection.on_change.append(self._selection_changed)

    @property
    def node(self) -> Optional[SelectedNode]:
        return self.selection.node

    @property
    def mode(self) -> Mode:
        return Mode.EDITING if self.state.editing else Mode.VIEWING

    @property
    def preview(self) -> str:
        """The text shown in viewing mode."""
        return summarize(self.selection.rows)

    @property
    def path_text(self) -> str:
        """The canonical path of the node."""
        return format_path(self.selection.path)

    def _set_state(self, state: EditState) -> None:
        self.state = state
        for callback in self.on_state_changed:
            callback(state)

    def _selection_changed(self, node: Optional[SelectedNode]) -> None:
        if not self.is_open:
            return
        logger.debug("Selected node changed while open; re-seeding")
        self.locked_size = None
        self._set_state(node_changed(self.selection.rows))

    def open(self) -> None:
        """Show the dialog for the selected node, in viewing mode."""
        self.is_open = True
        self.locked_size = None
        self.last_error = None
        self._set_state(node_changed(self.selection.rows))

    def close(self) -> None:
        """Discard the edit state and ask the surface to close."""
        self.is_open = False
        self.locked_size = None
        self._set_state(EditState())
        for callback in self.on_close:
            callback()

    def start_edit(self, size: Optional[Tuple[int, int]] = None) -> None:
        """Switch to the edit form.

        Args:
            size: The current size of the preview, kept so the form can be
                shown with the same size.
        """
        if self.state.editing:
            return
        self.locked_size = size
        self._set_state(start_editing(self.state))

    def cancel(self) -> None:
        """Drop the edits and return to the preview."""
        self.locked_size = None
        self.last_error = None
        self._set_state(cancel_editing(self.selection.rows))

    def set_field(self, key: str, text: str) -> None:
        """Change the text of a field of a record node."""
        self._set_state(set_field(self.state, key, text))

    def set_single(self, text: str) -> None:
        """Change the text of a bare scalar node."""
        self._set_state(set_single(self.state, text))

    async def save(self) -> bool:
        """Merge the edited fields into the document and commit it.

        On failure the store is left untouched, the state is kept and the
        error is logged and stored in `last_error`. A save requested while
        another one is in progress is ignored.

        Returns:
            True if the new document was committed.
        """
        if self.is_saving:
            logger.debug("A save is already in progress; ignoring")
            return False

        # The selection may change while the converter runs.
        state = self.state
        path = list(self.selection.path)

        self.is_saving = True
        try:
            document = await self.converter(self.store.contents, self.fmt)
            new_value = state.build_value()
            new_document = patch(document, path, new_value)
            text = dump_content(new_document, self.fmt, self.indent)
        except (JsonNodeError, ValueError, TypeError) as e:
            logger.error("Failed to save node edit: %s", e, exc_info=True)
            self.last_error = e
            return False
        finally:
            self.is_saving = False

        logger.info("Saved node %s", format_path(path))
        self.last_error = None
        self.store.set_contents(text)
        self.close()
        return True
