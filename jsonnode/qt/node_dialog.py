import asyncio
import logging
from typing import Dict, Optional

from PyQt5 import QtCore, QtGui, QtWidgets

from jsonnode.controller import EditController
from jsonnode.state import EditState

logger = logging.getLogger(__name__)


class NodeDialog(QtWidgets.QDialog):
    """Shows the content of the selected node and lets the user edit its
    scalar fields.

    The dialog is only a view over an `EditController`; every action is
    forwarded to the controller and the widgets are refreshed from its
    state.
    """

    def __init__(self, controller: EditController, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Node")
        self.ctrl = controller
        self._editors: Dict[str, QtWidgets.QLineEdit] = {}
        self._single_editor: Optional[QtWidgets.QLineEdit] = None
        self._form_shown = False

        font = QtGui.QFont()
        font.setFamily("Courier New")
        font.setStyleHint(QtGui.QFont.StyleHint.Monospace)

        self._preview = QtWidgets.QPlainTextEdit(self)
        self._preview.setReadOnly(True)
        self._preview.setFont(font)

        self._form_host = QtWidgets.QWidget(self)
        self._form = QtWidgets.QFormLayout(self._form_host)

        self._stack = QtWidgets.QStackedWidget(self)
        self._stack.addWidget(self._preview)
        self._stack.addWidget(self._form_host)

        self._edit_btn = QtWidgets.QPushButton("Edit", self)
        self._cancel_btn = QtWidgets.QPushButton("Cancel", self)
        self._save_btn = QtWidgets.QPushButton("Save", self)
        self._close_btn = QtWidgets.QPushButton("Close", self)
        self._edit_btn.clicked.connect(self._on_edit)
        self._cancel_btn.clicked.connect(self.ctrl.cancel)
        self._save_btn.clicked.connect(self._on_save)
        self._close_btn.clicked.connect(self.ctrl.close)

        self._error = QtWidgets.QLabel(self)
        self._error.setStyleSheet("color: #b00020;")
        self._error.setWordWrap(True)
        self._error.setVisible(False)

        self._path = QtWidgets.QLineEdit(self)
        self._path.setReadOnly(True)
        self._path.setFont(font)

        buttons = QtWidgets.QHBoxLayout()
        buttons.addStretch(1)
        buttons.addWidget(self._edit_btn)
        buttons.addWidget(self._cancel_btn)
        buttons.addWidget(self._save_btn)
        buttons.addWidget(self._close_btn)

        layout = QtWidgets.QVBoxLayout(self)
        layout.addWidget(QtWidgets.QLabel("Content", self))
        layout.addWidget(self._stack)
        layout.addWidget(self._error)
        layout.addLayout(buttons)
        layout.addWidget(QtWidgets.QLabel("JSON Path", self))
        layout.addWidget(self._path)

        self.ctrl.on_state_changed.append(self._on_state_changed)
        self.ctrl.on_close.append(self.hide)
        self._on_state_changed(self.ctrl.state)

    def open_node(self):
        """Open the dialog for the node that is currently selected."""
        self.ctrl.open()
        self.show()

    def field_editor(self, key: Optional[str] = None) -> QtWidgets.QLineEdit:
        """The input control of a field, or of the bare value if `key` is
        None.
        """
        if key is None:
            if self._single_editor is None:
                raise ValueError("The node is not a bare scalar")
            return self._single_editor
        return self._editors[key]

    def closeEvent(self, event):  # type: ignore
        if self.ctrl.is_open:
            self.ctrl.close()
        super().closeEvent(event)

    def _on_edit(self):
        size = self._stack.size()
        self.ctrl.start_edit((size.width(), size.height()))

    def _on_save(self):
        self._save_btn.setEnabled(False)
        try:
            saved = asyncio.run(self.ctrl.save())
        finally:
            self._save_btn.setEnabled(True)
        if not saved:
            self._error.setText(f"Could not save: {self.ctrl.last_error}")
            self._error.setVisible(True)

    def _on_state_changed(self, state: EditState):
        editing = state.editing
        self._preview.setPlainText(self.ctrl.preview)
        self._path.setText(self.ctrl.path_text)

        if editing and not self._form_shown:
            self._build_form(state)
        self._form_shown = editing
        self._stack.setCurrentIndex(1 if editing else 0)

        locked = self.ctrl.locked_size
        if editing and locked is not None:
            self._stack.setMinimumSize(QtCore.QSize(*locked))
        else:
            self._stack.setMinimumSize(QtCore.QSize(0, 0))

        self._edit_btn.setVisible(not editing)
        self._cancel_btn.setVisible(editing)
        self._save_btn.setVisible(editing)
        if not editing:
            self._error.setVisible(False)

    def _build_form(self, state: EditState):
        while self._form.rowCount():
            self._form.removeRow(0)
        self._editors = {}
        self._single_editor = None

        if state.is_single:
            rows = self.ctrl.selection.rows
            label = rows[0].key if rows and rows[0].key else "value"
            editor = QtWidgets.QLineEdit(state.single.value, self._form_host)
            editor.textChanged.connect(self.ctrl.set_single)
            self._form.addRow(label, editor)
            self._single_editor = editor
            return

        for key, fld in state.fields.items():
            editor = QtWidgets.QLineEdit(fld.value, self._form_host)
            editor.textChanged.connect(
                lambda text, k=key: self.ctrl.set_field(k, text)
            )
            self._form.addRow(key, editor)
            self._editors[key] = editor
        logger.debug("Edit form built with %d field(s)", len(self._editors))


if __name__ == "__main__":
    import json
    import sys

    from jsonnode.context import EditContext
    from jsonnode.store import MemoryDocumentStore

    app = QtWidgets.QApplication(sys.argv)

    initial_data = {
        "customer": {
            "name": "Alice",
            "age": 30,
            "vip": False,
            "orders": [1, 2],
        }
    }
    store = MemoryDocumentStore(json.dumps(initial_data, indent=2))
    store.on_change.append(print)
    ctx = EditContext(store=store)
    ctx.setup_logging()
    ctx.select_path(["customer"])

    dialog = NodeDialog(ctx.create_controller())
    dialog.open_node()

    sys.exit(app.exec())
