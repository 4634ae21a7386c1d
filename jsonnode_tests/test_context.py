import logging

import pytest

from jsonnode.context import DEFAULT_LOGGING, EditContext
from jsonnode.exceptions import ParseError
from jsonnode.local_settings import LocalSettings
from jsonnode.store import MemoryDocumentStore


@pytest.fixture
def restore_logging():
    """Undo the changes `setup_logging()` makes to the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_document_and_select_path():
    ctx = EditContext(store=MemoryDocumentStore('{"a": {"b": 1}}'))
    assert ctx.document() == {"a": {"b": 1}}

    node = ctx.select_path(["a"])
    assert ctx.selection.node is node
    assert node.path_text == '$["a"]'


def test_document_uses_format_setting():
    stg = LocalSettings()
    stg.set_read_only(True)
    stg["jsonnode.format"] = "yaml"
    ctx = EditContext(stg=stg, store=MemoryDocumentStore("a: 1\n"))
    assert ctx.document() == {"a": 1}


def test_document_parse_error():
    ctx = EditContext(store=MemoryDocumentStore("{"))
    with pytest.raises(ParseError):
        ctx.document()


def test_create_controller_uses_settings():
    stg = LocalSettings()
    stg.set_read_only(True)
    stg["jsonnode.indent"] = 4
    ctx = EditContext(stg=stg)
    ctrl = ctx.create_controller()
    assert ctrl.indent == 4
    assert ctrl.fmt == "json"
    assert ctrl.store is ctx.store
    assert ctrl.selection is ctx.selection


def test_setup_logging_stores_default(config_dir, restore_logging):
    stg = LocalSettings()
    stg.set_read_only(True)
    ctx = EditContext(stg=stg)
    ctx.setup_logging()

    log_stg = stg.get_setting("logging")
    assert log_stg is not None
    assert log_stg["handlers"]["file"]["filename"] == str(
        config_dir / "jsonnode.log"
    )
    assert DEFAULT_LOGGING["handlers"]["file"]["filename"] == "jsonnode.log"
    assert (config_dir / "jsonnode.log").exists()
