import json

import pytest

from jsonnode.controller import EditController
from jsonnode.rows import Row
from jsonnode.selection import NodeSelection
from jsonnode.store import MemoryDocumentStore


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    """Keep the local settings of the tests away from the user's ones."""
    path = tmp_path / "config"
    monkeypatch.setenv("JSONNODE_CONFIG_DIR", str(path))
    return path


@pytest.fixture
def customer_document():
    """A small document with a record that mixes scalars and containers."""
    return {
        "customer": {
            "name": "Alice",
            "age": 30,
            "vip": False,
            "note": None,
            "orders": [1, 2],
            "address": {"city": "Paris"},
        },
        "tags": ["a", "b"],
    }


@pytest.fixture
def customer_rows():
    """The rows the tree renderer shows for the `customer` node."""
    return [
        Row(key="name", value="Alice", type="string"),
        Row(key="age", value=30, type="number"),
        Row(key="vip", value=False, type="boolean"),
        Row(key="note", value=None, type="null"),
        Row(key="orders", value=None, type="array"),
        Row(key="address", value=None, type="object"),
    ]


@pytest.fixture
def store(customer_document):
    """An in-memory store holding the customer document."""
    return MemoryDocumentStore(json.dumps(customer_document, indent=2))


@pytest.fixture
def selection(customer_rows):
    """A selection pointing at the `customer` node."""
    sel = NodeSelection()
    sel.select_rows(customer_rows, ["customer"])
    return sel


@pytest.fixture
def controller(store, selection):
    """A controller over the customer document, opened on `customer`."""
    ctrl = EditController(store=store, selection=selection)
    ctrl.open()
    return ctrl
