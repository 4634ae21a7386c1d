import json

from jsonnode import api


def test_api_round_trip():
    store = api.MemoryDocumentStore('{"item": {"qty": 1, "tags": ["x"]}}')
    selection = api.NodeSelection()
    selection.select(api.node_at(api.parse_content(store.contents), ["item"]))

    ctrl = api.EditController(store=store, selection=selection)
    ctrl.open()
    assert ctrl.preview == '{\n  "qty": 1\n}'
    assert api.format_path(selection.path) == '$["item"]'

    ctrl.start_edit()
    ctrl.set_field("qty", "2")
    assert api.patch(json.loads(store.contents), ["item"], {"qty": 2}) == {
        "item": {"qty": 2, "tags": ["x"]}
    }
