import logging
from typing import Any, Callable, List, Optional

from attrs import define, field

from jsonnode.constants import Path, PathList
from jsonnode.patcher import value_at
from jsonnode.path import format_path
from jsonnode.rows import Row, RowLike, as_rows, rows_from_value

logger = logging.getLogger(__name__)


def _to_path(path) -> PathList:
    return list(path or [])


@define(eq=False)
class SelectedNode:
    """A node of the document as provided by the tree renderer.

    Nodes are compared by identity; a new instance means a new selection
    even if the rows are the same.

    Attributes:
        rows: The fields of the node.
        path: The location of the node inside the document.
        id: An optional identifier assigned by the renderer.
    """

    rows: List[Row] = field(factory=list, converter=as_rows)
    path: PathList = field(factory=list, converter=_to_path)
    id: Optional[str] = field(default=None)

    @property
    def path_text(self) -> str:
        """The canonical path of the node."""
        return format_path(self.path)


def node_at(
    document: Any, path: Path, id: Optional[str] = None
) -> SelectedNode:
    """Create the node located at `path` inside a parsed document."""
    value = value_at(document, path)
    return SelectedNode(rows=rows_from_value(value), path=list(path), id=id)


@define
class NodeSelection:
    """Keeps track of the node that is currently selected.

    Attributes:
        node: The selected node, if any.
        on_change: Callbacks invoked with the new node each time a different
            node is selected.
    """

    node: Optional[SelectedNode] = field(default=None)
    on_change: List[Callable[[Optional[SelectedNode]], None]] = field(
        factory=list, repr=False
    )

    @property
    def rows(self) -> List[Row]:
        return self.node.rows if self.node is not None else []

    @property
    def path(self) -> PathList:
        return self.node.path if self.node is not None else []

    def select(self, node: Optional[SelectedNode]) -> None:
        """Change the selected node.

        Listeners are only notified if the node is a different object.
        """
        if node is self.node:
            return
        self.node = node
        logger.debug(
            "Selected node %s",
            "<none>" if node is None else node.path_text,
        )
        for callback in self.on_change:
            callback(node)

    def select_rows(
        self,
        rows: List[RowLike],
        path: Path,
        id: Optional[str] = None,
    ) -> SelectedNode:
        """Select a node built from loose rows and a path."""
        node = SelectedNode(rows=rows, path=list(path), id=id)
        self.select(node)
        return node
