from jsonnode.constants import Path, Step  # noqa: F401
from jsonnode.context import EditContext  # noqa: F401
from jsonnode.controller import EditController, Mode  # noqa: F401
from jsonnode.exceptions import (  # noqa: F401
    JsonNodeError,
    ParseError,
    PatchError,
    PathSyntaxError,
)
from jsonnode.local_settings import LocalSettings  # noqa: F401
from jsonnode.path import format_path, parse_path  # noqa: F401
from jsonnode.patcher import patch, value_at  # noqa: F401
from jsonnode.rows import (  # noqa: F401
    MISSING,
    Row,
    RowType,
    rows_from_value,
)
from jsonnode.scalar import (  # noqa: F401
    BoolScalar,
    NullScalar,
    NumberScalar,
    Scalar,
    StringScalar,
    parse_by_type,
)
from jsonnode.selection import (  # noqa: F401
    NodeSelection,
    SelectedNode,
    node_at,
)
from jsonnode.state import EditableField, EditState, seed_state  # noqa: F401
from jsonnode.store import (  # noqa: F401
    DocumentStore,
    FileDocumentStore,
    MemoryDocumentStore,
    content_to_json,
    dump_content,
    parse_content,
)
from jsonnode.summary import summarize  # noqa: F401
