# Constants for the node editor
from typing import List, Sequence, Union

ROW_TYPE_STRING = "string"
ROW_TYPE_NUMBER = "number"
ROW_TYPE_BOOLEAN = "boolean"
ROW_TYPE_NULL = "null"
ROW_TYPE_ARRAY = "array"
ROW_TYPE_OBJECT = "object"

# Rows of these types only summarize nested content; they are never edited
# inline.
CONTAINER_TYPES = (ROW_TYPE_ARRAY, ROW_TYPE_OBJECT)

# The symbol that denotes the root of the document in a path string.
ROOT_SYMBOL = "$"

# What the summarizer shows for a node without rows.
EMPTY_RECORD_TEXT = "{}"

# Indentation used when serializing the document back into the store.
DEFAULT_INDENT = 2

# Supported formats for the raw text of the document store.
FORMAT_JSON = "json"
FORMAT_YAML = "yaml"
FORMATS = (FORMAT_JSON, FORMAT_YAML)

# A step is an array index or an object key; a path is a sequence of steps
# starting at the root of the document.
Step = Union[int, str]
Path = Sequence[Step]
PathList = List[Step]
