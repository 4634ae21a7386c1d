from typing import Any, Optional

from jsonnode.constants import Path, Step


class JsonNodeError(Exception):
    """Base class for the errors raised by the node editor."""


class ParseError(JsonNodeError):
    """The raw text of the document could not be converted to a value.

    Attributes:
        fmt: The format that was expected (json or yaml).
        line: The 1-based line where the problem was detected, if known.
        column: The 1-based column where the problem was detected, if known.
    """

    fmt: str
    line: Optional[int]
    column: Optional[int]

    def __init__(
        self,
        msg: str,
        fmt: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        super().__init__(msg)
        self.fmt = fmt
        self.line = line
        self.column = column

    def __str__(self) -> str:
        base = super().__str__()
        if self.line is None:
            return base
        return f"{base} (line {self.line}, column {self.column})"


class PatchError(JsonNodeError):
    """The path cannot be followed inside the document.

    Attributes:
        path: The full path that was requested.
        step: The step that could not be applied.
        found: The value found where a container was expected.
    """

    path: Path
    step: Step
    found: Any

    def __init__(self, msg: str, path: Path, step: Step, found: Any = None):
        super().__init__(msg)
        self.path = path
        self.step = step
        self.found = found


class PathSyntaxError(JsonNodeError):
    """A path string is not in the canonical bracket form.

    Attributes:
        text: The text that was parsed.
        offset: The 0-based offset of the offending character.
    """

    text: str
    offset: int

    def __init__(self, msg: str, text: str, offset: int):
        super().__init__(msg)
        self.text = text
        self.offset = offset
