import json
import logging
import os
from typing import Any, Callable, List, Protocol

import yaml
from attrs import define, field

from jsonnode.constants import DEFAULT_INDENT, FORMAT_JSON, FORMAT_YAML
from jsonnode.exceptions import ParseError

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """The owner of the raw text of the document."""

    @property
    def contents(self) -> str: ...

    def set_contents(self, contents: str) -> None:
        """Replace the whole text at once."""
        ...


@define
class MemoryDocumentStore:
    """A document store that keeps the text in memory.

    Attributes:
        contents: The current text of the document.
        on_change: Callbacks invoked with the new text after each
            replacement.
    """

    contents: str = field(default="")
    on_change: List[Callable[[str], None]] = field(factory=list, repr=False)

    def set_contents(self, contents: str) -> None:
        """Replace the text and notify the listeners."""
        self.contents = contents
        logger.debug("Document replaced (%d characters)", len(contents))
        for callback in self.on_change:
            callback(contents)


@define
class FileDocumentStore:
    """A document store backed by a file.

    The text is read when the store is created; each replacement is written
    to a temporary file that is then moved over the original.

    Attributes:
        file_path: The path of the file.
        encoding: The encoding of the file.
    """

    file_path: str
    encoding: str = field(default="utf-8")
    _contents: str = field(default="", init=False, repr=False)

    def __attrs_post_init__(self):
        with open(self.file_path, "r", encoding=self.encoding) as f:
            self._contents = f.read()
        logger.debug("Loaded document from %s", self.file_path)

    @property
    def contents(self) -> str:
        return self._contents

    def set_contents(self, contents: str) -> None:
        tmp_path = f"{self.file_path}.tmp"
        with open(tmp_path, "w", encoding=self.encoding) as f:
            f.write(contents)
        os.replace(tmp_path, self.file_path)
        self._contents = contents
        logger.debug("Document written to %s", self.file_path)


def parse_content(text: str, fmt: str = FORMAT_JSON) -> Any:
    """Convert the raw text of the document into a value.

    Args:
        text: The raw text.
        fmt: `json` or `yaml`.

    Raises:
        ParseError: The text is not valid in the requested format.
        ValueError: The format is not supported.
    """
    if fmt == FORMAT_JSON:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(
                f"Invalid JSON: {e.msg}", fmt, line=e.lineno, column=e.colno
            ) from e
    if fmt == FORMAT_YAML:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            raise ParseError(
                f"Invalid YAML: {getattr(e, 'problem', None) or e}",
                fmt,
                line=None if mark is None else mark.line + 1,
                column=None if mark is None else mark.column + 1,
            ) from e
    raise ValueError(f"Unsupported format {fmt}")


async def content_to_json(text: str, fmt: str = FORMAT_JSON) -> Any:
    """Asynchronous counterpart of `parse_content()`."""
    return parse_content(text, fmt)


def dump_content(
    value: Any, fmt: str = FORMAT_JSON, indent: int = DEFAULT_INDENT
) -> str:
    """Serialize a document for the store.

    Args:
        value: The document.
        fmt: `json` or `yaml`.
        indent: The number of spaces used for each level.
    """
    if fmt == FORMAT_YAML:
        return yaml.dump(
            value, allow_unicode=True, sort_keys=False, indent=indent
        )
    if fmt != FORMAT_JSON:
        raise ValueError(f"Unsupported format {fmt}")
    return json.dumps(value, indent=indent, ensure_ascii=False)
