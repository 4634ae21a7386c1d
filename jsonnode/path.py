import json
import logging
from typing import Optional

from jsonnode.constants import ROOT_SYMBOL, Path, PathList
from jsonnode.exceptions import PathSyntaxError

logger = logging.getLogger(__name__)

_decoder = json.JSONDecoder()
_DIGITS = "0123456789"


def format_step(step) -> str:
    """Format a single step as a bracketed segment.

    Integers are written as they are, keys are written as JSON strings.
    """
    if isinstance(step, int) and not isinstance(step, bool):
        return f"[{step}]"
    return f"[{json.dumps(str(step), ensure_ascii=False)}]"


def format_path(path: Optional[Path] = None) -> str:
    """Create the canonical string for a path.

    Example: `["customer", 0, "name"]` becomes `$["customer"][0]["name"]`.

    Args:
        path: The steps from the root of the document. `None` and the
            empty sequence both denote the root.
    """
    if not path:
        return ROOT_SYMBOL
    return ROOT_SYMBOL + "".join(format_step(step) for step in path)


def parse_path(text: str) -> PathList:
    """Parse a path string created by `format_path()`.

    Keys may also be enclosed in single quotes, in which case no escape
    sequences are recognized.

    Raises:
        PathSyntaxError: The text is not a valid path.
    """
    text = text.strip()
    if not text.startswith(ROOT_SYMBOL):
        raise PathSyntaxError(
            f"A path must start with `{ROOT_SYMBOL}`", text, 0
        )

    result: PathList = []
    pos = len(ROOT_SYMBOL)
    end = len(text)
    while pos < end:
        if text[pos] != "[":
            raise PathSyntaxError(
                f"Expected `[` but found `{text[pos]}`", text, pos
            )
        pos = _skip_spaces(text, pos + 1)
        if pos >= end:
            raise PathSyntaxError("Unterminated segment", text, pos)

        c = text[pos]
        if c == '"':
            try:
                step, pos = _decoder.raw_decode(text, pos)
            except json.JSONDecodeError as e:
                raise PathSyntaxError(
                    f"Invalid quoted key: {e.msg}", text, e.pos
                ) from e
            result.append(step)
        elif c == "'":
            closing = text.find("'", pos + 1)
            if closing == -1:
                raise PathSyntaxError("Unterminated quoted key", text, pos)
            result.append(text[pos + 1 : closing])
            pos = closing + 1
        elif c in _DIGITS:
            start = pos
            while pos < end and text[pos] in _DIGITS:
                pos += 1
            result.append(int(text[start:pos]))
        else:
            raise PathSyntaxError(
                f"Expected an index or a quoted key but found `{c}`",
                text,
                pos,
            )

        pos = _skip_spaces(text, pos)
        if pos >= end or text[pos] != "]":
            raise PathSyntaxError("Expected `]`", text, pos)
        pos += 1

    logger.debug("Parsed path %s into %r", text, result)
    return result


def _skip_spaces(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in " \t":
        pos += 1
    return pos
