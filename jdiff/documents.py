"""Reading input documents and writing the three output documents."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .models import ComparisonResult, JsonValue
from .exceptions import InputParseError, InputReadError, OutputWriteError

logger = logging.getLogger(__name__)

EQUAL_SUFFIX = "_eq.json"
DIFF_AB_SUFFIX = "_diff_ab.json"
DIFF_BA_SUFFIX = "_diff_ba.json"


class _NonFiniteNumber(ValueError):
    pass


def _reject_constant(name: str):
    raise _NonFiniteNumber(f"{name} is not a valid JSON number")


def _parse_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise _NonFiniteNumber(f"number {text} is out of range")
    return value


@dataclass
class OutputPaths:
    """Destinations of the three result documents."""
    equal: Path
    diff_ab: Path
    diff_ba: Path

    def __iter__(self):
        return iter((self.equal, self.diff_ab, self.diff_ba))


def output_paths(prefix: str | Path) -> OutputPaths:
    """Build the output file names for a prefix like ``out/run1``."""
    prefix = str(prefix)
    return OutputPaths(
        equal=Path(prefix + EQUAL_SUFFIX),
        diff_ab=Path(prefix + DIFF_AB_SUFFIX),
        diff_ba=Path(prefix + DIFF_BA_SUFFIX),
    )


def load_document(path: str | Path) -> JsonValue:
    """
    Parse a UTF-8 JSON document.

    The NaN and Infinity literals the json module tolerates are rejected,
    as are numbers too large for a float (such as 1e400).

    Raises:
        InputReadError: if the file cannot be opened or decoded
        InputParseError: if the content is not valid JSON
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(str(path), str(e))

    try:
        document = json.loads(
            content,
            parse_float=_parse_float,
            parse_constant=_reject_constant
        )
    except json.JSONDecodeError as e:
        raise InputParseError(str(path), e.lineno, e.colno, e.msg)
    except _NonFiniteNumber as e:
        raise InputParseError(str(path), reason=str(e))
    except RecursionError:
        raise InputParseError(str(path), reason="document nested too deeply")

    logger.debug("Loaded %s (%d bytes)", path, len(content))
    return document


def dump_document(value: JsonValue, indent: Optional[int] = 2) -> str:
    """Serialize a document keeping key order, with a trailing newline."""
    return json.dumps(value, indent=indent, ensure_ascii=False) + "\n"


def write_outputs(
    result: ComparisonResult,
    prefix: str | Path,
    indent: Optional[int] = 2
) -> OutputPaths:
    """
    Write the equal, diff_ab and diff_ba documents next to ``prefix``.

    All three documents are serialized before the first file is written.
    Files are written in that order; if a later write fails, the files
    already written stay on disk.

    Raises:
        OutputWriteError: if any of the files cannot be serialized or written
    """
    paths = output_paths(prefix)
    documents = [result.equal, result.diff_lr, result.diff_rl]

    contents = []
    for path, document in zip(paths, documents):
        try:
            contents.append(dump_document(document, indent))
        except RecursionError:
            raise OutputWriteError(str(path), "document nested too deeply to serialize")

    for path, content in zip(paths, contents):
        try:
            with open(path, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            raise OutputWriteError(str(path), str(e))
        logger.debug("Wrote %s", path)

    return paths
