"""
jdiff - Three-way JSON document comparison

Compares two JSON documents and splits their content into the tree of
values equal in both, the tree of differences read from a to b and the
mirror tree read from b to a, preserving the shape of the documents.
"""

from .differ import Differ, compare
from .engine import DiffEngine, diff
from .models import (
    EngineConfig,
    LogLevel,
    ComparisonResult,
    DiffReport,
    DiffEntry,
    DiffType,
    JsonKind,
    Summary,
    ErrorResponse,
)
from .documents import (
    load_document,
    dump_document,
    write_outputs,
    output_paths,
)
from .exceptions import (
    JdiffError,
    ValidationError,
    ConfigError,
    InputReadError,
    InputParseError,
    OutputWriteError,
    PayloadSizeError,
    MaxDepthExceededError,
)

__version__ = "0.1.0"
__all__ = [
    # Core
    "Differ",
    "compare",
    "ComparisonResult",
    # Engine
    "DiffEngine",
    "diff",
    "EngineConfig",
    "LogLevel",
    # Reports
    "DiffReport",
    "DiffEntry",
    "DiffType",
    "JsonKind",
    "Summary",
    "ErrorResponse",
    # Documents
    "load_document",
    "dump_document",
    "write_outputs",
    "output_paths",
    # Errors
    "JdiffError",
    "ValidationError",
    "ConfigError",
    "InputReadError",
    "InputParseError",
    "OutputWriteError",
    "PayloadSizeError",
    "MaxDepthExceededError",
]
