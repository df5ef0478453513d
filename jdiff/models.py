"""Data models for jdiff."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .exceptions import ConfigError


# Values as produced by the json module; dicts keep insertion order.
JsonValue = Union[None, bool, int, float, str, list, dict]


class JsonKind(Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class DiffType(Enum):
    VALUE_CHANGED = "VALUE_CHANGED"
    TYPE_CHANGED = "TYPE_CHANGED"
    REMOVED = "REMOVED"
    ADDED = "ADDED"


@dataclass
class EngineConfig:
    """Global configuration for the comparison engine."""
    # Limits are off unless a configuration sets them
    max_depth: Optional[int] = None
    max_payload_size_mb: Optional[float] = None
    collect_statistics: bool = True
    indent: Optional[int] = 2
    log_level: LogLevel = LogLevel.WARN

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> EngineConfig:
        """
        Build a configuration from a plain mapping.

        Missing keys keep their defaults. Unknown keys and values of the
        wrong type raise ConfigError.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )

        known = {f.name for f in fields(cls)}
        unknown = [key for key in data if key not in known]
        if unknown:
            raise ConfigError(f"Unknown configuration key: {unknown[0]}", unknown[0])

        config = cls()

        if "max_depth" in data:
            value = data["max_depth"]
            config.max_depth = None if value is None else _positive_int(value, "max_depth")

        if "max_payload_size_mb" in data:
            value = data["max_payload_size_mb"]
            if value is not None:
                if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                    raise ConfigError(
                        f"max_payload_size_mb must be a positive number or null, got {value!r}",
                        "max_payload_size_mb"
                    )
            config.max_payload_size_mb = None if value is None else float(value)

        if "collect_statistics" in data:
            value = data["collect_statistics"]
            if not isinstance(value, bool):
                raise ConfigError(
                    f"collect_statistics must be a boolean, got {value!r}",
                    "collect_statistics"
                )
            config.collect_statistics = value

        if "indent" in data:
            value = data["indent"]
            if value is not None:
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    raise ConfigError(
                        f"indent must be a non-negative integer or null, got {value!r}",
                        "indent"
                    )
            config.indent = value

        if "log_level" in data:
            value = str(data["log_level"]).upper()
            if value == "WARNING":
                value = "WARN"
            try:
                config.log_level = LogLevel(value)
            except ValueError:
                raise ConfigError(
                    f"log_level must be one of {[level.value for level in LogLevel]}, "
                    f"got {data['log_level']!r}",
                    "log_level"
                )

        return config

    @classmethod
    def from_file(cls, path: str | Path) -> EngineConfig:
        """Load configuration from a YAML or JSON file."""
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read configuration file {path}: {e}")

        # JSON is valid YAML, so both formats go through the YAML loader
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse configuration file {path}: {e}")

        return cls.from_dict(data)


def _positive_int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{key} must be a positive integer, got {value!r}", key)
    return value


@dataclass
class ComparisonResult:
    """The three trees produced by comparing two documents."""
    equal: JsonValue
    diff_lr: JsonValue
    diff_rl: JsonValue

    @property
    def diff_ab(self) -> JsonValue:
        return self.diff_lr

    @property
    def diff_ba(self) -> JsonValue:
        return self.diff_rl

    @property
    def is_equal(self) -> bool:
        """True when neither side holds content the other lacks."""
        return _is_blank(self.diff_lr) and _is_blank(self.diff_rl)

    def to_dict(self) -> dict:
        return {
            "equal": self.equal,
            "diff_ab": self.diff_lr,
            "diff_ba": self.diff_rl,
        }


def _is_blank(value: JsonValue) -> bool:
    # Root diffs are null, {} or [] when nothing differs. A real difference
    # is never an empty container, since pruning drops those and
    # mismatches are recorded as pairs.
    return value is None or value == {} or value == []


@dataclass
class DiffEntry:
    """A single classified difference found during comparison."""
    path: str
    type: DiffType
    left_value: Any = None
    right_value: Any = None

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "type": self.type.value,
            "left_value": self.left_value,
            "right_value": self.right_value,
        }


@dataclass
class Summary:
    """Summary statistics of comparison."""
    fields_checked: int = 0
    unchanged: int = 0
    changed: int = 0
    type_changed: int = 0
    removed: int = 0
    added: int = 0

    @property
    def differences(self) -> int:
        return self.changed + self.type_changed + self.removed + self.added

    def to_dict(self) -> dict:
        return {
            "fields_checked": self.fields_checked,
            "unchanged": self.unchanged,
            "changed": self.changed,
            "type_changed": self.type_changed,
            "removed": self.removed,
            "added": self.added,
        }


@dataclass
class ExecutionInfo:
    """Execution metadata."""
    duration_ms: int
    timestamp: str
    engine_version: str = "0.1.0"

    def to_dict(self) -> dict:
        return {
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
            "engine_version": self.engine_version,
        }


@dataclass
class DiffReport:
    """Complete comparison report."""
    is_equal: bool
    result: ComparisonResult
    execution: ExecutionInfo
    summary: Summary = field(default_factory=Summary)
    entries: list[DiffEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "is_equal": self.is_equal,
            "execution": self.execution.to_dict(),
            "summary": self.summary.to_dict(),
            "entries": [e.to_dict() for e in self.entries],
        }


@dataclass
class ErrorResponse:
    """Error response structure."""
    success: bool = False
    error: Optional[dict] = None

    def to_dict(self) -> dict:
        result = {"success": self.success}
        if self.error:
            result["error"] = self.error
        return result
