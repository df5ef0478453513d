"""Main comparison engine for jdiff."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Optional

from .models import (
    EngineConfig,
    DiffReport,
    ExecutionInfo,
    ErrorResponse,
)
from .differ import Differ
from .exceptions import (
    ValidationError,
    PayloadSizeError,
    MaxDepthExceededError,
)
from .utils import find_invalid_value, get_json_size_mb, get_type_name, measure_depth

logger = logging.getLogger(__name__)


class DiffEngine:
    """
    Validates two documents and runs the three-way Differ on them.

    1. Validation: JSON model, plus payload size and nesting depth limits
       when the configuration sets them
    2. Diffing: equal / diff_ab / diff_ba trees plus classified entries
    """

    VERSION = "0.1.0"

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self.config = config or EngineConfig()

    def compare(self, left_json: Any, right_json: Any) -> DiffReport | ErrorResponse:
        """
        Compare two JSON documents.

        Args:
            left_json: The first document ("a")
            right_json: The second document ("b")

        Returns:
            DiffReport on success, ErrorResponse on validation errors
        """
        start_time = time.time()

        try:
            self._validate_inputs(left_json, right_json)
        except ValidationError as e:
            return self._create_error_response("VALIDATION_ERROR", e.message, e.details)
        except PayloadSizeError as e:
            return self._create_error_response(
                "PAYLOAD_SIZE_ERROR",
                str(e),
                {"size_mb": e.size_mb, "limit_mb": e.limit_mb}
            )
        except MaxDepthExceededError as e:
            return self._create_error_response(
                "MAX_DEPTH_ERROR",
                str(e),
                {"depth": e.depth, "path": e.path}
            )

        logger.debug(
            "Comparing %s with %s",
            get_type_name(left_json), get_type_name(right_json)
        )

        differ = Differ(collect_statistics=self.config.collect_statistics)
        result = differ.compare(left_json, right_json)

        duration_ms = int((time.time() - start_time) * 1000)

        report = DiffReport(
            is_equal=result.is_equal,
            result=result,
            execution=ExecutionInfo(
                duration_ms=duration_ms,
                timestamp=datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
                engine_version=self.VERSION
            ),
            summary=differ.summary,
            entries=differ.entries
        )

        logger.info(
            "Comparison finished in %d ms: %d difference(s) over %d field(s)",
            duration_ms, report.summary.differences, report.summary.fields_checked
        )

        return report

    def _validate_inputs(self, left_json: Any, right_json: Any):
        """Validate both documents against the JSON model and the limits."""
        for side, document in (("left", left_json), ("right", right_json)):
            invalid = find_invalid_value(document)
            if invalid is not None:
                path, value = invalid
                raise ValidationError(
                    f"{side} document holds a value outside the JSON model at {path}",
                    {"side": side, "path": path, "type": type(value).__name__}
                )

            if self.config.max_depth is not None:
                depth, path = measure_depth(document, self.config.max_depth)
                if depth > self.config.max_depth:
                    raise MaxDepthExceededError(self.config.max_depth, path)

            if self.config.max_payload_size_mb is not None:
                size = get_json_size_mb(document)
                if size > self.config.max_payload_size_mb:
                    raise PayloadSizeError(size, self.config.max_payload_size_mb)

    def _create_error_response(self, code: str, message: str, details: dict) -> ErrorResponse:
        """Create an error response."""
        logger.warning("Comparison rejected (%s): %s", code, message)
        return ErrorResponse(
            success=False,
            error={
                "code": code,
                "message": message,
                "details": details
            }
        )


def diff(
    left_json: Any,
    right_json: Any,
    config: Optional[EngineConfig] = None
) -> DiffReport | ErrorResponse:
    """
    Convenience function to compare two JSON documents with validation.

    Args:
        left_json: The first document
        right_json: The second document
        config: Optional engine configuration

    Returns:
        DiffReport on success, ErrorResponse on errors
    """
    engine = DiffEngine(config)
    return engine.compare(left_json, right_json)
