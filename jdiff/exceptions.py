"""Custom exceptions for jdiff."""


class JdiffError(Exception):
    """Base exception for jdiff errors."""
    pass


class ValidationError(JdiffError):
    """Raised when an input is not a valid JSON value."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(JdiffError):
    """Raised when the engine configuration is invalid."""
    def __init__(self, message: str, key: str = None):
        super().__init__(message)
        self.message = message
        self.key = key


class InputReadError(JdiffError):
    """Raised when an input document cannot be read."""
    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class InputParseError(JdiffError):
    """Raised when an input document is not valid JSON."""
    def __init__(self, path: str, line: int = None, column: int = None, reason: str = None):
        if line is None:
            super().__init__(f"Invalid JSON in {path}: {reason}")
        else:
            super().__init__(f"Invalid JSON in {path} at line {line}, column {column}: {reason}")
        self.path = path
        self.line = line
        self.column = column
        self.reason = reason


class OutputWriteError(JdiffError):
    """Raised when an output document cannot be written."""
    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot write {path}: {reason}")
        self.path = path
        self.reason = reason


class MaxDepthExceededError(JdiffError):
    """Raised when maximum nesting depth is exceeded."""
    def __init__(self, depth: int, path: str):
        super().__init__(f"Maximum depth ({depth}) exceeded at path: {path}")
        self.depth = depth
        self.path = path


class PayloadSizeError(JdiffError):
    """Raised when payload size exceeds limit."""
    def __init__(self, size_mb: float, limit_mb: float):
        super().__init__(f"Payload size ({size_mb:.2f}MB) exceeds limit ({limit_mb}MB)")
        self.size_mb = size_mb
        self.limit_mb = limit_mb
