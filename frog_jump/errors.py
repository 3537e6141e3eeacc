from __future__ import annotations


class ValidationError(ValueError):
    """Raised when leaves, commands, or game text fail validation."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class NotFoundError(LookupError):
    """Raised when a leaf id is not present in the registry."""
