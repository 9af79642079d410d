"""Custom exceptions for faketake."""

from typing import Any


class FaketakeError(Exception):
    """Base exception for all faketake errors."""

    def __init__(self, message: str, *, exit_code: int = 1, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "exit_code": self.exit_code,
            "context": self.context,
        }


class CleanupError(FaketakeError):
    """Network teardown did not complete."""

    def __init__(self, network: str, details: str) -> None:
        super().__init__(
            f"Failed to remove network {network}: {details}",
            network=network,
            details=details,
        )
