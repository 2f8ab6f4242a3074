"""Error handling framework for Vista."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from vista.rsc.scanner import ServerComponentError


class ExitCode(IntEnum):
    """Vista CLI exit codes."""

    SUCCESS = 0
    BOUNDARY_VIOLATION = 1  # Server component uses client-only APIs
    CONFIG_ERROR = 2  # Configuration error (user fixable)
    FATAL_ERROR = 3  # Unexpected crash


class VistaError(Exception):
    """Base exception for Vista errors."""

    exit_code: ExitCode = ExitCode.FATAL_ERROR

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for JSON output."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "exit_code": self.exit_code,
            **self.context,
        }


class ConfigError(VistaError):
    """Configuration-related errors."""

    exit_code = ExitCode.CONFIG_ERROR


class BoundaryViolationError(VistaError):
    """Server components reference client-only hooks or event handlers."""

    exit_code = ExitCode.BOUNDARY_VIOLATION

    def __init__(self, violations: list[ServerComponentError]):
        super().__init__(
            f"{len(violations)} server component violation(s)",
            files=[v.file for v in violations],
        )
        self.violations = violations


class ManifestWriteError(VistaError):
    """Build output could not be written."""

    exit_code = ExitCode.FATAL_ERROR

    def __init__(self, message: str, path: str):
        super().__init__(message, path=path)
        self.path = path
