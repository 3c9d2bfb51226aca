"""Custom exception hierarchy for tsman.

This module provides a structured exception hierarchy that enables:
- Consistent error handling across the CLI and the menu
- Rich error context for debugging
- User-friendly error messages shown in the menu's error popup
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


class TsmanError(Exception):
    """Base exception for all tsman errors.

    Attributes:
        message: Human-readable error description.
        context: Additional context for debugging.
        timestamp: When the error occurred.
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        self.timestamp = datetime.now()
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# tmux Errors
# =============================================================================


class TmuxError(TsmanError):
    """Base class for errors talking to tmux or inspecting its processes."""

    pass


class NoAttachedSessionError(TmuxError):
    """Raised when the current session is needed but none is attached."""

    def __init__(
        self,
        message: str = "No attached tmux session",
        *,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, context=context, cause=cause)


class ProtocolParseError(TmuxError):
    """Raised when command output does not have the expected record shape."""

    def __init__(
        self,
        message: str = "Unexpected command output",
        *,
        line: str | None = None,
        expected_fields: int | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if line is not None:
            ctx["line"] = repr(line[:100])
        if expected_fields is not None:
            ctx["expected_fields"] = expected_fields
        super().__init__(message, context=ctx, cause=cause)


class CommandFailedError(TmuxError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(
        self,
        message: str = "Command failed",
        *,
        command: str | None = None,
        returncode: int | None = None,
        stderr: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if command:
            ctx["command"] = command
        if returncode is not None:
            ctx["returncode"] = returncode
        if stderr:
            ctx["stderr"] = stderr.strip()[:200]
        self.returncode = returncode
        super().__init__(message, context=ctx, cause=cause)


class RestoreFailedError(CommandFailedError):
    """Raised when the generated restore script fails."""

    def __init__(
        self,
        message: str = "Failed to restore session",
        *,
        session_name: str | None = None,
        returncode: int | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if session_name:
            ctx["session"] = session_name
        super().__init__(message, returncode=returncode, context=ctx, cause=cause)


# =============================================================================
# Registry Errors
# =============================================================================


class RegistryError(TsmanError):
    """Base class for saved-session storage errors."""

    pass


class SessionNotFoundError(RegistryError):
    """Raised when a saved session does not exist."""

    def __init__(
        self,
        session_name: str,
        *,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        ctx["session"] = session_name
        super().__init__(f"No saved session named {session_name!r}", context=ctx, cause=cause)


class RegistryReadError(RegistryError):
    """Raised when a saved session cannot be read."""

    def __init__(
        self,
        message: str = "Failed to read saved session",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class RegistryWriteError(RegistryError):
    """Raised when a saved session cannot be written, moved or removed."""

    def __init__(
        self,
        message: str = "Failed to write saved session",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class SessionFormatError(RegistryError):
    """Raised when a saved session document does not match the session schema."""

    def __init__(
        self,
        message: str = "Invalid session document",
        *,
        session_name: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if session_name:
            ctx["session"] = session_name
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Validation Errors
# =============================================================================


class InvalidSessionNameError(TsmanError):
    """Raised when a session name fails validation."""

    def __init__(
        self,
        name: str,
        message: str = (
            "Session name must be 1-30 characters long and only contain [a-zA-Z0-9_-]"
        ),
    ) -> None:
        self.name = name
        super().__init__(message)


class EditorError(TsmanError):
    """Raised when the configured editor cannot be used or fails."""

    def __init__(
        self,
        message: str = "Editor failed",
        *,
        command: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if command:
            ctx["command"] = command
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(TsmanError):
    """Base class for configuration-related errors."""

    pass


class ConfigLoadError(ConfigError):
    """Raised when configuration file fails to load."""

    def __init__(
        self,
        message: str = "Failed to load configuration",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class ConfigValidationError(ConfigError):
    """Raised when configuration validation fails."""

    def __init__(
        self,
        message: str = "Configuration validation failed",
        *,
        field: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Error Registry for Categorization
# =============================================================================


@dataclass
class ErrorStats:
    """Track error statistics for monitoring."""

    total_count: int = 0
    by_type: dict[str, int] = field(default_factory=dict)
    recent_errors: list[tuple[datetime, str, str]] = field(default_factory=list)
    max_recent: int = 100

    def record(self, error: Exception) -> None:
        """Record an error occurrence."""
        self.total_count += 1
        type_name = type(error).__name__
        self.by_type[type_name] = self.by_type.get(type_name, 0) + 1

        self.recent_errors.append((datetime.now(), type_name, str(error)[:200]))
        if len(self.recent_errors) > self.max_recent:
            self.recent_errors.pop(0)


# Global error stats tracker
error_stats = ErrorStats()


def record_error(error: Exception) -> None:
    """Record an error to global stats."""
    error_stats.record(error)
