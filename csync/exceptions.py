"""Exception hierarchy for c-sync."""

from __future__ import annotations


class CsyncError(Exception):
    """Base exception for all c-sync errors."""

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(CsyncError):
    """Raised when the configuration file or the aws profile is unusable."""
    pass


class InvalidPathError(CsyncError):
    """Raised when a local path does not exist or is neither file nor directory."""
    pass


class UnknownCommandError(CsyncError):
    """Raised when the command token does not match any known command."""
    pass


class ExternalClientError(CsyncError):
    """Raised when the aws CLI exits with a non-zero status."""

    def __init__(
        self, message: str, returncode: int, details: dict[str, str] | None = None
    ) -> None:
        super().__init__(message, details)
        self.returncode = returncode
