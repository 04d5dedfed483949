"""Custom exceptions for the TidyTabs library."""


class TidyTabsError(Exception):
    """Base exception for all TidyTabs errors."""

    pass


class ConfigurationError(TidyTabsError):
    """Raised when there is an error in configuration."""

    pass


class HostError(TidyTabsError):
    """Raised when the host application fails an operation."""

    pass


class CloseRejectedError(HostError):
    """Raised when the host refuses to close a window."""

    pass


class ValidationError(TidyTabsError):
    """Raised when input validation fails."""

    pass
