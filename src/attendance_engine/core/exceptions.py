class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when caller input is invalid; rejected before any processing."""


class ConfigurationError(DomainError):
    """Raised when organization configuration cannot serve a request (e.g. unknown shift)."""


class TimeParseError(DomainError, ValueError):
    """Raised when a clock, date or punch timestamp cannot be parsed."""
