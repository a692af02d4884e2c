"""Common exceptions for the ledchain package."""


class LedChainError(Exception):
    """Base exception for all ledchain errors."""

    pass


class ValidationError(LedChainError):
    """Input validation error."""

    pass


class PatternError(LedChainError):
    """Pattern execution error."""

    pass


class ConfigurationError(LedChainError):
    """Configuration error."""

    pass
