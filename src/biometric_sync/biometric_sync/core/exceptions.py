class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTableNameError(ValidationError):
    """Raised when the configured log table is not a safe SQL identifier."""


class SyncError(Exception):
    """Base exception for device sync failures."""


class ConfigurationMissingError(SyncError):
    """Raised when the log source connection settings are incomplete."""


class LogSourceError(SyncError):
    """Raised when connecting to or querying the device log table fails."""
