"""
Custom exceptions for the PUTNOTIF adapter.
"""


class NotifierError(Exception):
    """Base exception for all notifier related errors."""
    pass


class ConfigurationError(NotifierError):
    """Raised when the notifier configuration is rejected."""
    pass


class InvalidServiceError(ConfigurationError):
    """Raised when the plugin/type service identifier is malformed."""
    pass


class InvalidHostnameError(ConfigurationError):
    """Raised when the hostname does not fit the notification format."""
    pass


class IoError(NotifierError):
    """Raised when the input or output stream fails."""
    pass


class ReadError(IoError):
    """Raised when reading a line from the input stream fails."""
    pass


class WriteError(IoError):
    """Raised when writing or flushing a notification fails."""
    pass
