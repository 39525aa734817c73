"""
Error taxonomy for the todo service.

- ConfigError: malformed environment value, fatal at startup
- StorageError: database connectivity or constraint failure, surfaced as 500
"""


class TodoServiceError(Exception):
    """Base class for errors raised by the service itself"""


class ConfigError(TodoServiceError):
    """Invalid configuration; the process must not start"""


class StorageError(TodoServiceError):
    """A database operation failed; never retried by the service"""
