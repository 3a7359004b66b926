"""Errors raised by the worker middleware and its resolvers.

Both configuration errors are raised before any mapped middleware runs.
Errors raised by handlers themselves are never wrapped.
"""


class WorkerError(Exception):
    """Base class for every error raised by eb_worker."""


class MissingMiddlewareError(WorkerError, RuntimeError):
    """No middleware is mapped for the dispatched message name."""

    def __init__(self, message_name: str, config_key: str) -> None:
        self.message_name = message_name
        self.config_key = config_key
        super().__init__(
            f'No middleware was mapped for message "{message_name}". '
            f'Did you fill the "{config_key}" configuration?'
        )


class InvalidMappedMiddlewareError(WorkerError, TypeError):
    """A mapped value is neither a string nor a list of strings."""

    def __init__(self, type_name: str, message_name: str | None = None) -> None:
        self.type_name = type_name
        self.message_name = message_name
        text = f"Mapped middleware must be either a string or a list of strings, {type_name} given."
        if message_name is not None:
            text = f'Invalid mapping for message "{message_name}": {text}'
        super().__init__(text)


class UnresolvableMiddlewareError(WorkerError, LookupError):
    """A middleware identifier could not be resolved to a handler."""

    def __init__(self, identifier: str, reason: str | None = None) -> None:
        self.identifier = identifier
        text = f'Middleware "{identifier}" could not be resolved'
        if reason:
            text = f"{text}: {reason}"
        super().__init__(text)


class MappingFileError(WorkerError, ValueError):
    """A mapping file does not contain a JSON object of message names."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid mapping file {path}: {reason}")
