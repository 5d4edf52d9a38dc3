"""Errors raised by the capability loader."""


class LoaderError(Exception):
    """Base class for capability loader errors."""


class CapabilityLoadError(LoaderError):
    """A capability factory failed; nothing was cached."""

    def __init__(self, key: str, cause: BaseException):
        self.key = key
        self.cause = cause
        super().__init__(f"Failed to load {key}: {cause}")


class UnknownCapabilityError(LoaderError, KeyError):
    """No factory is registered for the requested key."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Unknown capability: {self.key}"


class LoaderStateError(LoaderError, RuntimeError):
    """Cache store or in-flight tracker precondition violated."""
