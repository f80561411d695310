"""Engine error types."""


class EngineError(Exception):
    """Base class for errors raised by the processing engine."""


class KernelNotFound(EngineError, KeyError):
    """Requested kernel name is absent from the registry."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f'Filter "{self.name}" not found'


class DimensionMismatchError(EngineError, ValueError):
    """Buffer length or shape disagrees with the declared dimensions."""
