"""
Exceptions raised by jsonshape.
"""


class JsonShapeError(Exception):
    """Base class for every error raised by jsonshape."""


class ConfigError(JsonShapeError):
    """Raised when generation options are invalid."""


class NestingDepthError(JsonShapeError):
    """Raised when the input value is nested deeper than the configured limit."""

    def __init__(self, max_depth: int):
        super().__init__(f"Input is nested deeper than the maximum depth of {max_depth}")
        self.max_depth = max_depth


class InputError(JsonShapeError):
    """Raised when input text cannot be read or parsed as JSON."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason
