"""
DevMind — Pipeline Errors
Failure taxonomy shared by every pipeline stage.

MissingContext and SourceReadFailure are recovered where they are raised.
GenerationFailure and WriteFailure abort the task and reach the caller.
"""

from __future__ import annotations


class DevMindError(Exception):
    """Base class for all pipeline errors."""


class MissingContext(DevMindError):
    """A named context document is missing or unreadable."""

    def __init__(self, name: str, reason: str = "not found"):
        self.name = name
        self.reason = reason
        super().__init__(f"Context document '{name}' unavailable: {reason}")


class SourceReadFailure(DevMindError):
    """The source artifact path could not be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read source artifact '{path}': {reason}")


class GenerationFailure(DevMindError):
    """The live generation backend did not produce a usable completion."""


class WriteFailure(DevMindError):
    """An output artifact could not be written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not write '{path}': {reason}")
