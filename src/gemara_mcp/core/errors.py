"""Exception types raised by loaders, filters and CUE helpers."""

from __future__ import annotations


class GemaraError(Exception):
    """Base class for errors converted into error-flagged tool results."""


class UsageError(GemaraError):
    """A tool was called with missing or invalid arguments."""


class LoadError(GemaraError):
    """A document could not be fetched, decoded or validated."""


class CueError(GemaraError):
    """The cue executable is missing or rejected its input."""
