"""Invocation faults raised by the diagnostics engine."""


class DiagnosticsError(Exception):
    """Base class for engine faults."""


class InvalidInput(DiagnosticsError, ValueError):
    """Raised when the engine is called with arguments of the wrong shape."""
