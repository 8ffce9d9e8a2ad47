"""Error taxonomy for the simulation control loop."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when simulation parameters fail validation."""


class RenderTargetUnavailable(RuntimeError):
    """Raised when the drawing surface cannot be obtained."""


class EngineConstructionFailure(RuntimeError):
    """Raised when the engine factory fails to build an engine."""


class StaleHandleError(RuntimeError):
    """Raised when a retired simulation handle is used."""


class FastForwardInProgressError(RuntimeError):
    """Raised when an operation conflicts with a running fast-forward burst."""
