"""Errors raised at the service boundary."""


class UpstreamError(RuntimeError):
    """Raised when an upstream provider call fails; the message names the subsystem."""
