"""Domain exception hierarchy.

Inner layers raise these; the GraphQL error boundary serializes them.
Each exception carries a stable ``kind`` so callers can tell failures
apart without parsing messages.
"""

from __future__ import annotations


class RepoInspectorError(Exception):
    """Base exception for the entire application."""

    kind = "INTERNAL"


# ── Host errors ─────────────────────────────────────────────────────────────


class HostError(RepoInspectorError):
    """Any failure talking to the repository host."""


class HostUnavailableError(HostError):
    """The host could not be reached (connect / read / timeout)."""

    kind = "HOST_UNAVAILABLE"


class HostRejectedError(HostError):
    """The host answered with a non-2xx status."""

    kind = "HOST_REJECTED"

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"Host returned HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class HostMalformedResponseError(HostError):
    """The host response body does not have the expected shape."""

    kind = "HOST_MALFORMED_RESPONSE"


# ── Aggregation errors ──────────────────────────────────────────────────────


class AggregationFailedError(RepoInspectorError):
    """A multi-step aggregation was aborted by one of its steps."""

    kind = "AGGREGATION_FAILED"

    def __init__(self, operation: str, cause: RepoInspectorError) -> None:
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause
