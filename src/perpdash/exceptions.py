"""Custom exceptions for the vault dashboard.

Adapters raise these internally and convert them into fallback data,
so they never reach HTTP callers.
"""


class DashboardError(Exception):
    """Base exception for all dashboard errors."""


class UpstreamError(DashboardError):
    """Raised when an upstream API call fails at the transport level."""


class UpstreamPayloadError(DashboardError):
    """Raised when an upstream API answers with an error or unusable body."""
