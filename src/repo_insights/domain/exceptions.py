"""Domain exception hierarchy.

Each exception maps to a GraphQL error code at the interface layer.
Inner layers raise these; the schema extension translates them.
"""

from __future__ import annotations


class RepoInsightsError(Exception):
    """Base exception for the entire application."""


# ── Upstream errors ─────────────────────────────────────────────────────────


class UpstreamError(RepoInsightsError):
    """Any failure talking to the repository-hosting service."""


class UpstreamTransportError(UpstreamError):
    """The upstream endpoint could not be reached (DNS, TLS, connect, timeout)."""


class UpstreamResponseError(UpstreamError):
    """Upstream answered with a non-success status or a GraphQL error payload."""


class UpstreamAuthenticationError(UpstreamResponseError):
    """The bearer token was rejected (401)."""


class UpstreamAccessDeniedError(UpstreamResponseError):
    """The token lacks permission for the requested resource (403)."""


class UpstreamRateLimitError(UpstreamResponseError):
    """Upstream rate limit exceeded (429 / 403 with rate-limit header)."""


class RepositoryNotFoundError(UpstreamResponseError):
    """The repository does not exist or is not visible to the viewer."""


# ── Data errors ─────────────────────────────────────────────────────────────


class MalformedDataError(RepoInsightsError):
    """Upstream returned a payload that does not have the expected shape."""
