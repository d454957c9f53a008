"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class StudyAidsError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidRequestError(StudyAidsError):
    """A generation request or study-aid parameter is not acceptable."""


class InvalidSchemaError(InvalidRequestError):
    """A schema descriptor is not well-formed."""


# ── Gateway errors ──────────────────────────────────────────────────────────


class GatewayError(StudyAidsError):
    """Any failure surfaced by the completion gateway."""


class MissingCredentialError(GatewayError):
    """No API credential was configured when the gateway was built."""


class TransportFailureError(GatewayError):
    """The provider call failed (network, timeout, non-2xx, quota...)."""


class MalformedResponseError(GatewayError):
    """The provider returned text that does not match the requested schema."""
