"""Connection module exports."""

from .transport import BearerTokenAuth, apply_transport, select_auth

__all__ = [
    "BearerTokenAuth",
    "apply_transport",
    "select_auth",
]
