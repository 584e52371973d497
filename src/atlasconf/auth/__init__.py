"""Token handling exports."""

from .token import Token, build_token, token_subject, unsafe_token_claims

__all__ = [
    "Token",
    "build_token",
    "token_subject",
    "unsafe_token_claims",
]
