"""OAuth token values built from the configured access and refresh tokens."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import jwt
from pydantic import SecretStr

BEARER = "Bearer"


@dataclass(frozen=True)
class Token:
    """An OAuth token pair as stored in a profile

    Attributes:
        access_token: The JWT sent with API requests
        refresh_token: The token used to obtain a new access token
        token_type: Always "Bearer" for Atlas
        expiry: Expiry read from the access token's claims, if it carries one
    """

    access_token: SecretStr
    refresh_token: SecretStr
    token_type: str = BEARER
    expiry: Optional[datetime] = None

    @property
    def expired(self) -> bool:
        """Check if the access token is past its expiry"""
        if self.expiry is None:
            return False
        return self.expiry <= datetime.now(timezone.utc)


def unsafe_token_claims(access_token: str) -> Dict[str, Any]:
    """Decode the claims of a JWT WITHOUT verifying its signature.

    Only use this to read informational claims such as the subject or the
    expiry. The result must never be used to make an authorization decision.

    Raises:
        jwt.DecodeError: If the value is not a well-formed JWT
    """
    return jwt.decode(
        access_token,
        options={
            "verify_signature": False,
            "verify_exp": False,
            "verify_nbf": False,
            "verify_iat": False,
            "verify_aud": False,
            "verify_iss": False,
        },
    )


def token_subject(access_token: str) -> str:
    """Get the subject encoded in an access token, or an empty string"""
    return str(unsafe_token_claims(access_token).get("sub", ""))


def build_token(access_token: str, refresh_token: str) -> Token:
    """Build a bearer Token, reading its expiry from the access token claims"""
    claims = unsafe_token_claims(access_token)

    expiry: Optional[datetime] = None
    exp = claims.get("exp")
    if exp is not None:
        expiry = datetime.fromtimestamp(float(exp), tz=timezone.utc)

    return Token(
        access_token=SecretStr(access_token),
        refresh_token=SecretStr(refresh_token),
        token_type=BEARER,
        expiry=expiry,
    )
