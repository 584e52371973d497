"""Credential injection for outbound Atlas API requests."""

from typing import Optional, Union

import requests
from requests.auth import AuthBase, HTTPDigestAuth
from requests.structures import CaseInsensitiveDict

CredentialAuth = Union[HTTPDigestAuth, "BearerTokenAuth"]


class BearerTokenAuth(AuthBase):
    """Set an ``Authorization: Bearer`` header on every request"""

    def __init__(self, token: str) -> None:
        self.token = token

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        r.headers["Authorization"] = f"Bearer {self.token}"
        return r

    def __eq__(self, other: object) -> bool:
        return isinstance(other, BearerTokenAuth) and self.token == other.token

    def __ne__(self, other: object) -> bool:
        return not self == other

    def __repr__(self) -> str:
        return "BearerTokenAuth(token=<redacted>)"


def select_auth(
    public_api_key: str,
    private_api_key: str,
    access_token: str,
) -> Optional[CredentialAuth]:
    """
    Pick the request authentication for a set of credentials.

    API keys take precedence over an access token. Expired access tokens
    are sent as they are, nothing here refreshes them.

    Returns:
        HTTPDigestAuth for an API key pair, BearerTokenAuth for an access
        token, or None when no credentials are configured
    """
    if public_api_key and private_api_key:
        return HTTPDigestAuth(public_api_key, private_api_key)

    if access_token:
        return BearerTokenAuth(access_token)

    return None


def _derive_session(base: requests.Session) -> requests.Session:
    """Create a new session carrying a copy of another session's settings"""
    session = requests.Session()
    session.headers = CaseInsensitiveDict(base.headers)
    session.cookies = base.cookies.copy()
    session.proxies = dict(base.proxies)
    session.hooks = {event: list(hooks) for event, hooks in base.hooks.items()}
    session.params = dict(base.params)
    session.stream = base.stream
    session.verify = base.verify
    session.cert = base.cert
    session.max_redirects = base.max_redirects
    session.trust_env = base.trust_env

    # adapters are shared, they hold no per-credential state
    session.adapters.clear()
    for prefix, adapter in base.adapters.items():
        session.mount(prefix, adapter)
    return session


def apply_transport(
    base: Optional[requests.Session],
    auth: Optional[CredentialAuth],
) -> requests.Session:
    """
    Wrap a session with credentials.

    ``base`` is never modified. With credentials, a new session is returned
    that copies the settings and adapters of ``base`` and carries ``auth``.
    Without credentials, ``base`` is returned as it is.
    """
    if auth is None:
        return base if base is not None else requests.Session()

    session = _derive_session(base) if base is not None else requests.Session()
    session.auth = auth
    return session
