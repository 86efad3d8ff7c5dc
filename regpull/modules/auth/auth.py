"""
Registry transport and bearer-token challenge handling.

Provides RegistryTransport for all registry API calls with:
- Bearer token attached when one is supplied
- One-shot 401 challenge -> token exchange -> retry
- Session management and cleanup via close()
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import urlencode

import requests

from regpull import config
from regpull.modules.errors import (
    AuthChallengeError,
    AuthExchangeError,
    RegistryError,
    TransportError,
)


# key="quoted, value" or key=bare-value
_CHALLENGE_FIELD = re.compile(r'(\w+)=(?:"([^"]*)"|([^,]*))')


@dataclass(frozen=True)
class AuthChallenge:
    """Fields of a 'WWW-Authenticate: Bearer ...' header."""
    realm: str
    service: str
    scope: str


def parse_challenge(header: str) -> AuthChallenge:
    """
    Parse a bearer challenge header.

    Raises AuthChallengeError if realm, service or scope is missing or
    empty. Never touches the network.
    """
    header = (header or "").strip()
    if header[:7].lower() == "bearer ":
        header = header[7:]

    fields = {}
    for match in _CHALLENGE_FIELD.finditer(header):
        key = match.group(1).lower()
        value = match.group(2) if match.group(2) is not None else match.group(3)
        fields[key] = value.strip()

    missing = [k for k in ("realm", "service", "scope") if not fields.get(k)]
    if missing:
        raise AuthChallengeError(
            f"Error parsing WWW-Authenticate header (missing {', '.join(missing)}): {header!r}"
        )
    return AuthChallenge(fields["realm"], fields["service"], fields["scope"])


def token_url(challenge: AuthChallenge) -> str:
    """Realm with scope and service appended as query parameters."""
    sep = "&" if "?" in challenge.realm else "?"
    query = urlencode({"scope": challenge.scope, "service": challenge.service})
    return f"{challenge.realm}{sep}{query}"


def resolve_challenge(
    header: str,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
    verify: bool = True,
) -> str:
    """
    Exchange a challenge header for a bearer token.

    The token endpoint is called without credentials and must answer
    with {"token": "..."}. No retry.
    """
    challenge = parse_challenge(header)
    url = token_url(challenge)
    getter = session.get if session is not None else requests.get

    try:
        resp = getter(url, timeout=timeout, verify=verify)
    except requests.RequestException as e:
        raise AuthExchangeError(f"token request to {challenge.realm} failed: {e}") from e

    try:
        if not 200 <= resp.status_code < 300:
            raise AuthExchangeError(
                f"token endpoint {challenge.realm} returned status code: {resp.status_code}"
            )
        try:
            body = resp.json()
        except ValueError as e:
            raise AuthExchangeError(f"token endpoint returned invalid JSON: {e}") from e
    finally:
        resp.close()

    # Docker Hub sends both; some registries only send access_token
    token = None
    if isinstance(body, dict):
        token = body.get("token") or body.get("access_token")
    if not token or not isinstance(token, str):
        raise AuthExchangeError("Auth endpoint returned no token")
    return token


class RegistryTransport:
    """
    HTTP access to a registry.

    Usage:
        with RegistryTransport() as transport:
            resp = transport.authenticated_request(url)
            # ... read resp ...

    Tokens are never stored on the transport: each authenticated_request
    runs its own challenge exchange when the registry asks for one.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = config.REQUEST_TIMEOUT,
        verify: bool = config.VERIFY_TLS,
    ):
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.verify = verify

    def resolve_token(self, header: str) -> str:
        """Default challenge handler: token exchange over our own session."""
        return resolve_challenge(header, self.session, self.timeout, self.verify)

    def request(
        self,
        url: str,
        token: Optional[str] = None,
        stream: bool = False,
    ) -> requests.Response:
        """Issue a single GET. Status codes are left to the caller."""
        headers = {"Accept": config.MANIFEST_ACCEPT}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        try:
            return self.session.get(
                url,
                headers=headers,
                stream=stream,
                timeout=self.timeout,
                verify=self.verify,
            )
        except requests.RequestException as e:
            raise TransportError(f"GET {url} failed: {e}") from e

    def authenticated_request(
        self,
        url: str,
        token: Optional[str] = None,
        stream: bool = False,
        on_challenge: Optional[Callable[[str], str]] = None,
    ) -> requests.Response:
        """
        GET with the single-retry challenge protocol.

        A 401 on a request sent without a token is answered by resolving
        the WWW-Authenticate challenge and reissuing the request once.
        Anything other than 2xx after that raises RegistryError.

        Args:
            url: Full URL to request
            token: Bearer token to use up front (skips the challenge retry)
            stream: Passed to requests, leave the body unread
            on_challenge: header -> token, defaults to resolve_token

        Returns:
            requests.Response with a 2xx status
        """
        resp = self.request(url, token, stream)

        if resp.status_code == 401 and not token:
            header = resp.headers.get("WWW-Authenticate", "")
            resp.close()
            token = (on_challenge or self.resolve_token)(header)
            resp = self.request(url, token, stream)

        if not 200 <= resp.status_code < 300:
            resp.close()
            raise RegistryError(resp.status_code, url)
        return resp

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
