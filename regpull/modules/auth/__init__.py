"""Registry authentication and transport."""

from .auth import (
    AuthChallenge,
    RegistryTransport,
    parse_challenge,
    resolve_challenge,
    token_url,
)

__all__ = [
    'AuthChallenge',
    'RegistryTransport',
    'parse_challenge',
    'resolve_challenge',
    'token_url',
]
