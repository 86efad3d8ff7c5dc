"""
Error kinds raised by the pull engine.

Every error is terminal for the operation that raised it. Components
only classify and raise; main.main() turns them into a one-line
diagnostic and a non-zero exit.
"""

from typing import Optional


class RegpullError(Exception):
    """Base class for every failure the CLI reports."""


class InvalidReferenceError(RegpullError, ValueError):
    """Image reference has no separable registry host or repository."""


class AuthChallengeError(RegpullError):
    """WWW-Authenticate header is missing realm, service or scope."""


class AuthExchangeError(RegpullError):
    """Token endpoint could not be reached or returned no usable token."""


class TransportError(RegpullError):
    """Network failure before a response arrived."""


class RegistryError(RegpullError):
    """Registry answered with a non-2xx status after the retry protocol."""

    def __init__(self, status_code: int, url: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        msg = f"status code: {status_code}"
        if url:
            msg += f" ({url})"
        super().__init__(msg)


class DecodeError(RegpullError, ValueError):
    """Response body was not the JSON document we expected."""


class InvalidDigestError(RegpullError, ValueError):
    """Digest is not of the form <algorithm>:<hex>."""


class DownloadError(TransportError):
    """I/O or network failure while streaming a blob to disk."""
