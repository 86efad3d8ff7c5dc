import os
from dataclasses import dataclass
from typing import Callable, Optional

import requests

from regpull import config
from regpull.modules.auth import RegistryTransport
from regpull.modules.errors import DownloadError, TransportError


SKIPPED = "skipped"
DOWNLOADED = "downloaded"


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class DownloadTarget:
    """One blob to fetch: where from, where to, how big, what to call it."""
    url: str
    destination_path: str
    expected_size: int
    label: str


@dataclass
class FetchResult:
    """Result of a blob fetch."""
    status: str
    path: str
    bytes_written: int = 0

    @property
    def skipped(self) -> bool:
        return self.status == SKIPPED


class ProgressCounter:
    """
    Per-transfer byte counter.

    Fed byte deltas through update(); after each one it reports
    (label, bytes so far, expected total) to the report callback.
    """

    def __init__(self, label: str, total: int, report: Callable[[str, int, int], None]):
        self.label = label
        self.total = total
        self.done = 0
        self.report = report

    def update(self, nbytes: int):
        self.done += nbytes
        self.report(self.label, self.done, self.total)


# =============================================================================
# Blob Download
# =============================================================================

def already_present(path: str, expected_size: int) -> bool:
    """True if path is a file of exactly expected_size bytes."""
    try:
        return os.path.isfile(path) and os.path.getsize(path) == expected_size
    except OSError:
        return False


def fetch_blob(
    transport: RegistryTransport,
    target: DownloadTarget,
    token: Optional[str] = None,
    progress: Optional[Callable[[int], None]] = None,
    chunk_size: int = config.CHUNK_SIZE,
) -> FetchResult:
    """
    Stream a blob to target.destination_path.

    A file already at the expected size is left alone without any
    request. Any other existing file is overwritten from byte zero.
    On failure mid-stream the partial file stays on disk and
    DownloadError is raised.

    Args:
        transport: RegistryTransport used for the challenge protocol
        target: DownloadTarget describing the blob
        token: Bearer token to send up front, if any
        progress: Called with the size of every chunk once it is written
        chunk_size: Bytes per read
    """
    path = target.destination_path
    if already_present(path, target.expected_size):
        return FetchResult(SKIPPED, path, 0)

    try:
        resp = transport.authenticated_request(target.url, token, stream=True)
    except TransportError as e:
        raise DownloadError(f"{target.label}: {e}") from e

    written = 0
    try:
        with open(path, "wb") as f:
            for chunk in resp.iter_content(chunk_size=chunk_size):
                if not chunk:
                    continue
                f.write(chunk)
                written += len(chunk)
                if progress:
                    progress(len(chunk))
    except (requests.RequestException, OSError) as e:
        raise DownloadError(
            f"{target.label}: transfer failed after {written} bytes: {e}"
        ) from e
    finally:
        resp.close()

    return FetchResult(DOWNLOADED, path, written)
