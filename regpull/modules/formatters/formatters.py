import re
from dataclasses import dataclass

from regpull.modules.errors import InvalidReferenceError, InvalidDigestError


# Digest hex becomes a file name, so no separators or dots
_DIGEST_HEX = re.compile(r"[A-Za-z0-9]+")

SIZE_UNITS = ["B", "KB", "MB", "GB", "TB", "PB", "EB"]


@dataclass(frozen=True)
class ImageReference:
    """An image reference split into registry host, repository and tag."""
    registry_host: str
    repository: str
    tag: str = "latest"

    @property
    def name(self) -> str:
        """Short display name: last path segment of the repository."""
        return self.repository.rsplit("/", 1)[-1]

    def __str__(self):
        return f"{self.registry_host}/{self.repository}:{self.tag}"


## Registry host is always the first path segment, there is no docker.io default

def parse_image_ref(image_ref: str) -> ImageReference:
    """
    Parse '<host>/<repository>[:<tag>]'.

    Splits on the first '/' and then on the first ':', so
    'host/repo:a:b' has tag 'a:b'. Tag defaults to 'latest'.
    """
    if "/" not in image_ref:
        raise InvalidReferenceError(f"invalid image path format: {image_ref}")
    host, remainder = image_ref.split("/", 1)
    if ":" in remainder:
        repository, tag = remainder.split(":", 1)
    else:
        repository, tag = remainder, "latest"
    if not host or not repository:
        raise InvalidReferenceError(f"invalid image path format: {image_ref}")
    return ImageReference(host, repository, tag)


def registry_base_url(ref: ImageReference) -> str:
    return f"https://{ref.registry_host}/v2/{ref.repository}"


def blob_url(ref: ImageReference, digest: str) -> str:
    return f"{registry_base_url(ref)}/blobs/{digest}"


def digest_hex(digest: str) -> str:
    """Return the hex part of '<algorithm>:<hex>'."""
    parts = digest.split(":")
    if len(parts) != 2 or not parts[0] or not _DIGEST_HEX.fullmatch(parts[1]):
        raise InvalidDigestError(f"Invalid digest: {digest}")
    return parts[1]


#========= FORMATTER
def humanize(size: int) -> str:
    """Binary units, truncated: humanize(1536) == '1KB'."""
    unit = 0
    while size >= 1024 and unit < len(SIZE_UNITS) - 1:
        size //= 1024
        unit += 1
    return f"{size}{SIZE_UNITS[unit]}"
