"""
Image manifest and tag list fetching.

Retrieves the single-arch image manifest for a reference and decodes it
into Manifest / Descriptor values. Manifest lists are not resolved.
"""

from dataclasses import dataclass, field
from typing import Optional

from regpull.modules.auth import RegistryTransport
from regpull.modules.errors import DecodeError, RegistryError
from regpull.modules.formatters import ImageReference, registry_base_url


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class Descriptor:
    """A retrievable blob: media type, size and digest."""
    media_type: str
    size: int
    digest: str

    @classmethod
    def from_dict(cls, data: dict) -> "Descriptor":
        if not isinstance(data, dict):
            raise DecodeError(f"descriptor is not an object: {data!r}")
        digest = data.get("digest")
        size = data.get("size", 0)
        if not isinstance(digest, str) or not digest:
            raise DecodeError(f"descriptor has no digest: {data!r}")
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise DecodeError(f"descriptor has invalid size: {data!r}")
        return cls(data.get("mediaType", ""), size, digest)


@dataclass(frozen=True)
class Manifest:
    """Image manifest: config descriptor plus ordered layer descriptors."""
    schema_version: int
    media_type: str
    config: Descriptor
    layers: list[Descriptor] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Manifest":
        if not isinstance(data, dict):
            raise DecodeError("manifest is not a JSON object")
        if "config" not in data or not isinstance(data.get("layers"), list):
            raise DecodeError(
                "manifest has no config/layers (manifest lists and schema 1 are not supported)"
            )
        return cls(
            schema_version=data.get("schemaVersion", 0),
            media_type=data.get("mediaType", ""),
            config=Descriptor.from_dict(data["config"]),
            layers=[Descriptor.from_dict(layer) for layer in data["layers"]],
        )


# =============================================================================
# Registry calls
# =============================================================================

def fetch_manifest(
    transport: RegistryTransport,
    ref: ImageReference,
    token: Optional[str] = None,
) -> Manifest:
    """
    Fetch and decode the manifest for ref.tag.

    Goes through the 401 challenge protocol. Raises RegistryError on a
    final non-2xx status and DecodeError on a malformed body.
    """
    url = f"{registry_base_url(ref)}/manifests/{ref.tag}"
    resp = transport.authenticated_request(url, token)
    try:
        data = resp.json()
    except ValueError as e:
        raise DecodeError(f"Failed to decode manifest for {ref}: {e}") from e
    finally:
        resp.close()
    return Manifest.from_dict(data)


def list_tags(transport: RegistryTransport, ref: ImageReference) -> list[str]:
    """
    Fetch the tag list of ref.repository.

    Plain request without the challenge retry: only public tag
    listings work.
    """
    url = f"{registry_base_url(ref)}/tags/list"
    resp = transport.request(url)
    try:
        if resp.status_code != 200:
            raise RegistryError(resp.status_code, url)
        try:
            data = resp.json()
        except ValueError as e:
            raise DecodeError(f"Failed to decode tag list: {e}") from e
    finally:
        resp.close()

    if not isinstance(data, dict):
        raise DecodeError("tag list is not a JSON object")
    tags = data.get("tags") or []
    if not isinstance(tags, list):
        raise DecodeError(f"tag list has invalid tags field: {tags!r}")
    return [str(t) for t in tags]
