"""Reference parsing and display formatting."""

from .formatters import (
    ImageReference,
    parse_image_ref,
    registry_base_url,
    blob_url,
    digest_hex,
    humanize,
)

__all__ = [
    'ImageReference',
    'parse_image_ref',
    'registry_base_url',
    'blob_url',
    'digest_hex',
    'humanize',
]
