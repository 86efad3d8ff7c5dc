from .manifest import Descriptor, Manifest, fetch_manifest, list_tags

__all__ = ['Descriptor', 'Manifest', 'fetch_manifest', 'list_tags']
