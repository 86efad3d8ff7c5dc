"""
regpull - pull container images straight from an OCI/Docker registry.

Resolves an image reference, fetches its manifest (answering bearer
token challenges when the registry asks for them) and writes the
config and layer blobs to disk.
"""

__version__ = "0.1.0"
