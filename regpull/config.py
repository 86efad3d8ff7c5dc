# config.py
# Runtime settings, read once from the environment.

import os


def _env_float(name):
    value = os.getenv(name, "").strip()
    if not value:
        return None
    return float(value)


def _env_bool(name, default=True):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


# Root of the persisted layout: <IMAGES_DIR>/<host>/<name>/<tag>/
IMAGES_DIR = os.getenv("REGPULL_IMAGES_DIR", "images")

# Bytes read from the socket per write to disk
CHUNK_SIZE = int(os.getenv("REGPULL_CHUNK_SIZE", "32768"))

# None means no timeout at all: a hung peer hangs the pull
REQUEST_TIMEOUT = _env_float("REGPULL_TIMEOUT")

VERIFY_TLS = _env_bool("REGPULL_VERIFY_TLS")

MANIFEST_ACCEPT = ", ".join([
    "application/vnd.docker.distribution.manifest.v2+json",
    "application/vnd.oci.image.manifest.v1+json",
])
