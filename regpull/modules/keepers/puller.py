# puller.py
# Pull an image: manifest, then config blob, then every layer in order.
# Stops at the first failure; nothing after a failed blob is attempted.

import os
from dataclasses import dataclass, field
from typing import Callable, Optional

from regpull import config
from regpull.modules.auth import RegistryTransport
from regpull.modules.errors import DownloadError
from regpull.modules.finders import fetch_manifest, list_tags
from regpull.modules.formatters import (
    ImageReference,
    parse_image_ref,
    blob_url,
    digest_hex,
)
from regpull.modules.keepers.downloaders import (
    DownloadTarget,
    FetchResult,
    ProgressCounter,
    fetch_blob,
)
from regpull.modules.keepers.console import (
    print_progress,
    print_complete,
    print_skipped,
)


CONFIG_FILENAME = "config.json"
LABEL_LENGTH = 12


@dataclass
class PullResult:
    """Result of a pull operation."""
    reference: ImageReference
    directory: str
    config: Optional[FetchResult] = None
    layers: list[FetchResult] = field(default_factory=list)


def image_dir(ref: ImageReference, images_dir: Optional[str] = None) -> str:
    """<images_dir>/<host>/<name>/<tag>"""
    root = images_dir if images_dir is not None else config.IMAGES_DIR
    return os.path.join(root, ref.registry_host, ref.name, ref.tag)


def _fetch_with_progress(
    transport: RegistryTransport,
    target: DownloadTarget,
    report: Callable[[str, int, int], None],
) -> FetchResult:
    counter = ProgressCounter(target.label, target.expected_size, report)
    result = fetch_blob(transport, target, progress=counter.update)
    if result.skipped:
        print_skipped(target.label)
    else:
        print_complete(target.label)
    return result


def pull(
    image_ref: str,
    transport: RegistryTransport,
    images_dir: Optional[str] = None,
    report: Callable[[str, int, int], None] = print_progress,
) -> PullResult:
    """
    Download the manifest's config and layer blobs under
    images/<host>/<name>/<tag>/.

    Layers land in <digest-hex>.tar exactly as the registry sends them.
    Every blob request runs its own challenge exchange if needed.

    Args:
        image_ref: '<host>/<repository>[:<tag>]'
        transport: RegistryTransport for all registry calls
        images_dir: Root of the layout (default config.IMAGES_DIR)
        report: Progress callback (label, bytes done, bytes total)

    Returns:
        PullResult with one FetchResult per blob
    """
    ref = parse_image_ref(image_ref)
    manifest = fetch_manifest(transport, ref)

    out_dir = image_dir(ref, images_dir)
    try:
        os.makedirs(out_dir, mode=0o750, exist_ok=True)
    except OSError as e:
        raise DownloadError(f"Failed to mkdir {out_dir}: {e}") from e
    result = PullResult(reference=ref, directory=out_dir)

    result.config = _fetch_with_progress(
        transport,
        DownloadTarget(
            url=blob_url(ref, manifest.config.digest),
            destination_path=os.path.join(out_dir, CONFIG_FILENAME),
            expected_size=manifest.config.size,
            label=CONFIG_FILENAME,
        ),
        report,
    )

    for layer in manifest.layers:
        hex_digest = digest_hex(layer.digest)
        result.layers.append(_fetch_with_progress(
            transport,
            DownloadTarget(
                url=blob_url(ref, layer.digest),
                destination_path=os.path.join(out_dir, f"{hex_digest}.tar"),
                expected_size=layer.size,
                label=hex_digest[:LABEL_LENGTH],
            ),
            report,
        ))

    return result


def list_image_tags(image_ref: str, transport: RegistryTransport) -> list[str]:
    """Tags of the reference's repository; any tag in image_ref is ignored."""
    return list_tags(transport, parse_image_ref(image_ref))
