"""Tests for reference parsing, digest helpers and byte formatting."""

import pytest

from regpull.modules.errors import InvalidDigestError, InvalidReferenceError
from regpull.modules.formatters import (
    ImageReference,
    blob_url,
    digest_hex,
    humanize,
    parse_image_ref,
    registry_base_url,
)


class TestParseImageRef:
    """Tests for parse_image_ref."""

    @pytest.mark.parametrize("ref,repo", [
        ("registry.example.com/app", "app"),
        ("ghcr.io/owner/tool", "owner/tool"),
        ("localhost:5000/library/busybox", "library/busybox"),
    ])
    def test_missing_tag_defaults_to_latest(self, ref: str, repo: str) -> None:
        parsed = parse_image_ref(ref)

        assert parsed.repository == repo
        assert parsed.tag == "latest"

    def test_explicit_tag(self) -> None:
        parsed = parse_image_ref("registry.example.com/library/app:v1")

        assert parsed == ImageReference("registry.example.com", "library/app", "v1")

    def test_splits_at_first_colon_only(self) -> None:
        parsed = parse_image_ref("host/repo:a:b")

        assert parsed.repository == "repo"
        assert parsed.tag == "a:b"

    def test_host_port_stays_in_host(self) -> None:
        """The first '/' separates the host, so a port there is not a tag."""
        parsed = parse_image_ref("localhost:5000/app:1.0")

        assert parsed.registry_host == "localhost:5000"
        assert parsed.repository == "app"
        assert parsed.tag == "1.0"

    @pytest.mark.parametrize("ref", ["ubuntu", "ubuntu:22.04", "", "localhost:5000"])
    def test_no_slash_is_invalid(self, ref: str) -> None:
        with pytest.raises(InvalidReferenceError):
            parse_image_ref(ref)

    @pytest.mark.parametrize("ref", ["/app", "host/", "host/:v1"])
    def test_empty_host_or_repository_is_invalid(self, ref: str) -> None:
        with pytest.raises(InvalidReferenceError):
            parse_image_ref(ref)

    def test_name_is_last_repository_segment(self) -> None:
        assert parse_image_ref("h/library/app:v1").name == "app"
        assert parse_image_ref("h/app").name == "app"


class TestUrls:

    def test_registry_and_blob_urls(self) -> None:
        ref = parse_image_ref("registry.example.com/library/app:v1")

        assert registry_base_url(ref) == "https://registry.example.com/v2/library/app"
        assert blob_url(ref, "sha256:abc") == (
            "https://registry.example.com/v2/library/app/blobs/sha256:abc"
        )


class TestDigestHex:

    def test_strips_algorithm(self) -> None:
        assert digest_hex("sha256:abc123") == "abc123"

    @pytest.mark.parametrize("digest", [
        "abc123", "sha256:abc:123", ":abc", "sha256:", "",
        "sha256:../../../../escaped", "sha256:a/b", "sha256:a\\b", "sha256:..",
    ])
    def test_malformed_digest(self, digest: str) -> None:
        with pytest.raises(InvalidDigestError):
            digest_hex(digest)


class TestHumanize:

    @pytest.mark.parametrize("size,expected", [
        (0, "0B"),
        (1023, "1023B"),
        (1024, "1KB"),
        (1536, "1KB"),
        (1024 * 1024 - 1, "1023KB"),
        (5 * 1024 ** 3, "5GB"),
        (2 ** 64 - 1, "15EB"),
    ])
    def test_truncates_in_binary_units(self, size: int, expected: str) -> None:
        assert humanize(size) == expected
