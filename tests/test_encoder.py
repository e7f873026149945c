"""Tests for attachment blob encoding."""

import base64
import os
from io import BytesIO

import pytest
from PIL import Image

from proyectate.domain.shared import Err, Ok
from proyectate.domain.task import AttachmentType
from proyectate.infrastructure.media import BlobEncoder, attachment_type_for, compress_image
from tests.conftest import write_png


@pytest.mark.parametrize(
    ("mime_type", "expected"),
    [
        ("image/jpeg", AttachmentType.IMAGE),
        ("audio/webm", AttachmentType.AUDIO),
        ("video/mp4", AttachmentType.VIDEO),
        ("application/pdf", AttachmentType.DOCUMENT),
    ],
)
def test_attachment_type_for(mime_type, expected):
    assert attachment_type_for(mime_type) == expected


class TestBlobEncoder:
    def test_encode_bytes(self):
        result = BlobEncoder().encode_bytes(b"voice", "audio/webm", "note.webm")
        assert isinstance(result, Ok)
        blob = result.value
        assert blob.attachment_type == AttachmentType.AUDIO
        assert blob.size == 5
        assert blob.data_uri == "data:audio/webm;base64," + base64.b64encode(b"voice").decode()

    def test_empty_content_is_rejected(self):
        assert isinstance(BlobEncoder().encode_bytes(b"", "audio/webm", "note.webm"), Err)

    def test_limit_is_inclusive(self):
        encoder = BlobEncoder(max_bytes=4)
        assert isinstance(encoder.encode_bytes(b"1234", "text/plain", "a.txt"), Ok)
        result = encoder.encode_bytes(b"12345", "text/plain", "a.txt")
        assert "too large" in result.error

    def test_encode_file_guesses_type(self, tmp_path):
        path = tmp_path / "plan.pdf"
        path.write_bytes(b"%PDF-1.4")
        blob = BlobEncoder().encode_file(path).value
        assert blob.name == "plan.pdf"
        assert blob.mime_type == "application/pdf"
        assert blob.attachment_type == AttachmentType.DOCUMENT

    def test_unknown_extension_is_rejected(self, tmp_path):
        path = tmp_path / "blob.zzunknown"
        path.write_bytes(b"data")
        assert "Unsupported" in BlobEncoder().encode_file(path).error

    def test_missing_file(self, tmp_path):
        result = BlobEncoder().encode_file(tmp_path / "gone.png")
        assert "not found" in result.error


def decode_data_uri(uri):
    header, payload = uri.split(",", 1)
    return header, Image.open(BytesIO(base64.b64decode(payload)))


class TestImageCompression:
    def test_wide_image_is_scaled_to_800(self, tmp_path):
        photo = write_png(tmp_path / "terrain.png", 1600, 1000)
        blob = BlobEncoder().encode_file(photo).value
        header, image = decode_data_uri(blob.data_uri)
        assert header == "data:image/jpeg;base64"
        assert blob.mime_type == "image/jpeg"
        assert blob.name == "terrain.png"
        assert blob.attachment_type == AttachmentType.IMAGE
        assert image.format == "JPEG"
        assert image.size == (800, 500)

    def test_narrow_image_keeps_size(self, tmp_path):
        photo = write_png(tmp_path / "icon.png", 120, 90)
        _, image = decode_data_uri(BlobEncoder().encode_file(photo).value.data_uri)
        assert image.size == (120, 90)
        assert image.format == "JPEG"

    def test_transparent_image_is_flattened(self):
        buffer = BytesIO()
        Image.new("RGBA", (10, 10), (255, 0, 0, 0)).save(buffer, format="PNG")
        compressed = compress_image(buffer.getvalue()).value
        assert Image.open(BytesIO(compressed)).mode == "RGB"

    def test_limit_applies_to_compressed_image(self, tmp_path):
        photo = tmp_path / "noise.png"
        Image.frombytes("RGB", (1200, 1200), os.urandom(1200 * 1200 * 3)).save(photo)
        original_size = photo.stat().st_size
        blob = BlobEncoder(max_bytes=original_size - 1).encode_file(photo)
        assert isinstance(blob, Ok)
        assert blob.value.size < original_size

    def test_unreadable_image_is_rejected(self, tmp_path):
        fake = tmp_path / "receipt.png"
        fake.write_bytes(b"\x89PNG not really")
        result = BlobEncoder().encode_file(fake)
        assert isinstance(result, Err)
        assert "Could not read image" in result.error

    def test_svg_is_stored_as_is(self, tmp_path):
        logo = tmp_path / "logo.svg"
        logo.write_text("<svg xmlns='http://www.w3.org/2000/svg'/>", encoding="utf-8")
        blob = BlobEncoder().encode_file(logo).value
        assert blob.data_uri.startswith("data:image/svg+xml;base64,")
