"""Blob encoding for attachments and avatars.

Turns user-supplied files or raw bytes (images, documents, voice notes)
into data URIs that can be stored inside the state document. Raster
images are scaled down to MAX_IMAGE_WIDTH and re-encoded as JPEG before
encoding. Files that are too large, unreadable or of an unknown type
are rejected with an error message; nothing is partially stored.
"""

import base64
import mimetypes
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel

from proyectate.config import DEFAULT_MAX_ATTACHMENT_BYTES
from proyectate.domain.shared.result import Err, Ok, Result
from proyectate.domain.task import AttachmentType

MAX_IMAGE_WIDTH = 800
JPEG_QUALITY = 70

# Vector images are stored as they are
UNCOMPRESSED_IMAGE_TYPES = frozenset({"image/svg+xml"})


class EncodedBlob(BaseModel):
    """A storable reference to encoded content."""

    name: str
    mime_type: str
    attachment_type: AttachmentType
    data_uri: str
    size: int


def attachment_type_for(mime_type: str) -> AttachmentType:
    """Map a MIME type to the attachment kind used for display."""
    major = mime_type.split("/", 1)[0]
    if major == "image":
        return AttachmentType.IMAGE
    if major == "audio":
        return AttachmentType.AUDIO
    if major == "video":
        return AttachmentType.VIDEO
    return AttachmentType.DOCUMENT


def compress_image(
    data: bytes,
    max_width: int = MAX_IMAGE_WIDTH,
    quality: int = JPEG_QUALITY,
) -> Result[bytes, str]:
    """Scale an image down to ``max_width`` (keeping its aspect ratio) and re-encode it as JPEG.

    Narrower images keep their size but are still re-encoded.
    """
    try:
        with Image.open(BytesIO(data)) as source:
            image = source.convert("RGB")
    except (UnidentifiedImageError, OSError) as e:
        return Err(f"Could not read image: {e}")

    if image.width > max_width:
        height = max(1, int(image.height * max_width / image.width))
        image = image.resize((max_width, height))

    buffer = BytesIO()
    image.save(buffer, format="JPEG", quality=quality)
    return Ok(buffer.getvalue())


class BlobEncoder:
    """Encode content as base64 data URIs with a size limit.

    Example:
        encoder = BlobEncoder(max_bytes=2_000_000)
        result = encoder.encode_file(Path("receipt.pdf"))
        if isinstance(result, Ok):
            url = result.value.data_uri
    """

    def __init__(
        self,
        max_bytes: int = DEFAULT_MAX_ATTACHMENT_BYTES,
        max_image_width: int = MAX_IMAGE_WIDTH,
        image_quality: int = JPEG_QUALITY,
    ) -> None:
        self.max_bytes = max_bytes
        self.max_image_width = max_image_width
        self.image_quality = image_quality

    def encode_bytes(self, data: bytes, mime_type: str, name: str) -> Result[EncodedBlob, str]:
        """Encode raw bytes (e.g. an audio capture).

        Args:
            data: Content to encode.
            mime_type: MIME type of the content.
            name: Display name for the resulting attachment.

        Returns:
            Ok(EncodedBlob) or Err(str) when the content is empty or too large.
        """
        if not data:
            return Err(f"'{name}' is empty")
        if len(data) > self.max_bytes:
            return Err(
                f"'{name}' is too large ({len(data):,} bytes, limit {self.max_bytes:,}). "
                "Try a smaller file."
            )

        payload = base64.b64encode(data).decode("ascii")
        return Ok(
            EncodedBlob(
                name=name,
                mime_type=mime_type,
                attachment_type=attachment_type_for(mime_type),
                data_uri=f"data:{mime_type};base64,{payload}",
                size=len(data),
            )
        )

    def encode_image(self, data: bytes, name: str) -> Result[EncodedBlob, str]:
        """Compress raster image bytes to JPEG and encode the result."""
        compressed = compress_image(data, self.max_image_width, self.image_quality)
        if isinstance(compressed, Err):
            return Err(f"'{name}': {compressed.error}")
        return self.encode_bytes(compressed.value, "image/jpeg", name)

    def encode_file(self, path: Path) -> Result[EncodedBlob, str]:
        """Read and encode a file, guessing its MIME type from the name.

        Raster images are compressed first, so the size limit applies
        to the compressed JPEG rather than the original file.
        """
        mime_type, _ = mimetypes.guess_type(path.name)
        if mime_type is None:
            return Err(f"Unsupported file type: {path.name}")
        compressible = mime_type.startswith("image/") and mime_type not in UNCOMPRESSED_IMAGE_TYPES

        try:
            size = path.stat().st_size
            if size > self.max_bytes and not compressible:
                return Err(
                    f"'{path.name}' is too large ({size:,} bytes, limit {self.max_bytes:,}). "
                    "Try a smaller file."
                )
            data = path.read_bytes()
        except FileNotFoundError:
            return Err(f"File not found: {path}")
        except PermissionError:
            return Err(f"Permission denied: {path}")
        except OSError as e:
            return Err(f"Error reading file: {e}")

        if compressible:
            return self.encode_image(data, path.name)
        return self.encode_bytes(data, mime_type, path.name)
