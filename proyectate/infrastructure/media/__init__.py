"""Blob encoding for attachments and avatars."""

from proyectate.infrastructure.media.encoder import (
    BlobEncoder,
    EncodedBlob,
    attachment_type_for,
    compress_image,
)

__all__ = [
    "BlobEncoder",
    "EncodedBlob",
    "attachment_type_for",
    "compress_image",
]
