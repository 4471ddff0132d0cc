# File utility functions
import mimetypes
from typing import Optional

from werkzeug.datastructures import FileStorage

from chat_relay.core.errors import InvalidInput
from chat_relay.models.chat_models import Attachment

DEFAULT_MIME_TYPE = "application/octet-stream"

# (offset, magic bytes, mime type)
FILE_SIGNATURES = [
    (0, b"\x89PNG\r\n\x1a\n", "image/png"),
    (0, b"\xff\xd8\xff", "image/jpeg"),
    (0, b"GIF87a", "image/gif"),
    (0, b"GIF89a", "image/gif"),
    (8, b"WEBP", "image/webp"),
    (0, b"%PDF-", "application/pdf"),
    (8, b"WAVE", "audio/wav"),
    (0, b"ID3", "audio/mpeg"),
    (0, b"\xff\xfb", "audio/mpeg"),
    (0, b"fLaC", "audio/flac"),
    (0, b"OggS", "audio/ogg"),
]


def sniff_mime_type(data: bytes) -> Optional[str]:
    """Identify common image, audio and PDF files from their first bytes."""
    for offset, magic, mime_type in FILE_SIGNATURES:
        if data[offset:offset + len(magic)] == magic:
            return mime_type
    return None


def resolve_mime_type(filename: str, declared: Optional[str], data: bytes = b"") -> str:
    """Use the browser's Content-Type, else guess from the extension, else from the content."""
    if declared and declared != DEFAULT_MIME_TYPE:
        return declared
    guessed, _ = mimetypes.guess_type(filename or "")
    return guessed or sniff_mime_type(data) or declared or DEFAULT_MIME_TYPE


def read_upload(
    file: Optional[FileStorage],
    required_prefix: Optional[str] = None,
    required: bool = True,
) -> Optional[Attachment]:
    """
    Read an uploaded file into memory.

    Returns None when no file was sent. An empty file field (browsers send
    filename "" when nothing was picked) also counts as no file unless
    required is set, in which case it raises InvalidInput. An empty file or a
    MIME type outside required_prefix raise InvalidInput too.
    """
    if file is None:
        return None
    if file.filename == "":
        if not required:
            return None
        raise InvalidInput("No file selected")

    data = file.read()
    if not data:
        raise InvalidInput("Uploaded file is empty")

    mime_type = resolve_mime_type(file.filename or "", file.mimetype, data)
    if required_prefix and not mime_type.startswith(required_prefix):
        raise InvalidInput(f"Unsupported file type '{mime_type}', expected {required_prefix}*")

    return Attachment(mime_type=mime_type, data=data, filename=file.filename or "")
