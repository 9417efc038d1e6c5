"""MIME type detection for uploaded files."""

import logging
import mimetypes
import os
from typing import Optional

import magic

from dragdropdo.const import DEFAULT_MIME_TYPE

logger = logging.getLogger(__name__)

MIME_TYPES = {
    ".pdf": "application/pdf",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".doc": "application/msword",
    ".docx": (
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    ),
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".zip": "application/zip",
    ".txt": "text/plain",
    ".mp4": "video/mp4",
    ".mp3": "audio/mpeg",
}


def get_mime_type(file_name: str) -> Optional[str]:
    """Look up the MIME type of a file name in the built-in extension table."""
    ext = os.path.splitext(file_name)[1].lower()
    return MIME_TYPES.get(ext)


def sniff_mime_type(file_path: str) -> Optional[str]:
    """Detect the MIME type of a local file from its content with libmagic.

    Returns None if the file cannot be read or libmagic fails.
    """
    try:
        return magic.from_file(file_path, mime=True) or None
    except (OSError, magic.MagicException) as e:
        logger.debug("Could not sniff MIME type of %s: %s", file_path, e)
        return None


def detect_mime_type(file_name: str, file_path: str) -> str:
    """Detect the MIME type to upload a file with.

    The built-in table is consulted for ``file_name`` first, then the
    platform ``mimetypes`` database. Files with an unknown extension are
    sniffed from the content of ``file_path``. This never fails.

    Args:
        file_name: Name the file is uploaded under.
        file_path: Local path of the file.

    Returns:
        The detected MIME type, ``application/octet-stream`` if unknown.
    """
    mime_type = get_mime_type(file_name)
    if mime_type:
        return mime_type
    guessed, _ = mimetypes.guess_type(file_name)
    if guessed:
        return guessed
    sniffed = sniff_mime_type(file_path)
    if sniffed:
        return sniffed
    logger.debug("Unknown MIME type for %s, using %s", file_name, DEFAULT_MIME_TYPE)
    return DEFAULT_MIME_TYPE
