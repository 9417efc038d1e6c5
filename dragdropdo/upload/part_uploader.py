"""Upload of a single part to its pre-signed URL."""

import logging
from typing import Optional

import requests

from dragdropdo.exceptions import D3ClientError, D3UploadError
from dragdropdo.models import PartResult
from dragdropdo.transport import Transport

logger = logging.getLogger(__name__)

ETAG_HEADERS = ("ETag", "etag")


def _strip_quotes(value: str) -> str:
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def extract_etag(response: requests.Response) -> Optional[str]:
    """Return the unquoted ETag of a part upload response, if any."""
    for header in ETAG_HEADERS:
        value = response.headers.get(header)
        if value:
            return _strip_quotes(value)
    return None


class PartUploader:
    """PUTs one part of a file to a pre-signed URL and collects its ETag.

    Failures are not retried; they abort the whole upload.
    """

    def __init__(self, transport: Transport) -> None:
        """Initialize the part uploader.

        Args:
            transport: Transport used to send the PUT request.
        """
        self._transport = transport

    def upload_part(
        self, url: str, data: bytes, mime_type: str, part_number: int
    ) -> PartResult:
        """Upload one part.

        Args:
            url: Pre-signed destination URL of the part.
            data: Full content of the part.
            mime_type: Content type sent with the part.
            part_number: 1-based number of the part.

        Returns:
            The part number with the ETag reported by the storage backend.

        Raises:
            D3UploadError: If the PUT fails or no ETag is returned.
        """
        logger.debug("PUT part %d: %d bytes", part_number, len(data))
        try:
            response = self._transport.send(
                "PUT", url, headers={"Content-Type": mime_type}, body=data
            )
        except D3ClientError as e:
            raise D3UploadError(f"Failed to upload part {part_number}: {e}") from e

        if not response.ok:
            logger.warning(
                "Part %d upload failed: status=%d", part_number, response.status_code
            )
            raise D3UploadError(
                f"Failed to upload part {part_number}",
                status_code=response.status_code,
            )

        etag = extract_etag(response)
        if not etag:
            raise D3UploadError(f"Failed to get ETag for part {part_number}")
        return PartResult(part_number=part_number, etag=etag)
