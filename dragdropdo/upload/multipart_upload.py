"""Multipart upload of a local file through pre-signed part URLs.

The upload runs in three steps: an upload session is requested from the
service together with one pre-signed URL per part, every part is PUT to its
URL in order, and the session is completed with the ETags of all parts.
A failure at any step aborts the whole upload; nothing is resumed and the
remote session is left to expire.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dragdropdo.const import COMPLETE_UPLOAD_PATH, INITIATE_UPLOAD_PATH
from dragdropdo.exceptions import D3ClientError, D3UploadError, D3ValidationError
from dragdropdo.models import PartResult, UploadResult, UploadSession
from dragdropdo.transport import Transport
from dragdropdo.upload.chunk_planner import ChunkPlan, plan_parts
from dragdropdo.upload.part_uploader import PartUploader
from dragdropdo.upload.progress import UploadProgressCallback, make_progress
from dragdropdo.utils.mime_types import detect_mime_type

logger = logging.getLogger(__name__)


class MultipartUpload:
    """Orchestrates the initiate, part upload and complete calls."""

    def __init__(
        self, transport: Transport, part_uploader: Optional[PartUploader] = None
    ) -> None:
        """Initialize the orchestrator.

        Args:
            transport: Transport used for the session calls.
            part_uploader: Uploader for single parts, built from the
                transport if not given.
        """
        self._transport = transport
        self._part_uploader = part_uploader or PartUploader(transport)

    def upload_file(
        self,
        file: str,
        file_name: str,
        mime_type: Optional[str] = None,
        parts: Optional[int] = None,
        on_progress: Optional[UploadProgressCallback] = None,
    ) -> UploadResult:
        """Upload a local file.

        Args:
            file: Path of the local file.
            file_name: Name the file is stored under.
            mime_type: Content type; detected from the name or the file
                content if not given.
            parts: Number of parts to upload in, clamped to [1, 100].
                One part per 5 MiB is used if not given.
            on_progress: Called after every uploaded part.

        Returns:
            The file key and upload session of the uploaded file.

        Raises:
            D3ValidationError: If the arguments are invalid or the file is
                missing. Raised before any request is made.
            D3UploadError: If any step of the upload fails.
        """
        path = self._validate(file, file_name)
        file_size = path.stat().st_size
        if not mime_type:
            mime_type = detect_mime_type(file_name, str(path))
        plan = plan_parts(file_size, parts)
        logger.info(
            "Starting upload of %s: size=%d parts=%d mime_type=%s",
            file_name,
            file_size,
            plan.part_count,
            mime_type,
        )

        try:
            session = self._initiate(file_name, file_size, mime_type, plan)
            part_results = self._upload_parts(
                path, session, plan, mime_type, on_progress
            )
            self._complete(session, part_results)
        except D3ClientError:
            raise
        except (OSError, ValueError) as e:
            raise D3UploadError(f"Upload failed: {e}") from e

        logger.info("Upload of %s completed: file_key=%s", file_name, session.file_key)
        return UploadResult(
            file_key=session.file_key,
            upload_id=session.upload_id,
            presigned_urls=session.presigned_urls,
            object_name=session.object_name,
        )

    def _validate(self, file: str, file_name: str) -> Path:
        if not file_name:
            raise D3ValidationError("file_name is required")
        if not file or not isinstance(file, (str, os.PathLike)):
            raise D3ValidationError("file must be a file path string")
        path = Path(file)
        if not path.is_file():
            raise D3ValidationError(f"File not found: {file}")
        if not os.access(path, os.R_OK):
            raise D3ValidationError(f"File is not readable: {file}")
        return path

    def _initiate(
        self, file_name: str, file_size: int, mime_type: str, plan: ChunkPlan
    ) -> UploadSession:
        data = self._transport.request_data(
            "POST",
            INITIATE_UPLOAD_PATH,
            {
                "file_name": file_name,
                "size": file_size,
                "mime_type": mime_type,
                "parts": plan.part_count,
            },
        )
        session = UploadSession.model_validate(data)
        if len(session.presigned_urls) != plan.part_count:
            raise D3UploadError(
                f"Mismatch: requested {plan.part_count} parts but received "
                f"{len(session.presigned_urls)} presigned URLs"
            )
        if not session.upload_id:
            raise D3UploadError("Upload ID not received from server")
        logger.debug(
            "Upload session initiated: file_key=%s upload_id=%s",
            session.file_key,
            session.upload_id,
        )
        return session

    def _upload_parts(
        self,
        path: Path,
        session: UploadSession,
        plan: ChunkPlan,
        mime_type: str,
        on_progress: Optional[UploadProgressCallback],
    ) -> list[PartResult]:
        part_results: list[PartResult] = []
        bytes_uploaded = 0
        with open(path, "rb") as f:
            for index, url in enumerate(session.presigned_urls):
                start, end = plan.byte_range(index)
                f.seek(start)
                chunk = f.read(end - start)
                if len(chunk) != end - start:
                    raise D3UploadError(
                        f"Short read for part {index + 1}: expected "
                        f"{end - start} bytes, got {len(chunk)}"
                    )

                part_results.append(
                    self._part_uploader.upload_part(url, chunk, mime_type, index + 1)
                )
                bytes_uploaded += len(chunk)

                if on_progress is not None:
                    on_progress(
                        make_progress(
                            index + 1, plan.part_count, bytes_uploaded, plan.file_size
                        )
                    )
        return part_results

    def _complete(self, session: UploadSession, part_results: list[PartResult]) -> None:
        payload = {
            "file_key": session.file_key,
            "upload_id": session.upload_id,
            "parts": [part.model_dump() for part in part_results],
        }
        if session.object_name:
            payload["object_name"] = session.object_name
        try:
            self._transport.request_json("POST", COMPLETE_UPLOAD_PATH, payload)
        except D3ClientError as e:
            raise D3UploadError(f"Failed to complete upload: {e}") from e
