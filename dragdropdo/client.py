"""D3 business API client.

Example:
    with Dragdropdo(ClientConfig(api_key="...")) as client:
        upload = client.upload_file("report.docx", "report.docx")
        operation = client.convert([upload.file_key], "pdf")
        status = client.poll_status(operation.main_task_id)
        print(status.files_data[0].download_link)
"""

from typing import Any, Optional

import requests

from dragdropdo.config import ClientConfig
from dragdropdo.models import (
    OperationResponse,
    SupportedOperationResponse,
    TaskStatus,
    UploadResult,
)
from dragdropdo.operations import Operations
from dragdropdo.status.poller import StatusCallback, StatusPoller
from dragdropdo.status.status_accessor import StatusAccessor
from dragdropdo.transport import Transport
from dragdropdo.upload.multipart_upload import MultipartUpload
from dragdropdo.upload.progress import UploadProgressCallback


class Dragdropdo:
    """Client for uploading files, running operations and tracking tasks.

    Instances hold no per-call state, so one client can serve concurrent
    calls for different files and tasks.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Create a client.

        Args:
            config: Client configuration. Read from DRAGDROPDO_* environment
                variables if not given.
            session: Optional requests session to send requests with.

        Raises:
            D3ValidationError: If no API key is configured.
        """
        self.config = config if config is not None else ClientConfig.from_env()
        self._transport = Transport(self.config, session)
        self._uploader = MultipartUpload(self._transport)
        self._operations = Operations(self._transport)
        self._status = StatusAccessor(self._transport)
        self._poller = StatusPoller(self._status)

    @property
    def base_url(self) -> str:
        """Base URL of the API, without a trailing slash."""
        return self.config.base_url

    def upload_file(
        self,
        file: str,
        file_name: str,
        mime_type: Optional[str] = None,
        parts: Optional[int] = None,
        on_progress: Optional[UploadProgressCallback] = None,
    ) -> UploadResult:
        """Upload a local file. See :meth:`MultipartUpload.upload_file`."""
        return self._uploader.upload_file(
            file, file_name, mime_type=mime_type, parts=parts, on_progress=on_progress
        )

    def check_supported_operation(
        self,
        ext: str,
        action: Optional[str] = None,
        parameters: Optional[dict[str, Any]] = None,
    ) -> SupportedOperationResponse:
        """Check whether an action is available for a file extension."""
        return self._operations.check_supported_operation(ext, action, parameters)

    def create_operation(
        self,
        action: str,
        file_keys: list[str],
        parameters: Optional[dict[str, Any]] = None,
        notes: Optional[dict[str, str]] = None,
    ) -> OperationResponse:
        """Create an operation on uploaded files."""
        return self._operations.create_operation(action, file_keys, parameters, notes)

    def convert(
        self,
        file_keys: list[str],
        convert_to: str,
        notes: Optional[dict[str, str]] = None,
    ) -> OperationResponse:
        """Convert files to another format. See :meth:`Operations.convert`."""
        return self._operations.convert(file_keys, convert_to, notes)

    def compress(
        self,
        file_keys: list[str],
        compression_value: Optional[str] = None,
        notes: Optional[dict[str, str]] = None,
    ) -> OperationResponse:
        """Compress files, at the ``recommended`` level by default."""
        return self._operations.compress(file_keys, compression_value, notes)

    def merge(
        self, file_keys: list[str], notes: Optional[dict[str, str]] = None
    ) -> OperationResponse:
        """Merge files into one."""
        return self._operations.merge(file_keys, notes)

    def zip(
        self, file_keys: list[str], notes: Optional[dict[str, str]] = None
    ) -> OperationResponse:
        """Bundle files into a zip archive."""
        return self._operations.zip(file_keys, notes)

    def share(
        self, file_keys: list[str], notes: Optional[dict[str, str]] = None
    ) -> OperationResponse:
        """Create share links for files."""
        return self._operations.share(file_keys, notes)

    def lock_pdf(
        self,
        file_keys: list[str],
        password: str,
        notes: Optional[dict[str, str]] = None,
    ) -> OperationResponse:
        """Protect PDF files with a password."""
        return self._operations.lock_pdf(file_keys, password, notes)

    def unlock_pdf(
        self,
        file_keys: list[str],
        password: str,
        notes: Optional[dict[str, str]] = None,
    ) -> OperationResponse:
        """Remove the password from PDF files."""
        return self._operations.unlock_pdf(file_keys, password, notes)

    def reset_pdf_password(
        self,
        file_keys: list[str],
        old_password: str,
        new_password: str,
        notes: Optional[dict[str, str]] = None,
    ) -> OperationResponse:
        """Change the password of PDF files."""
        return self._operations.reset_pdf_password(
            file_keys, old_password, new_password, notes
        )

    def get_status(
        self, main_task_id: str, file_task_id: Optional[str] = None
    ) -> TaskStatus:
        """Fetch the current status of a task."""
        return self._status.get_status(main_task_id, file_task_id)

    def poll_status(
        self,
        main_task_id: str,
        file_task_id: Optional[str] = None,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
        on_update: Optional[StatusCallback] = None,
    ) -> TaskStatus:
        """Poll a task until it completes or fails. See :class:`StatusPoller`."""
        return self._poller.poll_status(
            main_task_id, file_task_id, interval, timeout, on_update
        )

    async def apoll_status(
        self,
        main_task_id: str,
        file_task_id: Optional[str] = None,
        interval: Optional[float] = None,
        timeout: Optional[float] = None,
        on_update: Optional[StatusCallback] = None,
    ) -> TaskStatus:
        """Asyncio variant of :meth:`poll_status`."""
        return await self._poller.apoll_status(
            main_task_id, file_task_id, interval, timeout, on_update
        )

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._transport.close()

    def __enter__(self) -> "Dragdropdo":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


D3Client = Dragdropdo
