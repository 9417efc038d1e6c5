"""Single fetch of a task status."""

import logging
from typing import Optional
from urllib.parse import quote

from pydantic import ValidationError

from dragdropdo.const import STATUS_PATH
from dragdropdo.exceptions import D3ClientError, D3ValidationError
from dragdropdo.models import TaskStatus
from dragdropdo.transport import Transport

logger = logging.getLogger(__name__)


def status_path(main_task_id: str, file_task_id: Optional[str] = None) -> str:
    """Build the status endpoint path for a task and, optionally, one file."""
    path = f"{STATUS_PATH}/{quote(main_task_id, safe='')}"
    if file_task_id:
        path += f"/{quote(file_task_id, safe='')}"
    return path


class StatusAccessor:
    """Fetches and normalises task status snapshots."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def get_status(
        self, main_task_id: str, file_task_id: Optional[str] = None
    ) -> TaskStatus:
        """Fetch the current status of a task.

        Args:
            main_task_id: Task id returned when the operation was created.
            file_task_id: Optional id of a single file inside the task.

        Returns:
            The normalised status. A missing operation status reads as
            ``queued``.

        Raises:
            D3ValidationError: If ``main_task_id`` is empty.
            D3APIError: If the service rejects the request.
            D3ClientError: On network or parse failures.
        """
        if not main_task_id:
            raise D3ValidationError("main_task_id is required")

        data = self._transport.request_data(
            "GET", status_path(main_task_id, file_task_id)
        )
        try:
            status = TaskStatus.model_validate(data)
        except ValidationError as e:
            raise D3ClientError(f"Failed to get status: {e}") from e
        logger.debug(
            "Task %s status: %s (%d files)",
            main_task_id,
            status.operation_status,
            len(status.files_data),
        )
        return status
