"""Operation requests against uploaded files.

An operation applies a named action (``convert``, ``compress``, ...) to one
or more uploaded files and returns the id of the task that tracks it.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from dragdropdo.const import OPERATION_PATH, SUPPORTED_OPERATION_PATH
from dragdropdo.exceptions import D3ClientError, D3ValidationError
from dragdropdo.models import OperationResponse, SupportedOperationResponse
from dragdropdo.transport import Transport

logger = logging.getLogger(__name__)


class Operations:
    """Creates operations and checks which ones a file type supports."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def check_supported_operation(
        self,
        ext: str,
        action: Optional[str] = None,
        parameters: Optional[dict[str, Any]] = None,
    ) -> SupportedOperationResponse:
        """Check whether an action is available for a file extension.

        Args:
            ext: File extension, e.g. ``pdf``.
            action: Optional action to check. All available actions are
                listed if not given.
            parameters: Optional action parameters to validate.

        Raises:
            D3ValidationError: If ``ext`` is empty.
        """
        if not ext:
            raise D3ValidationError("Extension (ext) is required")
        payload: dict[str, Any] = {"ext": ext}
        if action is not None:
            payload["action"] = action
        if parameters is not None:
            payload["parameters"] = parameters

        data = self._transport.request_data("POST", SUPPORTED_OPERATION_PATH, payload)
        try:
            return SupportedOperationResponse.model_validate(data)
        except ValidationError as e:
            raise D3ClientError(f"Failed to check supported operation: {e}") from e

    def create_operation(
        self,
        action: str,
        file_keys: list[str],
        parameters: Optional[dict[str, Any]] = None,
        notes: Optional[dict[str, str]] = None,
    ) -> OperationResponse:
        """Create an operation on uploaded files.

        Args:
            action: Name of the action to run.
            file_keys: Keys of the uploaded input files.
            parameters: Action specific parameters.
            notes: Free form notes stored with the task.

        Returns:
            The id of the task tracking the operation.

        Raises:
            D3ValidationError: If ``action`` or ``file_keys`` is empty.
            D3APIError: If the service rejects the operation.
        """
        if not action:
            raise D3ValidationError("Action is required")
        if not file_keys:
            raise D3ValidationError("At least one file key is required")
        payload: dict[str, Any] = {"action": action, "file_keys": list(file_keys)}
        if parameters is not None:
            payload["parameters"] = parameters
        if notes is not None:
            payload["notes"] = notes

        data = self._transport.request_data("POST", OPERATION_PATH, payload)
        try:
            operation = OperationResponse.model_validate(data)
        except ValidationError as e:
            raise D3ClientError(f"Failed to create operation: {e}") from e
        logger.info(
            "Created %s operation on %d files: main_task_id=%s",
            action,
            len(file_keys),
            operation.main_task_id,
        )
        return operation

    def convert(
        self,
        file_keys: list[str],
        convert_to: str,
        notes: Optional[dict[str, str]] = None,
    ) -> OperationResponse:
        """Convert files to another format, e.g. ``png``."""
        return self.create_operation(
            "convert", file_keys, {"convert_to": convert_to}, notes
        )

    def compress(
        self,
        file_keys: list[str],
        compression_value: Optional[str] = None,
        notes: Optional[dict[str, str]] = None,
    ) -> OperationResponse:
        """Compress files. Uses the ``recommended`` level by default."""
        return self.create_operation(
            "compress",
            file_keys,
            {"compression_value": compression_value or "recommended"},
            notes,
        )

    def merge(
        self, file_keys: list[str], notes: Optional[dict[str, str]] = None
    ) -> OperationResponse:
        """Merge files into one."""
        return self.create_operation("merge", file_keys, None, notes)

    def zip(
        self, file_keys: list[str], notes: Optional[dict[str, str]] = None
    ) -> OperationResponse:
        """Bundle files into a zip archive."""
        return self.create_operation("zip", file_keys, None, notes)

    def share(
        self, file_keys: list[str], notes: Optional[dict[str, str]] = None
    ) -> OperationResponse:
        """Create share links for files."""
        return self.create_operation("share", file_keys, None, notes)

    def lock_pdf(
        self,
        file_keys: list[str],
        password: str,
        notes: Optional[dict[str, str]] = None,
    ) -> OperationResponse:
        """Protect PDF files with a password."""
        return self.create_operation("lock", file_keys, {"password": password}, notes)

    def unlock_pdf(
        self,
        file_keys: list[str],
        password: str,
        notes: Optional[dict[str, str]] = None,
    ) -> OperationResponse:
        """Remove the password from PDF files."""
        return self.create_operation(
            "unlock", file_keys, {"password": password}, notes
        )

    def reset_pdf_password(
        self,
        file_keys: list[str],
        old_password: str,
        new_password: str,
        notes: Optional[dict[str, str]] = None,
    ) -> OperationResponse:
        """Change the password of PDF files."""
        return self.create_operation(
            "reset_password",
            file_keys,
            {"old_password": old_password, "new_password": new_password},
            notes,
        )
