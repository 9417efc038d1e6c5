"""Data models exchanged with the D3 business API.

Responses from the service are not consistent in how they spell field names:
the same field may arrive in snake case or in camel case. Every field that is
read from a response is declared in :data:`FIELD_ALIASES`, and the models
below build their validation aliases from that table, so the snake spelling
wins when both are present.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "file_key": ("file_key", "fileKey"),
    "upload_id": ("upload_id", "uploadId"),
    "object_name": ("object_name", "objectName"),
    "presigned_urls": ("presigned_urls", "presignedUrls"),
    "main_task_id": ("main_task_id", "mainTaskId"),
    "operation_status": ("operation_status", "operationStatus"),
    "files_data": ("files_data", "filesData"),
    "download_link": ("download_link", "downloadLink"),
    "error_code": ("error_code", "errorCode"),
    "error_message": ("error_message", "errorMessage"),
    "available_actions": ("available_actions", "availableActions"),
}


def _aliased(name: str, **kwargs: Any) -> Any:
    return Field(validation_alias=AliasChoices(*FIELD_ALIASES[name]), **kwargs)


def _as_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


class OperationStatus(str, Enum):
    """Known values of ``TaskStatus.operation_status``."""

    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_STATUSES = frozenset({OperationStatus.COMPLETED, OperationStatus.FAILED})


class UploadSession(BaseModel):
    """Multipart upload session returned by the initiate call."""

    model_config = ConfigDict(frozen=True)

    file_key: str = _aliased("file_key")
    upload_id: Optional[str] = _aliased("upload_id", default=None)
    object_name: Optional[str] = _aliased("object_name", default=None)
    presigned_urls: list[str] = _aliased("presigned_urls", default_factory=list)

    @field_validator("file_key", "upload_id", "object_name", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Optional[str]:
        return _as_optional_str(value)

    @field_validator("presigned_urls", mode="before")
    @classmethod
    def _urls_default(cls, value: Any) -> Any:
        return [] if value is None else value


class PartResult(BaseModel):
    """ETag of one uploaded part, as sent to the complete call."""

    part_number: int
    etag: str


class UploadProgress(BaseModel):
    """Progress of a multipart upload, reported after every part."""

    current_part: int
    total_parts: int
    bytes_uploaded: int
    total_bytes: int
    percentage: int


class UploadResult(BaseModel):
    """Result of a completed multipart upload."""

    file_key: str
    upload_id: str
    presigned_urls: list[str]
    object_name: Optional[str] = None


class FileTaskStatus(BaseModel):
    """Status of one input file inside a task.

    Missing optional fields mean the value is not available yet.
    """

    file_key: str = _aliased("file_key", default="")
    status: str
    download_link: Optional[str] = _aliased("download_link", default=None)
    error_code: Optional[str] = _aliased("error_code", default=None)
    error_message: Optional[str] = _aliased("error_message", default=None)

    @field_validator(
        "file_key",
        "status",
        "download_link",
        "error_code",
        "error_message",
        mode="before",
    )
    @classmethod
    def _stringify(cls, value: Any) -> Optional[str]:
        return _as_optional_str(value)


class TaskStatus(BaseModel):
    """Snapshot of a task returned by the status endpoint."""

    operation_status: str = _aliased(
        "operation_status", default=OperationStatus.QUEUED.value
    )
    files_data: list[FileTaskStatus] = _aliased("files_data", default_factory=list)

    @field_validator("operation_status", mode="before")
    @classmethod
    def _status_default(cls, value: Any) -> str:
        if value is None:
            return OperationStatus.QUEUED.value
        return value.value if isinstance(value, OperationStatus) else str(value)

    @field_validator("files_data", mode="before")
    @classmethod
    def _files_default(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_terminal(self) -> bool:
        """Whether polling should stop at this status."""
        return self.operation_status in TERMINAL_STATUSES


class OperationResponse(BaseModel):
    """Response of the operation-create call."""

    main_task_id: str = _aliased("main_task_id")

    @field_validator("main_task_id", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Optional[str]:
        return _as_optional_str(value)


class SupportedOperationResponse(BaseModel):
    """Response of the supported-operation check."""

    supported: bool = False
    ext: Optional[str] = None
    action: Optional[str] = None
    available_actions: Optional[list[str]] = _aliased(
        "available_actions", default=None
    )
    parameters: Optional[dict[str, Any]] = None
