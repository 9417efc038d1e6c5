from .client import D3Client, Dragdropdo
from .config import ClientConfig
from .exceptions import (
    D3APIError,
    D3ClientError,
    D3TimeoutError,
    D3UploadError,
    D3ValidationError,
)
from .models import (
    FileTaskStatus,
    OperationResponse,
    OperationStatus,
    PartResult,
    SupportedOperationResponse,
    TaskStatus,
    UploadProgress,
    UploadResult,
    UploadSession,
)
from .upload.progress import TqdmUploadProgress

__version__ = "1.0.0"

__all__ = [
    "D3Client",
    "Dragdropdo",
    "ClientConfig",
    "D3APIError",
    "D3ClientError",
    "D3TimeoutError",
    "D3UploadError",
    "D3ValidationError",
    "FileTaskStatus",
    "OperationResponse",
    "OperationStatus",
    "PartResult",
    "SupportedOperationResponse",
    "TaskStatus",
    "TqdmUploadProgress",
    "UploadProgress",
    "UploadResult",
    "UploadSession",
]
