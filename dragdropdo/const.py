import os

API_URL = os.getenv("DRAGDROPDO_API_URL", "https://api-dev.dragdropdo.com")
API_KEY = os.getenv("DRAGDROPDO_API_KEY")
REQUEST_TIMEOUT_SECONDS = float(os.getenv("DRAGDROPDO_TIMEOUT", "30"))

CHUNK_SIZE = 5 * 1024 * 1024
MAX_PARTS = 100
DEFAULT_MIME_TYPE = "application/octet-stream"

DEFAULT_POLL_INTERVAL_SECONDS = 2.0
DEFAULT_POLL_TIMEOUT_SECONDS = 300.0

INITIATE_UPLOAD_PATH = "/v1/biz/initiate-upload"
COMPLETE_UPLOAD_PATH = "/v1/biz/complete-upload"
SUPPORTED_OPERATION_PATH = "/v1/biz/supported-operation"
OPERATION_PATH = "/v1/biz/do"
STATUS_PATH = "/v1/biz/status"
