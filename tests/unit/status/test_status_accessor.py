import pytest
import requests

from dragdropdo.exceptions import D3APIError, D3ClientError, D3ValidationError
from dragdropdo.models import OperationStatus
from dragdropdo.status.status_accessor import StatusAccessor

STATUS_URL = "https://api.test/v1/biz/status"


@pytest.fixture
def accessor(transport):
    return StatusAccessor(transport)


@pytest.mark.parametrize("camel", [False, True])
def test_operation_status_spellings_normalize(accessor, mock_api, status_body, camel):
    mock_api.get(f"{STATUS_URL}/task-1", json=status_body("completed", camel=camel))

    status = accessor.get_status("task-1")

    assert status.operation_status == OperationStatus.COMPLETED
    assert status.operation_status == "completed"
    assert status.is_terminal


def test_missing_operation_status_is_queued(accessor, mock_api, status_body):
    mock_api.get(f"{STATUS_URL}/task-1", json=status_body())

    status = accessor.get_status("task-1")

    assert status.operation_status == "queued"
    assert status.files_data == []
    assert not status.is_terminal


def test_snake_spelling_wins(accessor, mock_api):
    mock_api.get(
        f"{STATUS_URL}/task-1",
        json={"data": {"operation_status": "failed", "operationStatus": "running"}},
    )

    assert accessor.get_status("task-1").operation_status == "failed"


def test_file_fields_accept_both_spellings(accessor, mock_api, status_body):
    files = [
        {
            "file_key": "file-1",
            "status": "completed",
            "download_link": "https://files.test/out.png",
        },
        {
            "fileKey": "file-2",
            "status": "failed",
            "errorCode": 17,
            "errorMessage": "Unsupported format",
        },
        {"status": "queued"},
    ]
    mock_api.get(f"{STATUS_URL}/task-1", json=status_body("running", files, camel=True))

    status = accessor.get_status("task-1")

    first, second, third = status.files_data
    assert first.file_key == "file-1"
    assert first.download_link == "https://files.test/out.png"
    assert first.error_code is None
    assert second.file_key == "file-2"
    assert second.error_code == "17"
    assert second.error_message == "Unsupported format"
    assert second.download_link is None
    assert third.file_key == ""
    assert third.status == "queued"


def test_unknown_status_is_kept(accessor, mock_api, status_body):
    mock_api.get(f"{STATUS_URL}/task-1", json=status_body("paused"))

    status = accessor.get_status("task-1")

    assert status.operation_status == "paused"
    assert not status.is_terminal


def test_file_task_id_is_appended(accessor, mock_api, status_body):
    mock_api.get(f"{STATUS_URL}/task-1/file-9", json=status_body("running"))

    accessor.get_status("task-1", "file-9")

    assert mock_api.request_history[0].path == "/v1/biz/status/task-1/file-9"


def test_main_task_id_is_required(accessor, mock_api):
    with pytest.raises(D3ValidationError, match="main_task_id is required"):
        accessor.get_status("")
    assert mock_api.request_history == []


def test_api_error_carries_status_and_code(accessor, mock_api):
    mock_api.get(
        f"{STATUS_URL}/task-1",
        status_code=404,
        json={"error": "Task not found", "code": "404001"},
    )

    with pytest.raises(D3APIError) as e:
        accessor.get_status("task-1")

    assert e.value.status_code == 404
    assert e.value.code == 404001
    assert e.value.message == "Task not found"


def test_network_error_is_a_client_error(accessor, mock_api):
    mock_api.get(f"{STATUS_URL}/task-1", exc=requests.exceptions.ConnectTimeout)

    with pytest.raises(D3ClientError, match="Network error"):
        accessor.get_status("task-1")


def test_unparseable_status_is_a_client_error(accessor, mock_api, status_body):
    mock_api.get(
        f"{STATUS_URL}/task-1", json=status_body("running", [{"file_key": "f"}])
    )

    with pytest.raises(D3ClientError, match="Failed to get status"):
        accessor.get_status("task-1")


def test_non_json_body_is_a_client_error(accessor, mock_api):
    mock_api.get(f"{STATUS_URL}/task-1", text="<html>")

    with pytest.raises(D3ClientError, match="Invalid JSON"):
        accessor.get_status("task-1")
