import pytest

from dragdropdo.exceptions import D3APIError, D3ClientError, D3ValidationError

API_URL = "https://api.test"
OPERATION_URL = f"{API_URL}/v1/biz/do"
SUPPORTED_URL = f"{API_URL}/v1/biz/supported-operation"


@pytest.mark.parametrize("field", ["main_task_id", "mainTaskId"])
def test_create_operation_accepts_both_spellings(client, mock_api, field):
    mock_api.post(OPERATION_URL, json={"data": {field: "task-123"}})

    operation = client.create_operation(
        "convert",
        ["file-key-123"],
        parameters={"convert_to": "png"},
        notes={"user": "42"},
    )

    assert operation.main_task_id == "task-123"
    assert mock_api.last_request.json() == {
        "action": "convert",
        "file_keys": ["file-key-123"],
        "parameters": {"convert_to": "png"},
        "notes": {"user": "42"},
    }


def test_optional_fields_are_omitted(client, mock_api):
    mock_api.post(OPERATION_URL, json={"data": {"main_task_id": "task-1"}})

    client.merge(["a", "b"])

    assert mock_api.last_request.json() == {"action": "merge", "file_keys": ["a", "b"]}


@pytest.mark.parametrize(
    "call, action, parameters",
    [
        (lambda c: c.convert(["k"], "pdf"), "convert", {"convert_to": "pdf"}),
        (
            lambda c: c.compress(["k"]),
            "compress",
            {"compression_value": "recommended"},
        ),
        (
            lambda c: c.compress(["k"], "extreme"),
            "compress",
            {"compression_value": "extreme"},
        ),
        (lambda c: c.zip(["k"]), "zip", None),
        (lambda c: c.share(["k"]), "share", None),
        (lambda c: c.lock_pdf(["k"], "secret"), "lock", {"password": "secret"}),
        (lambda c: c.unlock_pdf(["k"], "secret"), "unlock", {"password": "secret"}),
        (
            lambda c: c.reset_pdf_password(["k"], "old", "new"),
            "reset_password",
            {"old_password": "old", "new_password": "new"},
        ),
    ],
)
def test_convenience_wrappers(client, mock_api, call, action, parameters):
    mock_api.post(OPERATION_URL, json={"data": {"main_task_id": "task-1"}})

    call(client)

    body = mock_api.last_request.json()
    assert body["action"] == action
    assert body["file_keys"] == ["k"]
    assert body.get("parameters") == parameters


@pytest.mark.parametrize(
    "action, file_keys, message",
    [
        ("", ["k"], "Action is required"),
        ("convert", [], "At least one file key is required"),
    ],
)
def test_create_operation_validation(client, mock_api, action, file_keys, message):
    with pytest.raises(D3ValidationError, match=message):
        client.create_operation(action, file_keys)

    assert mock_api.request_history == []


def test_create_operation_api_error(client, mock_api):
    mock_api.post(
        OPERATION_URL, status_code=422, json={"message": "Unknown action", "code": 12}
    )

    with pytest.raises(D3APIError) as e:
        client.create_operation("explode", ["k"])

    assert e.value.status_code == 422
    assert e.value.code == 12
    assert str(e.value) == "Unknown action (status 422)"


def test_create_operation_without_task_id(client, mock_api):
    mock_api.post(OPERATION_URL, json={"data": {}})

    with pytest.raises(D3ClientError, match="Failed to create operation"):
        client.create_operation("zip", ["k"])


def test_check_supported_operation(client, mock_api):
    mock_api.post(
        SUPPORTED_URL,
        json={
            "data": {
                "supported": True,
                "ext": "pdf",
                "available_actions": ["convert", "compress", "merge"],
            }
        },
    )

    result = client.check_supported_operation("pdf")

    assert result.supported
    assert result.ext == "pdf"
    assert result.available_actions == ["convert", "compress", "merge"]
    assert mock_api.last_request.json() == {"ext": "pdf"}


def test_check_supported_operation_sends_action_and_parameters(client, mock_api):
    mock_api.post(
        SUPPORTED_URL,
        json={"data": {"supported": False, "ext": "mp3", "action": "lock"}},
    )

    result = client.check_supported_operation(
        "mp3", action="lock", parameters={"password": "x"}
    )

    assert not result.supported
    assert result.action == "lock"
    assert mock_api.last_request.json() == {
        "ext": "mp3",
        "action": "lock",
        "parameters": {"password": "x"},
    }


def test_check_supported_operation_requires_ext(client, mock_api):
    with pytest.raises(D3ValidationError, match="Extension"):
        client.check_supported_operation("")
