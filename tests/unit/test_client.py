import pytest

from dragdropdo import ClientConfig, D3Client, Dragdropdo
from dragdropdo.const import API_URL, REQUEST_TIMEOUT_SECONDS
from dragdropdo.exceptions import D3ValidationError


def test_api_key_is_required():
    with pytest.raises(D3ValidationError, match="API key is required"):
        Dragdropdo(ClientConfig(api_key=""))


def test_client_from_environment(monkeypatch):
    monkeypatch.setenv("DRAGDROPDO_API_KEY", "env-key")
    monkeypatch.setenv("DRAGDROPDO_API_URL", "https://env.test/")
    monkeypatch.setenv("DRAGDROPDO_TIMEOUT", "12")

    with Dragdropdo() as client:
        assert client.base_url == "https://env.test"
        assert client.config.api_key == "env-key"
        assert client.config.timeout == 12.0


def test_config_defaults():
    config = ClientConfig(api_key="k", base_url="", timeout=0, headers=None)

    assert config.base_url == API_URL
    assert config.timeout == REQUEST_TIMEOUT_SECONDS
    assert config.headers == {}


def test_from_env_overrides(monkeypatch):
    monkeypatch.delenv("DRAGDROPDO_API_KEY", raising=False)
    monkeypatch.delenv("DRAGDROPDO_TIMEOUT", raising=False)

    config = ClientConfig.from_env(api_key="override", timeout=None)

    assert config.api_key == "override"
    assert config.timeout == REQUEST_TIMEOUT_SECONDS


def test_custom_headers_are_sent(mock_api):
    config = ClientConfig(
        api_key="k", base_url="https://api.test", headers={"X-Client": "tests"}
    )
    mock_api.get(
        "https://api.test/v1/biz/status/t", json={"data": {"operation_status": "queued"}}
    )

    with D3Client(config) as client:
        client.get_status("t")

    headers = mock_api.last_request.headers
    assert headers["X-Client"] == "tests"
    assert headers["Authorization"] == "Bearer k"
    assert headers["Content-Type"] == "application/json"


def test_upload_convert_and_poll(client, mock_api, make_file, status_body):
    """End to end flow: upload a file, convert it and wait for the result."""
    path = make_file(1024)
    mock_api.post(
        "https://api.test/v1/biz/initiate-upload",
        json={
            "data": {
                "fileKey": "file-key-123",
                "uploadId": "upload-id-456",
                "presignedUrls": ["https://storage.test/part1"],
            }
        },
    )
    mock_api.put("https://storage.test/part1", headers={"ETag": '"etag-1"'})
    mock_api.post("https://api.test/v1/biz/complete-upload", json={"data": {}})
    mock_api.post("https://api.test/v1/biz/do", json={"data": {"mainTaskId": "t-1"}})
    mock_api.get(
        "https://api.test/v1/biz/status/t-1",
        json=status_body(
            "completed",
            [{"fileKey": "file-key-123", "status": "completed", "downloadLink": "u"}],
            camel=True,
        ),
    )

    upload = client.upload_file(path, "doc.docx")
    operation = client.convert([upload.file_key], "pdf")
    status = client.poll_status(operation.main_task_id, interval=0.01, timeout=5)

    assert upload.file_key == "file-key-123"
    assert mock_api.request_history[0].json()["mime_type"] == (
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    )
    assert status.operation_status == "completed"
    assert status.files_data[0].download_link == "u"


def test_public_client_methods_are_documented():
    for name, member in vars(Dragdropdo).items():
        if name.startswith("_"):
            continue
        if isinstance(member, property):
            member = member.fget
        assert member.__doc__, f"Dragdropdo.{name} has no docstring"
