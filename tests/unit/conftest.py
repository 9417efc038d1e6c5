import pytest
import requests_mock

from dragdropdo import ClientConfig, Dragdropdo
from dragdropdo.transport import Transport

API_URL = "https://api.test"


@pytest.fixture
def config():
    return ClientConfig(api_key="test-key", base_url=f"{API_URL}/", timeout=5)


@pytest.fixture
def transport(config):
    transport = Transport(config)
    yield transport
    transport.close()


@pytest.fixture
def client(config):
    with Dragdropdo(config) as client:
        yield client


@pytest.fixture
def mock_api():
    """Fixture to mock every HTTP request made during a test."""
    with requests_mock.Mocker() as m:
        yield m


@pytest.fixture
def make_file(tmp_path):
    """Create a local file of the given size filled with a repeating pattern."""

    def _make_file(size: int, name: str = "test.pdf") -> str:
        path = tmp_path / name
        pattern = bytes(range(256))
        path.write_bytes((pattern * (size // 256 + 1))[:size])
        return str(path)

    return _make_file


@pytest.fixture
def status_body():
    """Build status endpoint response bodies."""

    def _status_body(operation_status=None, files_data=None, camel=False):
        data = {}
        if operation_status is not None:
            data["operationStatus" if camel else "operation_status"] = operation_status
        if files_data is not None:
            data["filesData" if camel else "files_data"] = files_data
        return {"data": data}

    return _status_body
