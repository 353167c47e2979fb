"""Shared pytest fixtures for gphoto_uploader tests."""

import json
import tempfile
from collections.abc import Generator
from pathlib import Path
from unittest.mock import Mock

import pytest

from gphoto_uploader.config import Credentials


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmp:
        yield Path(tmp)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def credentials_dict() -> dict:
    """Sample contents of a credentials file."""
    return {
        "refresh_token": "refresh_abc",
        "client_id": "client_123.apps.googleusercontent.com",
        "client_secret": "secret_xyz",
        "expires_in": 3600,
    }


@pytest.fixture
def credentials(credentials_dict: dict) -> Credentials:
    return Credentials(**credentials_dict)


@pytest.fixture
def credentials_file(temp_dir: Path, credentials_dict: dict) -> Path:
    """Write a credentials JSON file."""
    path = temp_dir / "credentials" / "tokens.json"
    path.parent.mkdir()
    path.write_text(json.dumps(credentials_dict))
    return path


@pytest.fixture
def make_response():
    """Factory for mocked requests.Response objects."""

    def _make(status_code: int = 200, text: str = "", json_body=None) -> Mock:
        response = Mock()
        response.status_code = status_code
        if json_body is not None:
            text = json.dumps(json_body)
            response.json.return_value = json_body
        else:
            response.json.side_effect = ValueError("No JSON object could be decoded")
        response.text = text
        return response

    return _make


@pytest.fixture
def token_response(make_response):
    """Successful token endpoint response."""
    return make_response(200, json_body={"access_token": "access_1", "expires_in": 3599})


@pytest.fixture
def batch_create_success() -> dict:
    """Successful mediaItems:batchCreate response body."""
    return {
        "newMediaItemResults": [
            {
                "uploadToken": "tok123",
                "status": {"message": "Success"},
                "mediaItem": {
                    "id": "media_item_1",
                    "productUrl": "https://x/y",
                    "filename": "f.jpg",
                },
            }
        ]
    }


@pytest.fixture
def photos_dir(temp_dir: Path) -> Path:
    """Directory tree with a few photos and some non-photo files."""
    root = temp_dir / "photos"
    (root / "2022" / "trip").mkdir(parents=True)
    (root / "a.jpg").write_bytes(b"jpeg-a")
    (root / "b.png").write_bytes(b"png-b")
    (root / "notes.txt").write_text("not a photo")
    (root / "2022" / "c.jpg").write_bytes(b"jpeg-c")
    (root / "2022" / "trip" / "d.JPG").write_bytes(b"jpeg-d")
    (root / "2022" / "trip" / "e.gif").write_bytes(b"gif-e")
    return root


@pytest.fixture
def sample_config_yaml(temp_dir: Path, credentials_file: Path) -> Path:
    """Create a temporary YAML config file."""
    import yaml

    config_path = temp_dir / "test_config.yaml"
    data = {
        "credentials_path": str(credentials_file),
        "request_timeout_seconds": 15,
        "on_failure": "abort",
        "log_level": "DEBUG",
    }
    with open(config_path, "w") as f:
        yaml.dump(data, f)
    return config_path


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration between tests."""
    import logging

    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level

    yield

    root_logger.handlers = original_handlers
    root_logger.level = original_level
