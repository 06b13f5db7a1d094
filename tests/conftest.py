"""Shared fixtures for deai-mcp tests."""

import logging
from unittest.mock import MagicMock, patch

import pytest

import deai_mcp.logging_config as logging_config

TOKEN = "0x" + "ab" * 20
TOKEN_2 = "0x" + "cd" * 20
WALLET = "0x" + "12" * 20


def _reset_logger():
    """Drop every deai_mcp handler so the next call re-creates the file."""
    logger = logging.getLogger("deai_mcp")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logging_config._reset_session_stamp()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep logs and config lookups inside tmp_path; start without a key."""
    monkeypatch.setenv("DEAI_ROOT", str(tmp_path))
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.delenv("DEAI_VERBOSE", raising=False)
    _reset_logger()
    yield tmp_path
    _reset_logger()


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("API_KEY", "test-key-123")
    return "test-key-123"


def make_response(status_code=200, json_data=None, text=None):
    """Build a mock curl_cffi Response."""
    resp = MagicMock()
    resp.status_code = status_code
    if json_data is not None:
        resp.json.return_value = json_data
        resp.text = text if text is not None else "{...}"
    else:
        resp.json.side_effect = ValueError("Expecting value")
        resp.text = text if text is not None else ""
    return resp


@pytest.fixture
def mock_cffi():
    """Patch the HTTP layer used by deai_mcp.api."""
    with patch("deai_mcp.api.cffi_requests") as mock:
        yield mock


@pytest.fixture
def anyio_backend():
    return "asyncio"
