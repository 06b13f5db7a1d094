"""Tests for deai_mcp.logging_config — security properties."""

import logging
import stat
import sys

from conftest import TOKEN, make_response
from deai_mcp.logging_config import _MAX_SESSION_LOGS, get_logger, set_debug


def _session_log(tmp_path):
    """Find the single *-deai-mcp.log file under .logs/sessions/."""
    logs = list((tmp_path / ".logs" / "sessions").glob("*-deai-mcp.log"))
    assert len(logs) == 1, f"Expected 1 session log, found {len(logs)}: {logs}"
    return logs[0]


def _flush(logger):
    for handler in logger.handlers:
        handler.flush()


class TestLogFilePermissions:
    """Log file and directory must be owner-only."""

    def test_log_dir_is_0700(self, tmp_path):
        get_logger()
        log_dir = tmp_path / ".logs" / "sessions"
        assert stat.S_IMODE(log_dir.stat().st_mode) == 0o700
        assert stat.S_IMODE(log_dir.parent.stat().st_mode) == 0o700

    def test_log_file_is_0600(self, tmp_path):
        logger = get_logger()
        logger.info("test")
        _flush(logger)
        mode = stat.S_IMODE(_session_log(tmp_path).stat().st_mode)
        assert mode == 0o600, f"Expected 0600, got {oct(mode)}"

    def test_no_stream_handlers_to_stdout(self):
        logger = get_logger()
        assert logger.propagate is False
        for handler in logger.handlers:
            assert getattr(handler, "stream", None) not in (sys.stdout, sys.stderr)

    def test_foreign_handler_does_not_suppress_session_file(self, tmp_path):
        logger = logging.getLogger("deai_mcp")
        logger.addHandler(logging.NullHandler())
        get_logger().info("still logged")
        _flush(logger)
        assert "still logged" in _session_log(tmp_path).read_text()


class TestApiKeyScrubbing:
    """The API key must NEVER appear in log output."""

    def test_key_value_redacted(self, tmp_path, api_key):
        logger = get_logger()
        logger.info(f"using key {api_key} for request")
        _flush(logger)
        content = _session_log(tmp_path).read_text()
        assert api_key not in content
        assert "[KEY-REDACTED]" in content

    def test_header_value_redacted(self, tmp_path):
        logger = get_logger()
        logger.info("headers: {'X-API-Key': 'sk-live-999', 'Accept': 'json'}")
        _flush(logger)
        content = _session_log(tmp_path).read_text()
        assert "sk-live-999" not in content
        assert "'Accept': 'json'" in content

    def test_percent_args_redacted(self, tmp_path, api_key):
        logger = get_logger()
        logger.info("key=%s", api_key)
        _flush(logger)
        assert api_key not in _session_log(tmp_path).read_text()

    def test_tool_calls_never_log_key(self, tmp_path, api_key, mock_cffi):
        from deai_mcp.skills import execute_tool

        set_debug(True)
        mock_cffi.get.return_value = make_response(401, {"message": "bad key"})
        execute_tool("get_token_info", {"contractAddress": TOKEN})
        _flush(get_logger())
        content = _session_log(tmp_path).read_text()
        assert "Tool call: get_token_info" in content
        assert api_key not in content


class TestLevels:
    def test_debug_hidden_by_default(self, tmp_path):
        logger = get_logger()
        logger.debug("hidden detail")
        _flush(logger)
        assert "hidden detail" not in _session_log(tmp_path).read_text()

    def test_set_debug_enables_debug(self, tmp_path):
        logger = get_logger()
        set_debug(True)
        logger.debug("visible detail")
        _flush(logger)
        assert "visible detail" in _session_log(tmp_path).read_text()


class TestCleanup:
    def test_old_session_logs_pruned(self, tmp_path):
        log_dir = tmp_path / ".logs" / "sessions"
        log_dir.mkdir(parents=True)
        for i in range(_MAX_SESSION_LOGS + 5):
            (log_dir / f"19990101-{i:06d}-deai-mcp.log").write_text("")
        get_logger()
        remaining = list(log_dir.glob("*-deai-mcp.log"))
        assert len(remaining) == _MAX_SESSION_LOGS
        assert not (log_dir / "19990101-000000-deai-mcp.log").exists()
