"""Tests for deai_mcp.cli — Typer commands."""

from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from conftest import TOKEN, make_response
from deai_mcp import __version__
from deai_mcp.cli import app

runner = CliRunner()


class TestVersionAndTools:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"deai-mcp {__version__}" in result.output

    def test_tools_lists_all_six(self):
        result = runner.invoke(app, ["tools"])
        assert result.exit_code == 0
        assert "get_token_info(contractAddress)" in result.output
        assert "get_two_token_overlap(token1, token2)" in result.output
        assert result.output.count("get_") == 6


class TestCall:
    def test_prints_display(self, api_key, mock_cffi):
        mock_cffi.get.return_value = make_response(200, {"name": "Tok", "symbol": "TK"})
        result = runner.invoke(app, ["call", "get_token_info", "-a", f"contractAddress={TOKEN}"])
        assert result.exit_code == 0, result.output
        assert "**Tok (TK)**" in result.output

    def test_validation_failure_exits_1_without_request(self, api_key, mock_cffi):
        result = runner.invoke(app, ["call", "get_token_info", "-a", "contractAddress=0x1"])
        assert result.exit_code == 1
        assert "ValidationError" in result.output
        assert mock_cffi.get.call_count == 0

    def test_missing_key_exits_1(self, mock_cffi):
        result = runner.invoke(app, ["call", "get_token_info", "-a", f"contractAddress={TOKEN}"])
        assert result.exit_code == 1
        assert "API_KEY" in result.output

    def test_malformed_arg_exits_2(self, api_key, mock_cffi):
        result = runner.invoke(app, ["call", "get_token_info", "-a", "contractAddress"])
        assert result.exit_code == 2
        assert mock_cffi.get.call_count == 0


class TestServe:
    def test_serve_runs_stdio_server(self):
        with patch("deai_mcp.server.run_stdio", new=AsyncMock()) as mock_run:
            result = runner.invoke(app, ["serve"])
        assert result.exit_code == 0
        mock_run.assert_awaited_once()

    def test_bare_invocation_serves(self):
        with patch("deai_mcp.server.run_stdio", new=AsyncMock()) as mock_run:
            result = runner.invoke(app, [])
        assert result.exit_code == 0
        mock_run.assert_awaited_once()

    def test_server_fault_exits_nonzero(self, tmp_path):
        with patch("deai_mcp.server.run_stdio",
                   new=AsyncMock(side_effect=RuntimeError("transport closed"))):
            result = runner.invoke(app, ["serve"])
        assert result.exit_code == 1
        assert "Server failed: transport closed" in result.output
        log_text = next((tmp_path / ".logs" / "sessions").glob("*.log")).read_text()
        assert "Server failed" in log_text
