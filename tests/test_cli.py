"""Tests for the typer CLI."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from tone_resizer.cli import app

from conftest import make_words

runner = CliRunner()


class TestCli:
    def test_count(self, tmp_path):
        path = tmp_path / "note.txt"
        path.write_text(make_words(100))

        result = runner.invoke(app, ["count", str(path)])

        assert result.exit_code == 0
        assert "100 words" in result.stdout
        assert "130 tokens" in result.stdout

    def test_count_missing_file(self, tmp_path):
        result = runner.invoke(app, ["count", str(tmp_path / "missing.txt")])
        assert result.exit_code == 1

    def test_height(self):
        result = runner.invoke(app, ["height", "200"])
        assert result.exit_code == 0
        assert "120 words" in result.stdout

    def test_enhance_without_key_fails(self, tmp_path, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        path = tmp_path / "note.txt"
        path.write_text(make_words(40))

        result = runner.invoke(app, ["enhance", str(path), "--words", "20"])

        assert result.exit_code == 1
        assert "unavailable" in result.stdout

    def test_enhance_reports_token_usage(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
        path = tmp_path / "note.txt"
        path.write_text(make_words(40))
        message = MagicMock()
        message.usage.input_tokens = 120
        message.usage.output_tokens = 30
        message.content = [MagicMock(type="text", text=make_words(15))]

        with patch("tone_resizer.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            mock_cls.return_value.messages.create = AsyncMock(return_value=message)
            result = runner.invoke(app, ["enhance", str(path), "--words", "20", "--type", "text"])

        assert result.exit_code == 0
        assert "Tokens: 120 input, 30 output" in result.stdout
        assert "15 words (target 20)" in result.stdout

    def test_enhance_reports_token_usage_on_rejected_draft(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
        path = tmp_path / "note.txt"
        path.write_text(make_words(40))
        message = MagicMock()
        message.usage.input_tokens = 90
        message.usage.output_tokens = 60
        message.content = [MagicMock(type="text", text=make_words(30))]

        with patch("tone_resizer.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            mock_cls.return_value.messages.create = AsyncMock(return_value=message)
            result = runner.invoke(app, ["enhance", str(path), "--words", "20", "--type", "text"])

        assert result.exit_code == 1
        assert "Tokens: 90 input, 60 output" in result.stdout
        assert "too-long-output" in result.stdout
