"""Tests for ``llmwire request``, ``llmwire response`` and ``llmwire providers``."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from click.testing import CliRunner

from llmwire.cli import main

if TYPE_CHECKING:
    from pathlib import Path


def _write(tmp_path: Path, name: str, data: object) -> Path:
    f = tmp_path / name
    f.write_text(json.dumps(data), encoding="utf-8")
    return f


_RESPONSE = {
    "text": "Hello",
    "finishReason": "stop",
    "usage": {"inputTokens": 4, "outputTokens": 1},
    "response": {"id": "resp_1", "modelId": "model-x", "timestamp": "2024-01-01T00:00:00Z"},
}


class TestRequestCommand:
    def test_anthropic_request(self, tmp_path: Path) -> None:
        f = _write(
            tmp_path,
            "req.json",
            {
                "model": "claude-test",
                "max_tokens": 32,
                "system": "Be brief.",
                "messages": [{"role": "user", "content": "Hi"}],
            },
        )

        runner = CliRunner()
        result = runner.invoke(main, ["request", "anthropic", str(f)])

        assert result.exit_code == 0, result.output
        params = json.loads(result.output)
        assert params["model"] == "claude-test"
        assert params["maxOutputTokens"] == 32
        assert params["system"] == "Be brief."
        assert params["messages"] == [{"role": "user", "content": "Hi"}]

    def test_unsupported_content_exits_1(self, tmp_path: Path) -> None:
        f = _write(tmp_path, "req.json", {"model": "m", "messages": [{"role": "robot", "content": ""}]})

        runner = CliRunner()
        result = runner.invoke(main, ["request", "openai", str(f)])

        assert result.exit_code == 1
        assert "Conversion error" in result.output


class TestResponseCommand:
    def test_openai_response(self, tmp_path: Path) -> None:
        f = _write(tmp_path, "resp.json", _RESPONSE)

        runner = CliRunner()
        result = runner.invoke(main, ["response", "openai", str(f)])

        assert result.exit_code == 0, result.output
        body = json.loads(result.output)
        assert body["id"] == "resp_1"
        assert body["created"] == 1704067200
        assert body["choices"][0]["message"]["content"] == "Hello"

    def test_overrides(self, tmp_path: Path) -> None:
        f = _write(tmp_path, "resp.json", _RESPONSE)

        runner = CliRunner()
        result = runner.invoke(
            main, ["response", "gemini", str(f), "--id", "r9", "--model", "gemini-x"]
        )

        assert result.exit_code == 0, result.output
        body = json.loads(result.output)
        assert body["responseId"] == "r9"
        assert body["modelVersion"] == "gemini-x"

    def test_invalid_response_exits_1(self, tmp_path: Path) -> None:
        f = _write(tmp_path, "resp.json", {"text": "no metadata"})

        runner = CliRunner()
        result = runner.invoke(main, ["response", "anthropic", str(f)])

        assert result.exit_code == 1
        assert "Conversion error" in result.output


class TestProvidersCommand:
    def test_lists_providers(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["providers"])

        assert result.exit_code == 0
        assert "anthropic" in result.output
        assert "openai" in result.output
        assert "vertex_ai" in result.output
        assert "full snapshots" in result.output
