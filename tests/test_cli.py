"""Tests for the command-line runner."""

import argparse
import io
import json

import pytest

import cli


def _args(**overrides):
    values = {"prompt": None, "system": None, "input": None, "list": False}
    values.update(overrides)
    return argparse.Namespace(**values)


class TestBuildRequest:
    def test_prompt_flag(self):
        assert cli.build_request(_args(prompt="Hello", system="Be brief")) == ("Hello", "Be brief")

    def test_inline_json_input(self):
        args = _args(input='{"prompt": "Hello", "system": "  "}')

        assert cli.build_request(args) == ("Hello", None)

    def test_system_flag_overrides_input(self):
        args = _args(input='{"prompt": "Hello", "system": "json"}', system="flag")

        assert cli.build_request(args) == ("Hello", "flag")

    def test_json_file_input(self, tmp_path):
        payload_file = tmp_path / "payload.json"
        payload_file.write_text(json.dumps({"prompt": "From file"}))

        assert cli.build_request(_args(input=str(payload_file))) == ("From file", None)

    def test_stdin_input(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO('{"prompt": "Piped"}'))

        assert cli.build_request(_args()) == ("Piped", None)

    def test_blank_prompt_rejected(self):
        with pytest.raises(ValueError, match="prompt is required"):
            cli.build_request(_args(prompt="   "))

    def test_non_object_input_rejected(self):
        with pytest.raises(ValueError, match="JSON object"):
            cli.build_request(_args(input='["Hello"]'))


class TestMain:
    def test_prints_outcome_and_succeeds(self, monkeypatch, capsys):
        async def fake_run_dispatch(prompt, system_prompt):
            return {"provider": "groq", "model": "m", "text": f"echo {prompt}", "tried": ["groq"], "errors": []}

        monkeypatch.setattr(cli, "run_dispatch", fake_run_dispatch)

        exit_code = cli.main(["--prompt", "Hello"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)["text"] == "echo Hello"

    def test_nonzero_exit_when_nobody_answers(self, monkeypatch, capsys):
        async def fake_run_dispatch(prompt, system_prompt):
            return {"provider": None, "model": None, "text": "fallback", "tried": ["groq"], "errors": []}

        monkeypatch.setattr(cli, "run_dispatch", fake_run_dispatch)

        assert cli.main(["--prompt", "Hello"]) == 1

    def test_invalid_json_input(self, capsys):
        exit_code = cli.main(["--input", "{not json"])

        assert exit_code == 1
        assert "Invalid JSON input" in json.loads(capsys.readouterr().out)["error"]

    def test_real_dispatch_without_credentials(self, capsys):
        """With no keys configured every provider fails fast and the fallback is printed."""
        exit_code = cli.main(["--prompt", "Hello"])

        output = json.loads(capsys.readouterr().out)
        assert exit_code == 1
        assert output["provider"] is None
        assert [error["error"] for error in output["errors"]][0] == "OPENAI_API_KEY missing"

    def test_list_providers(self, monkeypatch, capsys):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

        exit_code = cli.main(["--list"])

        output = capsys.readouterr().out
        assert exit_code == 0
        assert "1. openai (configured)" in output
        assert "2. anthropic (missing key)" in output
        assert "Timeout per attempt: 25000ms" in output
