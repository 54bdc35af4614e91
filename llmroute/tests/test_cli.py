"""CLI tests: subcommand wiring, exit codes and stdout/stderr separation.

Completion subcommands run against ``httpx.MockTransport`` by patching
``cli_actions.build_client``; credential subcommands use the SQLite keystore
or the environment variable under the per-test ``XDG_CONFIG_HOME``.
"""
from __future__ import annotations

import io
import json
from typing import Optional, TextIO

import pytest

from llmroute.cli import cli_actions, main
from llmroute.cli.settings import load_settings, settings_path
from llmroute.config import ModelSettings
from llmroute.config.defaults import DEFAULT_MODEL
from llmroute.openrouter import CompletionClient
from llmroute.tests.utils import RecordingTransport, StaticCredentials, chat_response, sse_response


@pytest.fixture()
def wire(monkeypatch):
    """Patch the CLI client factory to use a recording transport."""

    def _install(handler, secret: Optional[str] = "sk-or-test") -> RecordingTransport:  # pragma: allowlist secret - test value
        transport = RecordingTransport(handler)

        def _factory(settings: ModelSettings, *, console: Optional[TextIO] = None) -> CompletionClient:
            return CompletionClient(
                settings,
                StaticCredentials(secret),
                http_client=transport.client(),
                console=console,
            )

        monkeypatch.setattr(cli_actions, "build_client", _factory)
        return transport

    return _install


def test_ask_prints_answer_to_stdout(wire, capsys):
    transport = wire(lambda req: chat_response("Paris"))
    assert main(["ask", "Capital of France?"]) == 0  # nosec B101 - pytest assert in tests
    out, err = capsys.readouterr()
    assert out == "Paris\n"  # nosec B101 - pytest assert in tests
    assert err == ""  # nosec B101 - pytest assert in tests
    assert transport.body()["model"] == DEFAULT_MODEL  # nosec B101 - pytest assert in tests


def test_ask_stream_echoes_deltas(wire, capsys):
    transport = wire(lambda req: sse_response("Pa", "ris"))
    assert main(["ask", "--stream", "--model", "vendor/fast", "q"]) == 0  # nosec B101 - pytest assert in tests
    assert capsys.readouterr().out == "Paris\n"  # nosec B101 - pytest assert in tests
    assert transport.body()["model"] == "vendor/fast"  # nosec B101 - pytest assert in tests
    assert transport.body()["stream"] is True  # nosec B101 - pytest assert in tests


def test_ask_reads_prompt_from_stdin(wire, monkeypatch):
    transport = wire(lambda req: chat_response("ok"))
    monkeypatch.setattr("sys.stdin", io.StringIO("from a pipe\n"))
    assert main(["ask", "-"]) == 0  # nosec B101 - pytest assert in tests
    assert transport.body()["messages"][0]["content"] == "from a pipe\n"  # nosec B101 - pytest assert in tests


def test_ask_empty_prompt_is_caller_error(wire, monkeypatch, capsys):
    transport = wire(lambda req: chat_response("unused"))
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main(["ask", "-"]) == 2  # nosec B101 - pytest assert in tests
    assert "llmroute: error:" in capsys.readouterr().err  # nosec B101 - pytest assert in tests
    assert transport.count == 0  # nosec B101 - pytest assert in tests


def test_ask_empty_result_exits_1(wire):
    wire(lambda req: chat_response(None))
    assert main(["ask", "q"]) == 1  # nosec B101 - pytest assert in tests


def test_ask_without_credential_exits_3(wire, capsys):
    transport = wire(lambda req: chat_response("unused"), secret=None)
    assert main(["ask", "q"]) == 3  # nosec B101 - pytest assert in tests
    assert "set-key" in capsys.readouterr().err  # nosec B101 - pytest assert in tests
    assert transport.count == 0  # nosec B101 - pytest assert in tests


def test_ask_http_error_exits_4(wire, capsys):
    wire(lambda req: chat_response("x", status=502))
    assert main(["ask", "q"]) == 4  # nosec B101 - pytest assert in tests
    assert "http 502" in capsys.readouterr().err  # nosec B101 - pytest assert in tests


def test_ask_out_file_writes_file_only(wire, tmp_path, capsys):
    wire(lambda req: sse_response("line one\n", "line two"))
    target = tmp_path / "out" / "answer.md"
    assert main(["ask", "--stream", "--out-file", str(target), "q"]) == 0  # nosec B101 - pytest assert in tests
    out, err = capsys.readouterr()
    assert out == ""  # nosec B101 - pytest assert in tests
    assert f"Response written to {target}" in err  # nosec B101 - pytest assert in tests
    assert target.read_text(encoding="utf-8") == "line one\nline two"  # nosec B101 - pytest assert in tests


def test_ask_out_file_empty_result_exits_1(wire, tmp_path):
    wire(lambda req: sse_response())
    target = tmp_path / "answer.md"
    assert main(["ask", "--stream", "--out-file", str(target), "q"]) == 1  # nosec B101 - pytest assert in tests
    assert not target.exists()  # nosec B101 - pytest assert in tests


def test_ask_raw_prints_provider_records(wire, capsys):
    wire(lambda req: sse_response("a", "b"))
    assert main(["ask", "--stream", "--raw", "q"]) == 0  # nosec B101 - pytest assert in tests
    records = json.loads(capsys.readouterr().out)
    assert [r["choices"][0]["delta"]["content"] for r in records] == ["a", "b"]  # nosec B101 - pytest assert in tests


def test_describe_image_sends_structured_prompt(wire, tmp_path, capsys):
    transport = wire(lambda req: chat_response("A red square."))
    image = tmp_path / "square.gif"
    image.write_bytes(b"GIF89a\x01\x00\x01\x00")
    assert main(["describe-image", str(image)]) == 0  # nosec B101 - pytest assert in tests
    assert capsys.readouterr().out == "A red square.\n"  # nosec B101 - pytest assert in tests
    content = transport.body()["messages"][0]["content"]
    assert [part["type"] for part in content] == ["text", "image_url"]  # nosec B101 - pytest assert in tests
    assert content[1]["image_url"]["url"].startswith("data:image/gif;base64,")  # nosec B101 - pytest assert in tests


def test_describe_image_missing_file_exits_2(wire, tmp_path):
    transport = wire(lambda req: chat_response("unused"))
    assert main(["describe-image", str(tmp_path / "none.png")]) == 2  # nosec B101 - pytest assert in tests
    assert transport.count == 0  # nosec B101 - pytest assert in tests


def test_default_model_roundtrip_is_used_by_ask(wire, capsys):
    transport = wire(lambda req: chat_response("ok"))
    assert main(["set-default-model", "vendor/saved"]) == 0  # nosec B101 - pytest assert in tests
    out, err = capsys.readouterr()
    assert out == "Default model set to vendor/saved\n"  # nosec B101 - pytest assert in tests
    assert str(settings_path()) in err  # nosec B101 - pytest assert in tests
    assert load_settings().default_model == "vendor/saved"  # nosec B101 - pytest assert in tests

    assert main(["get-default-model"]) == 0  # nosec B101 - pytest assert in tests
    assert capsys.readouterr().out == "vendor/saved\n"  # nosec B101 - pytest assert in tests

    assert main(["ask", "q"]) == 0  # nosec B101 - pytest assert in tests
    assert transport.body()["model"] == "vendor/saved"  # nosec B101 - pytest assert in tests


def test_set_default_model_rejects_blank():
    assert main(["set-default-model", "  "]) == 2  # nosec B101 - pytest assert in tests
    assert not settings_path().exists()  # nosec B101 - pytest assert in tests


def test_get_default_model_falls_back_to_config(monkeypatch, capsys):
    monkeypatch.setenv("LLMROUTE_MODEL", "vendor/env")
    assert main(["get-default-model"]) == 0  # nosec B101 - pytest assert in tests
    assert capsys.readouterr().out == "vendor/env\n"  # nosec B101 - pytest assert in tests


def test_set_key_keystore_then_status(monkeypatch, capsys):
    assert main(["set-key", "--backend", "keystore", "sk-stored-secret"]) == 0  # nosec B101 - pytest assert in tests
    assert capsys.readouterr().out == "API key stored (backend: keystore)\n"  # nosec B101 - pytest assert in tests

    assert main(["key-status", "--backend", "keystore"]) == 0  # nosec B101 - pytest assert in tests
    out, err = capsys.readouterr()
    assert out == "API key available (source: keystore)\n"  # nosec B101 - pytest assert in tests
    assert "sk-stored-secret" not in out + err  # nosec B101 - pytest assert in tests


def test_set_key_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("sk-from-stdin\n"))
    assert main(["set-key", "--backend", "keystore"]) == 0  # nosec B101 - pytest assert in tests
    capsys.readouterr()
    from llmroute.base.credentials import KeystoreCredentialProvider

    assert KeystoreCredentialProvider().get() == "sk-from-stdin"  # nosec B101 - pytest assert in tests


def test_set_key_empty_stdin_exits_2(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main(["set-key", "--backend", "keystore"]) == 2  # nosec B101 - pytest assert in tests


def test_set_key_unknown_backend_exits_2(capsys):
    assert main(["set-key", "--backend", "floppy", "sk-x"]) == 2  # nosec B101 - pytest assert in tests
    assert "unknown credential backend" in capsys.readouterr().err  # nosec B101 - pytest assert in tests


def test_key_status_env_fallback_and_missing(monkeypatch, capsys):
    assert main(["key-status", "--backend", "keystore"]) == 3  # nosec B101 - pytest assert in tests
    assert "No API key found" in capsys.readouterr().out  # nosec B101 - pytest assert in tests

    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-env-secret")  # pragma: allowlist secret - dummy test value
    assert main(["key-status", "--backend", "keystore"]) == 0  # nosec B101 - pytest assert in tests
    out = capsys.readouterr().out
    assert out == "API key available (source: environment)\n"  # nosec B101 - pytest assert in tests
    assert "sk-env-secret" not in out  # nosec B101 - pytest assert in tests


def test_missing_subcommand_is_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2  # nosec B101 - pytest assert in tests


def test_set_key_without_platform_tool_exits_3(monkeypatch, capsys):
    monkeypatch.setenv("PATH", "")
    assert main(["set-key", "--backend", "secret_service", "sk-x"]) == 3  # nosec B101 - pytest assert in tests
    assert "secret service write failed" in capsys.readouterr().err  # nosec B101 - pytest assert in tests


def test_ask_out_file_rewrite_of_existing_file_exits_0(wire, tmp_path, capsys):
    wire(lambda req: chat_response("same answer"))
    target = tmp_path / "answer.md"
    target.write_text("same answer", encoding="utf-8")
    assert main(["ask", "--out-file", str(target), "q"]) == 0  # nosec B101 - pytest assert in tests
    out, err = capsys.readouterr()
    assert out == ""  # nosec B101 - pytest assert in tests
    assert "Response written to" in err  # nosec B101 - pytest assert in tests
    assert target.read_text(encoding="utf-8") == "same answer"  # nosec B101 - pytest assert in tests


def test_ask_out_file_empty_result_keeps_existing_file(wire, tmp_path):
    wire(lambda req: chat_response(None))
    target = tmp_path / "answer.md"
    target.write_text("previous", encoding="utf-8")
    assert main(["ask", "--out-file", str(target), "q"]) == 1  # nosec B101 - pytest assert in tests
    assert target.read_text(encoding="utf-8") == "previous"  # nosec B101 - pytest assert in tests
