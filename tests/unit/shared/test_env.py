from __future__ import annotations

import logging
import os

import pytest

from src.shared.env import load_secret_file_variables


def _unset(monkeypatch: pytest.MonkeyPatch, key: str) -> None:
    monkeypatch.delenv(key, raising=False)


def test_load_secret_file_variables_reads_content(tmp_path, monkeypatch):
    secret_file = tmp_path / "llm_key.txt"
    secret_file.write_text("sk-s3cr3t\n", encoding="utf-8")

    monkeypatch.setenv("LLM_API_KEY_FILE", str(secret_file))
    _unset(monkeypatch, "LLM_API_KEY")

    resolved = load_secret_file_variables()

    assert os.environ["LLM_API_KEY"] == "sk-s3cr3t"
    assert "LLM_API_KEY" in resolved


def test_load_secret_file_variables_logs_missing_file(monkeypatch, caplog):
    monkeypatch.setenv("APIFOX_API_TOKEN_FILE", "/tmp/does-not-exist")
    _unset(monkeypatch, "APIFOX_API_TOKEN")

    with caplog.at_level(logging.WARNING):
        resolved = load_secret_file_variables()

    assert "APIFOX_API_TOKEN" not in resolved
    assert "APIFOX_API_TOKEN" not in os.environ
    assert any(
        record.message == "env.secret_file.unreadable" for record in caplog.records
    )


def test_load_secret_file_variables_handles_decode_error(tmp_path, monkeypatch, caplog):
    binary_file = tmp_path / "binary.bin"
    binary_file.write_bytes(b"\xff\xfe\xfd")

    monkeypatch.setenv("BINARY_SECRET_FILE", str(binary_file))
    _unset(monkeypatch, "BINARY_SECRET")

    with caplog.at_level(logging.WARNING):
        load_secret_file_variables()

    assert "BINARY_SECRET" not in os.environ
    assert any(
        record.message == "env.secret_file.unreadable" for record in caplog.records
    )


def test_load_secret_file_variables_skips_existing_target(monkeypatch):
    monkeypatch.setenv("EXISTING_SECRET", "present")
    monkeypatch.setenv("EXISTING_SECRET_FILE", "/tmp/ignored")

    load_secret_file_variables()

    assert os.environ["EXISTING_SECRET"] == "present"


def test_load_secret_file_variables_skips_empty_path(monkeypatch):
    _unset(monkeypatch, "EMPTY_SECRET")
    monkeypatch.setenv("EMPTY_SECRET_FILE", "")

    load_secret_file_variables()

    assert "EMPTY_SECRET" not in os.environ
