from __future__ import annotations

import pytest

from toolkits.notifications import load_recipient_config, resolve_recipients


def test_load_recipient_config_from_toml(tmp_path):
    path = tmp_path / "recipients.toml"
    path.write_text('to = ["me@example.com"]\ncc = ["partner@example.com"]\n', encoding="utf-8")

    config = load_recipient_config(path)

    assert config.to == ["me@example.com"]
    assert config.cc == ["partner@example.com"]
    assert config.bcc == []


def test_load_recipient_config_rejects_invalid_toml(tmp_path):
    path = tmp_path / "recipients.toml"
    path.write_text("to = [", encoding="utf-8")
    with pytest.raises(ValueError):
        load_recipient_config(path)


def test_resolve_recipients_env_fallback(monkeypatch, tmp_path):
    monkeypatch.setenv("EMAIL_TO", "foo@example.com, bar@example.com")
    monkeypatch.setenv("EMAIL_CC", "")
    monkeypatch.setenv("EMAIL_BCC", "bcc@example.com")

    recipients = resolve_recipients(tmp_path / "missing.toml")

    assert recipients.to == ["foo@example.com", "bar@example.com"]
    assert recipients.cc == []
    assert recipients.bcc == ["bcc@example.com"]


def test_resolve_recipients_without_any_source(monkeypatch, tmp_path):
    for key in ("EMAIL_TO", "EMAIL_CC", "EMAIL_BCC"):
        monkeypatch.delenv(key, raising=False)
    with pytest.raises(FileNotFoundError, match="EMAIL_TO"):
        resolve_recipients(tmp_path / "missing.toml")
