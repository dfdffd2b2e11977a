import json

from shield.settings import (
    DEFAULT_ACCEPT_STATUSES,
    NOTIFICATION_SENT,
    EnvSettings,
    MemorySettings,
    ShieldConfig,
)


def test_env_settings_reads_strings(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("EMAIL_VERIFY_API_KEY", "  abc  ")
    monkeypatch.delenv("PHONE_VERIFY_API_KEY", raising=False)
    settings = EnvSettings(str(tmp_path / "state.json"), load_env=False)

    assert settings.get_string("EMAIL_VERIFY_API_KEY") == "abc"
    assert settings.get_string("PHONE_VERIFY_API_KEY") == ""


def test_env_settings_persists_flags(tmp_path) -> None:
    path = tmp_path / "state.json"
    settings = EnvSettings(str(path), load_env=False)

    assert settings.get_bool(NOTIFICATION_SENT) is False
    settings.set_bool(NOTIFICATION_SENT, True)

    assert json.loads(path.read_text(encoding="utf-8")) == {NOTIFICATION_SENT: True}
    assert EnvSettings(str(path), load_env=False).get_bool(NOTIFICATION_SENT) is True


def test_env_settings_ignores_corrupt_state(tmp_path) -> None:
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")

    assert EnvSettings(str(path), load_env=False).get_bool(NOTIFICATION_SENT) is False


def test_memory_settings_counts_writes() -> None:
    settings = MemorySettings({"k": "v"})
    settings.set_bool("flag", True)

    assert settings.get_string("k") == "v"
    assert settings.get_string("missing") == ""
    assert settings.get_bool("flag") is True
    assert settings.writes == 1


def test_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("EMAIL_ACCEPT_STATUSES", "OK, Valid ,")
    monkeypatch.setenv("SITE_DOMAIN", "leads.example.org")
    monkeypatch.setenv("HTTP_TIMEOUT", "5")
    monkeypatch.setenv("EMAIL_VERIFY_URL", "https://verify.test/verify")

    config = ShieldConfig.from_env()

    assert config.accept_statuses == ("ok", "valid")
    assert config.site_domain == "leads.example.org"
    assert config.timeout == 5.0
    assert config.email_verify_url == "https://verify.test/verify"


def test_config_defaults(monkeypatch) -> None:
    monkeypatch.setenv("EMAIL_ACCEPT_STATUSES", " , ")

    assert ShieldConfig.from_env().accept_statuses == DEFAULT_ACCEPT_STATUSES
