import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from access_gate.core.settings import GateSettings


def test_defaults_match_stock_gate():
    settings = GateSettings()
    config = settings.gate_config()
    assert config.public_path_prefixes == ("/login", "/register")
    assert config.excluded_path_prefixes == ("/api", "/_next/static", "/_next/image", "/favicon.ico")
    assert config.login_path == "/login"
    assert config.home_path == "/todos"
    assert config.credential_cookie == "auth-token"
    assert settings.REDIRECT_STATUS_CODE == 307


def test_prefix_lists_parse_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("PUBLIC_PATH_PREFIXES", "/signin, /signup ,,/docs")
    monkeypatch.setenv("EXCLUDED_PATH_PREFIXES", "/assets")
    monkeypatch.setenv("LOGIN_PATH", "/signin")
    settings = GateSettings()
    assert settings.PUBLIC_PATH_PREFIXES == ["/signin", "/signup", "/docs"]
    assert settings.gate_config().excluded_path_prefixes == ("/assets",)


def test_cookie_name_and_status_from_env(monkeypatch):
    monkeypatch.setenv("AUTH_COOKIE_NAME", "session")
    monkeypatch.setenv("REDIRECT_STATUS_CODE", "302")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = GateSettings()
    assert settings.gate_config().credential_cookie == "session"
    assert settings.REDIRECT_STATUS_CODE == 302
    assert settings.LOG_LEVEL == "DEBUG"


def test_non_redirect_status_rejected(monkeypatch):
    monkeypatch.setenv("REDIRECT_STATUS_CODE", "200")
    with pytest.raises(ValidationError):
        GateSettings()


def test_loop_prone_settings_fail_when_building_gate_config():
    settings = GateSettings(HOME_PATH="/login/done")
    with pytest.raises(ValidationError, match="home path"):
        settings.gate_config()


@pytest.mark.parametrize("code", ["301", "308"])
def test_permanent_redirect_status_rejected(monkeypatch, code):
    monkeypatch.setenv("REDIRECT_STATUS_CODE", code)
    with pytest.raises(ValidationError, match="REDIRECT_STATUS_CODE"):
        GateSettings()


@pytest.mark.parametrize("code", [302, 303, 307])
def test_temporary_redirect_status_accepted(code):
    assert GateSettings(REDIRECT_STATUS_CODE=code).REDIRECT_STATUS_CODE == code
