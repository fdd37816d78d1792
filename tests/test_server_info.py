import pytest

from nothanks.server_info import DEFAULTS, format_motd, get_server_info, load_env_file
from nothanks.version import get_version_info


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for key in DEFAULTS:
        monkeypatch.delenv(key, raising=False)


def test_load_env_file(tmp_path):
    env_path = tmp_path / ".env"
    env_path.write_text("SERVER_ENV=Production\nSERVER_HOST=example.com\n# comment\nNAME=value=with=equals\n")
    env_vars = load_env_file(str(env_path))
    assert env_vars["SERVER_ENV"] == "Production"
    assert env_vars["SERVER_HOST"] == "example.com"
    assert env_vars["NAME"] == "value=with=equals"


def test_load_env_file_missing(tmp_path):
    assert load_env_file(str(tmp_path / "missing.env")) == {}


def test_get_server_info_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    info = get_server_info()
    assert info["server_port"] == "22222"
    assert info["action_timeout"] == 5.0
    assert info["database_path"] == "nothanks_data.db"
    assert info["healthcheck_port"] == 22223


def test_get_server_info_uses_env_file_and_environment(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text("SERVER_ENV=Staging\nSERVER_PORT=10022\nACTION_TIMEOUT=2.5\n")
    monkeypatch.chdir(tmp_path)

    info = get_server_info()
    assert info["server_env"] == "Staging"
    assert info["server_port"] == "10022"
    assert info["action_timeout"] == 2.5

    monkeypatch.setenv("SERVER_HOST", "nothanks.example")
    monkeypatch.setenv("SERVER_PORT", "22")
    info = get_server_info()
    assert info["ssh_connection_string"] == "nothanks.example"
    for key, value in get_version_info().items():
        assert info[key] == value


def test_format_motd_includes_server():
    motd = format_motd({
        "server_name": "Table",
        "server_env": "Public Stable",
        "ssh_connection_string": "example.com -p 22222",
        "version": "1.0.0",
        "build_date": "today",
    })
    assert "Table" in motd
    assert "Public Stable" in motd
    assert "1.0.0" in motd
    assert "today" in motd
