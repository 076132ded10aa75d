import pytest

from apikey_sync.config import settings
from apikey_sync.config.settings import SyncConfig, load_settings
from apikey_sync.core.apikey import ApikeySynchronizer, create_synchronizer, prepare_authorization_header


@pytest.fixture
def sync_env(monkeypatch, tmp_path):
    """Complete environment with /run/secrets pointed at an empty directory."""
    real_path = settings.Path

    def fake_path(target):
        if str(target) == "/run/secrets":
            return tmp_path
        return real_path(target)

    monkeypatch.setattr(settings, "Path", fake_path)
    monkeypatch.setenv("APIKEY_SERVICE_URL", "https://apikey.test/apikey")
    monkeypatch.setenv("APIKEY_MANAGER_CLIENT_ID", "manager")
    monkeypatch.setenv("APIKEY_MANAGER_CLIENT_SECRET", "env-secret")
    monkeypatch.delenv("APIKEY_REQUEST_TIMEOUT", raising=False)
    return tmp_path


def test_load_settings_from_env(sync_env):
    cfg = load_settings()
    assert cfg.apikey_service_url == "https://apikey.test/apikey"
    assert cfg.manager_client_id == "manager"
    assert cfg.manager_client_secret == "env-secret"
    assert cfg.request_timeout is None


def test_secret_file_takes_priority(sync_env):
    (sync_env / "apikey_manager_client_secret").write_text("file-secret\n")
    cfg = load_settings()
    assert cfg.manager_client_secret == "file-secret"


def test_empty_secret_file_falls_back_to_env(sync_env):
    (sync_env / "apikey_manager_client_secret").write_text("  ")
    cfg = load_settings()
    assert cfg.manager_client_secret == "env-secret"


def test_secret_path_that_is_not_a_file_falls_back_to_env(sync_env):
    (sync_env / "apikey_manager_client_secret").mkdir()
    cfg = load_settings()
    assert cfg.manager_client_secret == "env-secret"


@pytest.mark.parametrize("var", ["APIKEY_SERVICE_URL", "APIKEY_MANAGER_CLIENT_ID", "APIKEY_MANAGER_CLIENT_SECRET"])
def test_missing_required_value_raises(sync_env, monkeypatch, var):
    monkeypatch.delenv(var)
    with pytest.raises(RuntimeError, match=var):
        load_settings()


def test_request_timeout_parsed(sync_env, monkeypatch):
    monkeypatch.setenv("APIKEY_REQUEST_TIMEOUT", "7.5")
    assert load_settings().request_timeout == 7.5


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_invalid_request_timeout_rejected(sync_env, monkeypatch, raw):
    monkeypatch.setenv("APIKEY_REQUEST_TIMEOUT", raw)
    with pytest.raises(ValueError, match="APIKEY_REQUEST_TIMEOUT"):
        load_settings()


def test_repr_masks_secret():
    cfg = SyncConfig("https://apikey.test", "manager", "top-secret")
    assert "top-secret" not in repr(cfg)


def test_create_synchronizer_from_config():
    cfg = SyncConfig("https://apikey.test/apikey/", "manager", "top-secret", request_timeout=3)
    sync = create_synchronizer(cfg)
    try:
        assert isinstance(sync, ApikeySynchronizer)
        assert sync.service_url == "https://apikey.test/apikey"
        assert sync.authorization_header == prepare_authorization_header("manager", "top-secret")
        assert sync.http_client.timeout == 3
    finally:
        sync.close()


def test_create_synchronizer_loads_settings(sync_env):
    sync = create_synchronizer()
    try:
        assert sync.service_url == "https://apikey.test/apikey"
    finally:
        sync.close()
