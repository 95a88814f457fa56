import importlib

import httpx
import pytest

import config as config_module
from api_client import ShopApi
from config import ClientConfig
from token_storage import AUTH_TOKEN_KEY, FileStorage, MemoryStorage

pytestmark = pytest.mark.anyio


def test_defaults():
    config = ClientConfig(base_url="http://localhost:9100/")
    assert config.base_url == "http://localhost:9100"
    assert isinstance(config.storage, MemoryStorage)
    assert config.transport is None
    assert config.validate_responses is True


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("API_BASE_URL", "https://api.shop.example.com/")
    monkeypatch.setenv("API_STORAGE_PATH", str(tmp_path / "storage.json"))
    config = ClientConfig.from_env(validate_responses=False)
    assert config.base_url == "https://api.shop.example.com"
    assert isinstance(config.storage, FileStorage)
    assert config.storage.path == tmp_path / "storage.json"
    assert config.validate_responses is False


@pytest.fixture
def unset_base_url(monkeypatch):
    monkeypatch.delenv("API_BASE_URL", raising=False)
    yield importlib.reload(config_module)
    monkeypatch.undo()
    importlib.reload(config_module)


def test_base_url_defaults_to_localhost(unset_base_url):
    assert unset_base_url.API_BASE_URL == "http://localhost:9100"
    assert unset_base_url.ClientConfig().base_url == "http://localhost:9100"
    assert unset_base_url.ClientConfig.from_env().base_url == "http://localhost:9100"


def test_config_is_frozen():
    config = ClientConfig()
    with pytest.raises(AttributeError):
        config.base_url = "http://elsewhere"


async def test_api_from_env_reads_token_file(monkeypatch, tmp_path, recorder):
    path = tmp_path / "storage.json"
    FileStorage(path).set_item(AUTH_TOKEN_KEY, "from-disk")
    monkeypatch.setenv("API_BASE_URL", "http://shop.test")
    monkeypatch.setenv("API_STORAGE_PATH", str(path))

    api = ShopApi.from_env(transport=httpx.MockTransport(recorder))
    await api.shops.get_all()
    assert str(recorder.last.url) == "http://shop.test/api/shops"
    assert recorder.last.headers["Authorization"] == "Bearer from-disk"
