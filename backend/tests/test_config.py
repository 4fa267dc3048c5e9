"""Settings — documented defaults and environment overrides."""

import pytest
from pydantic import ValidationError

from app.config import Settings


def test_defaults(monkeypatch):
    for var in ("PORT", "API_KEY", "API_PREFIX", "SEED_PRODUCTS", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    settings = Settings(_env_file=None)
    assert settings.port == 3000
    assert settings.api_key == "changeme"
    assert settings.uses_default_api_key
    assert settings.api_prefix == "/api"
    assert settings.seed_products is True
    assert settings.log_format == "json"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("API_KEY", "s3cret")
    monkeypatch.setenv("SEED_PRODUCTS", "false")
    settings = Settings(_env_file=None)
    assert settings.port == 8080
    assert settings.api_key == "s3cret"
    assert not settings.uses_default_api_key
    assert settings.seed_products is False


def test_prefix_normalized():
    assert Settings(_env_file=None, api_prefix="api/").api_prefix == "/api"
    assert Settings(_env_file=None, api_prefix="/v2/").api_prefix == "/v2"


@pytest.mark.parametrize("prefix", ["/", "", "//"])
def test_root_prefix_rejected(prefix):
    with pytest.raises(ValidationError, match="non-root path"):
        Settings(_env_file=None, api_prefix=prefix)
