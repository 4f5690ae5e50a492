import tomllib
from pathlib import Path

import pytest

from ckan_datastore import Configurator


def test_default_config(monkeypatch):
    monkeypatch.delenv("API_ENDPOINT", raising=False)
    monkeypatch.delenv("PAGE_SIZE_MAX", raising=False)
    config = Configurator()

    assert config.API_ENDPOINT == "http://datahub.io/api"
    assert config.PAGE_SIZE_DEFAULT == 10
    assert config.PAGE_SIZE_MAX == 100

    # Make sure all config keys are defined
    with open(Path(__file__).parent.parent / "ckan_datastore/config_default.toml", "rb") as f:
        assert config.configuration.keys() == tomllib.load(f).keys()


def test_custom_config_file_override(monkeypatch, tmp_path):
    settings = tmp_path / "config.toml"
    settings.write_text('PAGE_SIZE_MAX = 200\nAPI_ENDPOINT = "https://demo.ckan.org/api/"\n')
    monkeypatch.setenv("CKAN_DATASTORE_SETTINGS", str(settings))
    config = Configurator()

    assert config.PAGE_SIZE_MAX == 200
    assert config.API_ENDPOINT == "https://demo.ckan.org/api"


def test_env_override(monkeypatch):
    monkeypatch.setenv("API_ENDPOINT", "ckan.example.com/api")
    monkeypatch.setenv("PAGE_SIZE_MAX", "200")
    monkeypatch.setenv("SENTRY_SAMPLE_RATE", "0.5")
    config = Configurator()

    assert config.API_ENDPOINT == "http://ckan.example.com/api"
    assert config.PAGE_SIZE_MAX == 200
    assert config.SENTRY_SAMPLE_RATE == 0.5


def test_override_sanity_check():
    config = Configurator()
    with pytest.raises(ValueError):
        config.override(PAGE_SIZE_DEFAULT=500, PAGE_SIZE_MAX=100)
