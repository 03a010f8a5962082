"""
Notes Client — Base URL Resolution Tests
=========================================

Priority: runtime config → MIP_BACKEND_URL environment → same origin.
"""

import json

import pytest

from notes_client.config import (
    ClientSettings,
    join_origin,
    load_runtime_config,
    resolve_base_url,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.delenv("MIP_BACKEND_URL", raising=False)
    monkeypatch.delenv("MIP_RUNTIME_CONFIG_PATH", raising=False)
    monkeypatch.delenv("MIP_ORIGIN", raising=False)
    # Keep a stray runtime-config.json in the working directory out of the picture
    monkeypatch.chdir(tmp_path)


class TestResolveBaseUrl:

    def test_runtime_config_wins(self):
        settings = ClientSettings(mip_backend_url="http://env:8080")
        runtime = {"MIP_BACKEND_URL": "http://runtime:9000/api/"}

        assert resolve_base_url(runtime, settings) == "http://runtime:9000/api"

    def test_environment_when_runtime_config_empty(self, monkeypatch):
        monkeypatch.setenv("MIP_BACKEND_URL", "http://env:8080/api")

        assert resolve_base_url({}, ClientSettings()) == "http://env:8080/api"

    def test_blank_runtime_value_falls_through(self):
        settings = ClientSettings(mip_backend_url="http://env:8080")
        assert resolve_base_url({"MIP_BACKEND_URL": ""}, settings) == "http://env:8080"

    def test_same_origin_fallback(self):
        assert resolve_base_url({}, ClientSettings()) == ""

    def test_runtime_config_loaded_from_file(self, tmp_path):
        path = tmp_path / "runtime-config.json"
        path.write_text(json.dumps({"MIP_BACKEND_URL": "https://notes.example.com/api"}))
        settings = ClientSettings(
            mip_backend_url="http://env:8080",
            mip_runtime_config_path=str(path),
        )

        assert resolve_base_url(settings=settings) == "https://notes.example.com/api"


class TestLoadRuntimeConfig:

    def test_missing_file(self, tmp_path):
        assert load_runtime_config(str(tmp_path / "absent.json")) == {}

    def test_invalid_json_is_ignored(self, tmp_path):
        path = tmp_path / "runtime-config.json"
        path.write_text("window.__RUNTIME_CONFIG__ = {}")
        assert load_runtime_config(str(path)) == {}

    def test_non_object_is_ignored(self, tmp_path):
        path = tmp_path / "runtime-config.json"
        path.write_text("[1, 2]")
        assert load_runtime_config(str(path)) == {}


class TestJoinOrigin:

    @pytest.mark.parametrize(
        "base, expected",
        [
            ("", "http://localhost:8080"),
            ("/api", "http://localhost:8080/api"),
            ("api/", "http://localhost:8080/api"),
            ("https://other.example.com/api/", "https://other.example.com/api"),
        ],
    )
    def test_join(self, base, expected):
        assert join_origin("http://localhost:8080/", base) == expected
