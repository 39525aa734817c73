"""Tests for environment -> ServerConfig resolution."""

from __future__ import annotations

from datetime import timedelta

import pytest

from todo_service.config import CorsPolicy, ServerConfig, Settings, resolve_server_config
from todo_service.errors import ConfigError
from todo_service.server import create_app


def resolve(**env) -> ServerConfig:
    return resolve_server_config(Settings(_env_file=None, **env))


def test_defaults():
    cfg = resolve()
    assert cfg.request_id_header == "x-request-id"
    assert cfg.timeout == timedelta(seconds=15)
    assert cfg.cors == CorsPolicy.permissive()


def test_values_are_read_from_environment(monkeypatch):
    monkeypatch.setenv("REQUEST_ID_HEADER", "x-correlation-id")
    monkeypatch.setenv("TIMEOUT_SECS", "3")
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://a.example")

    cfg = resolve_server_config(Settings(_env_file=None))

    assert cfg.request_id_header == "x-correlation-id"
    assert cfg.timeout == timedelta(seconds=3)
    assert cfg.cors == CorsPolicy.allow(["https://a.example"])


@pytest.mark.parametrize("header", ["X-Request-Id", "", "bad header", "x-id:", "x-ïd"])
def test_invalid_request_id_header(header):
    with pytest.raises(ConfigError, match="REQUEST_ID_HEADER"):
        resolve(REQUEST_ID_HEADER=header)


@pytest.mark.parametrize("value", ["-1", "1.5", "abc", "", " 5", "100000000000000"])
def test_invalid_timeout(value):
    with pytest.raises(ConfigError, match="TIMEOUT_SECS"):
        resolve(TIMEOUT_SECS=value)


def test_zero_timeout_is_accepted():
    assert resolve(TIMEOUT_SECS="0").timeout == timedelta(0)


def test_disabled_wins_over_allow_list():
    cfg = resolve(CORS_DISABLED="1", CORS_ALLOWED_ORIGINS="https://a.example")
    assert cfg.cors.mode == "disabled"


def test_empty_disable_flag_is_ignored():
    assert resolve(CORS_DISABLED="").cors.mode == "permissive"


def test_allow_list_is_trimmed_and_filtered():
    cfg = resolve(CORS_ALLOWED_ORIGINS=" https://a.example , ,https://b.example,")
    assert cfg.cors.mode == "allow"
    assert cfg.cors.origins == ("https://a.example", "https://b.example")


def test_allow_list_without_entries_stays_permissive():
    assert resolve(CORS_ALLOWED_ORIGINS=" , ,").cors.mode == "permissive"


def test_invalid_origin_is_cited():
    with pytest.raises(ConfigError, match="bad\\\\x01origin"):
        resolve(CORS_ALLOWED_ORIGINS="https://a.example,bad\x01origin")


def test_allow_policy_needs_origins():
    with pytest.raises(ValueError):
        CorsPolicy.allow([])


def test_create_app_refuses_bad_config(make_settings):
    with pytest.raises(ConfigError):
        create_app(make_settings(TIMEOUT_SECS="soon"))
