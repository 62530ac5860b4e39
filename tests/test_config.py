"""Tests for parsebone.config.build_config.

Covers URL derivation for built-in and custom classes, trailing slash
handling, header mapping and the missing-settings path.
"""

import logging
from unittest.mock import MagicMock
import pytest

from parsebone.config import build_config, class_path, pointer_class, RequestConfig
from parsebone.settings import BUILTIN_CLASSES, ParseSettings


def _settings(api_url="https://api.parse.com/1", debug=False):
    return ParseSettings(api_url=api_url, debug=debug, app_id="app-123", api_key="key-456")


# ---------------------------------------------------------------------------
# URL derivation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("class_name", BUILTIN_CLASSES)
@pytest.mark.parametrize("api_url", ["https://api.parse.com/1", "https://api.parse.com/1/"])
def test_builtin_class_at_api_root(class_name, api_url):
    config = build_config(class_name, _settings(api_url))
    assert config.url == f"https://api.parse.com/1/{class_name}"
    assert "classes/" not in config.url


@pytest.mark.parametrize("api_url", ["https://api.parse.com/1", "https://api.parse.com/1/"])
def test_custom_class_under_classes(api_url):
    config = build_config("ChatMessage", _settings(api_url))
    assert config.url == "https://api.parse.com/1/classes/ChatMessage"


@pytest.mark.parametrize("class_name,expected", [
    ("users", "_User"),
    ("roles", "_Role"),
    ("installations", "_Installation"),
    ("sessions", "_Session"),
    ("ChatMessage", "ChatMessage"),
])
def test_pointer_class(class_name, expected):
    assert pointer_class(class_name) == expected


def test_class_name_is_case_sensitive():
    # "Users" is not the built-in "users"
    assert class_path("Users") == "classes/Users"
    assert class_path("users") == "users"


# ---------------------------------------------------------------------------
# Config contents
# ---------------------------------------------------------------------------

def test_headers_from_credentials():
    config = build_config("ChatMessage", _settings())
    assert config.headers == {
        "X-Parse-Application-Id": "app-123",
        "X-Parse-REST-API-Key": "key-456",
    }


def test_debug_and_adapter():
    config = build_config("ChatMessage", _settings(debug=True))
    assert config.debug is True
    assert config.adapter.type == "restapi"
    assert config.adapter.id_attribute == "objectId"


def test_to_dict_wire_shape():
    config = build_config("roles", _settings())
    assert config.to_dict() == {
        "URL": "https://api.parse.com/1/roles",
        "debug": False,
        "adapter": {"type": "restapi", "idAttribute": "objectId"},
        "headers": {
            "X-Parse-Application-Id": "app-123",
            "X-Parse-REST-API-Key": "key-456",
        },
    }


def test_config_is_recomputed_each_call():
    settings = _settings()
    first = build_config("ChatMessage", settings)
    settings.app_id = "changed"
    second = build_config("ChatMessage", settings)
    assert first is not second
    assert first.headers["X-Parse-Application-Id"] == "app-123"
    assert second.headers["X-Parse-Application-Id"] == "changed"


def test_config_is_frozen():
    config = build_config("ChatMessage", _settings())
    with pytest.raises(Exception):
        config.url = "https://elsewhere"


# ---------------------------------------------------------------------------
# Missing settings
# ---------------------------------------------------------------------------

def test_missing_settings_returns_none_and_logs(caplog):
    with caplog.at_level(logging.ERROR):
        config = build_config("ChatMessage", None)
    assert config is None
    assert "parse settings missing" in caplog.text


def test_missing_settings_uses_injected_logger():
    log = MagicMock()
    assert build_config("ChatMessage", None, log=log) is None
    log.error.assert_called_once()


def test_returns_request_config():
    assert isinstance(build_config("users", _settings()), RequestConfig)
