"""
Request Config - Per-class configuration for the restapi transport.

build_config() turns a Parse class name plus ParseSettings into the
configuration the transport consumes:

    {
        "URL": "https://api.parse.com/1/classes/ChatMessage",
        "debug": false,
        "adapter": {"type": "restapi", "idAttribute": "objectId"},
        "headers": {
            "X-Parse-Application-Id": "...",
            "X-Parse-REST-API-Key": "..."
        }
    }

Built-in classes (see BUILTIN_CLASSES) are addressed at the API root, every
other class under classes/.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from .settings import BUILTIN_CLASSES, ParseSettings

logger = logging.getLogger(__name__)

ID_ATTRIBUTE = "objectId"
ADAPTER_TYPE = "restapi"
CLASSES_PREFIX = "classes/"

APP_ID_HEADER = "X-Parse-Application-Id"
API_KEY_HEADER = "X-Parse-REST-API-Key"

# Built-in classes are stored under internal names that Pointers must use
POINTER_CLASSES = {
    "users": "_User",
    "roles": "_Role",
    "installations": "_Installation",
    "sessions": "_Session",
}


@dataclass(frozen=True)
class AdapterConfig:
    type: str = ADAPTER_TYPE
    id_attribute: str = ID_ATTRIBUTE


@dataclass(frozen=True)
class RequestConfig:
    url: str
    debug: bool = False
    adapter: AdapterConfig = field(default_factory=AdapterConfig)
    headers: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {
            "URL": self.url,
            "debug": self.debug,
            "adapter": {
                "type": self.adapter.type,
                "idAttribute": self.adapter.id_attribute,
            },
            "headers": dict(self.headers),
        }


def class_path(class_name: str) -> str:
    """URL path of a class relative to the API root."""
    if class_name in BUILTIN_CLASSES:
        return class_name
    return CLASSES_PREFIX + class_name


def pointer_class(class_name: str) -> str:
    """className a Pointer to this class carries (e.g. "users" -> "_User")."""
    return POINTER_CLASSES.get(class_name, class_name)


def build_config(
    class_name: str,
    settings: Optional[ParseSettings],
    log: Optional[logging.Logger] = None,
) -> Optional[RequestConfig]:
    """Build the restapi configuration for one Parse class.

    Args:
        class_name: A built-in class (e.g. "users") or a custom one.
        settings: Loaded ParseSettings. None means the application never
                  configured Parse.
        log: Optional logger, defaults to this module's logger.

    Returns:
        RequestConfig, or None when settings are missing. The error is logged,
        not raised; callers must treat None as fatal misconfiguration.
    """
    log = log or logger

    if settings is None:
        log.error("parse settings missing, check your configuration")
        return None

    base_url = settings.api_url
    if not base_url.endswith("/"):
        base_url += "/"

    return RequestConfig(
        url=base_url + class_path(class_name),
        debug=settings.debug,
        adapter=AdapterConfig(),
        headers={
            APP_ID_HEADER: settings.app_id,
            API_KEY_HEADER: settings.api_key,
        },
    )
