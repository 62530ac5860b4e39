"""
Model Registry - Defines Parse-backed model and collection classes by name.

define() is the one place where the three building blocks meet:

    config      = build_config(class_name, settings)
    model       = extend_model(<Model subclass>, factory=registry.create_model)
    collection  = extend_collection(<Collection subclass>)

Typical usage:
    registry = ModelRegistry(load_settings("./.env"))
    registry.define("User", class_name="users")
    registry.define("ChatMessage", model_attrs={"defaults": {"message": ""}})

    message = registry.create_model("ChatMessage", {"objectId": "kBFn1LLjid"})
    message.fetch()
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from .config import RequestConfig, build_config, pointer_class
from .hooks import extend_collection, extend_model
from .models import Collection, Model
from .rest_client import RestApiSync
from .settings import ParseSettings

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Parse settings are missing or a model name is unknown."""


@dataclass
class Definition:
    name: str
    config: RequestConfig
    model: type
    collection: type


class ModelRegistry:
    """Named Parse model definitions sharing one settings object and session."""

    def __init__(
        self,
        settings: Optional[ParseSettings],
        session: Optional[requests.Session] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.settings = settings
        self.session = session or requests.Session()
        self.log = log or logger
        self._definitions: Dict[str, Definition] = {}

    def define(
        self,
        name: str,
        class_name: Optional[str] = None,
        model_attrs: Optional[Dict[str, Any]] = None,
        collection_attrs: Optional[Dict[str, Any]] = None,
    ) -> Definition:
        """Build the config, model class and collection class for one name.

        Args:
            name: Registry name, used by create_model() (e.g. "User").
            class_name: Parse class the name is stored in (e.g. "users").
                        Defaults to name.
            model_attrs: Extra class attributes for the model (defaults,
                         validate, ...).
            collection_attrs: Extra class attributes for the collection.

        Raises:
            ConfigurationError: settings are missing.
        """
        class_name = class_name or name
        config = build_config(class_name, self.settings, log=self.log)
        if not config:
            raise ConfigurationError(f"Cannot define '{name}': parse settings missing")

        sync = RestApiSync(config, session=self.session)

        model_cls = type(name, (Model,), {
            "class_name": class_name,
            "pointer_class": pointer_class(class_name),
            "id_attribute": config.adapter.id_attribute,
            "sync": sync,
            **(model_attrs or {}),
        })
        extend_model(model_cls, factory=self.create_model, log=self.log)

        collection_cls = type(f"{name}Collection", (Collection,), {
            "model": model_cls,
            "sync": sync,
            **(collection_attrs or {}),
        })
        extend_collection(collection_cls, log=self.log)

        definition = Definition(name, config, model_cls, collection_cls)
        self._definitions[name] = definition

        if self.settings.debug:
            print(f"  Defined {name} -> {config.url}")

        return definition

    def get(self, name: str) -> Definition:
        try:
            return self._definitions[name]
        except KeyError:
            raise ConfigurationError(f"Model '{name}' is not defined") from None

    def is_defined(self, name: str) -> bool:
        return name in self._definitions

    def create_model(self, name: str, attrs: Optional[Dict] = None, options: Optional[Dict] = None) -> Model:
        return self.get(name).model(attrs, options)

    def create_collection(self, name: str, records=None) -> Collection:
        return self.get(name).collection(records)


_default_registry: Optional[ModelRegistry] = None


def set_default_registry(registry: Optional[ModelRegistry]) -> None:
    global _default_registry
    _default_registry = registry


def default_registry() -> ModelRegistry:
    """Registry used by hooks that were extended without an explicit factory."""
    if _default_registry is None:
        raise ConfigurationError("No default ModelRegistry set, call set_default_registry()")
    return _default_registry
