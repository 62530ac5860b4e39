"""
parsebone - Parse REST conventions for a generic model/collection layer.

  settings.py     ParseSettings, loaded from .env or a config.json "parse" block
  config.py       build_config(): per-class URL, adapter and auth headers
  hooks.py        ModelHooks / CollectionHooks and extend_model() / extend_collection()
  models.py       Generic Model and Collection the hooks plug into
  rest_client.py  RestApiSync, the requests-based "restapi" transport
  registry.py     ModelRegistry: define classes by name and create instances

Install with: pip install -e .
"""

__version__ = "0.1.0"

from .settings import BUILTIN_CLASSES, ParseSettings, load_settings, settings_from_config
from .config import RequestConfig, build_config
from .hooks import CollectionHooks, ModelHooks, extend_collection, extend_model
from .models import Collection, Model
from .rest_client import RestApiSync
from .registry import ConfigurationError, ModelRegistry, default_registry, set_default_registry
