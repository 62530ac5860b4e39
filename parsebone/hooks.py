"""
Hooks - Parse conventions for the generic model layer.

ModelHooks and CollectionHooks are attached to a Model/Collection class by
extend_model() / extend_collection(). The generic layer then calls them at
construction, fetch and parse time:

  - objectId is the record identifier
  - Pointers under "owner", or under both "from" and "to", become live User
    models on construction
  - fetch(options={"query": {...}}) is sent as ?where=<json>
  - {"results": [...]} envelopes are unwrapped

Typical usage:
    class ChatMessage(Model):
        class_name = "ChatMessage"

    extend_model(ChatMessage, factory=registry.create_model)
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

ID_FIELD = "objectId"
TAG_FIELDS = ("className", "__type")
NESTED_CLASS = "User"

ModelFactory = Callable[[str, Dict[str, Any]], Any]


def _default_factory(class_name: str, attrs: Dict[str, Any]):
    from .registry import default_registry

    return default_registry().create_model(class_name, attrs)


def strip_pointer(reference: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of a Pointer without its type tags."""
    fields = dict(reference)
    for tag in TAG_FIELDS:
        fields.pop(tag, None)
    return fields


class ModelHooks:
    """Construction, fetch, parse and serialization hooks for Parse models."""

    def __init__(self, factory: Optional[ModelFactory] = None, log: Optional[logging.Logger] = None):
        self.factory = factory or _default_factory
        self.log = log or logger

    def _rehydrate(self, reference: Dict[str, Any]):
        return self.factory(NESTED_CLASS, strip_pointer(reference))

    def on_construct(self, model, attrs: Optional[Dict] = None, options: Optional[Dict] = None) -> None:
        attrs = dict(attrs or {})
        options = options or {}

        if attrs.get(ID_FIELD):
            self.log.info("initialize with id %s", attrs[ID_FIELD])
            model.set(ID_FIELD, attrs[ID_FIELD])
        else:
            self.log.debug("initialized without id")

        if attrs.get("owner"):
            self.log.info("initialize with owner %s", attrs["owner"].get(ID_FIELD))
            attrs["owner"] = self._rehydrate(attrs["owner"])

        # A lone "from" or "to" is kept as the raw Pointer.
        if attrs.get("from") and attrs.get("to"):
            attrs["from"] = self._rehydrate(attrs["from"])
            attrs["to"] = self._rehydrate(attrs["to"])

        model.set(attrs, options)

    def on_fetch(self, model, options: Optional[Dict], fetch: Callable[[Optional[Dict]], Any]) -> Any:
        if options is not None and options.get("query") is not None:
            options["data"] = {"where": json.dumps(options["query"], separators=(",", ":"))}
            del options["query"]
        return fetch(options)

    def on_parse(self, resp: Any) -> Any:
        if isinstance(resp, dict) and resp.get("results") is not None:
            results = resp["results"]
            return results[0] if results else None
        return resp

    def to_json(self, model, serialize: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
        return serialize()


class CollectionHooks:
    """Parse hooks for collections."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def on_parse(self, resp: Any) -> Optional[List[Dict[str, Any]]]:
        """Unwrap {"results": [...]}. Without an envelope nothing is parsed."""
        if isinstance(resp, dict) and resp.get("results") is not None:
            records = resp["results"]
            for record in records:
                self.set_id(record)
            return records
        self.log.debug("response has no results envelope, nothing parsed")
        return None

    def set_id(self, record: Optional[Dict[str, Any]]) -> None:
        if record and record.get(ID_FIELD):
            record["id"] = record[ID_FIELD]


def extend_model(model_cls, factory: Optional[ModelFactory] = None, log: Optional[logging.Logger] = None):
    """Attach ModelHooks to model_cls. Returns the class for chaining."""
    model_cls.hooks = ModelHooks(factory=factory, log=log)
    return model_cls


def extend_collection(collection_cls, log: Optional[logging.Logger] = None):
    """Attach CollectionHooks to collection_cls. Returns the class for chaining."""
    collection_cls.hooks = CollectionHooks(log=log)
    return collection_cls
