"""
Models - Generic model and collection layer.

Model holds one record's attributes, Collection an ordered list of models.
Neither knows anything about Parse: backend conventions are plugged in by
attaching a hooks object to the class (see parsebone.hooks), and requests go
through the class-level `sync` transport (see parsebone.rest_client).

Lifecycle points that consult `hooks` when one is attached:

    Model.__init__   -> hooks.on_construct(model, attrs, options)
    Model.fetch      -> hooks.on_fetch(model, options, fetch)
    Model.parse      -> hooks.on_parse(resp)
    Model.to_json    -> hooks.to_json(model, serialize)
    Collection.parse -> hooks.on_parse(resp)
"""

from typing import Any, Dict, Iterator, List, Optional


class Model:
    """A single record.

    Attributes:
        class_name: Backend class name.
        pointer_class: className written into Pointers. Defaults to class_name.
        id_attribute: Attribute holding the record identifier.
        defaults: Attributes every new instance starts with.
        hooks: Optional lifecycle hooks, shared by all instances of the class.
        sync: Transport with read/create/update/delete(target, options).
    """

    class_name: Optional[str] = None
    pointer_class: Optional[str] = None
    id_attribute = "objectId"
    defaults: Dict[str, Any] = {}
    hooks = None
    sync = None

    def __init__(self, attrs: Optional[Dict] = None, options: Optional[Dict] = None):
        self.attributes: Dict[str, Any] = dict(self.defaults)
        self.id = None
        self.validation_error = None

        if self.hooks is not None:
            self.hooks.on_construct(self, attrs, options)
        else:
            self.set(attrs or {}, options)

    def __repr__(self):
        return f"<{type(self).__name__} id={self.id!r}>"

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def has(self, key: str) -> bool:
        return self.attributes.get(key) is not None

    def set(self, key, value: Any = None, options: Optional[Dict] = None) -> bool:
        """Set one attribute (key, value) or several ({key: value}, options).

        With options={"validate": True} the change is checked by validate()
        first; a rejected change is not applied and validation_error is set.
        """
        if isinstance(key, dict):
            attrs, options = key, value
        else:
            attrs = {key: value}
        options = options or {}

        if options.get("validate"):
            error = self.validate({**self.attributes, **attrs}, options)
            if error:
                self.validation_error = error
                return False

        self.attributes.update(attrs)
        if self.id_attribute in attrs:
            self.id = attrs[self.id_attribute]
        return True

    def unset(self, key: str) -> None:
        self.attributes.pop(key, None)
        if key == self.id_attribute:
            self.id = None

    def validate(self, attrs: Dict, options: Dict) -> Optional[str]:
        """Return an error message to reject attrs. Override per class."""
        return None

    def is_valid(self) -> bool:
        self.validation_error = self.validate(dict(self.attributes), {})
        return self.validation_error is None

    @property
    def is_new(self) -> bool:
        return self.id is None

    def parse(self, resp: Any) -> Any:
        if self.hooks is not None:
            return self.hooks.on_parse(resp)
        return resp

    def to_json(self) -> Dict[str, Any]:
        if self.hooks is not None:
            return self.hooks.to_json(self, self._serialize)
        return self._serialize()

    def _serialize(self) -> Dict[str, Any]:
        return dict(self.attributes)

    def to_pointer(self) -> Dict[str, Any]:
        """Reference to this record in the form other records store it."""
        return {
            "__type": "Pointer",
            "className": self.pointer_class or self.class_name,
            "objectId": self.id,
        }

    def fetch(self, options: Optional[Dict] = None) -> "Model":
        if self.hooks is not None:
            return self.hooks.on_fetch(self, options, self._fetch)
        return self._fetch(options)

    def _fetch(self, options: Optional[Dict] = None) -> "Model":
        resp = self.sync.read(self, options or {})
        parsed = self.parse(resp)
        if parsed:
            self.set(parsed)
        return self

    def save(self, attrs: Optional[Dict] = None, options: Optional[Dict] = None) -> "Model":
        """Create the record if it is new, otherwise update it."""
        options = options or {}
        if attrs and not self.set(attrs, {"validate": True}):
            return self

        if self.is_new:
            resp = self.sync.create(self, options)
        else:
            resp = self.sync.update(self, options)

        parsed = self.parse(resp)
        if parsed:
            self.set(parsed)
        return self

    def destroy(self, options: Optional[Dict] = None) -> None:
        if self.is_new:
            return
        self.sync.delete(self, options or {})


class Collection:
    """An ordered set of models of one class.

    Attributes:
        model: Model class used to build records.
        hooks: Optional parse hooks, shared by all instances of the class.
        sync: Transport with read(target, options).
    """

    model = Model
    hooks = None
    sync = None

    def __init__(self, records: Optional[List] = None):
        self.models: List[Model] = []
        if records:
            self.set_records(records)

    def __len__(self) -> int:
        return len(self.models)

    def __iter__(self) -> Iterator[Model]:
        return iter(self.models)

    def __getitem__(self, index: int) -> Model:
        return self.models[index]

    def parse(self, resp: Any) -> Any:
        if self.hooks is not None:
            return self.hooks.on_parse(resp)
        return resp

    def set_records(self, records: Optional[List]) -> None:
        """Replace the contents. None (nothing parsed) empties the collection."""
        self.models = [self._prepare(record) for record in records or []]

    def _prepare(self, record) -> Model:
        if isinstance(record, Model):
            return record
        return self.model(record)

    def add(self, record) -> Model:
        model = self._prepare(record)
        self.models.append(model)
        return model

    def get(self, record_id: Any) -> Optional[Model]:
        for model in self.models:
            if model.id == record_id:
                return model
        return None

    def fetch(self, options: Optional[Dict] = None) -> "Collection":
        resp = self.sync.read(self, options or {})
        self.set_records(self.parse(resp))
        return self

    def to_json(self) -> List[Dict[str, Any]]:
        return [model.to_json() for model in self.models]
