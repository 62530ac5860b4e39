"""Tests for the generic Model / Collection layer without hooks."""

from unittest.mock import MagicMock
import pytest

from parsebone.models import Collection, Model


class ChatMessage(Model):
    class_name = "ChatMessage"
    defaults = {"message": ""}

    def validate(self, attrs, options):
        if not attrs.get("message"):
            return "message is empty"


def _with_sync(cls):
    return type(cls.__name__, (cls,), {"sync": MagicMock()})


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------

def test_defaults_are_copied_per_instance():
    a = ChatMessage()
    a.set("message", "hi")
    assert ChatMessage().get("message") == ""


def test_set_dict_and_id():
    model = Model()
    model.set({"objectId": "a", "x": 1})
    assert model.id == "a"
    assert model.get("x") == 1
    assert model.has("x")
    assert not model.has("y")


def test_unset_id():
    model = Model({"objectId": "a"})
    model.unset("objectId")
    assert model.id is None
    assert model.is_new


def test_set_with_validation_rejects():
    model = ChatMessage()
    assert model.set({"message": ""}, {"validate": True}) is False
    assert model.validation_error == "message is empty"


def test_is_valid():
    assert ChatMessage({"message": "hi"}).is_valid()
    assert not ChatMessage().is_valid()


def test_to_pointer():
    model = ChatMessage({"objectId": "m1", "message": "hi"})
    assert model.to_pointer() == {"__type": "Pointer", "className": "ChatMessage", "objectId": "m1"}


def test_to_json_is_a_copy():
    model = ChatMessage({"message": "hi"})
    data = model.to_json()
    data["message"] = "changed"
    assert model.get("message") == "hi"


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

def test_save_new_creates():
    cls = _with_sync(ChatMessage)
    cls.sync.create.return_value = {"objectId": "new1", "createdAt": "2026-01-01T00:00:00.000Z"}
    model = cls().save({"message": "hi"})
    cls.sync.create.assert_called_once()
    assert model.id == "new1"
    assert model.get("createdAt") == "2026-01-01T00:00:00.000Z"


def test_save_existing_updates():
    cls = _with_sync(ChatMessage)
    cls.sync.update.return_value = {"updatedAt": "2026-01-02T00:00:00.000Z"}
    model = cls({"objectId": "m1", "message": "hi"}).save()
    cls.sync.update.assert_called_once_with(model, {})
    cls.sync.create.assert_not_called()


def test_save_invalid_skips_request():
    cls = _with_sync(ChatMessage)
    model = cls().save({"message": ""})
    assert model.validation_error == "message is empty"
    cls.sync.create.assert_not_called()


def test_destroy_new_model_is_noop():
    cls = _with_sync(ChatMessage)
    cls().destroy()
    cls.sync.delete.assert_not_called()


def test_destroy_existing():
    cls = _with_sync(ChatMessage)
    model = cls({"objectId": "m1"})
    model.destroy()
    cls.sync.delete.assert_called_once_with(model, {})


def test_fetch_without_hooks_sets_response():
    cls = _with_sync(Model)
    cls.sync.read.return_value = {"objectId": "a", "x": 1}
    model = cls({"objectId": "a"}).fetch()
    assert model.get("x") == 1


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------

def test_collection_from_records():
    collection = Collection([{"objectId": "a"}, Model({"objectId": "b"})])
    assert len(collection) == 2
    assert collection[1].id == "b"
    assert collection.get("a") is collection[0]
    assert collection.get("missing") is None


def test_collection_add_and_to_json():
    collection = Collection()
    collection.add({"objectId": "a"})
    assert collection.to_json() == [{"objectId": "a"}]


def test_collection_set_records_none_empties():
    collection = Collection([{"objectId": "a"}])
    collection.set_records(None)
    assert len(collection) == 0
