"""Tests for the JSON key-value store."""

from __future__ import annotations

import json
import os
from unittest.mock import patch

import pytest

from focusflow.errors import PersistenceError
from focusflow.storage import JsonKeyValueStore


def test_get_missing_key(tmp_path):
    store = JsonKeyValueStore(tmp_path / "kv.json")
    assert store.get("anything") is None
    assert store.items() == {}


def test_set_and_get(tmp_path):
    store = JsonKeyValueStore(tmp_path / "nested" / "kv.json")
    store.set("a", "1")
    store.set_many({"b": "2", "c": 3})

    assert store.get("a") == "1"
    assert store.items() == {"a": "1", "b": "2", "c": "3"}


def test_values_read_back_as_strings(tmp_path):
    path = tmp_path / "kv.json"
    path.write_text(json.dumps({"n": 25, "skip": None}), encoding="utf-8")
    assert JsonKeyValueStore(path).items() == {"n": "25"}


def test_non_object_file_is_unreadable(tmp_path):
    path = tmp_path / "kv.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(PersistenceError):
        JsonKeyValueStore(path).get("a")


def test_unreadable_file_is_overwritten_on_write(tmp_path):
    path = tmp_path / "kv.json"
    path.write_text("garbage", encoding="utf-8")
    store = JsonKeyValueStore(path)
    store.set("a", "1")
    assert store.items() == {"a": "1"}


def test_failed_write_leaves_file_and_no_temp(tmp_path):
    path = tmp_path / "data" / "kv.json"
    store = JsonKeyValueStore(path)
    store.set_many({"a": "1", "b": "2"})

    with patch("focusflow.storage.os.replace", side_effect=OSError("read-only")):
        with pytest.raises(PersistenceError):
            store.set_many({"a": "9", "b": "9"})

    assert store.items() == {"a": "1", "b": "2"}
    assert os.listdir(path.parent) == ["kv.json"]
