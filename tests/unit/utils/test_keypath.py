"""Unit tests for dotted key-path lookup."""

from types import SimpleNamespace

from polymer.utils import MISSING, resolve_key_path


def test_nested_mapping():
    assert resolve_key_path({"data": {"items": [1, 2]}}, "data.items") == [1, 2]


def test_list_index():
    assert resolve_key_path({"data": [{"id": 7}, {"id": 8}]}, "data.1.id") == 8


def test_negative_index():
    assert resolve_key_path([1, 2, 3], "-1") == 3


def test_attribute_lookup():
    obj = SimpleNamespace(owner=SimpleNamespace(login="octocat"))
    assert resolve_key_path(obj, "owner.login") == "octocat"


def test_missing_returns_default():
    assert resolve_key_path({"data": {}}, "data.items") is MISSING
    assert resolve_key_path({"data": {}}, "data.items", default=None) is None


def test_out_of_range_index():
    assert resolve_key_path({"data": [1]}, "data.5") is MISSING


def test_empty_path_returns_root():
    root = {"a": 1}
    assert resolve_key_path(root, "") is root


def test_strings_are_not_indexed():
    assert resolve_key_path({"name": "abc"}, "name.0") is MISSING
