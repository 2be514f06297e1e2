"""Tests for dbapiext.utils.Binder: placeholders per paramstyle."""

import pytest

from dbapiext.utils import Binder


def test_named():
    binder = Binder("named")
    assert binder.bind("name", "Anna") == ":name"
    assert binder.parameters == {"name": "Anna"}


def test_pyformat():
    binder = Binder("pyformat")
    assert binder.bind("name", "Anna") == "%(name)s"
    assert binder.parameters == {"name": "Anna"}


def test_positional():
    qmark = Binder("qmark")
    assert qmark.bind("a", 1) == "?"
    assert qmark.bind("b", 2) == "?"
    assert qmark.parameters == [1, 2]
    assert Binder("format").bind("a", 1) == "%s"


def test_duplicate_names_are_suffixed():
    binder = Binder()
    assert binder.bind("id", 1) == ":id"
    assert binder.bind("id", 2) == ":id_2"
    assert binder.bind("id", 3) == ":id_3"
    assert binder.parameters == {"id": 1, "id_2": 2, "id_3": 3}
    assert len(binder) == 3


def test_names_are_sanitized():
    binder = Binder()
    assert binder.bind("first name", "Anna") == ":first_name"
    assert binder.bind("", 1) == ":p"


def test_inline():
    assert Binder("pyformat").inline("LIKE '10%'") == "LIKE '10%%'"
    assert Binder("format").inline("100%") == "100%%"
    assert Binder("named").inline("LIKE '10%'") == "LIKE '10%'"


def test_unknown_paramstyle():
    with pytest.raises(ValueError):
        Binder("numeric")
