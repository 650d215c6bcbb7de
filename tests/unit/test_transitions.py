# tests/unit/test_transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from types import SimpleNamespace

import pytest

from eventstate.core.errors import ConfigurationError
from eventstate.core.transitions import PossibleTransitions, UnrestrictedTransitions, as_possible_transitions


def test_mapping_lookup(transitions):
    table = PossibleTransitions(transitions)
    assert table.get("pending") == ("approve", "cancel")
    assert table.has("pending", "cancel")
    assert not table.has("pending", "ship")


def test_missing_state_is_empty(transitions):
    table = PossibleTransitions(transitions)
    assert table.get("shipped") == ()
    assert not table.has("shipped", "ship")


def test_none_source_is_empty():
    table = PossibleTransitions()
    assert table.get("draft") == ()
    assert not table.has("draft", "submit")


def test_single_string_value():
    table = PossibleTransitions({"draft": "submit"})
    assert table.get("draft") == ("submit",)


def test_none_value_is_empty():
    table = PossibleTransitions({"draft": None})
    assert table.get("draft") == ()


def test_callable_source():
    table = PossibleTransitions(lambda state: ["reset"] if state == "error" else None)
    assert table.get("error") == ("reset",)
    assert table.get("idle") == ()


def test_callable_source_raising_lookup_error():
    def lookup(state):
        raise KeyError(state)

    assert PossibleTransitions(lookup).get("idle") == ()


def test_getitem_container_source():
    class Container:
        def __getitem__(self, key):
            if key == "draft":
                return ["submit"]
            raise KeyError(key)

    table = PossibleTransitions(Container())
    assert table.get("draft") == ("submit",)
    assert table.get("pending") == ()


def test_attribute_source():
    table = PossibleTransitions(SimpleNamespace(draft=["submit"], pending=["approve"]))
    assert table.get("draft") == ("submit",)
    assert table.get("approved") == ()


@pytest.mark.parametrize("source", ["draft", ["draft"], ("draft",), 42])
def test_invalid_source(source):
    with pytest.raises(ConfigurationError):
        PossibleTransitions(source)


def test_unrestricted_transitions():
    table = UnrestrictedTransitions()
    assert table.has("anything", "whatever")
    assert table.get("anything") == ()


def test_as_possible_transitions_keeps_tables(transitions):
    table = PossibleTransitions(transitions)
    assert as_possible_transitions(table) is table
    wrapped = as_possible_transitions(transitions)
    assert isinstance(wrapped, PossibleTransitions)
    assert wrapped.get("draft") == ("submit",)


def test_subscriptable_callable_source_uses_getitem():
    class Table:
        def __getitem__(self, key):
            if key == "draft":
                return ["submit"]
            raise KeyError(key)

        def __call__(self, state):
            return ["called"]

    table = PossibleTransitions(Table())
    assert table.get("draft") == ("submit",)
    assert table.get("pending") == ()
