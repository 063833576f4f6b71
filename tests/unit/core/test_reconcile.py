"""Precise unit tests for response reconciliation.

Tests focus on the decision order: sequence, single object, error, unknown.
"""

from __future__ import annotations

import pytest
from pydantic import BaseModel

from polymer.core import (
    EmptyOutcome,
    FailedOutcome,
    ManyOutcome,
    OneOutcome,
    PolymerError,
    TransportError,
    UnknownResponseError,
    classify_outcome,
    reconcile,
    reconcile_raw,
)
from polymer.models import Error, Result


class Foo(BaseModel):
    id: int


class Bar(BaseModel):
    id: int


class TestClassifyOutcome:
    """Test classify_outcome tagging."""

    def test_sequence(self):
        items = [Foo(id=1), Foo(id=2)]
        outcome = classify_outcome(items, None, Foo)
        assert outcome == ManyOutcome(items)

    def test_tuple_is_sequence(self):
        outcome = classify_outcome((Foo(id=1),), None, Foo)
        assert isinstance(outcome, ManyOutcome)
        assert outcome.items == [Foo(id=1)]

    def test_empty_sequence_is_sequence(self):
        assert classify_outcome([], None, Foo) == ManyOutcome([])

    def test_single(self):
        foo = Foo(id=1)
        assert classify_outcome(foo, None, Foo) == OneOutcome(foo)

    def test_mixed_sequence_is_not_usable(self):
        """A list with a foreign element is not a sequence of T."""
        outcome = classify_outcome([Foo(id=1), Bar(id=2)], None, Foo)
        assert isinstance(outcome, EmptyOutcome)

    def test_error(self):
        error = PolymerError("timeout")
        assert classify_outcome(None, error, Foo) == FailedOutcome(error)

    def test_plain_exception_is_wrapped(self):
        """Non-library exceptions become TransportError with the original as cause."""
        original = ConnectionResetError("reset by peer")
        outcome = classify_outcome(None, original, Foo)

        assert isinstance(outcome, FailedOutcome)
        assert isinstance(outcome.error, TransportError)
        assert outcome.error.message == "reset by peer"
        assert outcome.error.__cause__ is original

    def test_neither(self):
        assert classify_outcome(None, None, Foo) == EmptyOutcome(None, None)

    def test_wrong_type_result_without_error(self):
        outcome = classify_outcome({"id": 1}, None, Foo)
        assert outcome == EmptyOutcome({"id": 1}, None)


class TestReconcile:
    """Test reconcile output for every outcome."""

    def test_many_preserves_order(self):
        items = [Foo(id=3), Foo(id=1), Foo(id=2)]
        response = reconcile(ManyOutcome(items))
        assert response == Result(items)
        assert [foo.id for foo in response.items] == [3, 1, 2]

    def test_one_wraps_in_list(self):
        foo = Foo(id=1)
        response = reconcile(OneOutcome(foo))
        assert isinstance(response, Result)
        assert response.items == [foo]
        assert response.items[0] is foo

    def test_failed_passes_error_verbatim(self):
        error = PolymerError("timeout", domain="com.example.net", code=-1001)
        response = reconcile(FailedOutcome(error))
        assert isinstance(response, Error)
        assert response.error is error
        assert response.error.domain == "com.example.net"
        assert response.error.code == -1001

    def test_empty_synthesizes_unknown_error(self):
        response = reconcile(EmptyOutcome("weird", None))
        assert isinstance(response, Error)
        assert isinstance(response.error, UnknownResponseError)
        assert response.error.domain == "com.polymer.errordomain"
        assert response.error.code == 1
        assert response.error.message == "No Result: 'weird' or Error: None. Unknown."

    def test_unsupported_outcome(self):
        with pytest.raises(TypeError):
            reconcile("not an outcome")


class TestReconcileRaw:
    """Test precedence across the whole pipeline."""

    def test_result_wins_over_error(self):
        """A usable result is never dropped in favour of an error."""
        foo = Foo(id=1)
        response = reconcile_raw(foo, PolymerError("ignored"), Foo)
        assert response == Result([foo])

    def test_sequence_wins_over_error(self):
        items = [Foo(id=1)]
        response = reconcile_raw(items, PolymerError("ignored"), Foo)
        assert response == Result(items)

    def test_unusable_result_falls_back_to_error(self):
        error = PolymerError("bad gateway", code=502)
        response = reconcile_raw("garbage", error, Foo)
        assert response == Error(error)

    @pytest.mark.parametrize("raw_result", [None, "text", 42, {"id": 1}])
    def test_total(self, raw_result):
        """Every input without an error yields a well-formed Error."""
        response = reconcile_raw(raw_result, None, Foo)
        assert isinstance(response, Error)
        assert response.error.domain == "com.polymer.errordomain"
        assert response.error.message
