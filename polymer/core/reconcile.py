"""Response reconciliation: raw transport outcome -> typed ``Response``.

A transport completes with ``(raw_result, raw_error)``, where the result may be
a collection of mapped objects, a single object, or something unusable.
``classify_outcome`` turns that pair into a tagged ``RawOutcome``;
``reconcile`` turns the tagged outcome into exactly one ``Result`` or
``Error``.

Precedence:
    1. a sequence of T wins,
    2. then a single T,
    3. then the transport's error,
    4. otherwise a synthesized ``UnknownResponseError``.

The order matters: a transport that hands back both a usable result and an
error still yields the result, and an outcome with neither never gets dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeAlias, TypeVar

from ..models.response import Error, Response, Result
from .exceptions import PolymerError, TransportError, UnknownResponseError

T = TypeVar("T")


@dataclass(frozen=True)
class ManyOutcome(Generic[T]):
    items: list[T]


@dataclass(frozen=True)
class OneOutcome(Generic[T]):
    item: T


@dataclass(frozen=True)
class FailedOutcome:
    error: PolymerError


@dataclass(frozen=True)
class EmptyOutcome:
    """Neither a usable result nor an error; keeps the raw values for the message."""

    raw_result: Any = None
    raw_error: Any = None


RawOutcome: TypeAlias = ManyOutcome[T] | OneOutcome[T] | FailedOutcome | EmptyOutcome


def _as_polymer_error(error: BaseException) -> PolymerError:
    if isinstance(error, PolymerError):
        return error
    wrapped = TransportError(str(error) or error.__class__.__name__)
    wrapped.__cause__ = error
    return wrapped


def classify_outcome(raw_result: Any, raw_error: Any, result_type: type[T]) -> RawOutcome[T]:
    """Tag a raw ``(result, error)`` pair.

    Args:
        raw_result: Whatever the transport produced, possibly None
        raw_error: Error reported by the transport, possibly None
        result_type: Class every result object must be an instance of

    Returns:
        The matching RawOutcome variant
    """
    if isinstance(raw_result, (list, tuple)) and all(
        isinstance(item, result_type) for item in raw_result
    ):
        return ManyOutcome(list(raw_result))
    if isinstance(raw_result, result_type):
        return OneOutcome(raw_result)
    if isinstance(raw_error, BaseException):
        return FailedOutcome(_as_polymer_error(raw_error))
    return EmptyOutcome(raw_result=raw_result, raw_error=raw_error)


def reconcile(outcome: RawOutcome[T]) -> Response[T]:
    """Convert a tagged outcome into the response union."""
    match outcome:
        case ManyOutcome(items=items):
            return Result(items)
        case OneOutcome(item=item):
            return Result([item])
        case FailedOutcome(error=error):
            return Error(error)
        case EmptyOutcome(raw_result=raw_result, raw_error=raw_error):
            return Error(
                UnknownResponseError(
                    f"No Result: {raw_result!r} or Error: {raw_error!r}. Unknown."
                )
            )
    raise TypeError(f"Unsupported outcome: {outcome!r}")


def reconcile_raw(raw_result: Any, raw_error: Any, result_type: type[T]) -> Response[T]:
    """Classify and reconcile in one step."""
    return reconcile(classify_outcome(raw_result, raw_error, result_type))
