"""Checked casts.

:func:`cast` raises :class:`~outils.exceptions.ErrorMessage` pointing at
the caller when *value* is not an instance of the requested type;
:func:`cast_or_assert` routes the same failure through the debug
assertion policy and returns ``None``.

Messages may be plain strings or zero-argument callables, which are
only evaluated when the cast fails.
"""

from __future__ import annotations

import types
from collections.abc import Callable
from typing import Any, TypeVar, Union, get_args, get_origin

from outils.core.assertions import assertion_failure
from outils.exceptions import ErrorMessage
from outils.utils.callsite import CallSite, capture_call_site

T = TypeVar("T")

MessageLike = str | Callable[[], str] | None


def resolve_message(message: MessageLike, default: Callable[[], str]) -> str:
    """Evaluate a lazily supplied message, falling back to *default*."""
    if message is None:
        return default()
    if callable(message):
        return message()
    return message


def _type_name(type_: Any) -> str:
    return getattr(type_, "__qualname__", None) or repr(type_)


def _matches(value: Any, type_: Any) -> bool:
    if type_ is Any or type_ is object:
        return True
    origin = get_origin(type_)
    if origin is Union or origin is types.UnionType:
        return any(_matches(value, member) for member in get_args(type_))
    return isinstance(value, origin if isinstance(origin, type) else type_)


def _check(value: Any, type_: Any, call_site: CallSite | None) -> bool:
    try:
        return _matches(value, type_)
    except TypeError as exc:
        raise ErrorMessage(
            f"Cannot cast to unsupported type {_type_name(type_)}: {exc}",
            call_site=call_site if call_site is not None else capture_call_site(2),
        ) from exc


def _default_message(value: Any, type_: Any) -> Callable[[], str]:
    return lambda: f"Could not cast value {value!r} to type {_type_name(type_)}"


def cast(
    value: Any,
    type_: type[T],
    message: MessageLike = None,
    *,
    call_site: CallSite | None = None,
) -> T:
    """Return *value* typed as *type_*, or raise.

    Generic aliases such as ``list[int]`` are checked against their
    origin (``list``); element types are not inspected.  Unions match
    when any member matches, and ``typing.Any`` matches everything.

    Raises
    ------
    ErrorMessage
        When *value* is not an instance of *type_*, or *type_* cannot be
        checked at runtime (a ``TypeVar`` or ``Literal``, for example).
    """
    if _check(value, type_, call_site):
        return value
    raise ErrorMessage(
        resolve_message(message, _default_message(value, type_)),
        call_site=call_site if call_site is not None else capture_call_site(),
    )


def cast_or_assert(
    value: Any,
    type_: type[T],
    message: MessageLike = None,
    *,
    call_site: CallSite | None = None,
) -> T | None:
    """Return *value* typed as *type_*, or ``None`` after an assertion failure.

    An unsupported *type_* raises :class:`ErrorMessage` as in :func:`cast`.
    """
    if _check(value, type_, call_site):
        return value
    assertion_failure(
        resolve_message(message, _default_message(value, type_)),
        call_site if call_site is not None else capture_call_site(),
    )
    return None
