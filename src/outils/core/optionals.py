"""Helpers for values that may be ``None``."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from outils.core.assertions import assertion_failure
from outils.core.casting import MessageLike, resolve_message
from outils.exceptions import ErrorMessage
from outils.utils.callsite import CallSite, capture_call_site

T = TypeVar("T")

MISSING_VALUE_MESSAGE = "A required value was None"


def _default() -> str:
    return MISSING_VALUE_MESSAGE


def must_exist(
    value: T | None,
    message: MessageLike = None,
    *,
    call_site: CallSite | None = None,
) -> T:
    """Return *value*, raising :class:`ErrorMessage` when it is ``None``.

    The error carries the caller's call site and either *message* or
    :data:`MISSING_VALUE_MESSAGE`.
    """
    if value is not None:
        return value
    raise ErrorMessage(
        resolve_message(message, _default),
        call_site=call_site if call_site is not None else capture_call_site(),
    )


def assert_if_nil(
    value: T | None,
    message: MessageLike = None,
    *,
    call_site: CallSite | None = None,
) -> T | None:
    """Return *value* unchanged, signalling an assertion failure when ``None``."""
    if value is None:
        assertion_failure(
            resolve_message(message, _default),
            call_site if call_site is not None else capture_call_site(),
        )
    return value


def filter_nil(values: Iterable[T | None]) -> list[T]:
    """Return the elements of *values* that are not ``None``, in order."""
    return [value for value in values if value is not None]
