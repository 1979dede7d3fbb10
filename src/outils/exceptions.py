"""Custom exception hierarchy for outils.

Every error raised by the package inherits from :class:`OutilsError`,
so callers can catch the whole family with one clause and the CLI
error boundary can render a clean message plus an optional hint.

Hierarchy
---------
OutilsError
├── ErrorMessage          message + call site
├── AnyError              description / failure reason / recovery / help
├── InvalidLiteralError   a literal failed its format grammar
├── LiteralCheckError     one or more literals in a batch failed
├── SourceScanError       a source or table file could not be read
└── EnvironmentError      an optional runtime dependency is missing
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from outils.utils.callsite import CallSite, capture_call_site

DEFAULT_ERROR_MESSAGE = "An error occurred"
"""Message used by :class:`ErrorMessage` when none is supplied."""

_ANY_ERROR_FALLBACK = "The operation could not be completed."


class OutilsError(Exception):
    """Base exception for all outils errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Diagnostic error values ----------------------------------------------

class ErrorMessage(OutilsError):
    """An error carrying a message and the call site that produced it.

    When *call_site* is omitted the location of the code constructing
    the error is captured, so ``raise ErrorMessage("boom")`` points at
    the ``raise`` line.

    ``format(err, spec)`` renders a single component, where *spec* is
    one of ``message``, ``call_site``, ``file``, ``function``, ``line``
    or ``column``.
    """

    def __init__(
        self,
        message: str = DEFAULT_ERROR_MESSAGE,
        *,
        call_site: CallSite | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.message: str = message
        self.call_site: CallSite = (
            call_site if call_site is not None else capture_call_site()
        )

    @property
    def debug_description(self) -> str:
        """``file:function:line:column:message``."""
        return f"{self.call_site}:{self.message}"

    def __repr__(self) -> str:
        return f"ErrorMessage({self.message!r}, call_site={str(self.call_site)!r})"

    def __format__(self, format_spec: str) -> str:
        if not format_spec or format_spec == "message":
            return self.message
        if format_spec == "call_site":
            return str(self.call_site)
        if format_spec in ("file", "function", "line", "column"):
            return str(getattr(self.call_site, format_spec))
        raise ValueError(f"Unknown format spec for ErrorMessage: {format_spec!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorMessage):
            return NotImplemented
        return (self.message, self.call_site) == (other.message, other.call_site)

    def __hash__(self) -> int:
        return hash((self.message, self.call_site))

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible encoding of this error."""
        return {"message": self.message, "call_site": self.call_site.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ErrorMessage:
        """Decode an error produced by :meth:`to_dict`."""
        return cls(
            str(data["message"]),
            call_site=CallSite.from_dict(data["call_site"]),
        )


class AnyError(OutilsError):
    """A reusable, user-facing error value.

    Parameters
    ----------
    description:
        What went wrong.
    failure_reason:
        Why it went wrong.
    recovery_suggestion:
        How one might recover; also exposed as :attr:`hint`.
    help_anchor:
        Help text shown when the user asks for more.
    """

    def __init__(
        self,
        description: str | None = None,
        *,
        failure_reason: str | None = None,
        recovery_suggestion: str | None = None,
        help_anchor: str | None = None,
    ) -> None:
        super().__init__(description or _ANY_ERROR_FALLBACK, hint=recovery_suggestion)
        self.description: str | None = description
        self.failure_reason: str | None = failure_reason
        self.recovery_suggestion: str | None = recovery_suggestion
        self.help_anchor: str | None = help_anchor

    def _fields(self) -> tuple[str | None, ...]:
        return (
            self.description,
            self.failure_reason,
            self.recovery_suggestion,
            self.help_anchor,
        )

    def __repr__(self) -> str:
        return (
            f"AnyError({self.description!r}, failure_reason={self.failure_reason!r}, "
            f"recovery_suggestion={self.recovery_suggestion!r}, "
            f"help_anchor={self.help_anchor!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnyError):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self) -> int:
        return hash(self._fields())


# --- Validated literals ----------------------------------------------------

class InvalidLiteralError(OutilsError):
    """Raised when a literal does not satisfy its format grammar."""

    def __init__(
        self,
        kind: str,
        literal: str,
        reason: str,
        *,
        hint: str | None = None,
    ) -> None:
        super().__init__(f"Invalid {kind} literal {literal!r}: {reason}", hint=hint)
        self.kind: str = kind
        self.literal: str = literal
        self.reason: str = reason


class LiteralCheckError(OutilsError):
    """Raised when one or more literals in a batch fail validation.

    All failures are collected before raising so a single run reports
    every broken literal.
    """

    def __init__(
        self,
        failures: Sequence[InvalidLiteralError],
        *,
        hint: str | None = None,
    ) -> None:
        count = len(failures)
        noun = "literal" if count == 1 else "literals"
        lines = [f"{count} invalid {noun}:"]
        lines.extend(f"  {failure}" for failure in failures)
        super().__init__("\n".join(lines), hint=hint)
        self.failures: tuple[InvalidLiteralError, ...] = tuple(failures)


# --- Files -------------------------------------------------------------------

class SourceScanError(OutilsError):
    """Raised when a source or literal-table file cannot be read or parsed."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(OutilsError):
    """Raised when a required runtime dependency is not available."""
