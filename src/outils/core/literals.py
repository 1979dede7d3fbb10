"""Validated literals — URLs, links, mail-to addresses and dates.

A validated literal is built from fixed text whose format is checked
before the value can be used.  The constructors in this module raise
:class:`~outils.exceptions.InvalidLiteralError` immediately, so module
level constants fail at import time::

    HOMEPAGE = link("https://example.com")
    LAUNCH = date("08-22-1995")

For a check that runs before the program does, ``outils check``
validates every constructor call found in a source tree without
executing it, and ``outils generate`` turns a literal table into a
module of pre-validated constants.

Grammars
--------
``url``
    Non-empty, no whitespace, control or unsafe characters, well-formed
    percent escapes, and a parseable port when one is given.
``link``
    A ``url`` with an ``http``/``https`` scheme and a host.
``mail_to``
    An e-mail address (an optional ``mailto:`` prefix is tolerated),
    producing a ``mailto:`` URL.
``date``
    One of :data:`DATE_FORMATS`, tried in order.
"""

from __future__ import annotations

import datetime
import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any
from urllib.parse import SplitResult, urlsplit

from outils.exceptions import InvalidLiteralError, LiteralCheckError

logger = logging.getLogger(__name__)


class LiteralKind(StrEnum):
    """Target formats understood by the literal constructors."""

    URL = "url"
    LINK = "link"
    MAIL_TO = "mail_to"
    DATE = "date"


DATE_FORMATS: tuple[str, ...] = (
    "%m-%d-%Y",
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
)
"""``strptime`` patterns accepted by :func:`date`, in priority order."""

LINK_SCHEMES: frozenset[str] = frozenset({"http", "https"})

_UNSAFE_URL_CHARS = frozenset('<>"{}|\\^`')
_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_MAILTO_PREFIX = "mailto:"
_EMAIL = re.compile(
    r"^(?!\.)(?!.*\.\.)[A-Za-z0-9.!$&'*+=_~-]+(?<!\.)"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+$"
)


# ---------------------------------------------------------------------------
# Value type
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class URL:
    """An immutable, already validated resource locator."""

    text: str
    """The literal exactly as written."""

    scheme: str
    netloc: str
    host: str
    """Lower-cased host name, or ``""`` when the URL has none."""

    port: int | None
    path: str
    query: str
    fragment: str

    def __str__(self) -> str:
        return self.text

    @property
    def is_link(self) -> bool:
        """Whether this URL would also pass :func:`link`."""
        return self.scheme in LINK_SCHEMES and bool(self.host)


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------

def _invalid(kind: LiteralKind, text: str, reason: str, hint: str | None = None) -> InvalidLiteralError:
    return InvalidLiteralError(str(kind), text, reason, hint=hint)


def _split(kind: LiteralKind, text: str) -> tuple[SplitResult, int | None]:
    if not text:
        raise _invalid(kind, text, "must not be empty")
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in text):
        raise _invalid(
            kind, text, "contains whitespace or control characters",
            hint="Percent-encode spaces as %20.",
        )
    unsafe = sorted(set(text) & _UNSAFE_URL_CHARS)
    if unsafe:
        raise _invalid(kind, text, f"contains characters not allowed in a URL: {''.join(unsafe)}")
    if _BAD_PERCENT_ESCAPE.search(text):
        raise _invalid(kind, text, "contains a malformed percent escape")
    try:
        parts = urlsplit(text)
        port = parts.port
    except ValueError as exc:
        raise _invalid(kind, text, str(exc)) from exc
    return parts, port


def _build(kind: LiteralKind, text: str) -> URL:
    parts, port = _split(kind, text)
    return URL(
        text=text,
        scheme=parts.scheme,
        netloc=parts.netloc,
        host=parts.hostname or "",
        port=port,
        path=parts.path,
        query=parts.query,
        fragment=parts.fragment,
    )


def url(text: str) -> URL:
    """Validate *text* as a URL.

    Raises
    ------
    InvalidLiteralError
        When *text* is not a well-formed URL.
    """
    value = _build(LiteralKind.URL, text)
    logger.debug("Validated url literal %r", text)
    return value


def link(text: str) -> URL:
    """Validate *text* as an absolute ``http``/``https`` URL with a host.

    Raises
    ------
    InvalidLiteralError
        When *text* is malformed, uses another scheme, or has no host.
    """
    value = _build(LiteralKind.LINK, text)
    if value.scheme not in LINK_SCHEMES:
        raise _invalid(
            LiteralKind.LINK, text,
            f"scheme must be http or https, not {value.scheme or 'missing'}",
            hint="Write the full address, e.g. https://example.com",
        )
    if not value.host:
        raise _invalid(LiteralKind.LINK, text, "has no host")
    logger.debug("Validated link literal %r", text)
    return value


def mail_to(address: str) -> URL:
    """Validate an e-mail address and return its ``mailto:`` URL.

    Raises
    ------
    InvalidLiteralError
        When *address* is not a valid e-mail address.
    """
    bare = address[len(_MAILTO_PREFIX):] if address.lower().startswith(_MAILTO_PREFIX) else address
    if not _EMAIL.match(bare):
        raise _invalid(
            LiteralKind.MAIL_TO, address, "is not a valid e-mail address",
            hint="Expected the form name@example.com",
        )
    try:
        value = _build(LiteralKind.MAIL_TO, _MAILTO_PREFIX + bare)
    except InvalidLiteralError as exc:
        raise _invalid(LiteralKind.MAIL_TO, address, exc.reason, exc.hint) from exc
    logger.debug("Validated mail_to literal %r", address)
    return value


def date(text: str) -> datetime.date:
    """Parse *text* with the first matching pattern in :data:`DATE_FORMATS`.

    Raises
    ------
    InvalidLiteralError
        When no pattern matches or the date does not exist.
    """
    candidate = text.strip()
    for pattern in DATE_FORMATS:
        try:
            parsed = datetime.datetime.strptime(candidate, pattern).date()
        except ValueError:
            continue
        logger.debug("Validated date literal %r using %s", text, pattern)
        return parsed
    raise _invalid(
        LiteralKind.DATE, text, "does not match any supported date format",
        hint="Use MM-DD-YYYY, YYYY-MM-DD, MM/DD/YYYY or 'August 22, 1995'.",
    )


PARSERS: dict[LiteralKind, Callable[[str], Any]] = {
    LiteralKind.URL: url,
    LiteralKind.LINK: link,
    LiteralKind.MAIL_TO: mail_to,
    LiteralKind.DATE: date,
}
"""Constructor for each literal kind."""


def parse_literal(kind: LiteralKind | str, text: str) -> Any:
    """Dispatch *text* to the constructor for *kind*.

    Raises
    ------
    InvalidLiteralError
        When *text* fails validation.
    ValueError
        When *kind* is not a known :class:`LiteralKind`.
    """
    return PARSERS[LiteralKind(kind)](text)


# ---------------------------------------------------------------------------
# Batch validation
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LiteralSpec:
    """A named literal declaration awaiting validation."""

    name: str
    kind: LiteralKind
    text: str


def validate_literals(specs: Iterable[LiteralSpec]) -> dict[str, Any]:
    """Validate every spec and return ``{name: value}``.

    Failures are collected so one call reports every broken literal.

    Raises
    ------
    LiteralCheckError
        When at least one literal is invalid.
    """
    values: dict[str, Any] = {}
    failures: list[InvalidLiteralError] = []
    for spec in specs:
        try:
            values[spec.name] = parse_literal(spec.kind, spec.text)
        except InvalidLiteralError as exc:
            failures.append(exc)
    if failures:
        raise LiteralCheckError(failures, hint="Fix the literals above; no values were produced.")
    return values
