"""Typed, read-only access to process environment variables.

Values are read from the source mapping at call time and never cached,
so lookups always reflect the current process snapshot.

Quick reference::

    env = Environment()
    if env["USE_DEVELOPER_MODE"] == True:
        ...
    retries = env.get_int("RETRY_AMOUNT", default=3)

Keys may be plain strings or string-valued :class:`enum.Enum` members.
An environment with a *namespace* prefixes every key, so
``Environment(namespace="MYAPP")["API_KEY"]`` reads ``MYAPP_API_KEY``.

Configuration tables replace per-type key protocols with an explicit
mapping from key name to coercion function; see :class:`EnvironmentKey`
and :class:`EnvironmentTable`.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from pathlib import Path
from typing import Any, ClassVar, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

EnvironmentKeyLike = str | Enum

TRUTHY_VALUES: frozenset[str] = frozenset({"1", "true", "YES"})
"""Raw strings that coerce to ``True``; anything else is ``False``."""

_TRUE_LITERAL = "YES"
_FALSE_LITERAL = "NO"


# ---------------------------------------------------------------------------
# Coercions
# ---------------------------------------------------------------------------

def coerce_str(raw: str | None) -> str | None:
    """Identity coercion; ``None`` stays ``None``."""
    return raw


def coerce_bool(raw: str | None) -> bool:
    """``"1"``, ``"true"`` and ``"YES"`` are true; everything else is false."""
    return raw in TRUTHY_VALUES


def coerce_int(raw: str | None) -> int:
    """Parse an integer, falling back to ``0``."""
    if raw is None:
        return 0
    try:
        return int(raw)
    except ValueError:
        logger.debug("Environment value %r is not an integer; using 0", raw)
        return 0


def coerce_float(raw: str | None) -> float:
    """Parse a float, falling back to ``0.0``."""
    if raw is None:
        return 0.0
    try:
        return float(raw)
    except ValueError:
        logger.debug("Environment value %r is not a float; using 0.0", raw)
        return 0.0


COERCIONS: dict[str, Callable[[str | None], Any]] = {
    "str": coerce_str,
    "bool": coerce_bool,
    "int": coerce_int,
    "float": coerce_float,
}
"""Coercion functions by type name."""


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------

@total_ordering
class EnvironmentValue:
    """A single environment value with typed views.

    Values compare equal to other values with the same raw text, and to
    ``str``/``int``/``float``/``bool`` literals rendered the same way
    (booleans as ``YES``/``NO``).  Ordering uses :attr:`int_value`.

    The hash is that of the raw text, so it agrees with ``str`` but not
    with ``int``, ``float`` or ``bool``: ``EnvironmentValue("5") == 5``
    holds while ``hash(EnvironmentValue("5")) != hash(5)``.  Do not mix
    values and non-string literals as keys of one ``dict`` or ``set``;
    convert with :attr:`int_value` or :attr:`bool_value` first.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: str) -> None:
        self._raw = raw

    @classmethod
    def of(cls, literal: str | int | float | bool) -> EnvironmentValue:
        """Build a value from a Python literal."""
        if isinstance(literal, bool):
            return cls(_TRUE_LITERAL if literal else _FALSE_LITERAL)
        return cls(str(literal))

    @property
    def string_value(self) -> str:
        return self._raw

    @property
    def int_value(self) -> int:
        return coerce_int(self._raw)

    @property
    def float_value(self) -> float:
        return coerce_float(self._raw)

    @property
    def bool_value(self) -> bool:
        return coerce_bool(self._raw)

    @staticmethod
    def _coerce_other(other: object) -> EnvironmentValue | None:
        if isinstance(other, EnvironmentValue):
            return other
        if isinstance(other, (str, int, float, bool)):
            return EnvironmentValue.of(other)
        return None

    def __eq__(self, other: object) -> bool:
        rhs = self._coerce_other(other)
        if rhs is None:
            return NotImplemented
        return self._raw == rhs._raw

    def __lt__(self, other: object) -> bool:
        rhs = self._coerce_other(other)
        if rhs is None:
            return NotImplemented
        return self.int_value < rhs.int_value

    def __hash__(self) -> int:
        return hash(self._raw)

    def __str__(self) -> str:
        return self._raw

    def __repr__(self) -> str:
        return f"EnvironmentValue({self._raw!r})"


# ---------------------------------------------------------------------------
# Environment view
# ---------------------------------------------------------------------------

def _key_name(key: EnvironmentKeyLike) -> str:
    if isinstance(key, Enum):
        return str(key.value)
    return key


class Environment:
    """Read-only view over a key/value source (``os.environ`` by default).

    Parameters
    ----------
    source:
        Mapping to read from.  When ``None``, :data:`os.environ` is
        consulted on every lookup.
    namespace:
        Optional prefix joined to every key with an underscore.
    """

    def __init__(
        self,
        source: Mapping[str, str] | None = None,
        *,
        namespace: str | None = None,
    ) -> None:
        self._source = source
        self.namespace: str | None = namespace

    @classmethod
    def from_dotenv(
        cls,
        path: str | Path,
        *,
        namespace: str | None = None,
    ) -> Environment:
        """Build a view over the values declared in a ``.env`` file.

        Keys declared without a value are treated as unset.
        """
        from dotenv import dotenv_values

        values = {
            key: value
            for key, value in dotenv_values(path).items()
            if value is not None
        }
        return cls(values, namespace=namespace)

    @property
    def source(self) -> Mapping[str, str]:
        return self._source if self._source is not None else os.environ

    def with_namespace(self, namespace: str | None) -> Environment:
        """Return a view over the same source with a different namespace."""
        return Environment(self._source, namespace=namespace)

    def key_for(self, key: EnvironmentKeyLike) -> str:
        """Return the fully qualified variable name for *key*."""
        name = _key_name(key)
        if self.namespace is None:
            return name
        return f"{self.namespace}_{name}"

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------

    def raw_value(self, key: EnvironmentKeyLike) -> str | None:
        return self.source.get(self.key_for(key))

    def contains(self, key: EnvironmentKeyLike) -> bool:
        return self.raw_value(key) is not None

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, Enum)):
            return False
        return self.contains(key)

    def __getitem__(self, key: EnvironmentKeyLike) -> EnvironmentValue | None:
        raw = self.raw_value(key)
        return EnvironmentValue(raw) if raw is not None else None

    def keys(self) -> Iterator[str]:
        """Yield the variable names visible through this view."""
        if self.namespace is None:
            yield from self.source
            return
        prefix = f"{self.namespace}_"
        for name in self.source:
            if name.startswith(prefix):
                yield name[len(prefix):]

    # ------------------------------------------------------------------
    # Typed access
    # ------------------------------------------------------------------

    def value(self, key: EnvironmentKeyLike, coerce: Callable[[str | None], T]) -> T:
        """Coerce the raw value of *key* with *coerce*."""
        return coerce(self.raw_value(key))

    def get_str(self, key: EnvironmentKeyLike, default: str | None = None) -> str | None:
        raw = self.raw_value(key)
        return raw if raw is not None else default

    def get_bool(self, key: EnvironmentKeyLike, default: bool = False) -> bool:
        raw = self.raw_value(key)
        return coerce_bool(raw) if raw is not None else default

    def get_int(self, key: EnvironmentKeyLike, default: int = 0) -> int:
        raw = self.raw_value(key)
        return coerce_int(raw) if raw is not None else default

    def get_float(self, key: EnvironmentKeyLike, default: float = 0.0) -> float:
        raw = self.raw_value(key)
        return coerce_float(raw) if raw is not None else default

    def __repr__(self) -> str:
        origin = "os.environ" if self._source is None else "custom source"
        return f"Environment({origin}, namespace={self.namespace!r})"


# ---------------------------------------------------------------------------
# Configuration tables
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EnvironmentKey(Generic[T]):
    """One entry in an :class:`EnvironmentTable`.

    When the variable is unset and *default* is not ``None``, the
    default is returned without calling *coerce*.
    """

    name: str
    coerce: Callable[[str | None], T]
    default: T | None = None

    def read(self, env: Environment) -> T | None:
        raw = env.raw_value(self.name)
        if raw is None and self.default is not None:
            return self.default
        return self.coerce(raw)


class EnvironmentTable:
    """An explicit, enumerated set of environment keys and their coercions."""

    def __init__(
        self,
        keys: Iterable[EnvironmentKey[Any]],
        *,
        namespace: str | None = None,
    ) -> None:
        self._keys: tuple[EnvironmentKey[Any], ...] = tuple(keys)
        self.namespace: str | None = namespace
        names = [key.name for key in self._keys]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate keys in environment table: {names}")

    def __iter__(self) -> Iterator[EnvironmentKey[Any]]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def resolve(self, env: Environment | None = None) -> dict[str, Any]:
        """Read and coerce every key, returning ``{name: value}``."""
        base = env if env is not None else Environment()
        scoped = base.with_namespace(self.namespace) if self.namespace else base
        return {key.name: key.read(scoped) for key in self._keys}


# ---------------------------------------------------------------------------
# Process-wide accessors
# ---------------------------------------------------------------------------

class ProcessEnvironment:
    """Process-wide environment variables and command-line arguments."""

    variables: ClassVar[Environment] = Environment()

    @staticmethod
    def arguments() -> list[str]:
        return list(sys.argv)
