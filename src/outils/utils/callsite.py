"""Call-site capture for diagnostic error values.

A :class:`CallSite` records where an error-producing operation was
invoked: the file (as ``package/module.py``), the qualified function
name, and the 1-based line and column.  Columns are ``0`` when the
interpreter cannot report them.
"""

from __future__ import annotations

import inspect
from dataclasses import asdict, dataclass
from pathlib import PurePath
from types import FrameType
from typing import Any

_UNKNOWN = "<unknown>"


@dataclass(frozen=True, slots=True)
class CallSite:
    """Source location of a call, rendered as ``file:function:line:column``."""

    file: str
    """Trailing two components of the source path (e.g. ``pkg/mod.py``)."""

    function: str
    """Qualified name of the function containing the call."""

    line: int
    """1-based line number."""

    column: int
    """1-based column number, or ``0`` when unavailable."""

    def __str__(self) -> str:
        return ":".join((self.file, self.function, str(self.line), str(self.column)))

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible mapping of the four fields."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CallSite:
        """Inverse of :meth:`to_dict`."""
        return cls(
            file=str(data["file"]),
            function=str(data["function"]),
            line=int(data["line"]),
            column=int(data["column"]),
        )

    @classmethod
    def from_frame(cls, frame: FrameType) -> CallSite:
        """Build a call site from a live interpreter frame."""
        info = inspect.getframeinfo(frame, context=0)
        positions = getattr(info, "positions", None)
        col_offset = positions.col_offset if positions is not None else None
        return cls(
            file=_file_id(frame.f_code.co_filename),
            function=frame.f_code.co_qualname,
            line=frame.f_lineno,
            column=col_offset + 1 if col_offset is not None else 0,
        )


def _file_id(filename: str) -> str:
    parts = PurePath(filename).parts
    return "/".join(parts[-2:]) if parts else _UNKNOWN


def capture_call_site(depth: int = 1) -> CallSite:
    """Return the call site *depth* frames above the caller.

    ``depth=0`` is the function calling :func:`capture_call_site`;
    ``depth=1`` (the default) is that function's caller, which is what
    helpers such as :func:`~outils.core.casting.cast` report.
    """
    frame = inspect.currentframe()
    try:
        target = frame.f_back if frame is not None else None
        for _ in range(depth):
            if target is None:
                break
            target = target.f_back
        if target is None:
            return CallSite(_UNKNOWN, _UNKNOWN, 0, 0)
        return CallSite.from_frame(target)
    finally:
        # Break the reference cycle between this frame and its locals.
        del frame
