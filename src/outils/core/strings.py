"""String helpers: base64, snake case, and localization lookup."""

from __future__ import annotations

import base64
import binascii
import gettext
import re

from outils.config import Settings
from outils.exceptions import AnyError

_DECODE_FAILED = "Base 64 Decode Failed"

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z]|[0-9])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


# ---------------------------------------------------------------------------
# Base64
# ---------------------------------------------------------------------------

def encode_base64(text: str) -> str:
    """Encode the UTF-8 bytes of *text* with standard base64."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_base64(encoded: str) -> str:
    """Decode standard base64 back into text.

    Raises
    ------
    AnyError
        When *encoded* is not valid, padded base64 or the payload is not
        UTF-8 text.
    """
    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise AnyError(
            _DECODE_FAILED,
            failure_reason=f"Input is not valid base64: {exc}",
        ) from exc
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise AnyError(
            _DECODE_FAILED,
            failure_reason="Decoded bytes are not valid UTF-8 text",
        ) from exc


# ---------------------------------------------------------------------------
# Case conversion
# ---------------------------------------------------------------------------

def to_snake_case(text: str) -> str:
    """Convert camel/Pascal case to snake case.

    Acronyms are kept together: ``HTTPServer`` becomes ``http_server``
    and ``userID2`` becomes ``user_id_2``.
    """
    split_acronyms = _ACRONYM_BOUNDARY.sub(r"\1_\2", text)
    return _WORD_BOUNDARY.sub(r"\1_\2", split_acronyms).lower()


# ---------------------------------------------------------------------------
# Localization
# ---------------------------------------------------------------------------

def localized(key: str, *args: object, settings: Settings | None = None) -> str:
    """Look up *key* in the configured gettext catalogue.

    Missing catalogues fall back to *key* itself.  Positional *args*
    are applied with ``%`` formatting.
    """
    active = settings if settings is not None else Settings.from_environment()
    translation = gettext.translation(
        active.text_domain,
        localedir=active.locale_dir,
        fallback=True,
    )
    text = translation.gettext(key)
    return text % args if args else text
