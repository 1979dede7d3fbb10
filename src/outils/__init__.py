"""outils — small Python conveniences.

Validated literals, call-site-aware error values, checked casts,
sequence and string helpers, and typed environment variable access.
"""

import logging

from outils.config import Settings, load_settings
from outils.core.casting import cast, cast_or_assert
from outils.core.environment import (
    Environment,
    EnvironmentKey,
    EnvironmentTable,
    EnvironmentValue,
    ProcessEnvironment,
)
from outils.core.literals import (
    URL,
    LiteralKind,
    LiteralSpec,
    date,
    link,
    mail_to,
    parse_literal,
    url,
    validate_literals,
)
from outils.core.optionals import assert_if_nil, filter_nil, must_exist
from outils.core.sequences import SortOrder, safe_get, sort_by, sorted_by
from outils.core.strings import decode_base64, encode_base64, localized, to_snake_case
from outils.exceptions import (
    AnyError,
    ErrorMessage,
    InvalidLiteralError,
    LiteralCheckError,
    OutilsError,
)
from outils.utils.callsite import CallSite
from outils.version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__: list[str] = [
    "URL",
    "AnyError",
    "CallSite",
    "Environment",
    "EnvironmentKey",
    "EnvironmentTable",
    "EnvironmentValue",
    "ErrorMessage",
    "InvalidLiteralError",
    "LiteralCheckError",
    "LiteralKind",
    "LiteralSpec",
    "OutilsError",
    "ProcessEnvironment",
    "Settings",
    "SortOrder",
    "__version__",
    "assert_if_nil",
    "cast",
    "cast_or_assert",
    "date",
    "decode_base64",
    "encode_base64",
    "filter_nil",
    "link",
    "load_settings",
    "localized",
    "mail_to",
    "must_exist",
    "parse_literal",
    "safe_get",
    "sort_by",
    "sorted_by",
    "to_snake_case",
    "url",
    "validate_literals",
]
