"""TypeIDs - typed, sortable, human-readable identifiers."""

from __future__ import annotations

from typeid.base32 import decode, encode
from typeid.errors import (
    ParseErrorReason,
    PrefixError,
    PrefixErrorReason,
    PrefixMismatchError,
    SeparatorError,
    SuffixError,
    SuffixErrorReason,
    TypeIDError,
)
from typeid.prefix import is_valid_prefix, validate_prefix
from typeid.typeid import (
    TypeID,
    TypeIDType,
    factory,
    format_typeid,
    parse,
    parse_or_none,
    parser,
    try_parse,
)


__all__ = [
    "ParseErrorReason",
    "PrefixError",
    "PrefixErrorReason",
    "PrefixMismatchError",
    "SeparatorError",
    "SuffixError",
    "SuffixErrorReason",
    "TypeID",
    "TypeIDError",
    "TypeIDType",
    "decode",
    "encode",
    "factory",
    "format_typeid",
    "is_valid_prefix",
    "parse",
    "parse_or_none",
    "parser",
    "try_parse",
    "validate_prefix",
]
