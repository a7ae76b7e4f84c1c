"""Error taxonomy for TypeID validation, encoding and parsing."""

from __future__ import annotations

from enum import StrEnum


class PrefixErrorReason(StrEnum):
    """Why a prefix was rejected."""

    EMPTY_SEGMENT = "empty_segment"
    INVALID_CHARACTER = "invalid_character"
    TOO_LONG = "too_long"


class SuffixErrorReason(StrEnum):
    """Why a suffix was rejected."""

    INVALID_LENGTH = "invalid_length"
    INVALID_CHARACTER = "invalid_character"
    SUFFIX_OVERFLOW = "suffix_overflow"


class ParseErrorReason(StrEnum):
    """Failures that belong to neither the prefix nor the suffix."""

    MALFORMED_SEPARATOR = "malformed_separator"
    PREFIX_MISMATCH = "prefix_mismatch"


class TypeIDError(ValueError):
    """Raised when TypeID parsing or validation fails.

    Attributes:
        reason: Machine-readable reason for the failure.
        position: Index of the offending character, if one can be named.
    """

    def __init__(
        self,
        message: str,
        reason: PrefixErrorReason | SuffixErrorReason | ParseErrorReason,
        position: int | None = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.position = position

    def __reduce__(self) -> tuple[type[TypeIDError], tuple[str, StrEnum, int | None]]:
        return (type(self), (str(self), self.reason, self.position))


class PrefixError(TypeIDError):
    """Raised when a prefix violates the prefix grammar."""

    reason: PrefixErrorReason


class SuffixError(TypeIDError):
    """Raised when a suffix cannot be decoded to 128 bits."""

    reason: SuffixErrorReason


class SeparatorError(TypeIDError):
    """Raised when the '_' separator is used without a prefix."""

    reason: ParseErrorReason


class PrefixMismatchError(TypeIDError):
    """Raised when a valid TypeID carries a different prefix than expected."""

    reason: ParseErrorReason


__all__ = [
    "ParseErrorReason",
    "PrefixError",
    "PrefixErrorReason",
    "PrefixMismatchError",
    "SeparatorError",
    "SuffixError",
    "SuffixErrorReason",
    "TypeIDError",
]
