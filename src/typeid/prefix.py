"""Prefix grammar for TypeIDs."""

from __future__ import annotations

from typeid.errors import PrefixError, PrefixErrorReason


PREFIX_MAX_LENGTH = 63
SEPARATOR = "_"


def validate_prefix(prefix: str) -> None:
    """Validate a TypeID prefix.

    Checks run in order: length, character set, then underscore placement,
    so a prefix that is both too long and malformed reports ``TOO_LONG``.

    Raises:
        PrefixError: If the prefix is invalid.
    """
    if len(prefix) > PREFIX_MAX_LENGTH:
        raise PrefixError(
            f"Prefix must be at most {PREFIX_MAX_LENGTH} characters, got {len(prefix)}",
            PrefixErrorReason.TOO_LONG,
            PREFIX_MAX_LENGTH,
        )

    for i, char in enumerate(prefix):
        if not ("a" <= char <= "z" or char == SEPARATOR):
            raise PrefixError(
                f"Prefix must contain only lowercase letters a-z and '_', "
                f"got {char!r} at position {i} in {prefix!r}",
                PrefixErrorReason.INVALID_CHARACTER,
                i,
            )

    previous = SEPARATOR  # a leading '_' is an empty first segment
    for i, char in enumerate(prefix):
        if char == SEPARATOR and previous == SEPARATOR:
            raise _empty_segment(prefix, i)
        previous = char
    if previous == SEPARATOR and prefix:
        raise _empty_segment(prefix, len(prefix) - 1)


def _empty_segment(prefix: str, position: int) -> PrefixError:
    return PrefixError(
        f"Prefix must not start or end with '_' or contain consecutive underscores, "
        f"got {prefix!r}",
        PrefixErrorReason.EMPTY_SEGMENT,
        position,
    )


def is_valid_prefix(prefix: str) -> bool:
    """Return True if ``prefix`` satisfies the prefix grammar."""
    try:
        validate_prefix(prefix)
    except PrefixError:
        return False
    return True


__all__ = ["PREFIX_MAX_LENGTH", "SEPARATOR", "is_valid_prefix", "validate_prefix"]
