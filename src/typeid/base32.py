"""Base32 suffix codec: 16-byte values to 26-character strings and back."""

from __future__ import annotations

from typeid.errors import SuffixError, SuffixErrorReason


# Crockford-style base32: digits then lowercase letters without i, l, o, u.
# IMPORTANT: '0' must be first so the zero value encodes to all '0's
ALPHABET = "0123456789abcdefghjkmnpqrstvwxyz"

# 128 bits need ceiling(128 / 5) = 26 symbols; the 130 symbol bits carry two
# zero bits in front of the value, so the leading symbol is always < 8
SUFFIX_LENGTH = 26
VALUE_LENGTH = 16
_BITS_PER_SYMBOL = 5
_SYMBOL_MASK = 0x1F
_PAD_BITS = SUFFIX_LENGTH * _BITS_PER_SYMBOL - VALUE_LENGTH * 8
_MAX_LEADING_SYMBOL = (1 << (_BITS_PER_SYMBOL - _PAD_BITS)) - 1

# Reverse lookup indexed by code point, -1 for characters outside the alphabet.
# Uppercase letters decode to the same value as their lowercase form.
_INVALID = -1
_DECODE_TABLE: tuple[int, ...] = tuple(
    ALPHABET.find(chr(code).lower()) if chr(code).lower() in ALPHABET else _INVALID
    for code in range(128)
)


def encode(value: bytes) -> str:
    """Encode 16 bytes as a 26-character suffix.

    The value is read as a big-endian 128-bit integer and emitted most
    significant symbol first.

    Raises:
        TypeError: If ``value`` is not bytes-like.
        SuffixError: If ``value`` is not exactly 16 bytes long.
    """
    check_value(value)

    symbols: list[str] = []
    buffer = 0
    pending = _PAD_BITS  # bits in buffer not yet emitted
    for byte in value:
        buffer = (buffer << 8) | byte
        pending += 8
        while pending >= _BITS_PER_SYMBOL:
            pending -= _BITS_PER_SYMBOL
            symbols.append(ALPHABET[(buffer >> pending) & _SYMBOL_MASK])
        buffer &= (1 << pending) - 1

    return "".join(symbols)


def check_value(value: bytes) -> None:
    """Check that ``value`` is 16 bytes of a bytes-like type.

    Raises:
        TypeError: If ``value`` is not bytes, bytearray or memoryview.
        SuffixError: If ``value`` is not exactly 16 bytes long.
    """
    if not isinstance(value, bytes | bytearray | memoryview):
        msg = f"Value must be bytes-like, got {type(value).__name__}"
        raise TypeError(msg)
    if len(value) != VALUE_LENGTH:
        raise SuffixError(
            f"Value must be {VALUE_LENGTH} bytes, got {len(value)}",
            SuffixErrorReason.INVALID_LENGTH,
        )


def decode(suffix: str) -> bytes:
    """Decode a 26-character suffix into 16 bytes.

    Decoding is case-insensitive.

    Raises:
        SuffixError: If the suffix has the wrong length, contains a character
            outside the alphabet, or encodes a value wider than 128 bits.
    """
    if len(suffix) != SUFFIX_LENGTH:
        raise SuffixError(
            f"Suffix must be {SUFFIX_LENGTH} characters, got {len(suffix)}",
            SuffixErrorReason.INVALID_LENGTH,
        )

    values = [_symbol_value(suffix, i) for i in range(SUFFIX_LENGTH)]

    if values[0] > _MAX_LEADING_SYMBOL:
        raise SuffixError(
            f"Suffix must start with one of "
            f"[{ALPHABET[: _MAX_LEADING_SYMBOL + 1]}], got {suffix[0]!r}",
            SuffixErrorReason.SUFFIX_OVERFLOW,
            0,
        )

    out = bytearray()
    buffer = 0
    filled = -_PAD_BITS  # meaningful bits in buffer not yet written
    for symbol in values:
        buffer = (buffer << _BITS_PER_SYMBOL) | symbol
        filled += _BITS_PER_SYMBOL
        while filled >= 8:
            filled -= 8
            out.append((buffer >> filled) & 0xFF)
            buffer &= (1 << filled) - 1

    return bytes(out)


def _symbol_value(suffix: str, position: int) -> int:
    code = ord(suffix[position])
    value = _DECODE_TABLE[code] if code < len(_DECODE_TABLE) else _INVALID
    if value == _INVALID:
        raise SuffixError(
            f"Suffix must contain only characters from [{ALPHABET}], "
            f"got {suffix[position]!r} at position {position}",
            SuffixErrorReason.INVALID_CHARACTER,
            position,
        )
    return value


def encode_int(num: int) -> str:
    """Encode a non-negative integer below 2**128 as a suffix."""
    if not 0 <= num < 1 << 128:
        raise SuffixError(
            f"Value must fit in 128 unsigned bits, got {num}",
            SuffixErrorReason.SUFFIX_OVERFLOW,
        )
    return encode(num.to_bytes(VALUE_LENGTH, "big"))


def decode_int(suffix: str) -> int:
    """Decode a suffix into its 128-bit integer value."""
    return int.from_bytes(decode(suffix), "big")


def is_valid_suffix(suffix: str) -> bool:
    """Return True if ``suffix`` decodes to a 128-bit value."""
    try:
        decode(suffix)
    except SuffixError:
        return False
    return True


__all__ = [
    "ALPHABET",
    "SUFFIX_LENGTH",
    "VALUE_LENGTH",
    "check_value",
    "decode",
    "decode_int",
    "encode",
    "encode_int",
    "is_valid_suffix",
]
