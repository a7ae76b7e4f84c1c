from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from typeid import SuffixError, SuffixErrorReason
from typeid.base32 import (
    ALPHABET,
    decode,
    decode_int,
    encode,
    encode_int,
    is_valid_suffix,
)

from .conftest import SOME_SUFFIX, SOME_UUID, suffix_strategy, value_strategy


class TestAlphabet:
    def test_has_32_unique_symbols(self) -> None:
        assert len(ALPHABET) == 32
        assert len(set(ALPHABET)) == 32

    def test_excludes_ambiguous_letters(self) -> None:
        for char in "ilou":
            assert char not in ALPHABET

    def test_is_lowercase(self) -> None:
        assert ALPHABET == ALPHABET.lower()


class TestEncodeVectors:
    def test_zero_encodes_to_all_zeros(self) -> None:
        assert encode(bytes(16)) == "0" * 26

    def test_one_encodes_to_trailing_one(self) -> None:
        assert encode(bytes(15) + b"\x01") == "0" * 25 + "1"

    def test_ten_uses_first_letter(self) -> None:
        assert encode(bytes(15) + b"\x0a") == "0" * 25 + "a"

    def test_sixteen_skips_excluded_letters(self) -> None:
        assert encode(bytes(15) + b"\x10") == "0" * 25 + "g"

    def test_thirty_two_carries_into_next_symbol(self) -> None:
        assert encode(bytes(15) + b"\x20") == "0" * 24 + "10"

    def test_max_value(self) -> None:
        assert encode(b"\xff" * 16) == "7" + "z" * 25

    def test_uuidv7_reference(self) -> None:
        assert encode(SOME_UUID.bytes) == SOME_SUFFIX

    @pytest.mark.parametrize("bit", range(128))
    def test_each_bit_lands_in_its_window(self, bit: int) -> None:
        # symbol 25 holds bits 4..0, symbol 0 holds bits 127..125
        suffix = encode_int(1 << bit)
        position = 25 - bit // 5
        expected = ["0"] * 26
        expected[position] = ALPHABET[1 << (bit % 5)]
        assert suffix == "".join(expected)

    def test_rejects_short_value(self) -> None:
        with pytest.raises(SuffixError, match="16 bytes, got 15") as exc_info:
            encode(bytes(15))
        assert exc_info.value.reason is SuffixErrorReason.INVALID_LENGTH

    def test_accepts_bytearray(self) -> None:
        assert encode(bytearray(16)) == "0" * 26

    def test_rejects_str(self) -> None:
        with pytest.raises(TypeError, match="bytes-like, got str"):
            encode("0" * 16)  # type: ignore[arg-type]



class TestEncodeProperties:
    @given(value_strategy)
    def test_output_is_26_alphabet_chars(self, value: bytes) -> None:
        suffix = encode(value)
        assert len(suffix) == 26
        assert all(c in ALPHABET for c in suffix)

    @given(value_strategy)
    def test_first_symbol_is_below_eight(self, value: bytes) -> None:
        assert ALPHABET.index(encode(value)[0]) < 8

    @given(value_strategy)
    def test_roundtrip_any_value(self, value: bytes) -> None:
        assert decode(encode(value)) == value

    @given(st.integers(min_value=0, max_value=(1 << 128) - 1))
    def test_int_roundtrip(self, num: int) -> None:
        assert decode_int(encode_int(num)) == num

    @given(value_strategy, value_strategy)
    def test_encoding_preserves_order(self, a: bytes, b: bytes) -> None:
        assert (a < b) == (encode(a) < encode(b))


class TestDecode:
    def test_reference_suffix(self) -> None:
        assert decode(SOME_SUFFIX) == SOME_UUID.bytes

    def test_max_value(self) -> None:
        assert decode("7" + "z" * 25) == b"\xff" * 16

    def test_uppercase_is_accepted(self) -> None:
        assert decode(SOME_SUFFIX.upper()) == SOME_UUID.bytes

    @pytest.mark.parametrize("length", [0, 1, 25, 27, 100])
    def test_rejects_wrong_length(self, length: int) -> None:
        with pytest.raises(SuffixError, match=f"got {length}") as exc_info:
            decode("0" * length)
        assert exc_info.value.reason is SuffixErrorReason.INVALID_LENGTH

    @pytest.mark.parametrize("char", ["i", "l", "o", "u", "I", "L", "O", "U", "-", " ", "é", "\x00"])
    def test_rejects_character_outside_alphabet(self, char: str) -> None:
        suffix = "0" * 10 + char + "0" * 15
        with pytest.raises(SuffixError, match="position 10") as exc_info:
            decode(suffix)
        assert exc_info.value.reason is SuffixErrorReason.INVALID_CHARACTER
        assert exc_info.value.position == 10

    @pytest.mark.parametrize("char", list("89abcdefghjkmnpqrstvwxyz"))
    def test_rejects_leading_symbol_of_eight_or_more(self, char: str) -> None:
        with pytest.raises(SuffixError) as exc_info:
            decode(char + SOME_SUFFIX[1:])
        assert exc_info.value.reason is SuffixErrorReason.SUFFIX_OVERFLOW
        assert exc_info.value.position == 0

    def test_invalid_character_reported_before_overflow(self) -> None:
        with pytest.raises(SuffixError) as exc_info:
            decode("8u" + "0" * 24)
        assert exc_info.value.reason is SuffixErrorReason.INVALID_CHARACTER
        assert exc_info.value.position == 1

    @given(suffix_strategy)
    def test_valid_suffix_roundtrip(self, suffix: str) -> None:
        assert encode(decode(suffix)) == suffix

    @given(st.text(max_size=40))
    def test_is_idempotent(self, s: str) -> None:
        assert is_valid_suffix(s) == is_valid_suffix(s)
        if is_valid_suffix(s):
            assert decode(s) == decode(s)


class TestIntHelpers:
    def test_encode_int_rejects_negative(self) -> None:
        with pytest.raises(SuffixError, match="128 unsigned bits"):
            encode_int(-1)

    def test_encode_int_rejects_129_bits(self) -> None:
        with pytest.raises(SuffixError, match="128 unsigned bits"):
            encode_int(1 << 128)

    def test_all_zeros_decodes_to_zero(self) -> None:
        assert decode_int("0" * 26) == 0


class TestIsValidSuffix:
    def test_valid(self) -> None:
        assert is_valid_suffix(SOME_SUFFIX)

    @pytest.mark.parametrize("suffix", ["", "0" * 25, "8" + "0" * 25, "0" * 25 + "u"])
    def test_invalid(self, suffix: str) -> None:
        assert not is_valid_suffix(suffix)
