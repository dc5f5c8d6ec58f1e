"""Tests for the hex/bytes codec."""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from cluster_client.types import (
    ENCRYPTED_REFERENCE_HEX_LENGTH,
    ClusterArgumentError,
    HexLengthError,
    assert_hex_string,
    assert_reference,
    bytes_to_hex,
    hex_to_bytes,
    is_hex_string,
    is_reference,
    make_hex_string,
)


class TestBytesToHex:
    """Tests for rendering bytes as hex."""

    def test_lowercase_two_chars_per_byte(self) -> None:
        """Each byte becomes two lowercase hex characters, zero padded."""
        assert bytes_to_hex(b"\x00\x0a\xff\xab") == "000affab"

    def test_empty(self) -> None:
        """Empty input renders as empty text."""
        assert bytes_to_hex(b"") == ""

    def test_expected_length_matches(self) -> None:
        """A matching expected length is accepted."""
        assert bytes_to_hex(b"\x01" * 32, 64) == "01" * 32

    def test_expected_length_mismatch_raises(self) -> None:
        """A mismatching expected length is reported with the produced value."""
        with pytest.raises(HexLengthError, match="expected length 64") as exc_info:
            bytes_to_hex(b"\x01" * 31, 64)
        assert exc_info.value.value == "01" * 31
        assert exc_info.value.expected == 64
        assert exc_info.value.actual == 62

    def test_zero_expected_length_is_checked(self) -> None:
        """Length 0 is a real requirement, not a missing one."""
        with pytest.raises(HexLengthError):
            bytes_to_hex(b"\x01", 0)

    @given(st.binary(max_size=64))
    def test_matches_builtin_hex(self, data: bytes) -> None:
        """Output agrees with bytes.hex for arbitrary input."""
        assert bytes_to_hex(data) == data.hex()


class TestHexToBytes:
    """Tests for parsing hex text."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("", None),
            ("00", b"\x00"),
            ("deadBEEF", b"\xde\xad\xbe\xef"),
            ("0a0B0c", b"\x0a\x0b\x0c"),
        ],
    )
    def test_parses_either_case(self, text: str, expected: bytes | None) -> None:
        """Hex digits in either case are accepted; empty text is not hex."""
        if expected is None:
            with pytest.raises(ClusterArgumentError):
                hex_to_bytes(text)
        else:
            assert hex_to_bytes(text) == expected

    @pytest.mark.parametrize("text", ["0x00", "zz", "12 34", "12\n", "ab-c"])
    def test_non_hex_raises(self, text: str) -> None:
        """Anything that is not purely hex digits is rejected with the value attached."""
        with pytest.raises(ClusterArgumentError, match="not valid hex string") as exc_info:
            hex_to_bytes(text)
        assert exc_info.value.value == text

    def test_odd_length_raises(self) -> None:
        """Odd length text does not describe whole bytes."""
        with pytest.raises(ClusterArgumentError, match="odd hex length"):
            hex_to_bytes("abc")

    @given(st.binary(min_size=1, max_size=64))
    def test_inverts_bytes_to_hex(self, data: bytes) -> None:
        """Parsing rendered hex restores the bytes."""
        assert hex_to_bytes(bytes_to_hex(data)) == data


class TestIsHexString:
    """Tests for the hex predicate."""

    @pytest.mark.parametrize(
        ("value", "length", "expected"),
        [
            ("abcdef0123456789", None, True),
            ("ABCDEF", None, True),
            ("ABCDEF", 6, True),
            ("ABCDEF", 4, False),
            ("", None, False),
            ("0xab", None, False),
            ("abg", None, False),
            ("ab\n", None, False),
            (b"ab", None, False),
            (None, None, False),
            (12, None, False),
        ],
    )
    def test_predicate(self, value: Any, length: int | None, expected: bool) -> None:
        """Only str values made of hex digits (with the right length) qualify."""
        assert is_hex_string(value, length) is expected


class TestAssertHexString:
    """Tests for the hex assertion."""

    def test_passes_for_hex(self) -> None:
        """Valid hex does not raise."""
        assert_hex_string("00ff")

    def test_message_names_value_and_length(self) -> None:
        """The error names the value, the offending input and the required length."""
        message = "topic not valid hex string of length 64: xyz"
        with pytest.raises(ClusterArgumentError, match=message):
            assert_hex_string("xyz", 64, name="topic")

    def test_message_omits_length_when_not_requested(self) -> None:
        """Without a length the message does not mention one."""
        with pytest.raises(ClusterArgumentError) as exc_info:
            assert_hex_string("xyz")
        assert "length" not in str(exc_info.value)


class TestAssertReference:
    """Tests for the plain reference assertion."""

    @given(st.binary(min_size=32, max_size=32))
    def test_accepts_every_64_char_reference(self, digest: bytes) -> None:
        """Any 32-byte digest rendered as hex is a valid reference."""
        assert_reference(digest.hex())
        assert is_reference(digest.hex())

    @given(st.integers(min_value=1, max_value=200).filter(lambda n: n != 64))
    def test_rejects_other_lengths(self, length: int) -> None:
        """Any hex string not exactly 64 characters long is rejected."""
        with pytest.raises(ClusterArgumentError):
            assert_reference("a" * length)

    def test_rejects_encrypted_reference(self) -> None:
        """128-character references are valid hex but explicitly unsupported."""
        encrypted = "ab" * 64
        assert is_hex_string(encrypted, ENCRYPTED_REFERENCE_HEX_LENGTH)
        assert not is_reference(encrypted)
        with pytest.raises(ClusterArgumentError, match="Encrypted references are not supported"):
            assert_reference(encrypted)

    def test_rejects_non_hex(self) -> None:
        """64 characters that are not hex are rejected as hex errors."""
        with pytest.raises(ClusterArgumentError, match="not valid hex string"):
            assert_reference("g" * 64)

    def test_rejects_non_string(self) -> None:
        """Raw bytes are not a reference."""
        with pytest.raises(ClusterArgumentError):
            assert_reference(b"\x00" * 32)


class TestMakeHexString:
    """Tests for normalizing user supplied hex."""

    @pytest.mark.parametrize("text", ["0xABcd", "0XabCD", "abcd", "ABCD"])
    def test_strips_prefix_and_lowercases(self, text: str) -> None:
        """Prefix and case differences disappear."""
        assert make_hex_string(text) == "abcd"

    def test_enforces_length_after_prefix(self) -> None:
        """The length applies to the digits, not the prefix."""
        assert make_hex_string("0x" + "a" * 40, 40) == "a" * 40
        with pytest.raises(ClusterArgumentError):
            make_hex_string("0x" + "a" * 38, 40)

    def test_rejects_non_string(self) -> None:
        """Non-text input is rejected."""
        with pytest.raises(ClusterArgumentError, match="Expected hex string"):
            make_hex_string(1234)  # type: ignore[arg-type]
