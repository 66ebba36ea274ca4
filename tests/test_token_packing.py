"""Tests for binary packing of Lempel-Ziv tokens."""

import pytest

from algorithms.bit_utils.bit_reader import BitReader
from algorithms.bit_utils.bit_writer import BitWriter
from algorithms.errors import FormatError, InvalidArgumentError
from algorithms.LempelZiv import LempelZiv, Token
from algorithms.token_packing import TokenPacker


@pytest.mark.parametrize(
    "text",
    [
        "a",
        "abcabc",
        "aaaaaaaaaa",
        "to be or not to be, that is the question",
        "naïve café ∑ 🙂🙂 \ud800",
    ],
)
def test_unpack_restores_tokens(text):
    tokens = LempelZiv.tokenize(text)
    packed = TokenPacker.pack(tokens)

    assert TokenPacker.unpack(packed) == tokens
    assert LempelZiv.expand(TokenPacker.unpack(packed)) == text


def test_layout_of_literal_and_match():
    packed = TokenPacker.pack([Token(0, 0, "a"), Token(1, 2, "b")])
    reader = BitReader(packed)

    assert reader.read_bits(TokenPacker.COUNT_BITS) == 2
    assert reader.read_bit() == 0
    assert reader.read_byte() == ord("a")
    assert reader.read_bit() == 1
    assert reader.read_bits(TokenPacker.DISTANCE_BITS) == 1
    assert reader.read_bits(TokenPacker.LENGTH_BITS) == 2
    assert reader.read_byte() == ord("b")


def test_packed_form_is_smaller_than_text_form():
    text = "the rain in spain stays mainly in the plain. " * 10
    compressed = LempelZiv.compress(text)
    packed = TokenPacker.pack(LempelZiv.tokenize(text))
    assert len(packed) < len(compressed)
    assert len(packed) < len(text)


def test_empty_token_list():
    assert TokenPacker.unpack(TokenPacker.pack([])) == []


@pytest.mark.parametrize(
    "token",
    [
        Token(0, 3, "a"),
        Token(3, 0, "a"),
        Token(1 << TokenPacker.DISTANCE_BITS, 1, "a"),
        Token(1, 1 << TokenPacker.LENGTH_BITS, "a"),
        Token(0, 0, "ab"),
        Token(0, 0, ""),
    ],
)
def test_pack_rejects_unrepresentable_tokens(token):
    with pytest.raises(InvalidArgumentError):
        TokenPacker.pack([token])


def test_unpack_truncated_data():
    packed = TokenPacker.pack(LempelZiv.tokenize("abcabc"))
    with pytest.raises(FormatError):
        TokenPacker.unpack(packed[:-2])
    with pytest.raises(FormatError):
        TokenPacker.unpack(b"\x00\x00")


def test_unpack_invalid_utf8():
    writer = BitWriter()
    writer.write_bits(1, TokenPacker.COUNT_BITS)
    writer.write_bit(0)
    writer.write_bits(0xFF, 8)
    with pytest.raises(FormatError):
        TokenPacker.unpack(writer.to_bytes())


def test_unpack_match_with_zero_distance():
    writer = BitWriter()
    writer.write_bits(1, TokenPacker.COUNT_BITS)
    writer.write_bit(1)
    writer.write_bits(0, TokenPacker.DISTANCE_BITS)
    writer.write_bits(2, TokenPacker.LENGTH_BITS)
    writer.write_bits(ord("a"), 8)
    with pytest.raises(FormatError):
        TokenPacker.unpack(writer.to_bytes())


def test_bit_writer_rejects_oversized_value():
    writer = BitWriter()
    with pytest.raises(ValueError):
        writer.write_bits(4, 2)
    with pytest.raises(ValueError):
        writer.write_bits(1, -1)


def test_bit_reader_end_of_stream():
    reader = BitReader(b"\x80")
    assert reader.read_bit() == 1
    assert reader.read_bits(7) == 0
    with pytest.raises(EOFError):
        reader.read_bit()
