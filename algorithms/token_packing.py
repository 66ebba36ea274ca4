"""
Binary packing of Lempel-Ziv tokens.

Layout (MSB first):
    32-bit token count, then for every token
    1 flag bit (0 - literal only, 1 - match),
    distance and length fields for matches,
    the literal as UTF-8 bytes.
The stream is zero padded to a whole byte.
"""

from typing import List

from algorithms.bit_utils.bit_reader import BitReader
from algorithms.bit_utils.bit_writer import BitWriter
from algorithms.errors import FormatError, InvalidArgumentError
from algorithms.LempelZiv import LempelZiv, Token


class TokenPacker:
    """
    Packs tokens into a compact bit stream and back.
    """

    COUNT_BITS = 32
    DISTANCE_BITS = LempelZiv.WINDOW_SIZE.bit_length()
    LENGTH_BITS = LempelZiv.WINDOW_SIZE.bit_length()
    ENCODING = "utf-8"
    ERRORS = "surrogatepass"

    @staticmethod
    def _utf8_length(lead_byte: int) -> int:
        if lead_byte < 0x80:
            return 1
        if lead_byte >> 5 == 0b110:
            return 2
        if lead_byte >> 4 == 0b1110:
            return 3
        if lead_byte >> 3 == 0b11110:
            return 4
        raise FormatError(f"Invalid UTF-8 lead byte 0x{lead_byte:02X}")

    @classmethod
    def pack(cls, tokens: List[Token]) -> bytes:
        """
        Pack tokens into bytes.

        Raises:
            InvalidArgumentError: If a token cannot be represented
        """
        if len(tokens) >> cls.COUNT_BITS:
            raise InvalidArgumentError(f"Too many tokens to pack: {len(tokens)}")

        writer = BitWriter()
        writer.write_bits(len(tokens), cls.COUNT_BITS)

        for index, (distance, length, literal) in enumerate(tokens):
            if not isinstance(literal, str) or len(literal) != 1:
                raise InvalidArgumentError(
                    f"Token {index}: literal must be one character, got {literal!r}"
                )
            if (distance == 0) != (length == 0):
                raise InvalidArgumentError(
                    f"Token {index} mixes a zero and non-zero field "
                    f"(distance={distance}, length={length})"
                )

            if length:
                if not 0 < distance < 1 << cls.DISTANCE_BITS:
                    raise InvalidArgumentError(
                        f"Token {index}: distance {distance} does not fit "
                        f"in {cls.DISTANCE_BITS} bits"
                    )
                if not 0 < length < 1 << cls.LENGTH_BITS:
                    raise InvalidArgumentError(
                        f"Token {index}: length {length} does not fit "
                        f"in {cls.LENGTH_BITS} bits"
                    )
                writer.write_bit(1)
                writer.write_bits(distance, cls.DISTANCE_BITS)
                writer.write_bits(length, cls.LENGTH_BITS)
            else:
                writer.write_bit(0)

            writer.write_bytes(literal.encode(cls.ENCODING, cls.ERRORS))

        return writer.to_bytes()

    @classmethod
    def unpack(cls, data: bytes) -> List[Token]:
        """
        Unpack bytes produced by pack().

        Raises:
            FormatError: If the data is truncated or holds an invalid literal
        """
        reader = BitReader(data)
        tokens = []

        try:
            count = reader.read_bits(cls.COUNT_BITS)
            for _ in range(count):
                if reader.read_bit():
                    distance = reader.read_bits(cls.DISTANCE_BITS)
                    length = reader.read_bits(cls.LENGTH_BITS)
                    if distance == 0 or length == 0:
                        raise FormatError(
                            f"Match token {len(tokens)} has a zero field "
                            f"(distance={distance}, length={length})"
                        )
                else:
                    distance = length = 0

                lead_byte = reader.read_byte()
                raw = bytearray([lead_byte])
                for _ in range(cls._utf8_length(lead_byte) - 1):
                    raw.append(reader.read_byte())

                try:
                    literal = raw.decode(cls.ENCODING, cls.ERRORS)
                except UnicodeDecodeError as e:
                    raise FormatError(f"Invalid literal in token {len(tokens)}: {e}") from e

                tokens.append(Token(distance, length, literal))
        except EOFError as e:
            raise FormatError(f"Unexpected end of packed data: {e}") from e

        return tokens
