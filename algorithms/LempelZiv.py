"""
Lempel-Ziv sliding window compression for text.
Input is encoded as a chain of [distance|length|literal] tuples.
"""

from typing import List, NamedTuple

from algorithms.errors import FormatError, InvalidArgumentError
from algorithms.KMP import KMP


class Token(NamedTuple):
    """
    One compression step: copy `length` characters found `distance`
    characters back, then append `literal`.
    Both numbers are zero for a literal on its own.
    """

    distance: int
    length: int
    literal: str

    def is_match(self) -> bool:
        return self.length > 0

    def __str__(self) -> str:
        return f"[{self.distance}|{self.length}|{self.literal}]"


class _TupleReader:
    """
    Cursor over a compressed string that reads one tuple at a time.
    """

    OPEN = "["
    SEPARATOR = "|"
    CLOSE = "]"

    def __init__(self, compressed: str):
        self.text = compressed
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def _expect(self, delimiter: str) -> None:
        if self.at_end():
            raise FormatError(
                f"Truncated tuple: expected '{delimiter}' at offset {self.pos}"
            )
        char = self.text[self.pos]
        if char != delimiter:
            raise FormatError(
                f"Expected '{delimiter}' at offset {self.pos}, found {char!r}"
            )
        self.pos += 1

    def _read_number(self) -> int:
        start = self.pos
        while not self.at_end() and "0" <= self.text[self.pos] <= "9":
            self.pos += 1

        if self.pos == start:
            if self.at_end():
                raise FormatError(f"Truncated tuple: expected a number at offset {start}")
            raise FormatError(
                f"Expected a number at offset {start}, found {self.text[start]!r}"
            )
        if self.text[start] == "0" and self.pos - start > 1:
            raise FormatError(f"Leading zero in number at offset {start}")

        try:
            return int(self.text[start : self.pos])
        except ValueError as e:
            raise FormatError(f"Number too large at offset {start}") from e

    def _read_literal(self) -> str:
        if self.at_end():
            raise FormatError(f"Truncated tuple: missing literal at offset {self.pos}")
        literal = self.text[self.pos]
        self.pos += 1
        return literal

    def read_token(self) -> Token:
        """
        Read `[distance|length|literal]` starting at the cursor.
        """
        start = self.pos
        self._expect(self.OPEN)
        distance = self._read_number()
        self._expect(self.SEPARATOR)
        length = self._read_number()
        self._expect(self.SEPARATOR)
        literal = self._read_literal()
        self._expect(self.CLOSE)

        if (distance == 0) != (length == 0):
            raise FormatError(
                f"Tuple at offset {start} mixes a zero and non-zero field "
                f"(distance={distance}, length={length})"
            )
        return Token(distance, length, literal)


class LempelZiv:
    """
    Greedy longest-match compressor over a fixed trailing window.
    Matches are located with KMP; ties go to the earliest window position.
    """

    WINDOW_SIZE = 100  # Characters of history searched for a match
    MAX_OUTPUT_SIZE = 1 << 26  # Upper bound on decompressed characters

    @staticmethod
    def tokenize(data: str, verbose: bool = False) -> List[Token]:
        """
        Split text into compression tokens.

        Args:
            data: Non-empty text to compress
            verbose: Print every emitted token

        Returns:
            List of tokens in input order

        Raises:
            InvalidArgumentError: If data is None, not a string or empty
        """
        if data is None or not isinstance(data, str):
            raise InvalidArgumentError("Input must be a string")
        if not data:
            raise InvalidArgumentError("Input is empty")

        tokens = []
        cursor = 0
        data_length = len(data)

        while cursor < data_length:
            window_start = max(0, cursor - LempelZiv.WINDOW_SIZE)
            window = data[window_start:cursor]

            length = 1
            distance = 0

            # The last character of a step is always kept as the literal
            while cursor + length < data_length:
                match = KMP.search(data[cursor : cursor + length], window)
                if match == KMP.NOT_FOUND:
                    break
                distance = cursor - (window_start + match)
                length += 1

            if length > 1:
                token = Token(distance, length - 1, data[cursor + length - 1])
                if verbose:
                    print(
                        f"Match at position {cursor}: "
                        f"distance={token.distance}, length={token.length}"
                    )
            else:
                token = Token(0, 0, data[cursor])
                if verbose:
                    print(f"Literal at position {cursor}: {token.literal!r}")

            tokens.append(token)
            cursor += length

        return tokens

    @staticmethod
    def compress(data: str, verbose: bool = False) -> str:
        """
        Compress text into its tuple representation.

        Args:
            data: Non-empty text to compress
            verbose: Print every emitted token

        Returns:
            Concatenated `[distance|length|literal]` tuples
        """
        tokens = LempelZiv.tokenize(data, verbose)
        return "".join(str(token) for token in tokens)

    @staticmethod
    def parse_tokens(compressed: str) -> List[Token]:
        """
        Parse a tuple string back into tokens.

        Raises:
            FormatError: If the string does not follow the tuple grammar
        """
        if compressed is None or not isinstance(compressed, str):
            raise FormatError("Compressed data must be a string")

        reader = _TupleReader(compressed)
        tokens = []
        while not reader.at_end():
            tokens.append(reader.read_token())
        return tokens

    @staticmethod
    def expand(tokens: List[Token], verbose: bool = False) -> str:
        """
        Rebuild text from tokens.

        Copies run one character at a time so a match may overlap
        the characters it is producing.

        Raises:
            FormatError: If a token refers to text before the start of the output
                or would grow it past MAX_OUTPUT_SIZE
        """
        output_buffer = []

        for index, (distance, length, literal) in enumerate(tokens):
            if distance == 0 and length == 0:
                output_buffer.append(literal)
                continue

            if distance <= 0 or length <= 0:
                raise FormatError(
                    f"Token {index} is not a valid match "
                    f"(distance={distance}, length={length})"
                )
            if distance > len(output_buffer):
                raise FormatError(
                    f"Token {index}: distance {distance} exceeds "
                    f"output size {len(output_buffer)}"
                )
            if len(output_buffer) + length + 1 > LempelZiv.MAX_OUTPUT_SIZE:
                raise FormatError(
                    f"Token {index}: length {length} exceeds the output limit "
                    f"of {LempelZiv.MAX_OUTPUT_SIZE} characters"
                )

            if verbose:
                print(
                    f"Copy at position {len(output_buffer)}: "
                    f"distance={distance}, length={length}"
                )

            for _ in range(length):
                output_buffer.append(output_buffer[-distance])
            output_buffer.append(literal)

        return "".join(output_buffer)

    @staticmethod
    def decompress(compressed: str, verbose: bool = False) -> str:
        """
        Decompress a tuple string produced by compress().

        Args:
            compressed: Concatenated `[distance|length|literal]` tuples
            verbose: Print every back reference copy

        Returns:
            The original text

        Raises:
            FormatError: On malformed tuples or out-of-range back references
        """
        return LempelZiv.expand(LempelZiv.parse_tokens(compressed), verbose)

    @staticmethod
    def get_information(original: str, compressed: str) -> str:
        """
        Summarise a compression run for logging.
        """
        tokens = LempelZiv.parse_tokens(compressed)
        matches = sum(1 for token in tokens if token.is_match())
        ratio = len(compressed) / len(original) * 100 if original else 0.0

        return (
            f"Original length: {len(original)} chars\n"
            f"Compressed length: {len(compressed)} chars\n"
            f"Tokens: {len(tokens)} ({matches} matches, "
            f"{len(tokens) - matches} literals)\n"
            f"Compressed size: {ratio:.2f}% of original"
        )
