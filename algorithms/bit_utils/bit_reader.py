from bitarray import bitarray


class BitReader:
    """
    Reads bits from an in-memory buffer, most significant bit first.
    """

    def __init__(self, data: bytes) -> None:
        """
        Args:
            data: Bytes holding the bit stream
        """
        self.bits = bitarray(endian="big")
        self.bits.frombytes(data)
        self.pos = 0

    def read_bit(self) -> int:
        """
        Read one bit from the stream.

        Raises:
            EOFError: If the bit stream is exhausted
        """
        if self.pos >= len(self.bits):
            raise EOFError("Bit stream length exceeded")
        val = self.bits[self.pos]
        self.pos += 1
        return val

    def read_bits(self, n: int) -> int:
        """
        Read n bits and return them as an integer.

        Raises:
            EOFError: If there are not enough bits to read
        """
        if self.pos + n > len(self.bits):
            raise EOFError(f"Not enough bits to read ({n} requested)")
        val = 0
        for _ in range(n):
            val = (val << 1) | self.read_bit()
        return val

    def read_byte(self) -> int:
        return self.read_bits(8)
