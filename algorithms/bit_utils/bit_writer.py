from bitarray import bitarray


class BitWriter:
    """
    Collects bits in memory, most significant bit first.
    """

    def __init__(self) -> None:
        """Initialize a new BitWriter instance with an empty bitarray."""
        self.bits = bitarray(endian="big")

    def write_bit(self, bit: int) -> None:
        self.bits.append(bit & 1)

    def write_bits(self, value: int, length: int) -> None:
        """
        Write the lowest `length` bits of value, MSB first.

        Raises:
            ValueError: If length is negative or value does not fit
        """
        if length < 0:
            raise ValueError("Length cannot be negative")
        if value < 0 or value >> length:
            raise ValueError(f"Value {value} does not fit in {length} bits")
        for i in range(length - 1, -1, -1):
            self.bits.append((value >> i) & 1)

    def write_bytes(self, data: bytes) -> None:
        self.bits.frombytes(data)

    def byte_align(self) -> None:
        """Add padding bits to achieve byte alignment."""
        while len(self.bits) % 8 != 0:
            self.bits.append(0)

    def to_bytes(self) -> bytes:
        """
        Byte-align the stream and return its contents.
        """
        self.byte_align()
        return self.bits.tobytes()
