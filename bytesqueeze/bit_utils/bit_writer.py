from bitarray import bitarray


class BitWriter:
    """
    A class for writing Huffman codes to a bitarray stream with byte alignment support.
    Bits are packed most significant bit first.
    """

    def __init__(self) -> None:
        """Initialize a new BitWriter instance with an empty bitarray."""
        self.bits = bitarray(endian="big")

    def write_symbols(self, codes: dict[int, str], data: bytes) -> None:
        """
        Append the code of every byte in data.

        Args:
            codes: Code table mapping byte values to strings of '0' and '1'
            data: Bytes to encode

        Raises:
            ValueError: If data holds a byte missing from the code table
        """
        table = {symbol: bitarray(code, endian="big") for symbol, code in codes.items()}
        self.bits.encode(table, data)

    def byte_align(self) -> int:
        """
        Add padding bits to achieve byte alignment.

        Returns:
            The number of padding bits added (0-7)
        """
        return self.bits.fill()

    def to_bytes(self) -> bytes:
        """
        Get the packed bits. Call byte_align first to know the padding.

        Returns:
            The bit array as bytes, zero-filled to a byte boundary
        """
        return self.bits.tobytes()
