from bitarray import bitarray


class BitReader:
    """
    A class for reading Huffman-coded bits from a byte buffer.
    Trailing padding is dropped on construction so only payload bits remain.
    """

    def __init__(self, data: bytes, padding: int = 0) -> None:
        """
        Initialize BitReader by unpacking the buffer into a bitarray.

        Args:
            data: Packed bits, most significant bit first
            padding: Number of trailing padding bits to ignore (0-7)

        Raises:
            ValueError: If padding is out of range
        """
        if not 0 <= padding <= 7:
            raise ValueError(f"Padding must be between 0 and 7, got {padding}")
        self.bits = bitarray(endian="big")
        self.bits.frombytes(bytes(data))
        if padding:
            if padding > len(self.bits):
                raise ValueError("Padding is longer than the bit stream")
            del self.bits[-padding:]

    def decode_symbols(self, codes: dict[int, str]) -> bytes:
        """
        Decode the bits with a prefix-free code table.

        Args:
            codes: Code table mapping byte values to code strings

        Returns:
            The decoded bytes

        Raises:
            ValueError: If the bits do not end on a complete code
        """
        table = {symbol: bitarray(code, endian="big") for symbol, code in codes.items()}
        return bytes(self.bits.decode(table))
