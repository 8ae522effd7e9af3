"""
LZW Compression and Decompression
"""
import struct

from bytesqueeze.results import CorruptPayload

ALPHABET_SIZE = 256
LZW_MAX_DICT_SIZE = 65536
# u32 original length + u32 code count
LZW_HEADER_SIZE = 8
LZW_CODE_SIZE = 2


class LZWDictionary:
    """
    String-to-code dictionary kept as a trie.

    Entry i is the node for code i; each node maps the next byte
    to the code of the extended string, so a lookup of w + c never
    builds the string itself.
    """

    def __init__(self, max_size: int = LZW_MAX_DICT_SIZE):
        if not ALPHABET_SIZE <= max_size <= LZW_MAX_DICT_SIZE:
            raise ValueError(
                f"Dictionary size must be between {ALPHABET_SIZE} and "
                f"{LZW_MAX_DICT_SIZE}, got {max_size}"
            )
        self.max_size = max_size
        self.children: list[dict[int, int]] = [{} for _ in range(ALPHABET_SIZE)]

    def __len__(self) -> int:
        return len(self.children)

    @property
    def full(self) -> bool:
        return len(self.children) >= self.max_size

    def lookup(self, code: int, byte: int):
        """Code of the entry code + byte, or None if it is not known yet."""
        return self.children[code].get(byte)

    def add(self, code: int, byte: int):
        """
        Learns the entry code + byte.

        Returns the new code, or None once the dictionary is full.
        """
        if self.full:
            return None
        new_code = len(self.children)
        self.children[code][byte] = new_code
        self.children.append({})
        return new_code


class LZWCoder:
    """
    A class for LZW compression and decompression.
    """

    @staticmethod
    def compress(data: bytes, max_size: int = LZW_MAX_DICT_SIZE) -> list[int]:
        """LZW compression for bytes, returns the list of emitted codes."""
        if not data:
            return []

        dictionary = LZWDictionary(max_size)
        result = []
        w = data[0]

        for c in data[1:]:
            wc = dictionary.lookup(w, c)
            if wc is not None:
                w = wc
            else:
                result.append(w)
                # once full, new patterns are simply not learned
                dictionary.add(w, c)
                w = c

        result.append(w)
        return result

    @staticmethod
    def decompress(compressed_data: list[int], max_size: int = LZW_MAX_DICT_SIZE) -> bytes:
        """LZW decompression for a list of codes."""
        if not compressed_data:
            return b""

        dictionary = [bytes([i]) for i in range(ALPHABET_SIZE)]
        result = bytearray()

        first = compressed_data[0]
        if first >= ALPHABET_SIZE:
            raise CorruptPayload(f"Bad first code: {first}")
        w = dictionary[first]
        result += w

        for k in compressed_data[1:]:
            if k < len(dictionary):
                entry = dictionary[k]
            elif k == len(dictionary) and len(dictionary) < max_size:
                entry = w + w[:1]
            else:
                raise CorruptPayload(f"Bad compressed code: {k}")

            result += entry
            if len(dictionary) < max_size:
                dictionary.append(w + entry[:1])
            w = entry

        return bytes(result)

    @staticmethod
    def pack(original_length: int, codes: list[int]) -> bytes:
        """
        Serializes codes as [u32 length][u32 count][u16 code]*count.
        Empty input packs to an empty record.
        """
        if original_length == 0:
            return b""
        return struct.pack(f">II{len(codes)}H", original_length, len(codes), *codes)

    @staticmethod
    def unpack(record: bytes) -> tuple[int, list[int]]:
        """Parses a record made by pack, returns (original length, codes)."""
        if not record:
            return 0, []
        if len(record) < LZW_HEADER_SIZE:
            raise CorruptPayload("LZW record is truncated")

        original_length, count = struct.unpack(">II", record[:LZW_HEADER_SIZE])
        expected = LZW_HEADER_SIZE + count * LZW_CODE_SIZE
        if len(record) != expected:
            raise CorruptPayload(
                f"LZW record holds {len(record)} bytes, expected {expected} "
                f"for {count} codes"
            )
        codes = list(struct.unpack(f">{count}H", record[LZW_HEADER_SIZE:]))
        return original_length, codes


def encode_lzw(data: bytes, max_size: int = LZW_MAX_DICT_SIZE) -> list[int]:
    """Codes emitted for data, each fitting in 16 bits."""
    return LZWCoder.compress(bytes(data), max_size)


def decode_lzw(record: bytes, max_size: int = LZW_MAX_DICT_SIZE) -> bytes:
    """
    Decodes a packed LZW record back to the original bytes.

    Raises:
        CorruptPayload: If the record is malformed or its length field disagrees
    """
    original_length, codes = LZWCoder.unpack(record)
    data = LZWCoder.decompress(codes, max_size)
    if len(data) != original_length:
        raise CorruptPayload(
            f"Decoded {len(data)} bytes, expected {original_length}"
        )
    return data
