"""
Self-describing file layout for CompressionResult objects.

    magic   b"BSQ"
    version u8
    kind    u8   0 = verbatim, 1 = huffman, 2 = lzw
    body

A verbatim body starts with a u8 method tag (1 huffman, 2 lzw) followed
by the raw bytes. A Huffman body carries the sparse frequency table
[u16 n][(u8 byte, u32 count) * n] in table order, then the Huffman record.
An LZW body is the LZW record. All integers are big-endian.
"""
import struct

from bytesqueeze.huffman_coding import decode_huffman
from bytesqueeze.LZW import decode_lzw
from bytesqueeze.results import HUFFMAN, LZW, CompressionResult, CorruptPayload

MAGIC = b"BSQ"
VERSION = 1
HEADER_SIZE = len(MAGIC) + 2

KIND_VERBATIM = 0
KIND_HUFFMAN = 1
KIND_LZW = 2

METHOD_TAGS = {HUFFMAN: KIND_HUFFMAN, LZW: KIND_LZW}
TAG_METHODS = {tag: method for method, tag in METHOD_TAGS.items()}

FREQ_ENTRY = struct.Struct(">BI")


def pack_frequencies(frequencies: dict[int, int]) -> bytes:
    """Sparse frequency table, entries kept in table order."""
    table = bytearray(struct.pack(">H", len(frequencies)))
    for value, count in frequencies.items():
        table += FREQ_ENTRY.pack(value, count)
    return bytes(table)


def unpack_frequencies(body: bytes) -> tuple[dict[int, int], int]:
    """
    Reads a table written by pack_frequencies.

    Returns:
        Tuple (frequency table, number of bytes consumed)
    """
    if len(body) < 2:
        raise CorruptPayload("Frequency table is truncated")
    (n,) = struct.unpack(">H", body[:2])
    end = 2 + n * FREQ_ENTRY.size
    if len(body) < end:
        raise CorruptPayload(f"Frequency table of {n} entries is truncated")

    frequencies = {}
    for value, count in FREQ_ENTRY.iter_unpack(body[2:end]):
        if value in frequencies:
            raise CorruptPayload(f"Byte value {value} appears twice in frequency table")
        frequencies[value] = count
    return frequencies, end


def pack(result: CompressionResult) -> bytes:
    """
    Serializes a CompressionResult into a container.

    Raises:
        ValueError: If the result carries an unknown method
    """
    if result.method not in METHOD_TAGS:
        raise ValueError(f"Unknown compression method: {result.method}")

    if result.verbatim:
        header = MAGIC + bytes([VERSION, KIND_VERBATIM, METHOD_TAGS[result.method]])
        return header + bytes(result.compressed_bytes)

    header = MAGIC + bytes([VERSION, METHOD_TAGS[result.method]])
    if result.method == HUFFMAN:
        return header + pack_frequencies(result.frequencies or {}) + result.compressed_bytes
    return header + result.compressed_bytes


def read_header(blob: bytes) -> tuple[int, str]:
    """
    Validates the container header.

    Returns:
        Tuple (kind, method name)

    Raises:
        CorruptPayload: On bad magic, unsupported version or unknown kind
    """
    if len(blob) < HEADER_SIZE or blob[: len(MAGIC)] != MAGIC:
        raise CorruptPayload("Invalid magic number")
    version, kind = blob[len(MAGIC)], blob[len(MAGIC) + 1]
    if version != VERSION:
        raise CorruptPayload(f"Unsupported container version: {version}")

    if kind == KIND_VERBATIM:
        if len(blob) < HEADER_SIZE + 1 or blob[HEADER_SIZE] not in TAG_METHODS:
            raise CorruptPayload("Verbatim container has no valid method tag")
        return kind, TAG_METHODS[blob[HEADER_SIZE]]
    if kind not in TAG_METHODS:
        raise CorruptPayload(f"Unknown container kind: {kind}")
    return kind, TAG_METHODS[kind]


def unpack(blob: bytes) -> bytes:
    """
    Restores the original bytes from a container.

    Raises:
        CorruptPayload: If the container or its payload is malformed
    """
    blob = bytes(blob)
    kind, _ = read_header(blob)
    body = blob[HEADER_SIZE:]

    if kind == KIND_VERBATIM:
        return body[1:]
    if kind == KIND_HUFFMAN:
        frequencies, offset = unpack_frequencies(body)
        return decode_huffman(body[offset:], frequencies)
    return decode_lzw(body)
