"""
Profitability policy and method selection for the Huffman and LZW encoders
"""
from functools import reduce

from bytesqueeze.huffman_coding import decode_huffman, encode_huffman
from bytesqueeze.LZW import (
    LZW_CODE_SIZE,
    LZW_HEADER_SIZE,
    LZWCoder,
    decode_lzw,
    encode_lzw,
)
from bytesqueeze.results import (
    BOTH,
    HUFFMAN,
    LZW,
    CompressionResult,
    EmptyCandidateSet,
)

# Below this size container overhead dominates
MIN_COMPRESSIBLE_SIZE = 100
# Estimated cost of storing the Huffman tree next to the record
SINGLE_SYMBOL_OVERHEAD = 6
TREE_BYTES_PER_SYMBOL = 5


def _verbatim(data: bytes, method: str) -> CompressionResult:
    return CompressionResult(
        compressed_bytes=data,
        original_size=len(data),
        compressed_size=len(data),
        method=method,
        verbatim=True,
    )


def tree_overhead(symbol_count: int) -> int:
    """Estimated bytes needed to store a tree over symbol_count byte values."""
    if symbol_count <= 1:
        return SINGLE_SYMBOL_OVERHEAD
    return symbol_count * TREE_BYTES_PER_SYMBOL


def compress_huffman(data: bytes) -> CompressionResult:
    """
    Huffman-encode data, falling back to the original bytes when
    the record plus tree overhead would not be smaller.

    Args:
        data: Input buffer

    Returns:
        CompressionResult tagged "huffman"
    """
    data = bytes(data)
    if len(data) < MIN_COMPRESSIBLE_SIZE:
        return _verbatim(data, HUFFMAN)

    record, tree = encode_huffman(data)
    total_size = len(record) + tree_overhead(len(tree.char_frequency_dict))
    if total_size >= len(data):
        return _verbatim(data, HUFFMAN)

    return CompressionResult(
        compressed_bytes=record,
        original_size=len(data),
        compressed_size=total_size,
        method=HUFFMAN,
        frequencies=tree.char_frequency_dict,
    )


def compress_lzw(data: bytes) -> CompressionResult:
    """
    LZW-encode data, falling back to the original bytes when the
    header plus 16-bit codes would not be smaller.

    Args:
        data: Input buffer

    Returns:
        CompressionResult tagged "lzw"
    """
    data = bytes(data)
    if not data:
        return CompressionResult(
            compressed_bytes=b"",
            original_size=0,
            compressed_size=0,
            method=LZW,
        )
    if len(data) < MIN_COMPRESSIBLE_SIZE:
        return _verbatim(data, LZW)

    codes = encode_lzw(data)
    total_size = LZW_HEADER_SIZE + LZW_CODE_SIZE * len(codes)
    if total_size >= len(data):
        return _verbatim(data, LZW)

    record = LZWCoder.pack(len(data), codes)
    return CompressionResult(
        compressed_bytes=record,
        original_size=len(data),
        compressed_size=len(record),
        method=LZW,
    )


def compress_data(data: bytes, method: str = BOTH) -> list[CompressionResult]:
    """
    Run the requested encoders over data.

    Args:
        data: Input buffer
        method: "huffman", "lzw" or "both"

    Returns:
        Results in the order huffman, lzw

    Raises:
        ValueError: If method is unknown
    """
    if method not in (HUFFMAN, LZW, BOTH):
        raise ValueError(f"Unknown compression method: {method}")

    results = []
    if method in (HUFFMAN, BOTH):
        results.append(compress_huffman(data))
    if method in (LZW, BOTH):
        results.append(compress_lzw(data))
    return results


def choose_best_compression(results: list[CompressionResult]) -> CompressionResult:
    """
    Pick the result with the smallest compressed/original ratio.
    On equal ratios the earlier result wins.

    Raises:
        EmptyCandidateSet: If results is empty
    """
    if not results:
        raise EmptyCandidateSet("No compression results available")

    return reduce(
        lambda best, current: current if current.ratio < best.ratio else best,
        results,
    )


def decompress(result: CompressionResult) -> bytes:
    """
    Restore the original bytes from a CompressionResult.

    Raises:
        CorruptPayload: If the payload cannot be decoded
        ValueError: If the result carries an unknown method
    """
    if result.verbatim:
        return bytes(result.compressed_bytes)
    if result.method == HUFFMAN:
        return decode_huffman(result.compressed_bytes, result.frequencies)
    if result.method == LZW:
        return decode_lzw(result.compressed_bytes)
    raise ValueError(f"Unknown compression method: {result.method}")
