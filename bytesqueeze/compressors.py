"""
Concrete compressors built on the Compressor interface
"""
from bytesqueeze.compressor_ABC import Compressor
from bytesqueeze.results import BOTH, HUFFMAN, LZW, CompressionResult
from bytesqueeze.selector import (
    choose_best_compression,
    compress_data,
    compress_huffman,
    compress_lzw,
)


class HuffmanCompressor(Compressor):
    """Huffman coding with verbatim fallback."""

    method = HUFFMAN

    def encode(self, data: bytes) -> CompressionResult:
        return compress_huffman(data)


class LZWCompressor(Compressor):
    """LZW with 16-bit codes and verbatim fallback."""

    method = LZW

    def encode(self, data: bytes) -> CompressionResult:
        return compress_lzw(data)


class BestCompressor(Compressor):
    """Runs both algorithms and keeps the smaller result."""

    method = BOTH

    def encode(self, data: bytes) -> CompressionResult:
        results = compress_data(data, BOTH)
        for result in results:
            self._note(
                f"{result.method}: {result.compressed_size}/{result.original_size} bytes"
                + (" (verbatim)" if result.verbatim else "")
            )
        return choose_best_compression(results)


COMPRESSORS = {
    HUFFMAN: HuffmanCompressor,
    LZW: LZWCompressor,
    BOTH: BestCompressor,
}


def get_compressor(method: str) -> type[Compressor]:
    """
    Compressor class for a method name.

    Raises:
        ValueError: If method is unknown
    """
    try:
        return COMPRESSORS[method]
    except KeyError:
        raise ValueError(f"Unknown compression method: {method}") from None
