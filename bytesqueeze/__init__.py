"""
Huffman coding and LZW compression of in-memory byte buffers
"""
from bytesqueeze.results import (
    CompressionResult,
    CorruptPayload,
    EmptyCandidateSet,
)
from bytesqueeze.huffman_coding import HuffmanTree, decode_huffman, encode_huffman
from bytesqueeze.LZW import LZWCoder, LZWDictionary, decode_lzw, encode_lzw
from bytesqueeze.selector import (
    choose_best_compression,
    compress_data,
    compress_huffman,
    compress_lzw,
    decompress,
)
from bytesqueeze.compressors import (
    BestCompressor,
    HuffmanCompressor,
    LZWCompressor,
    get_compressor,
)

__all__ = [
    "BestCompressor",
    "CompressionResult",
    "CorruptPayload",
    "EmptyCandidateSet",
    "HuffmanCompressor",
    "HuffmanTree",
    "LZWCoder",
    "LZWCompressor",
    "LZWDictionary",
    "choose_best_compression",
    "compress_data",
    "compress_huffman",
    "compress_lzw",
    "decode_huffman",
    "decode_lzw",
    "decompress",
    "encode_huffman",
    "encode_lzw",
    "get_compressor",
]
