import random

import pytest

from bytesqueeze.results import CompressionResult, EmptyCandidateSet
from bytesqueeze.selector import (
    MIN_COMPRESSIBLE_SIZE,
    choose_best_compression,
    compress_data,
    compress_huffman,
    compress_lzw,
    decompress,
    tree_overhead,
)


def _result(compressed_size, original_size, method="huffman"):
    return CompressionResult(
        compressed_bytes=b"",
        original_size=original_size,
        compressed_size=compressed_size,
        method=method,
    )


def test_huffman_compresses_hello_world(hello):
    result = compress_huffman(hello)

    assert result.method == "huffman"
    assert not result.verbatim
    assert result.original_size == 110
    assert result.compressed_size < 110
    # 8 distinct bytes cost 5 bytes each in the accounting
    assert result.compressed_size == len(result.compressed_bytes) + 40
    assert len(result.frequencies) == 8
    assert decompress(result) == hello


@pytest.mark.parametrize("compress", [compress_huffman, compress_lzw])
def test_short_input_is_kept_verbatim(compress):
    result = compress(b"ABABABA")

    assert result.compressed_size == result.original_size == 7
    assert result.compressed_bytes == b"ABABABA"
    assert result.verbatim


@pytest.mark.parametrize("size", [1, 50, MIN_COMPRESSIBLE_SIZE - 1])
def test_size_floor(size):
    data = b"a" * size
    for result in compress_data(data, "both"):
        assert result.compressed_size == result.original_size == size
        assert result.compressed_bytes == data


def test_single_symbol_uses_six_byte_record():
    data = b"\x00" * 1000
    result = compress_huffman(data)

    assert result.compressed_bytes == b"\x01\x00\x00\x00\x03\xe8"
    assert result.compressed_size == 6 + 6
    assert result.original_size == 1000
    assert decompress(result) == data


def test_single_symbol_at_size_floor():
    result = compress_huffman(b"q" * MIN_COMPRESSIBLE_SIZE)
    assert not result.verbatim
    assert result.compressed_size == 12


def test_tree_overhead():
    assert tree_overhead(0) == 6
    assert tree_overhead(1) == 6
    assert tree_overhead(2) == 10
    assert tree_overhead(256) == 1280


def test_original_size_is_input_length(text_sample):
    for data in (b"x", text_sample, bytes(range(256))):
        assert compress_huffman(data).original_size == len(data)


def test_unprofitable_input_falls_back():
    data = bytes(range(256))
    huffman, lzw = compress_data(data, "both")

    assert huffman.verbatim and lzw.verbatim
    assert huffman.method == "huffman"
    assert lzw.method == "lzw"
    assert huffman.compressed_bytes == lzw.compressed_bytes == data
    assert huffman.compressed_size == lzw.compressed_size == 256


def test_lzw_compresses_repetitive_data():
    data = b"ABCD" * 100
    result = compress_lzw(data)

    assert result.method == "lzw"
    assert not result.verbatim
    assert result.compressed_size == len(result.compressed_bytes) < len(data)
    assert decompress(result) == data


def test_empty_input():
    huffman, lzw = compress_data(b"", "both")

    assert huffman.compressed_bytes == lzw.compressed_bytes == b""
    assert huffman.original_size == lzw.original_size == 0
    assert huffman.compressed_size == lzw.compressed_size == 0
    assert huffman.ratio == lzw.ratio == 1.0
    assert decompress(huffman) == decompress(lzw) == b""


def test_compress_data_order(hello):
    results = compress_data(hello)
    assert [r.method for r in results] == ["huffman", "lzw"]
    assert [r.method for r in compress_data(hello, "huffman")] == ["huffman"]
    assert [r.method for r in compress_data(hello, "lzw")] == ["lzw"]


def test_compress_data_rejects_unknown_method(hello):
    with pytest.raises(ValueError):
        compress_data(hello, "zip")


def test_choose_best_rejects_empty_list():
    with pytest.raises(EmptyCandidateSet):
        choose_best_compression([])


def test_choose_best_lower_ratio_wins():
    a = _result(50, 100)
    b = _result(40, 100, "lzw")
    assert choose_best_compression([a, b]) is b
    assert choose_best_compression([b, a]) is b


def test_choose_best_compares_ratios_not_sizes():
    a = _result(30, 100)
    b = _result(40, 200, "lzw")
    assert choose_best_compression([a, b]) is b


def test_choose_best_tie_keeps_first():
    a = _result(50, 100)
    b = _result(100, 200, "lzw")
    assert choose_best_compression([a, b]) is a
    assert choose_best_compression([b, a]) is b


def test_choose_best_single_candidate(hello):
    (only,) = compress_data(hello, "lzw")
    assert choose_best_compression([only]) is only


@pytest.mark.parametrize("method", ["huffman", "lzw"])
def test_round_trip_random_skewed(method):
    rng = random.Random(1234)
    data = bytes(rng.choice(b"aaaaaaabbbbccd\x00\xff") for _ in range(5000))
    (result,) = compress_data(data, method)

    assert not result.verbatim
    assert decompress(result) == data


@pytest.mark.parametrize("method", ["huffman", "lzw"])
def test_round_trip_all_byte_values(method):
    data = bytes(range(256)) * 20
    (result,) = compress_data(data, method)
    assert decompress(result) == data


def test_decompress_rejects_unknown_method():
    with pytest.raises(ValueError):
        decompress(_result(10, 100, "zip"))
