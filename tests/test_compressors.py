import io

import pytest

from bytesqueeze.compressors import (
    BestCompressor,
    HuffmanCompressor,
    LZWCompressor,
    get_compressor,
)
from bytesqueeze.results import CorruptPayload
from bytesqueeze.selector import compress_data

ALL = [HuffmanCompressor, LZWCompressor, BestCompressor]


@pytest.mark.parametrize("compressor_cls", ALL)
def test_bytes_round_trip(compressor_cls, text_sample):
    blob, log_info = compressor_cls.compress_bytes(text_sample)
    restored, _ = compressor_cls.decompress_bytes(blob)

    assert restored == text_sample
    assert len(blob) < len(text_sample)
    assert "Size reduced by" in log_info


@pytest.mark.parametrize("compressor_cls", ALL)
def test_small_input_logged_as_verbatim(compressor_cls):
    blob, log_info = compressor_cls.compress_bytes(b"ABABABA")

    assert "Stored verbatim" in log_info
    assert compressor_cls.decompress_bytes(blob)[0] == b"ABABABA"


@pytest.mark.parametrize("compressor_cls", ALL)
def test_empty_round_trip(compressor_cls):
    blob, _ = compressor_cls.compress_bytes(b"")
    assert compressor_cls.decompress_bytes(blob)[0] == b""


def test_any_compressor_reads_any_container(text_sample):
    blob, _ = HuffmanCompressor.compress_bytes(text_sample)
    assert LZWCompressor.decompress_bytes(blob)[0] == text_sample


def test_best_compressor_keeps_smaller_result(text_sample):
    compressor = BestCompressor()
    result = compressor.encode(text_sample)

    assert result.ratio == min(r.ratio for r in compress_data(text_sample, "both"))
    assert any(line.startswith("huffman:") for line in compressor.log)
    assert any(line.startswith("lzw:") for line in compressor.log)


def test_stream_interface(hello):
    out = io.BytesIO()
    log_info = HuffmanCompressor().compress(io.BytesIO(hello), out)

    assert out.getvalue().startswith(b"BSQ")
    assert log_info.splitlines()[0] == f"Compressing {len(hello)} bytes"


def test_verbose_prints_log(hello, capsys):
    LZWCompressor(verbose=True).compress(io.BytesIO(hello), io.BytesIO())
    assert "Compressing 110 bytes" in capsys.readouterr().out


def test_file_helpers(tmp_path, text_sample):
    source = tmp_path / "notes.txt"
    packed = tmp_path / "notes.txt.bsq"
    restored = tmp_path / "restored.txt"
    source.write_bytes(text_sample)

    BestCompressor.compress_file(str(source), str(packed))
    log_info = BestCompressor.decompress_file(str(packed), str(restored))

    assert restored.read_bytes() == text_sample
    assert f"Restored {len(text_sample)} bytes" in log_info


def test_corrupt_file_leaves_no_output(tmp_path):
    packed = tmp_path / "broken.bsq"
    restored = tmp_path / "broken"
    packed.write_bytes(b"BSQ\x01\x02\x00\x00")

    with pytest.raises(CorruptPayload):
        LZWCompressor.decompress_file(str(packed), str(restored))
    assert not restored.exists()


def test_get_compressor():
    assert get_compressor("huffman") is HuffmanCompressor
    assert get_compressor("lzw") is LZWCompressor
    assert get_compressor("both") is BestCompressor
    for method in ("huffman", "lzw", "both"):
        assert get_compressor(method).method == method
    with pytest.raises(ValueError):
        get_compressor("zip")
