from abc import ABC, abstractmethod
import io
from typing import BinaryIO, Tuple

from bytesqueeze import container
from bytesqueeze.results import CompressionResult


class Compressor(ABC):
    """
    Interface describing compression and decompression of files
    with different algorithms. The whole input is read into memory.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.log = []

    @abstractmethod
    def encode(self, data: bytes) -> CompressionResult:
        """
        Runs the compression algorithm over a byte buffer.

        Args:
            data: Input bytes

        Returns:
            The chosen CompressionResult
        """

    def _note(self, message: str) -> None:
        self.log.append(message)
        if self.verbose:
            print(message)

    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Reads all bytes from the input stream, compresses them and
        writes the container to the output stream.

        Args:
            input_stream: Input stream for data
            output_stream: Output stream for the compressed container

        Returns:
            String with information for logging
        """
        self.log.clear()
        data = input_stream.read()
        self._note(f"Compressing {len(data)} bytes")

        result = self.encode(data)
        blob = container.pack(result)
        output_stream.write(blob)

        if result.verbatim:
            self._note(f"Stored verbatim: {result.method} would not reduce the size")
        else:
            diff = result.original_size - result.compressed_size
            self._note(
                f"Size reduced by {diff} bytes ({result.saving:.1f}% total saving) "
                f"using {result.method}"
            )
        self._note(f"Container size: {len(blob)} bytes")
        return "\n".join(self.log)

    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Reads a container from the input stream and writes the
        restored bytes to the output stream.

        Args:
            input_stream: Input stream for the compressed container
            output_stream: Output stream for decompressed data

        Returns:
            String with information for logging
        """
        self.log.clear()
        blob = input_stream.read()
        kind, method = container.read_header(blob)
        self._note(f"Decompressing {len(blob)} bytes ({method})")

        data = container.unpack(blob)
        output_stream.write(data)

        if kind == container.KIND_VERBATIM:
            self._note(f"Restored {len(data)} bytes stored verbatim")
        else:
            self._note(f"Restored {len(data)} bytes")
        return "\n".join(self.log)

    @classmethod
    def compress_file(cls, input_file: str, output_file: str, verbose: bool = False) -> str:
        """
        Helper method to compress a file.

        Args:
            input_file: Path to the input file
            output_file: Path to the output file
            verbose: Whether to print log lines as they are produced

        Returns:
            Compression information
        """
        compressor = cls(verbose=verbose)
        with open(input_file, "rb") as in_file, open(output_file, "wb") as out_file:
            return compressor.compress(in_file, out_file)

    @classmethod
    def decompress_file(cls, input_file: str, output_file: str, verbose: bool = False) -> str:
        """
        Helper method to decompress a file.

        Args:
            input_file: Path to the compressed file
            output_file: Path to the output file
            verbose: Whether to print log lines as they are produced

        Returns:
            Decompression information
        """
        compressor = cls(verbose=verbose)
        with open(input_file, "rb") as in_file:
            blob = in_file.read()
        # decode fully before touching the output so a corrupt input leaves no partial file
        out_buffer = io.BytesIO()
        log_info = compressor.decompress(io.BytesIO(blob), out_buffer)
        with open(output_file, "wb") as out_file:
            out_file.write(out_buffer.getvalue())
        return log_info

    @classmethod
    def compress_bytes(cls, data: bytes) -> Tuple[bytes, str]:
        """
        Helper method to compress bytes.

        Args:
            data: Input data for compression

        Returns:
            Tuple (compressed container, compression information)
        """
        compressor = cls()
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        log_info = compressor.compress(in_buffer, out_buffer)
        return out_buffer.getvalue(), log_info

    @classmethod
    def decompress_bytes(cls, data: bytes) -> Tuple[bytes, str]:
        """
        Helper method to decompress bytes.

        Args:
            data: Compressed container

        Returns:
            Tuple (decompressed data, decompression information)
        """
        compressor = cls()
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        log_info = compressor.decompress(in_buffer, out_buffer)
        return out_buffer.getvalue(), log_info
