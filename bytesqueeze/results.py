"""
Result descriptor and error types shared by the encoders
"""
from dataclasses import dataclass
from typing import Optional

HUFFMAN = "huffman"
LZW = "lzw"
BOTH = "both"


class EmptyCandidateSet(ValueError):
    """Raised when a best result is requested from an empty list."""


class CorruptPayload(ValueError):
    """Raised when a record or container cannot be decoded."""


@dataclass(frozen=True)
class CompressionResult:
    """
    Outcome of one encode call.

    Args:
        compressed_bytes: Encoded record, or the original bytes when stored verbatim
        original_size: Length of the input buffer
        compressed_size: Size used for the profitability comparison
        method: "huffman" or "lzw"
        verbatim: True when compression was not worthwhile
        frequencies: Frequency table needed to rebuild the Huffman tree
    """

    compressed_bytes: bytes
    original_size: int
    compressed_size: int
    method: str
    verbatim: bool = False
    frequencies: Optional[dict[int, int]] = None

    @property
    def ratio(self) -> float:
        if self.original_size == 0:
            return 1.0
        return self.compressed_size / self.original_size

    @property
    def saving(self) -> float:
        """Percentage of the original size saved."""
        return (1 - self.ratio) * 100
