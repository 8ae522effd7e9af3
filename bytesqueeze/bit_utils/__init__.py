from bytesqueeze.bit_utils.bit_reader import BitReader
from bytesqueeze.bit_utils.bit_writer import BitWriter

__all__ = ["BitReader", "BitWriter"]
