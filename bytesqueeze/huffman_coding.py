"""
Huffman coding algorithm -
data compression algorithm
"""
import heapq
import struct
from collections import defaultdict
from typing import Optional

from bytesqueeze.bit_utils import BitReader, BitWriter
from bytesqueeze.results import CorruptPayload

SINGLE_SYMBOL_FLAG = 0x01
SINGLE_SYMBOL_RECORD_SIZE = 6
# u32 original length in front, u8 padding count at the end
RECORD_HEADER_SIZE = 4
RECORD_TRAILER_SIZE = 1


class Node:
    """
    Class object for Node in Huffman's Tree
    """

    def __init__(self, value: Optional[int], val_freq: int, order: int = 0):
        """
        Function initializes the structure of a node.

        :param value: byte value held by a leaf, None for internal nodes
        :param val_freq: int, the frequency in our data for this value
        :param order: int, creation sequence used to break frequency ties
        """
        self.left = None
        self.right = None
        self.value = value
        self.val_freq = val_freq
        self.order = order

    def __lt__(self, val):
        return (self.val_freq, self.order) < (val.val_freq, val.order)

    def __repr__(self):
        if self.is_leaf:
            return f"Node(value={self.value}, val_freq={self.val_freq})"
        return f"Node(val_freq={self.val_freq})"

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


class HuffmanTree:
    """
    Class object for Huffman Tree - main structure used
    in Huffman coding algorithm. Holds the frequency table,
    the tree itself and the code table of one invocation.
    """

    def __init__(self, data: Optional[bytes] = None):
        """
        Function initializes the structure of Huffman Tree.

        :param data: bytes to count frequencies for, leaves the tree empty if None
        """
        self.res_codes = {}
        self.root = None
        self.char_frequency_dict = {}
        self.nodes = []
        if data:
            self.char_frequency_dict = self.char_frequency(data)
            self.nodes = self._leaves(self.char_frequency_dict)

    @classmethod
    def build_from_freq(cls, freq_dict: dict[int, int]) -> "HuffmanTree":
        """
        Builds a Huffman tree from an external frequency table,
        generates prefix codes and returns the instance.

        The decoder relies on this: given the same table in the same
        order it reproduces exactly the encoder's codes.

        :param freq_dict: dict {byte value: frequency}
        :return: HuffmanTree with res_codes filled in
        """
        tree = cls(data=None)
        tree.char_frequency_dict = dict(freq_dict)
        tree.nodes = cls._leaves(tree.char_frequency_dict)
        if tree.nodes:
            tree.tree()
            tree.codes_generation()
        return tree

    @staticmethod
    def _leaves(freq_dict: dict[int, int]) -> list[Node]:
        return [
            Node(val, val_freq, order)
            for order, (val, val_freq) in enumerate(freq_dict.items())
        ]

    @staticmethod
    def char_frequency(data: bytes) -> dict[int, int]:
        """
        Function builds dictionary with frequency
        of each byte for given data. Keys keep first-occurrence order.

        :param data: data to count byte frequency for
        :return: dict, dictionary with byte frequency
        """
        char_frequency_dict = defaultdict(int)
        for el in data:
            char_frequency_dict[el] += 1

        return dict(char_frequency_dict)

    def tree(self):
        """
        Function builds Huffman Tree.

        Equal frequencies are ordered by creation: leaves in table
        order first, merged nodes after them in the order they were made.
        """
        nodes = self.nodes[:]
        heapq.heapify(nodes)
        next_order = len(nodes)
        while len(nodes) > 1:
            # left smallest node
            l = heapq.heappop(nodes)
            # right smallest node
            r = heapq.heappop(nodes)

            # creating new merged node from the smallest left and right
            new_merged_node = Node(None, l.val_freq + r.val_freq, next_order)
            new_merged_node.left, new_merged_node.right = l, r
            next_order += 1
            heapq.heappush(nodes, new_merged_node)

        self.root = nodes[0]

    def codes_generation(self, node=None, curr_code=""):
        """
        Recursive function that generates
        code for each byte, preorder traversal of Huffman's tree

        :param node: node to start traversal from
        :param curr_code: str, current code of a byte
        """

        # if node is not passed, we start traversal from the root
        if node is None:
            node = self.root

        # if our node is a leaf than we write the code for it
        if node.is_leaf:
            # a lone root still needs a one-bit code
            self.res_codes.setdefault(node.value, curr_code or "0")
            return

        self.codes_generation(node.left, curr_code + "0")
        self.codes_generation(node.right, curr_code + "1")

    def iter_nodes(self):
        """Yields every node of the tree in preorder."""
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            yield node
            if not node.is_leaf:
                stack.append(node.right)
                stack.append(node.left)


def encode_huffman(data: bytes) -> tuple[bytes, HuffmanTree]:
    """
    Function encodes data using Huffman algorithm.

    The tree is not written into the record; keep
    tree.char_frequency_dict to be able to decode it.

    :param data: bytes to encode
    :return: tuple (record, tree)
    """
    data = bytes(data)
    if not data:
        return b"", HuffmanTree()

    tree = HuffmanTree(data)
    if len(tree.char_frequency_dict) == 1:
        tree.tree()
        tree.codes_generation()
        return (
            struct.pack(">BBI", SINGLE_SYMBOL_FLAG, data[0], len(data)),
            tree,
        )

    tree.tree()
    tree.codes_generation()

    writer = BitWriter()
    writer.write_symbols(tree.res_codes, data)
    padding = writer.byte_align()

    record = bytearray(struct.pack(">I", len(data)))
    record += writer.to_bytes()
    record.append(padding)
    return bytes(record), tree


def decode_huffman(record: bytes, frequencies: Optional[dict[int, int]] = None) -> bytes:
    """
    Function decodes a record made by encode_huffman.

    :param record: bytes, single-symbol or general Huffman record
    :param frequencies: dict, frequency table the record was encoded with,
        not needed for single-symbol records
    :return: bytes, decoded data
    """
    if not record:
        return b""

    if frequencies is None or len(frequencies) <= 1:
        if len(record) != SINGLE_SYMBOL_RECORD_SIZE or record[0] != SINGLE_SYMBOL_FLAG:
            raise CorruptPayload("Expected a 6-byte single-symbol Huffman record")
        _, value, count = struct.unpack(">BBI", record)
        if frequencies and frequencies.get(value) != count:
            raise CorruptPayload("Single-symbol record does not match frequency table")
        return bytes([value]) * count

    if len(record) < RECORD_HEADER_SIZE + RECORD_TRAILER_SIZE:
        raise CorruptPayload("Huffman record is truncated")

    (original_length,) = struct.unpack(">I", record[:RECORD_HEADER_SIZE])
    padding = record[-1]
    if original_length != sum(frequencies.values()):
        raise CorruptPayload(
            f"Record length {original_length} does not match frequency table "
            f"total {sum(frequencies.values())}"
        )

    tree = HuffmanTree.build_from_freq(frequencies)
    try:
        reader = BitReader(record[RECORD_HEADER_SIZE:-RECORD_TRAILER_SIZE], padding)
        decoded = reader.decode_symbols(tree.res_codes)
    except ValueError as exc:
        raise CorruptPayload(f"Huffman bit stream is invalid: {exc}") from exc

    if len(decoded) != original_length:
        raise CorruptPayload(
            f"Decoded {len(decoded)} bytes, expected {original_length}"
        )
    return decoded
