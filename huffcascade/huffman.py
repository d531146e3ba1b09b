from heapq import heapify, heappush, heappop
from collections import Counter
from itertools import count


class HuffmanLeaf:
    def __init__(self, symbol, weight):
        self.symbol = symbol
        self.weight = weight

    def __repr__(self):
        return "HuffmanLeaf(%d, %d)" % (self.symbol, self.weight)


class HuffmanInternal:
    def __init__(self, left, right):
        self.left = left
        self.right = right
        self.weight = left.weight + right.weight

    def __repr__(self):
        return "HuffmanInternal(%r, %r)" % (self.left, self.right)


def count_frequencies(data: bytes) -> Counter:
    """
    Counts how often each byte value occurs in the given buffer.

    Parameters:
    data (bytes): The buffer to analyze.

    Returns:
    Counter: Byte value -> occurrence count. Empty for an empty buffer.
    """
    return Counter(data)


def build_tree(frequencies):
    """
    Builds a Huffman tree from a frequency table.

    The first node popped from the queue becomes the left child and the second
    one the right child. Equal weights are ordered by sequence number: leaves
    are numbered in ascending symbol order, internal nodes get the next number
    when they are created.

    Parameters:
    frequencies (Mapping[int, int]): Byte value -> count.

    Returns:
    HuffmanLeaf | HuffmanInternal: The root of the tree.
    """
    sequence = count()
    heap = [(weight, next(sequence), HuffmanLeaf(symbol, weight))
            for symbol, weight in sorted(frequencies.items()) if weight > 0]
    if not heap:
        raise ValueError("Cannot build a Huffman tree from an empty frequency table")
    heapify(heap)

    while len(heap) > 1:
        left_weight, _, left = heappop(heap)
        right_weight, _, right = heappop(heap)
        heappush(heap, (left_weight + right_weight, next(sequence), HuffmanInternal(left, right)))

    return heap[0][2]


def generate_codes(root) -> dict:
    """
    Walks the tree and assigns a (value, length) code to every leaf.

    A tree made of a single leaf would give that leaf an empty code, so it is
    assigned (0, 1) instead.

    Parameters:
    root: The root returned by build_tree.

    Returns:
    dict: Byte value -> (code value, code length), in pre-order.
    """
    codes = {}

    def walk(node, value, length):
        if isinstance(node, HuffmanLeaf):
            codes[node.symbol] = (value, length) if length else (0, 1)
        else:
            walk(node.left, value << 1, length + 1)
            walk(node.right, (value << 1) | 1, length + 1)

    walk(root, 0, 0)
    return codes
