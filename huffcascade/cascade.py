"""
Multi-round Huffman coding.

Every round builds a fresh Huffman code for the current payload and packs it.
A round is kept only if its header plus packed payload is strictly smaller than
the payload it started from. The artifact layout is:

    depth (1 byte) | header block * depth | final payload

The headers are stored in the order the rounds ran, so decoding applies them
from last to first.
"""

import logging

from .bitpacker import pack, read_header, unpack
from .errors import DecodeCorruptionError
from .huffman import build_tree, count_frequencies, generate_codes

logger = logging.getLogger(__name__)

MAX_DEPTH = 255


def compress_round(payload: bytes):
    """
    Runs one Huffman round over a non-empty payload.

    Returns:
    tuple: (header, packed payload).
    """
    codes = generate_codes(build_tree(count_frequencies(payload)))
    return pack(payload, codes)


def encode(data: bytes, max_depth: int = MAX_DEPTH) -> bytes:
    """
    Compresses a buffer with as many improving rounds as possible.

    Parameters:
    data (bytes): The buffer to compress.
    max_depth (int): Upper bound on committed rounds, 0 to 255.

    Returns:
    bytes: The encoded artifact.
    """
    if not 0 <= max_depth <= MAX_DEPTH:
        raise ValueError(f"max_depth must be between 0 and {MAX_DEPTH}, got {max_depth}")

    payload = bytes(data)
    headers = []
    while payload and len(headers) < max_depth:
        header, candidate = compress_round(payload)
        candidate_size = len(header) + len(candidate)
        if candidate_size >= len(payload):
            logger.debug("Round %d rejected: %d -> %d bytes",
                         len(headers), len(payload), candidate_size)
            break
        logger.debug("Round %d committed: %d -> %d bytes (header %d)",
                     len(headers), len(payload), candidate_size, len(header))
        headers.append(header)
        payload = candidate

    return bytes([len(headers)]) + b"".join(headers) + payload


def decode(artifact: bytes) -> bytes:
    """
    Restores the original buffer from an encoded artifact.

    Parameters:
    artifact (bytes): Output of encode.

    Returns:
    bytes: The original buffer.
    """
    artifact = bytes(artifact)
    if not artifact:
        raise DecodeCorruptionError("Artifact is empty, depth byte missing")

    depth = artifact[0]
    offset = 1
    tables = []
    for index in range(depth):
        if offset >= len(artifact):
            raise DecodeCorruptionError(
                f"Depth is {depth} but the artifact only holds {index} headers")
        codes, offset = read_header(artifact, offset)
        tables.append(codes)

    payload = artifact[offset:]
    for index in reversed(range(depth)):
        payload = unpack(payload, tables[index])
        logger.debug("Round %d undone: %d bytes", index, len(payload))
    return payload
