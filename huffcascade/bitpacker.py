from bitarray import bitarray

from .errors import DecodeCorruptionError, MalformedHeaderError, UnrepresentableRoundError

MAX_CODE_LENGTH = 255
SENTINEL = b"\x00\x00"
TRAILER_SIZE = 2


def _code_bits(value: int, length: int) -> bitarray:
    return bitarray(format(value, "0%db" % length), endian="big")


def write_header(codes: dict) -> bytes:
    """
    Serializes a code table as a header block.

    Every entry is written as symbol, bit length and the code value in the
    smallest number of big-endian bytes that holds the bit length. The block
    ends with a (0, 0) sentinel.

    Parameters:
    codes (dict): Byte value -> (code value, code length).

    Returns:
    bytes: The header block.
    """
    header = bytearray()
    for symbol, (value, length) in codes.items():
        if not 1 <= length <= MAX_CODE_LENGTH:
            raise UnrepresentableRoundError(
                f"Code length {length} for symbol {symbol} does not fit in a header")
        header.append(symbol)
        header.append(length)
        header += value.to_bytes((length + 7) // 8, "big")
    header += SENTINEL
    return bytes(header)


def read_header(buffer: bytes, offset: int = 0):
    """
    Parses one header block.

    Parameters:
    buffer (bytes): The buffer holding the header block.
    offset (int): Index of the first byte of the block.

    Returns:
    tuple: (codes, offset) where codes maps byte value -> (code value, code
    length) and offset points just past the sentinel.
    """
    codes = {}
    seen = set()
    while True:
        if offset + 2 > len(buffer):
            raise MalformedHeaderError(f"Header ends at byte {len(buffer)} without a sentinel")
        symbol, length = buffer[offset], buffer[offset + 1]
        offset += 2
        if length == 0:
            return codes, offset

        width = (length + 7) // 8
        if offset + width > len(buffer):
            raise MalformedHeaderError(
                f"Code of {length} bits for symbol {symbol} is truncated at byte {len(buffer)}")
        value = int.from_bytes(buffer[offset:offset + width], "big")
        offset += width

        if value >> length:
            raise MalformedHeaderError(
                f"Code value {value} for symbol {symbol} does not fit in {length} bits")
        if symbol in codes or (value, length) in seen:
            raise MalformedHeaderError(f"Duplicate header entry for symbol {symbol}")
        codes[symbol] = (value, length)
        seen.add((value, length))


def pack(data: bytes, codes: dict):
    """
    Encodes a buffer under a code table.

    The payload ends with the partial last byte (left-justified, all zero if
    the bits ended on a byte boundary) followed by the number of valid bits
    in it.

    Parameters:
    data (bytes): The buffer to encode.
    codes (dict): Byte value -> (code value, code length) for every byte in data.

    Returns:
    tuple: (header, payload) as bytes.
    """
    missing = set(data).difference(codes)
    if missing:
        raise UnrepresentableRoundError(f"No code for symbols {sorted(missing)}")
    header = write_header(codes)

    bits = bitarray(endian="big")
    bits.encode({symbol: _code_bits(value, length)
                 for symbol, (value, length) in codes.items()}, data)

    valid = len(bits) % 8
    bits.fill()
    payload = bytearray(bits.tobytes())
    if valid == 0:
        payload.append(0)
    payload.append(valid)
    return header, bytes(payload)


def unpack(payload: bytes, codes: dict) -> bytes:
    """
    Decodes a payload produced by pack.

    Parameters:
    payload (bytes): The bit-packed payload including its trailer.
    codes (dict): Byte value -> (code value, code length), as read from the header.

    Returns:
    bytes: The decoded buffer.
    """
    if len(payload) < TRAILER_SIZE:
        raise DecodeCorruptionError(f"Payload of {len(payload)} bytes has no trailer")
    valid = payload[-1]
    if valid > 7:
        raise DecodeCorruptionError(f"Trailer declares {valid} valid bits in the last byte")

    bits = bitarray(endian="big")
    bits.frombytes(bytes(payload[:-1]))
    del bits[len(bits) - 8 + valid:]

    symbols = {code: symbol for symbol, code in codes.items()}
    longest = max((length for _, length in symbols), default=0)

    output = bytearray()
    value = length = 0
    for bit in bits:
        value = (value << 1) | bit
        length += 1
        symbol = symbols.get((value, length))
        if symbol is not None:
            output.append(symbol)
            value = length = 0
        elif length >= longest:
            raise DecodeCorruptionError(
                f"Bit sequence of length {length} matches no code in the header")

    if length:
        raise DecodeCorruptionError(f"Payload ends inside a code ({length} pending bits)")
    return bytes(output)
