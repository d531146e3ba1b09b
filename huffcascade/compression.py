from .cascade import MAX_DEPTH, decode, encode


class Compressor:
        # Compression Block: turns raw bytes into an encoded artifact. 'store'
        # keeps the bytes as they are, 'huffman' runs a single Huffman round and
        # 'cascade' keeps running rounds while they shrink the payload.
        # Every method writes the same artifact format, so any artifact can be
        # decompressed by any Compressor.
        VALID_METHODS = {'store', 'huffman', 'cascade'}

        def __init__(self, method='cascade', max_depth=MAX_DEPTH):
            """
            Initializes the Compressor with the specified compression method.

            Parameters:
            method (str): The compression method to be used ('store', 'huffman', 'cascade').
            max_depth (int): Round limit for the 'cascade' method, 0 to 255.
            """
            self.method = method.lower()
            if self.method not in self.VALID_METHODS:
                raise ValueError(f"Unsupported compression method: {self.method}")
            if not 0 <= max_depth <= MAX_DEPTH:
                raise ValueError(f"max_depth must be between 0 and {MAX_DEPTH}, got {max_depth}")
            self.max_depth = max_depth

        @classmethod
        def from_config(cls, config):
            compression = config["compression"]
            return cls(compression["method"], compression["max_depth"])

        @property
        def depth_limit(self) -> int:
            if self.method == 'store':
                return 0
            elif self.method == 'huffman':
                return min(1, self.max_depth)
            return self.max_depth

        def compress(self, data: bytes) -> bytes:
            """
            Compresses the given bytes using the specified method.

            Parameters:
            data (bytes): The bytes to compress.

            Returns:
            bytes: The encoded artifact.
            """
            if not isinstance(data, (bytes, bytearray, memoryview)):
                raise TypeError("Input data must be bytes-like.")
            return encode(data, self.depth_limit)

        def decompress(self, compressed: bytes) -> bytes:
            """
            Decompresses an encoded artifact.

            Parameters:
            compressed (bytes): The encoded artifact.

            Returns:
            bytes: The original bytes.
            """
            if not isinstance(compressed, (bytes, bytearray, memoryview)):
                raise TypeError("Input compressed data must be bytes-like.")
            return decode(compressed)
