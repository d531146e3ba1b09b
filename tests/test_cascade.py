import random

import pytest

from huffcascade.bitpacker import read_header, write_header
from huffcascade.cascade import MAX_DEPTH, compress_round, decode, encode
from huffcascade.errors import DecodeCorruptionError, HuffcascadeError, MalformedHeaderError


def _random_bytes(n, seed=0):
	rng = random.Random(seed)
	return bytes(rng.getrandbits(8) for _ in range(n))


def _headers(artifact):
	offset = 1
	headers = []
	for _ in range(artifact[0]):
		codes, end = read_header(artifact, offset)
		headers.append(artifact[offset:end])
		offset = end
	return headers, artifact[offset:]


@pytest.mark.parametrize("data", [
	b"",
	b"\x00",
	b"A",
	b"AB",
	b"\x00" * 8192,
	b"A" * 10 * 1024,
	bytes(range(256)),
	b"This is a test" * 100,
	b"Hello World" * 50,
	b"abracadabra" * 37 + b"\xff",
])
def test_roundtrip(data):
	assert decode(encode(data)) == data


def test_roundtrip_random():
	for n in (1, 2, 3, 17, 1000, 4096):
		data = _random_bytes(n, seed=n)
		assert decode(encode(data)) == data


def test_roundtrip_skewed_random():
	rng = random.Random(42)
	data = bytes(rng.choice(b"aaaaaaaabbbbccd") for _ in range(5000))
	artifact = encode(data)
	assert artifact[0] >= 1
	assert len(artifact) < len(data)
	assert decode(artifact) == data


def test_empty_input():
	assert encode(b"") == b"\x00"
	assert decode(b"\x00") == b""


def test_incompressible_input_is_stored():
	data = bytes(range(256))
	assert encode(data) == b"\x00" + data

	data = _random_bytes(4096)
	assert encode(data) == b"\x00" + data


def test_first_round_of_identical_bytes():
	header, payload = compress_round(b"\x41" * 8192)
	assert header == b"\x41\x01\x00\x00\x00"
	assert len(payload) == 8192 // 8 + 2


def test_identical_bytes_cascade():
	data = b"\x00" * 8192
	artifact = encode(data)
	assert artifact[0] == 4
	assert len(artifact) == 34
	assert decode(artifact) == data


def test_committed_rounds_strictly_shrink():
	data = b"\x00" * 8192
	previous = len(data)
	headers, payload = _headers(encode(data))
	current = data
	for _ in headers:
		header, current = compress_round(current)
		assert len(header) + len(current) < previous
		previous = len(current)
	assert current == payload


@pytest.mark.parametrize("data", [
	b"",
	b"x",
	bytes(range(256)) * 3,
	b"\x00" * 100000,
	b"mississippi" * 20,
])
def test_artifact_never_grows_more_than_one_byte(data):
	assert len(encode(data)) <= len(data) + 1


def test_max_depth_limits_rounds():
	data = b"\x00" * 8192
	assert encode(data, max_depth=0) == b"\x00" + data

	artifact = encode(data, max_depth=2)
	assert artifact[0] == 2
	assert decode(artifact) == data


@pytest.mark.parametrize("max_depth", [-1, MAX_DEPTH + 1])
def test_max_depth_out_of_range(max_depth):
	with pytest.raises(ValueError):
		encode(b"abc", max_depth=max_depth)


def test_decode_accepts_bytearray():
	artifact = bytearray(encode(b"Hello World" * 50))
	assert decode(artifact) == b"Hello World" * 50


def test_decode_empty_artifact():
	with pytest.raises(DecodeCorruptionError):
		decode(b"")


def test_decode_depth_larger_than_headers():
	header = write_header({0x41: (0, 1)})
	with pytest.raises(DecodeCorruptionError):
		decode(b"\x02" + header)


def test_decode_header_without_sentinel():
	with pytest.raises(MalformedHeaderError):
		decode(b"\x01\x41\x01\x00")


def test_decode_missing_payload():
	header = write_header({0x41: (0, 1)})
	with pytest.raises(DecodeCorruptionError):
		decode(b"\x01" + header)


def test_truncated_artifact():
	artifact = encode(b"This is a test" * 100)
	assert artifact[0] >= 1
	_, payload = _headers(artifact)
	with pytest.raises(DecodeCorruptionError):
		decode(artifact[:-len(payload)])
	with pytest.raises(MalformedHeaderError):
		decode(artifact[:3])


def test_corrupted_depth():
	artifact = bytearray(encode(b"Hello World" * 50))
	artifact[0] ^= 0xFF
	with pytest.raises(HuffcascadeError):
		decode(bytes(artifact))


def test_default_depth_cap(monkeypatch):
	calls = []

	def shrinking_round(payload):
		calls.append(len(payload))
		return b"", payload[1:]

	monkeypatch.setattr("huffcascade.cascade.compress_round", shrinking_round)
	artifact = encode(b"\x00" * 1000)
	assert artifact[0] == MAX_DEPTH == 255
	assert len(calls) == 255
	assert artifact == b"\xff" + b"\x00" * (1000 - 255)
