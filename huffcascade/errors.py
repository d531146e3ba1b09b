class HuffcascadeError(ValueError):
    """Base class for every failure raised by the codec."""


class MalformedHeaderError(HuffcascadeError):
    """A header block is truncated, lacks its sentinel or declares an impossible code."""


class DecodeCorruptionError(HuffcascadeError):
    """The artifact or one of its payloads cannot be decoded."""


class UnrepresentableRoundError(HuffcascadeError):
    """A round produced a code table that cannot describe its own payload."""
