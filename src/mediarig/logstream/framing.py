"""Docker multiplexed log stream framing.

A container started without a TTY writes stdout and stderr through a single
channel, each chunk prefixed with an 8-byte header:

    byte 0      stream type (0 = stdin, 1 = stdout, 2 = stderr)
    bytes 1-3   padding, always zero
    bytes 4-7   payload length, big-endian uint32

This module recovers the raw payload bytes from such a stream. Two modes are
supported: LENGTH honours the declared payload length, SCAN reproduces the
older heuristic that drops anything shaped like a header and ignores the
length field.
"""

from __future__ import annotations

import struct
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, IntEnum

HEADER_SIZE = 8

_HEADER = struct.Struct(">B3xI")
_PADDING = b"\x00\x00\x00"


class StreamType(IntEnum):
    """Channel tag carried in byte 0 of a frame header."""

    STDIN = 0
    STDOUT = 1
    STDERR = 2


_STREAM_TAGS = frozenset(int(tag) for tag in StreamType)


class FramingMode(str, Enum):
    """How frame boundaries are located."""

    LENGTH = "length"
    SCAN = "scan"


@dataclass(frozen=True)
class Frame:
    """One payload segment recovered from a framed stream.

    Attributes:
        stream: Channel the payload was written to, or None for bytes that
            were not covered by any header (TTY output, garbage tail).
        payload: The payload bytes.
    """

    stream: StreamType | None
    payload: bytes


def is_header(data: bytes, offset: int = 0) -> bool:
    """Check whether a complete frame header starts at ``offset``."""
    if len(data) - offset < HEADER_SIZE:
        return False
    return (
        data[offset] in _STREAM_TAGS
        and data[offset + 1 : offset + 4] == _PADDING
    )


def iter_frames(raw: bytes) -> Iterator[Frame]:
    """Split a framed stream into frames using the declared lengths.

    Never raises on malformed input. A short or invalid header ends framing:
    everything from that point on is yielded as a single untagged frame. A
    payload cut short by the end of input yields whatever bytes remain.

    Args:
        raw: Complete framed stream.

    Yields:
        Frames in stream order. Empty payloads are skipped.
    """
    data = bytes(raw)
    cursor = 0
    end = len(data)

    while cursor < end:
        if not is_header(data, cursor):
            yield Frame(stream=None, payload=data[cursor:])
            return

        tag, length = _HEADER.unpack_from(data, cursor)
        cursor += HEADER_SIZE
        payload = data[cursor : cursor + length]
        cursor += len(payload)
        if payload:
            yield Frame(stream=StreamType(tag), payload=payload)


def _unframe_length(raw: bytes) -> bytes:
    return b"".join(frame.payload for frame in iter_frames(raw))


def _unframe_scan(raw: bytes) -> bytes:
    data = bytes(raw)
    out = bytearray()
    cursor = 0
    end = len(data)

    while cursor < end:
        if is_header(data, cursor):
            cursor += HEADER_SIZE
            continue
        out.append(data[cursor])
        cursor += 1

    return bytes(out)


def unframe(raw: bytes, mode: FramingMode | str = FramingMode.LENGTH) -> bytes:
    """Strip frame headers from a multiplexed stream.

    Args:
        raw: Complete framed stream, possibly empty, unframed or truncated.
        mode: LENGTH (default) consumes exactly the declared payload length
            after each header. SCAN drops every 8-byte window that looks like
            a header and keeps all other bytes, so payload bytes that happen
            to match the header pattern are lost.

    Returns:
        Payload bytes in stream order.
    """
    if FramingMode(mode) is FramingMode.SCAN:
        return _unframe_scan(raw)
    return _unframe_length(raw)


@dataclass(frozen=True)
class DemuxedOutput:
    """Per-channel payloads of a framed stream."""

    stdout: bytes
    stderr: bytes


def demux(raw: bytes) -> DemuxedOutput:
    """Separate a framed stream into stdout and stderr payloads.

    Stdin frames and untagged bytes are attached to stdout, which is where
    the daemon writes them for TTY containers.
    """
    stdout = bytearray()
    stderr = bytearray()
    for frame in iter_frames(raw):
        if frame.stream is StreamType.STDERR:
            stderr += frame.payload
        else:
            stdout += frame.payload
    return DemuxedOutput(stdout=bytes(stdout), stderr=bytes(stderr))


def encode_frame(stream: StreamType | int, payload: bytes) -> bytes:
    """Build a single frame, header included."""
    return _HEADER.pack(int(stream), len(payload)) + payload
