"""Recovery of raw process output from multiplexed container log streams."""

from mediarig.logstream.framing import (
    HEADER_SIZE,
    DemuxedOutput,
    Frame,
    FramingMode,
    StreamType,
    demux,
    encode_frame,
    is_header,
    iter_frames,
    unframe,
)

__all__ = [
    "HEADER_SIZE",
    "DemuxedOutput",
    "Frame",
    "FramingMode",
    "StreamType",
    "demux",
    "encode_frame",
    "is_header",
    "iter_frames",
    "unframe",
]
