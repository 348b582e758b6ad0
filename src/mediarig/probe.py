"""Parsing of JSON documents printed by ffprobe and shaka-packager.

ffprobe runs inside a container, so its JSON arrives through the framed log
stream and is unframed before validation.
"""

from __future__ import annotations

import json

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mediarig.logstream import FramingMode, unframe


class ProbeParseError(Exception):
    """Raised when tool output is not the expected JSON document."""


class FFProbeFormat(BaseModel):
    """The ``format`` section of ``ffprobe -show_format``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    filename: str = ""
    format_name: str = ""
    format_long_name: str | None = None
    nb_streams: int | None = None
    duration: str | None = None
    size: str | None = None
    bit_rate: str | None = None
    tags: dict[str, str] = Field(default_factory=dict)

    @property
    def duration_seconds(self) -> float | None:
        """Duration as a float, None when absent or unparsable."""
        try:
            return float(self.duration) if self.duration else None
        except ValueError:
            return None


class FFProbeStream(BaseModel):
    """One entry of the ``streams`` list of ``ffprobe -show_streams``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    index: int
    codec_name: str | None = None
    codec_type: str | None = None
    width: int = 0
    height: int = 0
    sample_rate: str | None = None
    channels: int = 0
    duration: str | None = None
    bit_rate: str | None = None
    tags: dict[str, str] = Field(default_factory=dict)


class FFProbeOutput(BaseModel):
    """Top-level ffprobe JSON document.

    Either section may be missing depending on the -show_* flags used.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    format: FFProbeFormat = Field(default_factory=FFProbeFormat)
    streams: list[FFProbeStream] = Field(default_factory=list)

    def video_streams(self) -> list[FFProbeStream]:
        return [s for s in self.streams if s.codec_type == "video"]

    def audio_streams(self) -> list[FFProbeStream]:
        return [s for s in self.streams if s.codec_type == "audio"]


def _load_json(text: str, what: str) -> object:
    text = text.strip()
    if not text:
        raise ProbeParseError(f"{what} output is empty")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ProbeParseError(f"{what} output is not valid JSON: {e}") from e


def parse_ffprobe_output(
    raw: bytes, mode: FramingMode | str = FramingMode.LENGTH
) -> FFProbeOutput:
    """Parse ffprobe JSON from a framed container log stream.

    Args:
        raw: Log stream as returned by the daemon (framed or not).
        mode: Framing mode used to strip headers.

    Returns:
        Validated ffprobe document.

    Raises:
        ProbeParseError: If the unframed output is not valid ffprobe JSON.
    """
    text = unframe(raw, mode).decode("utf-8", errors="replace")
    data = _load_json(text, "ffprobe")
    try:
        return FFProbeOutput.model_validate(data)
    except ValidationError as e:
        raise ProbeParseError(f"Unexpected ffprobe document: {e}") from e


class StreamInfo(BaseModel):
    """Stream summary emitted by shaka-packager as JSON."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: str = ""
    codec: str = ""
    duration: str = ""


def parse_stream_info(data: bytes | str) -> list[StreamInfo]:
    """Parse a JSON array of stream summaries.

    Raises:
        ProbeParseError: If the document is not a JSON array of objects.
    """
    text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
    payload = _load_json(text, "stream info")
    if not isinstance(payload, list):
        raise ProbeParseError("stream info output is not a JSON array")
    try:
        return [StreamInfo.model_validate(item) for item in payload]
    except ValidationError as e:
        raise ProbeParseError(f"Unexpected stream info entry: {e}") from e
