"""Command lines for the containerised media tools.

Each builder returns the argument list passed to the image entrypoint (the
images run ffmpeg, ffprobe or packager directly), so nothing here includes
the program name. Paths are container paths: inputs are staged under
/input, outputs are written to a bind-mounted /output (or /workspace when
the tool reads and writes the same directory).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

INPUT_DIR = "/input"
OUTPUT_DIR = "/output"
WORKSPACE_DIR = "/workspace"
SAMPLE_INPUT = f"{INPUT_DIR}/sample.mp4"

DEFAULT_CLIP_SECONDS = 10
DEFAULT_SCENE_THRESHOLD = 0.4


def _input_args(input_path: str, duration: float | None) -> list[str]:
    args = ["-i", input_path]
    if duration is not None:
        args.extend(["-t", _number(duration)])
    return args


def _number(value: float) -> str:
    """Format a number without a trailing .0 for whole values."""
    return str(int(value)) if float(value).is_integer() else str(value)


def transcode_args(
    output: str,
    *,
    input_path: str = SAMPLE_INPUT,
    duration: float | None = DEFAULT_CLIP_SECONDS,
    scale: tuple[int, int] | None = None,
    video_codec: str | None = "libx264",
    preset: str | None = "medium",
    crf: int | None = 23,
    video_bitrate: str | None = None,
    audio_codec: str | None = "aac",
    audio_bitrate: str | None = "128k",
) -> list[str]:
    """Build an ffmpeg transcode command.

    Passing ``video_codec=None`` drops the video stream (-vn) and
    ``audio_codec=None`` drops audio (-an).

    Example:
        >>> transcode_args("/output/720p.mp4", scale=(1280, 720))[:6]
        ['-i', '/input/sample.mp4', '-t', '10', '-vf', 'scale=1280:720']
    """
    args = _input_args(input_path, duration)
    if video_codec is None:
        args.append("-vn")
    else:
        if scale is not None:
            args.extend(["-vf", f"scale={scale[0]}:{scale[1]}"])
        args.extend(["-c:v", video_codec])
        if video_bitrate is not None:
            args.extend(["-b:v", video_bitrate])
        if preset is not None:
            args.extend(["-preset", preset])
        if crf is not None:
            args.extend(["-crf", str(crf)])

    if audio_codec is None:
        args.append("-an")
    else:
        args.extend(["-c:a", audio_codec])
        if audio_bitrate is not None and audio_codec != "copy":
            args.extend(["-b:a", audio_bitrate])

    args.append(output)
    return args


def vp9_args(output: str, *, input_path: str = SAMPLE_INPUT) -> list[str]:
    """Constant-quality VP9 with Opus audio, for WebM output."""
    return transcode_args(
        output,
        input_path=input_path,
        video_codec="libvpx-vp9",
        preset=None,
        crf=30,
        video_bitrate="0",
        audio_codec="libopus",
    )


def trim_args(
    output: str,
    *,
    input_path: str = SAMPLE_INPUT,
    duration: float = DEFAULT_CLIP_SECONDS,
) -> list[str]:
    """Stream-copy the first ``duration`` seconds."""
    return [*_input_args(input_path, duration), "-c", "copy", output]


def segment_args(
    output_pattern: str,
    *,
    segment_time: float = 5,
    input_path: str = SAMPLE_INPUT,
    duration: float | None = DEFAULT_CLIP_SECONDS,
) -> list[str]:
    """Split into fixed-length stream-copied segments.

    ``output_pattern`` needs a printf-style counter, e.g.
    ``/output/part-%03d.mp4``.
    """
    if "%" not in output_pattern:
        raise ValueError(f"segment output needs a %d pattern: {output_pattern}")
    return [
        *_input_args(input_path, duration),
        "-c", "copy",
        "-f", "segment",
        "-segment_time", _number(segment_time),
        "-reset_timestamps", "1",
        output_pattern,
    ]


def scene_split_args(
    output_pattern: str,
    *,
    threshold: float = DEFAULT_SCENE_THRESHOLD,
    metadata_file: str | None = None,
    input_path: str = SAMPLE_INPUT,
    duration: float | None = DEFAULT_CLIP_SECONDS,
    encode: bool = False,
) -> list[str]:
    """Keep only frames whose scene score exceeds ``threshold``.

    Args:
        output_pattern: Numbered output, e.g. /output/scene_%03d.mp4.
        threshold: Scene change score between 0 and 1.
        metadata_file: When set, selected frame metadata is printed to this
            container path.
        input_path: Container path of the source clip.
        duration: Seconds of input to read.
        encode: Re-encode with libx264 (fast, crf 23) instead of the
            image's default encoder.
    """
    if not 0 < threshold < 1:
        raise ValueError(f"threshold must be between 0 and 1, got {threshold}")
    video_filter = f"select='gt(scene,{threshold})'"
    if metadata_file is not None:
        video_filter += f",metadata=print:file={metadata_file}"
    args = [*_input_args(input_path, duration), "-vf", video_filter, "-vsync", "vfr"]
    if encode:
        args.extend(["-c:v", "libx264", "-preset", "fast", "-crf", "23"])
    args.append(output_pattern)
    return args


def thumbnail_args(
    output: str, *, at_seconds: float = 5, input_path: str = SAMPLE_INPUT
) -> list[str]:
    """Grab a single frame at ``at_seconds``."""
    return ["-i", input_path, "-ss", _number(at_seconds), "-vframes", "1", output]


def storyboard_args(
    output: str,
    *,
    interval: int = 10,
    tile_size: tuple[int, int] = (160, 90),
    grid: tuple[int, int] = (5, 5),
    input_path: str = SAMPLE_INPUT,
    duration: float | None = DEFAULT_CLIP_SECONDS,
) -> list[str]:
    """Build a contact sheet of one frame every ``interval`` seconds."""
    video_filter = (
        f"fps=1/{interval},scale={tile_size[0]}:{tile_size[1]},"
        f"tile={grid[0]}x{grid[1]}"
    )
    return [*_input_args(input_path, duration), "-vf", video_filter, output]


def best_frame_args(
    output: str,
    *,
    input_path: str = SAMPLE_INPUT,
    duration: float | None = DEFAULT_CLIP_SECONDS,
) -> list[str]:
    """Pick the most representative frame with the thumbnail filter."""
    return [
        *_input_args(input_path, duration),
        "-vf", "thumbnail",
        "-frames:v", "1",
        output,
    ]


def interval_thumbnail_args(
    output_pattern: str,
    *,
    interval: int = 60,
    input_path: str = SAMPLE_INPUT,
    duration: float | None = DEFAULT_CLIP_SECONDS,
) -> list[str]:
    """One numbered image every ``interval`` seconds."""
    return [*_input_args(input_path, duration), "-vf", f"fps=1/{interval}", output_pattern]


def concat_args(list_file: str, output: str) -> list[str]:
    """Join the files named in a concat list without re-encoding."""
    return ["-f", "concat", "-safe", "0", "-i", list_file, "-c", "copy", output]


def probe_args(
    input_path: str = SAMPLE_INPUT,
    *,
    show_format: bool = True,
    show_streams: bool = True,
) -> list[str]:
    """ffprobe arguments printing JSON and nothing else."""
    if not (show_format or show_streams):
        raise ValueError("at least one of show_format and show_streams is required")
    args = ["-v", "quiet", "-print_format", "json"]
    if show_format:
        args.append("-show_format")
    if show_streams:
        args.append("-show_streams")
    args.append(input_path)
    return args


@dataclass(frozen=True)
class PackagerStream:
    """One packager stream descriptor (``in=...,stream=...,output=...``).

    Attributes:
        input: Container path of the source file.
        stream: Stream selector: audio, video, text or a stream index.
        output: Container path of the packaged output.
        playlist_name: HLS media playlist name, if packaging for HLS.
    """

    input: str
    stream: str
    output: str
    playlist_name: str | None = None

    def __post_init__(self) -> None:
        for name in ("input", "stream", "output", "playlist_name"):
            value = getattr(self, name)
            if value is not None and ("," in value or not value):
                raise ValueError(f"{name} must be non-empty without commas: {value!r}")

    def descriptor(self) -> str:
        fields = [f"in={self.input}", f"stream={self.stream}", f"output={self.output}"]
        if self.playlist_name:
            fields.append(f"playlist_name={self.playlist_name}")
        return ",".join(fields)


def packager_args(
    streams: Sequence[PackagerStream],
    *,
    mpd_output: str | None = None,
    hls_master_playlist_output: str | None = None,
    extra: Sequence[str] = (),
) -> list[str]:
    """Build a packager command line.

    Example:
        >>> packager_args(
        ...     [PackagerStream("/input/sample.mp4", "video", "/output/video.mp4")],
        ...     mpd_output="/output/manifest.mpd",
        ... )
        ['in=/input/sample.mp4,stream=video,output=/output/video.mp4', '--mpd_output', '/output/manifest.mpd']
    """
    if not streams:
        raise ValueError("at least one stream descriptor is required")
    args = [stream.descriptor() for stream in streams]
    if mpd_output is not None:
        args.extend(["--mpd_output", mpd_output])
    if hls_master_playlist_output is not None:
        args.extend(["--hls_master_playlist_output", hls_master_playlist_output])
    args.extend(extra)
    return args


def split_streams(
    input_path: str = SAMPLE_INPUT,
    *,
    audio_output: str = f"{OUTPUT_DIR}/audio.mp4",
    video_output: str = f"{OUTPUT_DIR}/video.mp4",
) -> list[PackagerStream]:
    """Audio and video descriptors for one input, audio first."""
    return [
        PackagerStream(input_path, "audio", audio_output),
        PackagerStream(input_path, "video", video_output),
    ]
