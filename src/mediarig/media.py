"""Sample clip generation.

The suite needs one input clip with both audio and video, long enough for
the 10-second operations, and with hard cuts so scene detection has
something to find. It is synthesised with the ffmpeg image itself from
lavfi test sources, so no media files live in the repository.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from mediarig.commands import OUTPUT_DIR
from mediarig.runner import BindMount, ContainerRequest, ContainerRunner

logger = logging.getLogger(__name__)

SAMPLE_FILENAME = "sample.mp4"

# One lavfi source per scene; concatenated back to back for hard cuts
SCENE_SOURCES = ("testsrc2", "smptehdbars", "mandelbrot")


@dataclass(frozen=True)
class SampleSpec:
    """Attributes of the generated clip.

    Attributes:
        duration: Total length in seconds, split evenly across scenes.
        width: Frame width in pixels.
        height: Frame height in pixels.
        rate: Frames per second.
        audio: Include a sine tone audio track.
        noise: Strength of the temporal noise added to every frame. Noise
            keeps stream-copied outputs above the size thresholds.
    """

    duration: int = 18
    width: int = 1280
    height: int = 720
    rate: int = 25
    audio: bool = True
    noise: int = 12

    def __post_init__(self) -> None:
        if self.duration < len(SCENE_SOURCES):
            raise ValueError(
                f"duration must be at least {len(SCENE_SOURCES)}s, got {self.duration}"
            )
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"invalid size {self.width}x{self.height}")
        if self.width % 2 or self.height % 2:
            raise ValueError("width and height must be even for yuv420p")
        if self.rate <= 0:
            raise ValueError(f"rate must be positive, got {self.rate}")
        if not 0 <= self.noise <= 100:
            raise ValueError(f"noise must be between 0 and 100, got {self.noise}")

    @property
    def size(self) -> str:
        return f"{self.width}x{self.height}"

    @property
    def scene_seconds(self) -> float:
        return self.duration / len(SCENE_SOURCES)


def sample_args(spec: SampleSpec, output: str) -> list[str]:
    """Build the ffmpeg arguments that synthesise the sample clip.

    Args:
        spec: Clip attributes.
        output: Container path of the MP4 to write.

    Returns:
        Argument list for the ffmpeg image entrypoint.
    """
    args = ["-hide_banner", "-y"]
    for source in SCENE_SOURCES:
        args.extend(
            [
                "-f",
                "lavfi",
                "-i",
                f"{source}=size={spec.size}:rate={spec.rate}"
                f":duration={spec.scene_seconds:g}",
            ]
        )
    if spec.audio:
        args.extend(
            [
                "-f",
                "lavfi",
                "-i",
                f"sine=frequency=440:sample_rate=48000:duration={spec.duration}",
            ]
        )

    labels = "".join(f"[{i}:v]" for i in range(len(SCENE_SOURCES)))
    video_chain = f"{labels}concat=n={len(SCENE_SOURCES)}:v=1:a=0"
    if spec.noise:
        video_chain += f",noise=alls={spec.noise}:allf=t+u"
    video_chain += ",format=yuv420p[v]"
    args.extend(["-filter_complex", video_chain, "-map", "[v]"])

    args.extend(["-c:v", "libx264", "-preset", "veryfast", "-g", str(spec.rate * 2)])
    if spec.audio:
        args.extend(["-map", f"{len(SCENE_SOURCES)}:a", "-c:a", "aac", "-b:a", "128k"])

    args.extend(["-movflags", "+faststart", "-t", str(spec.duration), output])
    return args


def generate_sample(
    runner: ContainerRunner,
    image: str,
    dest_dir: Path,
    spec: SampleSpec | None = None,
) -> Path:
    """Generate the sample clip into ``dest_dir``.

    Args:
        runner: Runner used to start the ffmpeg container.
        image: ffmpeg image reference.
        dest_dir: Absolute host directory, bound to /output.
        spec: Clip attributes (defaults to SampleSpec()).

    Returns:
        Host path of the generated clip.

    Raises:
        ContainerExitError: If ffmpeg fails.
        FileNotFoundError: If ffmpeg exits cleanly without writing the clip.
    """
    spec = spec or SampleSpec()
    dest_dir = Path(dest_dir).resolve()
    dest_dir.mkdir(parents=True, exist_ok=True)

    logger.info(
        "Generating %ss %s sample clip in %s", spec.duration, spec.size, dest_dir
    )
    result = runner.run(
        ContainerRequest(
            image=image,
            cmd=sample_args(spec, f"{OUTPUT_DIR}/{SAMPLE_FILENAME}"),
            mounts=[BindMount(dest_dir, OUTPUT_DIR)],
        )
    )
    result.check_returncode()

    path = dest_dir / SAMPLE_FILENAME
    if not path.is_file():
        raise FileNotFoundError(f"ffmpeg exited 0 but {path} was not written")
    return path
