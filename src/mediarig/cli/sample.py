"""mediarig sample command for generating the sample clip."""

import re
import sys
from pathlib import Path

import click

from mediarig.cli import load_cli_config
from mediarig.cli.exit_codes import ExitCode, exit_code_for_error
from mediarig.engine import EngineError
from mediarig.media import SampleSpec, generate_sample
from mediarig.runner import ContainerExitError, ContainerRunner

_SIZE_PATTERN = re.compile(r"^(\d+)x(\d+)$")


def _parse_size(ctx, param, value: str) -> tuple[int, int]:
    match = _SIZE_PATTERN.match(value)
    if not match:
        raise click.BadParameter("expected WIDTHxHEIGHT, e.g. 1280x720")
    return int(match.group(1)), int(match.group(2))


@click.command("sample")
@click.argument(
    "output_dir", type=click.Path(file_okay=False, path_type=Path)
)
@click.option(
    "--duration",
    type=click.IntRange(min=3),
    default=SampleSpec.duration,
    show_default=True,
    help="Clip length in seconds.",
)
@click.option(
    "--size",
    default=f"{SampleSpec.width}x{SampleSpec.height}",
    show_default=True,
    callback=_parse_size,
    help="Frame size as WIDTHxHEIGHT.",
)
@click.option(
    "--image",
    default=None,
    help="ffmpeg image to use (default: configured ffmpeg image).",
)
@click.pass_context
def sample_command(
    ctx: click.Context,
    output_dir: Path,
    duration: int,
    size: tuple[int, int],
    image: str | None,
) -> None:
    """Generate the sample clip into OUTPUT_DIR/sample.mp4."""
    config = load_cli_config(ctx)
    try:
        spec = SampleSpec(duration=duration, width=size[0], height=size[1])
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--size") from e

    runner = ctx.obj.get("runner") or ContainerRunner.from_config(config)
    try:
        with runner:
            path = generate_sample(
                runner, image or config.images.ffmpeg, output_dir, spec
            )
    except KeyboardInterrupt:
        click.echo("\nInterrupted.", err=True)
        sys.exit(ExitCode.INTERRUPTED)
    except ContainerExitError as e:
        click.echo(f"Error: {e}", err=True)
        click.echo(e.output[-2000:], err=True)
        sys.exit(exit_code_for_error(e))
    except (EngineError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(exit_code_for_error(e))

    click.echo(str(path))
