"""mediarig run command.

Runs one throwaway container the same way the integration suite does and
prints its unframed output.
"""

import logging
import sys
from pathlib import Path

import click

from mediarig.cli import load_cli_config
from mediarig.cli.exit_codes import ExitCode, exit_code_for_error
from mediarig.commands import INPUT_DIR, OUTPUT_DIR
from mediarig.config.models import VALID_PULL_POLICIES
from mediarig.engine import DockerEngineClient, EngineError
from mediarig.runner import BindMount, ContainerFile, ContainerRequest, ContainerRunner

logger = logging.getLogger(__name__)


def build_request(
    image: str,
    args: tuple[str, ...],
    inputs: tuple[Path, ...],
    output_dir: Path | None,
) -> ContainerRequest:
    """Stage each input under /input and bind the output directory to /output."""
    files = [
        ContainerFile(Path(path).resolve(), f"{INPUT_DIR}/{Path(path).name}")
        for path in inputs
    ]
    mounts = []
    if output_dir is not None:
        output_dir = output_dir.resolve()
        output_dir.mkdir(parents=True, exist_ok=True)
        mounts.append(BindMount(output_dir, OUTPUT_DIR))
    return ContainerRequest(image=image, cmd=args, files=files, mounts=mounts)


@click.command(
    "run",
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
)
@click.argument("image")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "--input",
    "inputs",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="File to stage under /input/ (repeatable).",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Host directory bound to /output.",
)
@click.option(
    "--pull-policy",
    type=click.Choice(sorted(VALID_PULL_POLICIES)),
    default=None,
    help="Override the configured pull policy.",
)
@click.pass_context
def run_command(
    ctx: click.Context,
    image: str,
    args: tuple[str, ...],
    inputs: tuple[Path, ...],
    output_dir: Path | None,
    pull_policy: str | None,
) -> None:
    """Run IMAGE with ARGS and print its output.

    Options go before IMAGE; everything after it is passed to the
    container, e.g.

      mediarig run --input sample.mp4 IMAGE -i /input/sample.mp4 -f null -

    Exits with the container's exit code.
    """
    config = load_cli_config(ctx)
    runner = ctx.obj.get("runner")
    if runner is None:
        runner = ContainerRunner(
            DockerEngineClient(config.engine),
            pull_policy=pull_policy or config.runner.pull_policy,
            keep_containers=config.runner.keep_containers,
            exit_timeout=config.runner.exit_timeout_seconds,
        )

    request = build_request(image, args, inputs, output_dir)
    try:
        with runner:
            result = runner.run(request)
    except KeyboardInterrupt:
        logger.info("Run of %s interrupted by user", image)
        click.echo("\nInterrupted.", err=True)
        sys.exit(ExitCode.INTERRUPTED)
    except (EngineError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(exit_code_for_error(e))

    click.echo(result.stdout, nl=False)
    click.echo(result.stderr, nl=False, err=True)
    sys.exit(result.exit_code)
