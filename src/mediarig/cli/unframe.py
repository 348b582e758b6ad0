"""mediarig unframe command.

Strips Docker log stream framing from a captured file, e.g. the body of
``GET /containers/{id}/logs`` saved with curl.
"""

import click

from mediarig.logstream import FramingMode, demux, unframe


@click.command("unframe")
@click.argument("input_file", type=click.File("rb"), default="-")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in FramingMode], case_sensitive=False),
    default=FramingMode.LENGTH.value,
    show_default=True,
    help="How frame boundaries are located.",
)
@click.option(
    "--stream",
    "channel",
    type=click.Choice(["all", "stdout", "stderr"], case_sensitive=False),
    default="all",
    show_default=True,
    help="Which channel to keep.",
)
@click.option(
    "--output",
    "-o",
    "output_file",
    type=click.File("wb"),
    default="-",
    help="Write payload here instead of stdout.",
)
def unframe_command(input_file, mode: str, channel: str, output_file) -> None:
    """Remove frame headers from a captured container log stream.

    INPUT_FILE defaults to standard input.
    """
    raw = input_file.read()
    channel = channel.lower()

    if channel == "all":
        payload = unframe(raw, FramingMode(mode.lower()))
    elif FramingMode(mode.lower()) is FramingMode.SCAN:
        raise click.UsageError("--stream requires --mode length")
    else:
        demuxed = demux(raw)
        payload = demuxed.stdout if channel == "stdout" else demuxed.stderr

    output_file.write(payload)
