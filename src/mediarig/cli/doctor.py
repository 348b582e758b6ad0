"""mediarig doctor command for checking the container engine and images.

This module provides the 'mediarig doctor' command to check that the Docker
Engine is reachable and that every configured tool image is present.
"""

import json
import sys
from typing import Any

import click

from mediarig.cli import load_cli_config
from mediarig.cli.exit_codes import DOCTOR_EXIT_CODES
from mediarig.engine import DockerEngineClient, EngineConnectionError, EngineError

EXIT_OK = DOCTOR_EXIT_CODES["EXIT_OK"]
EXIT_WARNINGS = DOCTOR_EXIT_CODES["EXIT_WARNINGS"]
EXIT_CRITICAL = DOCTOR_EXIT_CODES["EXIT_CRITICAL"]


def _format_status(available: bool) -> str:
    """Format status for display."""
    return "✓" if available else "✗"


def collect_report(
    client: DockerEngineClient, images: dict[str, str], pull: bool = False
) -> dict[str, Any]:
    """Probe the engine and each image.

    Args:
        client: Engine client to probe.
        images: Image references keyed by tool name.
        pull: Pull images that are not present locally.

    Returns:
        Report dict with "engine", "images" and "status" keys. Status is
        "critical" when the engine is unreachable, "warnings" when an image
        is missing and "ok" otherwise.
    """
    engine: dict[str, Any] = {
        "host": client.host,
        "reachable": False,
        "version": None,
        "api_version": None,
        "error": None,
    }
    report: dict[str, Any] = {"engine": engine, "images": [], "status": "ok"}

    try:
        engine["reachable"] = client.ping()
        if engine["reachable"]:
            info = client.version()
            engine["version"] = info.get("Version")
            engine["api_version"] = info.get("ApiVersion")
    except EngineError as e:
        engine["error"] = str(e)

    if not engine["reachable"]:
        report["status"] = "critical"
        return report

    for name, reference in images.items():
        entry: dict[str, Any] = {
            "name": name,
            "image": reference,
            "present": False,
            "error": None,
        }
        try:
            entry["present"] = client.image_exists(reference)
            if not entry["present"] and pull:
                client.pull_image(reference)
                entry["present"] = True
        except EngineConnectionError as e:
            entry["error"] = str(e)
            engine["error"] = str(e)
            report["status"] = "critical"
        except EngineError as e:
            entry["error"] = str(e)
        report["images"].append(entry)
        if not entry["present"] and report["status"] == "ok":
            report["status"] = "warnings"

    return report


@click.command("doctor")
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output results as JSON",
)
@click.option(
    "--pull",
    is_flag=True,
    help="Pull images that are not present locally",
)
@click.pass_context
def doctor_command(ctx: click.Context, json_output: bool, pull: bool) -> None:
    """Check container engine reachability and tool images.

    Exit codes:
      0 - Engine reachable and all images present
      60 - Some images are missing
      61 - Engine unreachable
    """
    config = load_cli_config(ctx)
    client = ctx.obj.get("engine_client") or DockerEngineClient(config.engine)
    try:
        report = collect_report(client, config.images.as_dict(), pull=pull)
    finally:
        client.close()

    exit_code = {
        "ok": EXIT_OK,
        "warnings": EXIT_WARNINGS,
        "critical": EXIT_CRITICAL,
    }[report["status"]]

    if json_output:
        click.echo(json.dumps(report, indent=2))
        sys.exit(exit_code)

    click.echo("mediarig Engine Health Check")
    click.echo("=" * 40)
    click.echo()

    engine = report["engine"]
    click.echo("Docker Engine:")
    click.echo("-" * 20)
    click.echo(f"  {_format_status(engine['reachable'])} {engine['host']}")
    if engine["reachable"]:
        click.echo(
            f"    └─ Version {engine['version'] or 'unknown'} "
            f"(API {engine['api_version'] or 'unknown'})"
        )
    elif engine["error"]:
        click.echo(f"    └─ {engine['error']}")
    click.echo()

    if report["images"]:
        click.echo("Images:")
        click.echo("-" * 20)
        for entry in report["images"]:
            status = _format_status(entry["present"])
            click.echo(f"  {status} {entry['name']}: {entry['image']}")
            if entry["error"]:
                click.echo(f"    └─ {entry['error']}")
            elif not entry["present"]:
                click.echo("    └─ Not pulled yet; run 'mediarig doctor --pull'")
        click.echo()

    if exit_code == EXIT_CRITICAL:
        click.echo("⚠ Docker Engine is not reachable. Containers cannot run.")
    elif exit_code == EXIT_WARNINGS:
        click.echo("Note: Some images are missing and will be pulled on first use.")
    else:
        click.echo("✓ Engine reachable and all images present.")
    sys.exit(exit_code)
