"""Tests for mediarig package layout and metadata."""

import importlib
from importlib.metadata import version

import pytest
from click.testing import CliRunner

import mediarig


def test_version_matches_distribution():
    """The in-package version agrees with the installed metadata."""
    assert mediarig.__version__ == version("mediarig")


@pytest.mark.parametrize(
    "module_name",
    [
        "mediarig.config",
        "mediarig.engine",
        "mediarig.logging",
        "mediarig.logstream",
        "mediarig.runner",
    ],
)
def test_public_names_resolve(module_name):
    """Every name a subpackage exports in __all__ is importable from it."""
    module = importlib.import_module(module_name)

    missing = [name for name in module.__all__ if not hasattr(module, name)]

    assert missing == []


def test_cli_reports_version():
    from mediarig.cli import main

    result = CliRunner().invoke(main, ["--version"])

    assert result.exit_code == 0
    assert mediarig.__version__ in result.output
