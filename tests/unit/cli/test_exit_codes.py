"""Tests for cli/exit_codes.py module."""

import pytest

from mediarig.cli.exit_codes import DOCTOR_EXIT_CODES, ExitCode, exit_code_for_error
from mediarig.engine import (
    ContainerNotFoundError,
    ContainerTimeoutError,
    EngineAPIError,
    EngineConnectionError,
    ImageNotFoundError,
    ImagePullError,
)
from mediarig.probe import ProbeParseError
from mediarig.runner import ContainerExitError


class TestExitCode:
    """Tests for ExitCode enum."""

    def test_success_is_zero(self) -> None:
        assert ExitCode.SUCCESS == 0

    def test_exit_codes_are_unique(self) -> None:
        """All exit codes should have unique values."""
        values = [int(code) for code in ExitCode]
        assert len(values) == len(set(values))

    def test_exit_code_ranges(self) -> None:
        """Exit codes should be within expected ranges."""
        assert 1 <= ExitCode.GENERAL_ERROR <= 9
        assert 10 <= ExitCode.CONFIG_ERROR <= 19
        assert 20 <= ExitCode.TARGET_NOT_FOUND <= 29
        assert 30 <= ExitCode.ENGINE_UNAVAILABLE <= 39
        assert 30 <= ExitCode.IMAGE_NOT_AVAILABLE <= 39
        assert 40 <= ExitCode.CONTAINER_FAILED <= 49
        assert 40 <= ExitCode.CONTAINER_TIMEOUT <= 49
        assert 50 <= ExitCode.PARSE_ERROR <= 59
        assert 60 <= ExitCode.WARNINGS <= 69


class TestDoctorExitCodes:
    def test_mapping(self) -> None:
        assert DOCTOR_EXIT_CODES["EXIT_OK"] == ExitCode.SUCCESS
        assert DOCTOR_EXIT_CODES["EXIT_WARNINGS"] == ExitCode.WARNINGS
        assert DOCTOR_EXIT_CODES["EXIT_CRITICAL"] == ExitCode.CRITICAL


class TestExitCodeForError:
    """Tests for exit_code_for_error."""

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (EngineConnectionError("down"), ExitCode.ENGINE_UNAVAILABLE),
            (ImageNotFoundError("missing"), ExitCode.IMAGE_NOT_AVAILABLE),
            (ImagePullError("denied"), ExitCode.IMAGE_NOT_AVAILABLE),
            (ContainerTimeoutError("slow"), ExitCode.CONTAINER_TIMEOUT),
            (ContainerNotFoundError("gone"), ExitCode.ENGINE_ERROR),
            (EngineAPIError(500, "boom", "/containers/create"), ExitCode.ENGINE_ERROR),
            (ContainerExitError("img", 1, "log"), ExitCode.CONTAINER_FAILED),
            (ProbeParseError("bad json"), ExitCode.PARSE_ERROR),
            (FileNotFoundError("sample.mp4"), ExitCode.TARGET_NOT_FOUND),
            (RuntimeError("other"), ExitCode.GENERAL_ERROR),
        ],
    )
    def test_mapping(self, error: Exception, expected: ExitCode) -> None:
        assert exit_code_for_error(error) == expected
