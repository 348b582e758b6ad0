"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (config, arguments)
    20-29: Input errors
    30-39: Engine and image errors
    40-49: Container errors
    50-59: Output parsing errors
    60-69: Warning states

``mediarig run`` exits with the container's own status when the container
ran to completion, so these codes only apply when it could not.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for mediarig CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2

    # Validation errors (10-19)
    CONFIG_ERROR = 11

    # Input errors (20-29)
    TARGET_NOT_FOUND = 20

    # Engine and image errors (30-39)
    ENGINE_UNAVAILABLE = 30
    IMAGE_NOT_AVAILABLE = 31
    ENGINE_ERROR = 32

    # Container errors (40-49)
    CONTAINER_FAILED = 40
    CONTAINER_TIMEOUT = 41

    # Output parsing errors (50-59)
    PARSE_ERROR = 51

    # Warning states (60-69)
    WARNINGS = 60
    CRITICAL = 61


# doctor.py mappings
DOCTOR_EXIT_CODES = {
    "EXIT_OK": ExitCode.SUCCESS,
    "EXIT_WARNINGS": ExitCode.WARNINGS,
    "EXIT_CRITICAL": ExitCode.CRITICAL,
}


def exit_code_for_error(error: Exception) -> ExitCode:
    """Map an exception raised while running containers to an exit code."""
    from mediarig.engine import (
        ContainerTimeoutError,
        EngineConnectionError,
        EngineError,
        ImageNotFoundError,
        ImagePullError,
    )
    from mediarig.probe import ProbeParseError
    from mediarig.runner import ContainerExitError

    if isinstance(error, EngineConnectionError):
        return ExitCode.ENGINE_UNAVAILABLE
    if isinstance(error, (ImageNotFoundError, ImagePullError)):
        return ExitCode.IMAGE_NOT_AVAILABLE
    if isinstance(error, ContainerTimeoutError):
        return ExitCode.CONTAINER_TIMEOUT
    if isinstance(error, EngineError):
        return ExitCode.ENGINE_ERROR
    if isinstance(error, ContainerExitError):
        return ExitCode.CONTAINER_FAILED
    if isinstance(error, ProbeParseError):
        return ExitCode.PARSE_ERROR
    if isinstance(error, FileNotFoundError):
        return ExitCode.TARGET_NOT_FOUND
    return ExitCode.GENERAL_ERROR
