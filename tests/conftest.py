"""Shared test fixtures for mediarig."""

import json
import shutil
import tempfile
from pathlib import Path

import pytest

from mediarig.config import clear_config_cache


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Make sure no test sees configuration cached by another."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def ffprobe_document() -> dict:
    """A trimmed ffprobe -show_format -show_streams document for an MP4."""
    return {
        "streams": [
            {
                "index": 0,
                "codec_name": "h264",
                "codec_type": "video",
                "width": 1280,
                "height": 720,
                "r_frame_rate": "25/1",
                "duration": "18.000000",
                "bit_rate": "1843200",
                "tags": {"language": "und", "handler_name": "VideoHandler"},
            },
            {
                "index": 1,
                "codec_name": "aac",
                "codec_type": "audio",
                "sample_rate": "48000",
                "channels": 1,
                "duration": "18.000000",
                "bit_rate": "128000",
                "tags": {"language": "und"},
            },
        ],
        "format": {
            "filename": "/input/sample.mp4",
            "nb_streams": 2,
            "format_name": "mov,mp4,m4a,3gp,3g2,mj2",
            "format_long_name": "QuickTime / MOV",
            "duration": "18.000000",
            "size": "4325376",
            "bit_rate": "1922389",
            "tags": {"major_brand": "isom", "encoder": "Lavf61.7.100"},
        },
    }


@pytest.fixture
def ffprobe_json(ffprobe_document: dict) -> bytes:
    """The ffprobe document serialised the way ffprobe prints it."""
    return json.dumps(ffprobe_document, indent=4).encode()
