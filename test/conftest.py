"""Shared pytest configuration and fixtures for the vision hub tests."""

import sys
from datetime import datetime
from pathlib import Path

import numpy as np
import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from vision_hub.vision.errors import DeviceError  # noqa: E402
from vision_hub.vision.frame import UnifiedFrame  # noqa: E402


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "hardware: mark test as requiring a connected RealSense camera"
    )


def pytest_addoption(parser):
    parser.addoption(
        "--run-hardware",
        action="store_true",
        default=False,
        help="Run tests that require a RealSense camera",
    )


def pytest_collection_modifyitems(config, items):
    """Skip hardware tests unless --run-hardware is specified."""
    if config.getoption("--run-hardware"):
        return

    skip_hardware = pytest.mark.skip(reason="Need --run-hardware option to run")
    for item in items:
        if "hardware" in item.keywords:
            item.add_marker(skip_hardware)


# =============================================================================
# Frame helpers
# =============================================================================

def make_frame(width=640, height=480, rgb=(10, 200, 30), depth_mm=2000,
               timestamp=None, with_source=True):
    """Build a synthetic UnifiedFrame with uniform color and depth."""
    raw_color = bytes(rgb) * (width * height)
    raw_depth = np.full((height, width), depth_mm, dtype="<u2").tobytes()
    return UnifiedFrame(
        raw_color=raw_color,
        raw_depth=raw_depth,
        width=width,
        height=height,
        timestamp=timestamp or datetime(2024, 5, 17, 12, 30, 45, 123000),
        source=object() if with_source else None,
    )


class FakeSource:
    """Frame source replaying a scripted list of frames and exceptions."""

    def __init__(self, items):
        self.items = list(items)
        self.fetched = []
        self.timeouts = []

    def fetch(self, timeout_ms=1000):
        self.timeouts.append(timeout_ms)
        if not self.items:
            raise DeviceError("script exhausted")
        item = self.items.pop(0)
        if isinstance(item, BaseException):
            raise item
        self.fetched.append(item)
        return item


class CaptureSink:
    """Display sink keeping copies of every rendered pair."""

    def __init__(self, fail_with=None):
        self.rendered = []
        self.running = True
        self.fail_with = fail_with

    def render(self, color_image, depth_image):
        if self.fail_with is not None:
            raise self.fail_with
        self.rendered.append((color_image.copy(), depth_image.copy()))


@pytest.fixture
def frame_factory():
    return make_frame


@pytest.fixture
def capture_sink():
    return CaptureSink()
