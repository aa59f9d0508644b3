"""
Pytest configuration and shared fixtures for the pixel editor tests.
"""

import pytest

from pixel_editor.core.constants import BACKGROUND
from pixel_editor.core.pixel_buffer import PixelBuffer
from pixel_editor.core.session import EditorSession


@pytest.fixture
def small_buffer():
    """
    Provide an 8x8 buffer of opaque black.
    """
    return PixelBuffer(8, BACKGROUND)


@pytest.fixture
def status_log():
    """
    Provide a list that collects session status messages.
    """
    return []


@pytest.fixture
def session(status_log):
    """
    Provide a 16x16 session with one surface unit per pixel at zoom 1,
    so surface and pixel coordinates line up.
    """
    return EditorSession(grid_size=16, base_cell_size=1.0, on_status=status_log.append)
