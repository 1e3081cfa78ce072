# conftest.py
"""Shared fixtures for the simulation tests."""
import logging
import logging.handlers
import os

import numpy as np
import pytest

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
# No real display is needed to exercise the window code.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from particle import Particle, PerChannelDrift, Bounds


@pytest.fixture
def bounds():
    # An 800x600 window centered on the origin.
    return Bounds.centered(800, 600)


@pytest.fixture
def make_particle():
    """Factory for particles with a frozen (zero-speed) color."""
    def _make(position, velocity=(0.0, 0.0), radius=20.0):
        color = PerChannelDrift(values=[0.5, 0.5, 0.5], speeds=[0.0, 0.0, 0.0], directions=[1, 1, 1])
        return Particle(np.array(position, dtype=float), np.array(velocity, dtype=float), radius, color)
    return _make


@pytest.fixture
def sim_params():
    return {
        "seed": 1234,
        "particle_count": 5,
        "ball_speed": 3.0,
        "particle_radius": 20.0,
        "color_model": "per_channel",
        "color_change_speed": 0.005,
        "parallel_advance": False,
    }


@pytest.fixture
def restore_root_logger():
    """Removes the handlers setup_logging installs on the root logger."""
    root = logging.getLogger()
    saved_level = root.level
    yield root
    for handler in list(root.handlers):
        if isinstance(handler, logging.handlers.RotatingFileHandler) or type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)
