"""Pytest configuration and shared fixtures."""

import random
import sys
from pathlib import Path

import pytest

# Packages live as top-level modules under src/
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from core.vector import Color  # noqa: E402
from materials.lambertian import Lambertian  # noqa: E402


@pytest.fixture
def rng():
    """Provide a seeded random source."""
    return random.Random(1234)


@pytest.fixture
def grey():
    """Provide a plain diffuse material."""
    return Lambertian(Color(0.5, 0.5, 0.5))
