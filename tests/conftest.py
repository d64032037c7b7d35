"""Shared fixtures for the hailstorm test-suite."""
from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from hailstorm.models import Particle
from hailstorm.parsing import parse_particles

SAMPLE_INPUT = """\
19, 13, 30 @ -2,  1, -2
18, 19, 22 @ -1, -1, -2
20, 25, 34 @ -2, -2, -4
12, 31, 28 @ -1, -2, -1
20, 19, 15 @  1, -5, -3
"""


@pytest.fixture
def sample_particles() -> List[Particle]:
    return parse_particles(SAMPLE_INPUT.splitlines())


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "hail.txt"
    path.write_text(SAMPLE_INPUT, encoding="utf-8")
    return path
