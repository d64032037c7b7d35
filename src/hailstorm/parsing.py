"""Parse ``"<x>, <y>, <z> @ <vx>, <vy>, <vz>"`` records into particles."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from .geometry import Vector3
from .models import Particle

LOGGER = logging.getLogger(__name__)


class ParseError(ValueError):
    """Raised when an input line is not a valid particle record."""

    def __init__(self, reason: str, line: str, line_number: Optional[int] = None) -> None:
        location = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{location}{reason}: {line!r}")
        self.reason = reason
        self.line = line
        self.line_number = line_number


def _parse_triple(text: str, line: str) -> Vector3:
    fields = [field.strip() for field in text.split(",")]
    if len(fields) != 3:
        raise ParseError(f"expected 3 comma separated values, got {len(fields)}", line)
    try:
        x, y, z = (int(field) for field in fields)
    except ValueError:
        raise ParseError("non-integer component", line) from None
    return Vector3(x, y, z)


def parse_particle(line: str) -> Particle:
    """Parse a single record, raising :class:`ParseError` when malformed."""

    position_text, separator, velocity_text = line.partition("@")
    if not separator:
        raise ParseError("missing '@' separator", line)
    return Particle(_parse_triple(position_text, line), _parse_triple(velocity_text, line))


def parse_particles(lines: Iterable[str]) -> List[Particle]:
    """Parse every non-blank line, reporting the 1-based line number on failure."""

    particles: List[Particle] = []
    for line_number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue
        try:
            particles.append(parse_particle(line))
        except ParseError as exc:
            raise ParseError(exc.reason, exc.line, line_number) from None
    LOGGER.debug("Parsed %s particles", len(particles))
    return particles


def load_particles(path: str | Path) -> List[Particle]:
    """Read a particle list from a UTF-8 text file."""

    content = Path(path).read_text(encoding="utf-8")
    return parse_particles(content.splitlines())
