"""Hailstone path crossing counter and rock trajectory solver."""
from __future__ import annotations

from .crossings import count_crossings, count_crossings_in, crossing_in_window, iter_pairs
from .geometry import Vector3
from .models import Bound, Particle, RockSolution
from .parsing import ParseError, load_particles, parse_particle, parse_particles
from .rock import (
    DEFAULT_ITERATIONS,
    DEFAULT_SEED,
    InsufficientParticlesError,
    SingularJacobianError,
    SolverDivergedError,
    SolverError,
    solve_first_triple,
    solve_rock,
    solve_rock_state,
    solve_rock_with_retries,
)

__all__ = [
    "Bound",
    "Particle",
    "RockSolution",
    "Vector3",
    "ParseError",
    "parse_particle",
    "parse_particles",
    "load_particles",
    "count_crossings",
    "count_crossings_in",
    "crossing_in_window",
    "iter_pairs",
    "DEFAULT_ITERATIONS",
    "DEFAULT_SEED",
    "SolverError",
    "InsufficientParticlesError",
    "SingularJacobianError",
    "SolverDivergedError",
    "solve_first_triple",
    "solve_rock",
    "solve_rock_state",
    "solve_rock_with_retries",
]
