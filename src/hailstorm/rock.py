"""Newton-Raphson search for a rock trajectory hitting three hailstones.

The unknown state is ``x = [x0, y0, z0, vx, vy, vz, tA, tB, tC]``. For every
reference hailstone ``P`` with hit time ``tP`` the rock must satisfy
``x0 + tP * v - P.position - tP * P.velocity = 0``, three equations per
hailstone and nine overall. Convergence depends on the start vector; the
default seed suits the usual puzzle scale but nothing guarantees it for
arbitrary input.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np

from .models import Particle, RockSolution, round_half_away

LOGGER = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 20
# Origin position, unit velocity and distinct hit times keep the first Jacobian invertible.
DEFAULT_SEED = (0.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0, 2.0, 3.0)
STATE_SIZE = 9


class SolverError(RuntimeError):
    """Base class for failures of the rock solver."""


class InsufficientParticlesError(SolverError):
    """Raised when fewer than three hailstones are available."""


class SingularJacobianError(SolverError):
    """Raised when the Jacobian cannot be inverted during an iteration."""


class SolverDivergedError(SolverError):
    """Raised when the iterate stops being finite."""


def _vectors(particle: Particle) -> tuple[np.ndarray, np.ndarray]:
    position = np.array(particle.position.as_tuple(), dtype=np.float64)
    velocity = np.array(particle.velocity.as_tuple(), dtype=np.float64)
    return position, velocity


def residuals(state: np.ndarray, references: Sequence[Particle]) -> np.ndarray:
    """Evaluate the nine intersection equations at ``state``."""

    f = np.zeros(STATE_SIZE, dtype=np.float64)
    origin = state[0:3]
    velocity = state[3:6]
    for k, particle in enumerate(references):
        position, particle_velocity = _vectors(particle)
        t = state[6 + k]
        f[3 * k : 3 * k + 3] = origin + t * velocity - position - t * particle_velocity
    return f


def jacobian(state: np.ndarray, references: Sequence[Particle]) -> np.ndarray:
    """Analytic 9x9 Jacobian of :func:`residuals`."""

    jac = np.zeros((STATE_SIZE, STATE_SIZE), dtype=np.float64)
    for k, particle in enumerate(references):
        _, particle_velocity = _vectors(particle)
        t = state[6 + k]
        for axis in range(3):
            row = 3 * k + axis
            jac[row, axis] = 1.0
            jac[row, 3 + axis] = t
            jac[row, 6 + k] = state[3 + axis] - particle_velocity[axis]
    return jac


def _invert(jac: np.ndarray, iteration: int) -> np.ndarray:
    try:
        inverse = np.linalg.inv(jac)
    except np.linalg.LinAlgError as exc:
        raise SingularJacobianError(
            f"Jacobian is singular at iteration {iteration}"
        ) from exc
    if not np.all(np.isfinite(inverse)):
        raise SingularJacobianError(f"Jacobian is singular at iteration {iteration}")
    return inverse


def solve_rock_state(
    a: Particle,
    b: Particle,
    c: Particle,
    iterations: int = DEFAULT_ITERATIONS,
    *,
    seed: Sequence[float] = DEFAULT_SEED,
    tolerance: Optional[float] = None,
) -> RockSolution:
    """Run Newton-Raphson against hailstones ``a``, ``b`` and ``c``.

    Exactly ``iterations`` updates ``x <- x - J^-1 f(x)`` are applied unless
    ``tolerance`` is given and the residual norm falls to it first. The result
    carries the final residual norm; a budget exhausted without converging is
    still returned so callers can judge it.
    """

    if iterations < 1:
        raise ValueError("iterations must be at least 1")
    if len(seed) != STATE_SIZE:
        raise ValueError(f"seed must have {STATE_SIZE} components, got {len(seed)}")

    references = (a, b, c)
    state = np.array(seed, dtype=np.float64)
    performed = 0
    f_x = residuals(state, references)
    for iteration in range(iterations):
        norm = float(np.linalg.norm(f_x))
        LOGGER.debug("Newton iteration %s residual norm %.6g", iteration, norm)
        if tolerance is not None and norm <= tolerance:
            break
        inverse = _invert(jacobian(state, references), iteration)
        state = state - inverse @ f_x
        performed += 1
        if not np.all(np.isfinite(state)):
            raise SolverDivergedError(f"Iterate became non-finite at iteration {iteration}")
        f_x = residuals(state, references)

    residual_norm = float(np.linalg.norm(f_x))
    x0, y0, z0 = (round_half_away(float(value)) for value in state[0:3])
    LOGGER.info(
        "Rock start (%s, %s, %s) after %s iterations, residual %.3g",
        x0,
        y0,
        z0,
        performed,
        residual_norm,
    )
    return RockSolution(
        position=(x0, y0, z0),
        state=tuple(float(value) for value in state),
        iterations=performed,
        residual_norm=residual_norm,
    )


def _require_three(particles: Sequence[Particle]) -> None:
    if len(particles) < 3:
        raise InsufficientParticlesError(
            f"At least 3 particles are required, got {len(particles)}"
        )


def solve_first_triple(
    particles: Sequence[Particle],
    iterations: int = DEFAULT_ITERATIONS,
    *,
    seed: Sequence[float] = DEFAULT_SEED,
    tolerance: Optional[float] = None,
) -> RockSolution:
    """Solve against the first three hailstones of ``particles``."""

    _require_three(particles)
    a, b, c = particles[0], particles[1], particles[2]
    return solve_rock_state(a, b, c, iterations, seed=seed, tolerance=tolerance)


def solve_rock(
    particles: Sequence[Particle],
    iterations: int = DEFAULT_ITERATIONS,
    *,
    seed: Sequence[float] = DEFAULT_SEED,
    tolerance: Optional[float] = None,
) -> int:
    """Sum of the rock's rounded start coordinates, solved from the first three hailstones."""

    return solve_first_triple(particles, iterations, seed=seed, tolerance=tolerance).coordinate_sum


def solve_rock_with_retries(
    particles: Sequence[Particle],
    iterations: int = DEFAULT_ITERATIONS,
    *,
    attempts: Optional[int] = None,
    seed: Sequence[float] = DEFAULT_SEED,
    tolerance: Optional[float] = None,
) -> RockSolution:
    """Try consecutive hailstone triples until one solves.

    Triples ``(i, i + 1, i + 2)`` are tried in order, at most ``attempts`` of
    them. Singular or divergent solves are skipped; when every triple fails
    the last error is raised.
    """

    _require_three(particles)
    starts: List[int] = list(range(len(particles) - 2))
    if attempts is not None:
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        starts = starts[:attempts]

    last_error: Optional[SolverError] = None
    for start in starts:
        a, b, c = particles[start : start + 3]
        try:
            return solve_rock_state(a, b, c, iterations, seed=seed, tolerance=tolerance)
        except (SingularJacobianError, SolverDivergedError) as exc:
            LOGGER.warning("Triple starting at particle %s failed: %s", start, exc)
            last_error = exc
    assert last_error is not None
    raise last_error
