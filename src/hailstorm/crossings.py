"""Exact pairwise crossing test for hailstone paths projected onto the XY plane."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from itertools import combinations
from typing import Iterable, Iterator, Sequence, Tuple

from .models import Bound, Particle

LOGGER = logging.getLogger(__name__)


def crossing_in_window(left: Particle, right: Particle, bound: Bound) -> bool:
    """Return ``True`` when the XY paths of two particles cross inside ``bound``.

    Solving ``left.position + t * left.velocity = right.position + u * right.velocity``
    in the XY plane gives ``t = t_numer / denom`` and ``u = u_numer / denom``. The
    sign of ``denom`` is normalised so the future checks and the window checks
    reduce to integer comparisons; nothing is ever divided. Parallel paths
    (``denom == 0``) never count, coincident ones included. Both particles must
    reach the crossing strictly after time zero.
    """

    delta = left.position - right.position
    denom = left.velocity.cross_2d(right.velocity)
    if denom == 0:
        return False

    t_numer = right.velocity.cross_2d(delta)
    u_numer = left.velocity.cross_2d(delta)
    if denom < 0:
        denom, t_numer, u_numer = -denom, -t_numer, -u_numer

    if t_numer <= 0 or u_numer <= 0:
        return False

    # Crossing point scaled by denom.
    x = denom * left.position.x + t_numer * left.velocity.x
    y = denom * left.position.y + t_numer * left.velocity.y
    return bound.scaled_contains(x, denom) and bound.scaled_contains(y, denom)


def iter_pairs(particles: Sequence[Particle]) -> Iterator[Tuple[Particle, Particle]]:
    """Yield every unordered pair exactly once."""
    return combinations(particles, 2)


def _count_for_rows(particles: Sequence[Particle], rows: Iterable[int], bound: Bound) -> int:
    count = 0
    for i in rows:
        left = particles[i]
        for j in range(i + 1, len(particles)):
            if crossing_in_window(left, particles[j], bound):
                count += 1
    return count


def count_crossings_in(particles: Sequence[Particle], bound: Bound, *, workers: int = 1) -> int:
    """Count particle pairs whose paths cross inside ``bound`` in both futures.

    With ``workers > 1`` the rows of the pair triangle are dealt out round-robin
    to a thread pool and the per-shard counts are summed.
    """

    if workers < 1:
        raise ValueError("workers must be at least 1")

    particles = list(particles)
    total_pairs = len(particles) * (len(particles) - 1) // 2
    if workers == 1 or len(particles) < 2:
        count = sum(1 for left, right in iter_pairs(particles) if crossing_in_window(left, right, bound))
    else:
        shards = [range(offset, len(particles), workers) for offset in range(workers)]
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(_count_for_rows, particles, shard, bound) for shard in shards
            ]
            count = sum(future.result() for future in futures)

    LOGGER.debug(
        "Examined %s pairs within [%s, %s]: %s crossings",
        total_pairs,
        bound.minimum,
        bound.maximum,
        count,
    )
    return count


def count_crossings(
    particles: Sequence[Particle], minimum: int, maximum: int, *, workers: int = 1
) -> int:
    """Count crossings inside the inclusive square ``[minimum, maximum]^2``."""

    return count_crossings_in(particles, Bound(minimum, maximum), workers=workers)
