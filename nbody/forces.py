"""
All-pairs gravitational force field.

For body i the net force is the sum over every other body j of
G * m_i * m_j / d^2 along the unit vector from i to j. A pair closer than
twice body i's radius contributes nothing; overlapping bodies are left to the
collision resolver instead of producing huge forces at tiny distances.

Forces are computed from a read-only snapshot into a fresh, index-aligned
output, so row blocks are independent and can be fanned out to a thread pool.
"""

import numpy as np

from .Vec2 import Vec2
from .snapshot import Snapshot, row_chunks

# At or below this many bodies the plain Python loop is cheaper than building arrays.
SMALL_N = 32


def pair_force(body, other, G):
    """Force exerted on `body` by `other`."""
    dx = other.pos.x - body.pos.x
    dy = other.pos.y - body.pos.y
    dist = (dx * dx + dy * dy) ** 0.5
    if dist == 0.0 or dist < 2.0 * body.radius:
        return Vec2(0.0, 0.0)
    magnitude = G * body.mass * other.mass / (dist * dist)
    return Vec2(magnitude * dx / dist, magnitude * dy / dist)


def _forces_python(bodies, G):
    forces = [Vec2(0.0, 0.0) for _ in bodies]
    for i, body in enumerate(bodies):
        fx, fy = 0.0, 0.0
        for j, other in enumerate(bodies):
            if i == j:
                continue
            f = pair_force(body, other, G)
            fx += f.x
            fy += f.y
        forces[i] = Vec2(fx, fy)
    return forces


def _chunk_forces(snap, G, start, end, out_x, out_y):
    dx, dy, dist = snap.deltas(start, end)
    active = (dist > 0.0) & (dist >= 2.0 * snap.radius[start:end, None])
    # masked pairs get an infinite distance and so a zero coefficient
    safe = np.where(active, dist, np.inf)
    coeff = G * snap.mass[start:end, None] * snap.mass[None, :] / (safe * safe * safe)
    out_x[start:end] = (coeff * dx).sum(axis=1)
    out_y[start:end] = (coeff * dy).sum(axis=1)


def _forces_numpy(bodies, G, executor=None, chunk_rows=None):
    snap = Snapshot(bodies)
    n = len(snap)
    out_x = np.zeros(n, dtype=np.float64)
    out_y = np.zeros(n, dtype=np.float64)
    chunks = row_chunks(n, chunk_rows)

    if executor is not None and len(chunks) > 1:
        # each chunk owns a disjoint slice of out_x/out_y; list() re-raises worker errors
        list(executor.map(lambda c: _chunk_forces(snap, G, c[0], c[1], out_x, out_y), chunks))
    else:
        for start, end in chunks:
            _chunk_forces(snap, G, start, end, out_x, out_y)

    return [Vec2(fx, fy) for fx, fy in zip(out_x.tolist(), out_y.tolist())]


def compute_forces(bodies, G, executor=None, chunk_rows=None):
    """
    Return one net force Vec2 per body, index-aligned with `bodies`.

    `executor` is an optional concurrent.futures executor used to spread row
    blocks over workers. Block boundaries depend only on `chunk_rows` and the
    body count, so the result does not depend on how many workers run it.
    Bodies are not modified.
    """
    n = len(bodies)
    if n == 0:
        return []
    if n <= SMALL_N:
        return _forces_python(bodies, G)
    return _forces_numpy(bodies, G, executor=executor, chunk_rows=chunk_rows)
