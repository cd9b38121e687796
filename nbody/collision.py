import numpy as np

from .Vec2 import Vec2
from .snapshot import Snapshot, row_chunks

# Body counts above this go through the numpy prefilter.
SMALL_N = 64


def detect_collision(b1, b2):
    """
    Detect collision between two bodies.

    Each body's own radius is tested on its own (d < 2*r1 or d < 2*r2),
    not the sum of both radii.
    """
    dx = b1.pos.x - b2.pos.x
    dy = b1.pos.y - b2.pos.y
    dist = (dx * dx + dy * dy) ** 0.5
    return dist < 2.0 * b1.radius or dist < 2.0 * b2.radius


def resolve_collision(b1, b2, friction):
    """Swap the two velocities and damp both by `friction`. Masses and the contact normal are ignored."""
    v1 = b1.vel
    b1.vel = Vec2(b2.vel.x * friction, b2.vel.y * friction)
    b2.vel = Vec2(v1.x * friction, v1.y * friction)


def _colliding_pairs_python(bodies):
    pairs = []
    n = len(bodies)
    for i in range(n):
        for j in range(i + 1, n):
            if detect_collision(bodies[i], bodies[j]):
                pairs.append((i, j))
    return pairs


def _colliding_pairs_numpy(bodies, chunk_rows=None):
    snap = Snapshot(bodies)
    n = len(snap)
    pairs = []
    for start, end in row_chunks(n, chunk_rows):
        _, _, dist = snap.deltas(start, end)
        reach = 2.0 * np.maximum(snap.radius[start:end, None], snap.radius[None, :])
        upper = np.arange(n)[None, :] > np.arange(start, end)[:, None]
        rows, cols = np.nonzero((dist < reach) & upper)
        # np.nonzero walks row-major, which keeps (i, j) in lexicographic order
        pairs.extend(zip((rows + start).tolist(), cols.tolist()))
    return pairs


def colliding_pairs(bodies, chunk_rows=None):
    """Return every overlapping (i, j) with i < j, in lexicographic order."""
    if len(bodies) <= SMALL_N:
        return _colliding_pairs_python(bodies)
    return _colliding_pairs_numpy(bodies, chunk_rows=chunk_rows)


def handle_collisions(bodies, friction, chunk_rows=None):
    """
    Resolve every overlapping pair once, in a single forward pass over i < j.

    Resolution only touches velocities, so the overlap test can be done up
    front from positions; the swaps are then applied in pair order and a body
    may be hit by several pairs. There is no iteration to a fixed point.
    Returns the number of resolved pairs.
    """
    pairs = colliding_pairs(bodies, chunk_rows=chunk_rows)
    for i, j in pairs:
        resolve_collision(bodies[i], bodies[j], friction)
    return len(pairs)


def resolve_boundary(body, width, height, friction):
    """
    Reflect and clamp a body against the arena walls.

    Each axis is handled on its own, so a corner hit flips both components.
    Frozen bodies are left where they are. Returns True if a wall was hit.
    """
    if body.frozen:
        return False

    r = body.radius
    hit = False
    vel_x, vel_y = body.vel.x, body.vel.y
    pos_x, pos_y = body.pos.x, body.pos.y

    if pos_x < r or pos_x > width - r:
        vel_x = -vel_x * friction
        pos_x = min(max(pos_x, r), width - r)
        hit = True

    if pos_y < r or pos_y > height - r:
        vel_y = -vel_y * friction
        pos_y = min(max(pos_y, r), height - r)
        hit = True

    if hit:
        body.vel = Vec2(vel_x, vel_y)
        body.pos = Vec2(pos_x, pos_y)
    return hit


def handle_boundaries(bodies, width, height, friction):
    hits = 0
    for b in bodies:
        if resolve_boundary(b, width, height, friction):
            hits += 1
    return hits
