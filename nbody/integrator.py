"""
Explicit Euler integration with a velocity cap.

integrate_substeps reuses the same force list for every substep. That is an
approximation traded for stability at the frame timestep; forces are not
re-evaluated between substeps.
"""

from .Vec2 import Vec2


def _check(bodies, forces, dt, max_velocity):
    if len(forces) != len(bodies):
        raise ValueError(f"got {len(forces)} forces for {len(bodies)} bodies")
    if dt < 0:
        raise ValueError(f"dt must be non-negative, got {dt!r}")
    if max_velocity <= 0:
        raise ValueError(f"max_velocity must be positive, got {max_velocity!r}")


def _advance(bodies, forces, dt, max_velocity):
    for body, force in zip(bodies, forces):
        body.force = Vec2(force.x, force.y)
        if body.frozen:
            continue
        body.acc = force / body.mass
        body.vel = (body.vel + body.acc * dt).clamp_length(max_velocity)
        body.pos = body.pos + body.vel * dt


def integrate(bodies, forces, dt, max_velocity):
    """Advance every non-frozen body by one step of `dt` under `forces`."""
    _check(bodies, forces, dt, max_velocity)
    _advance(bodies, forces, dt, max_velocity)


def integrate_substeps(bodies, forces, dt, substeps, max_velocity):
    """Split `dt` into `substeps` equal steps, all using the same `forces`."""
    substeps = int(substeps)
    if substeps < 1:
        raise ValueError(f"substeps must be at least 1, got {substeps}")
    _check(bodies, forces, dt, max_velocity)
    h = dt / substeps
    for _ in range(substeps):
        _advance(bodies, forces, h, max_velocity)
