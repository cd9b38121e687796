import math
from collections import namedtuple

from .Vec2 import Vec2

# Read-only record handed to the renderer.
BodyView = namedtuple("BodyView", ["x", "y", "radius", "frozen"])


def radius_for_mass(mass, scale=1.0):
    return scale * mass ** (1.0 / 3.0)


class Body:
    def __init__(self, pos, vel=None, mass=1000.0, radius=None, frozen=False, radius_scale=1.0):
        self.pos = pos.copy() if isinstance(pos, Vec2) else Vec2(pos[0], pos[1])
        if isinstance(vel, Vec2):
            self.vel = vel.copy()
        elif vel is not None:
            self.vel = Vec2(vel[0], vel[1])
        else:
            self.vel = Vec2(0.0, 0.0)
        self.acc = Vec2(0.0, 0.0)
        self.force = Vec2(0.0, 0.0)

        # Use setters to validate
        self._mass = 1.0
        self._radius = 0.0
        self.mass = mass
        self.radius = radius if radius is not None else radius_for_mass(self.mass, radius_scale)
        self.frozen = bool(frozen)

    @property
    def mass(self):
        return self._mass

    @mass.setter
    def mass(self, value):
        value = float(value)
        if not math.isfinite(value) or value <= 0.0:
            raise ValueError(f"body mass must be positive and finite, got {value!r}")
        self._mass = value

    @property
    def radius(self):
        return self._radius

    @radius.setter
    def radius(self, value):
        value = float(value)
        if not math.isfinite(value) or value < 0.0:
            raise ValueError(f"body radius must be non-negative and finite, got {value!r}")
        self._radius = value

    def within_reach(self, point):
        """True if `point` lies inside the 2*radius disc used by the interaction commands."""
        return self.pos.distance_to(point) < 2.0 * self._radius

    def kinetic_energy(self):
        return 0.5 * self._mass * self.vel.length_sq()

    def view(self):
        return BodyView(self.pos.x, self.pos.y, self._radius, self.frozen)

    def __repr__(self):
        return (f"Body(pos=({self.pos.x:.2f}, {self.pos.y:.2f}), vel=({self.vel.x:.2f}, {self.vel.y:.2f}), "
                f"mass={self.mass}, radius={self.radius:.2f}, frozen={self.frozen})")

    def __str__(self):
        return self.__repr__()

