import math


class Vec2:
    def __init__(self, x, y):
        self.x = float(x)
        self.y = float(y)

    def __add__(self, other):
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar):
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar):
        return self.__mul__(scalar)

    def __truediv__(self, scalar):
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self):
        return Vec2(-self.x, -self.y)

    def length(self):
        return math.hypot(self.x, self.y)

    def length_sq(self):
        return self.x * self.x + self.y * self.y

    def distance_to(self, other):
        return math.hypot(other.x - self.x, other.y - self.y)

    def normalize(self):
        l = self.length()
        if l > 0.0:
            return Vec2(self.x / l, self.y / l)
        return Vec2(0.0, 0.0)

    def clamp_length(self, max_length):
        """
        Return a copy no longer than `max_length`, keeping the direction.

        The rescaled length never exceeds `max_length`, even by rounding.
        """
        l = self.length()
        if l <= max_length:
            return Vec2(self.x, self.y)
        scale = max_length / l
        clamped = Vec2(self.x * scale, self.y * scale)
        while clamped.length() > max_length:
            scale = math.nextafter(scale, 0.0)
            clamped = Vec2(self.x * scale, self.y * scale)
        return clamped

    def copy(self):
        return Vec2(self.x, self.y)

    def __eq__(self, other):
        if other is None or not isinstance(other, Vec2):
            return False
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Vec2({self.x:.3f}, {self.y:.3f})"
