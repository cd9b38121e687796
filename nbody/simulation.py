import random
import time
from concurrent.futures import ThreadPoolExecutor

from . import config
from .Body import Body, radius_for_mass
from .Vec2 import Vec2
from .collision import handle_boundaries, handle_collisions
from .commands import CommandQueue
from .forces import compute_forces
from .integrator import integrate_substeps
from .log import get_logger

logger = get_logger(__name__)


class Simulation:
    def __init__(self, width=config.WIDTH, height=config.HEIGHT, G=config.G, friction=config.FRICTION,
                 max_velocity=config.MAX_VELOCITY, substeps=config.SUBSTEPS,
                 mass_range=(config.MASS_MIN, config.MASS_MAX), radius_scale=config.RADIUS_SCALE,
                 workers=config.WORKERS, seed=config.SEED):
        if width <= 0 or height <= 0:
            raise ValueError(f"arena must have positive extent, got {width}x{height}")
        if not 0.0 <= friction < 1.0:
            raise ValueError(f"friction must be in [0, 1), got {friction!r}")
        if max_velocity <= 0:
            raise ValueError(f"max_velocity must be positive, got {max_velocity!r}")
        if int(substeps) < 1:
            raise ValueError(f"substeps must be at least 1, got {substeps!r}")
        if int(workers) < 1:
            raise ValueError(f"workers must be at least 1, got {workers!r}")
        if radius_scale < 0:
            raise ValueError(f"radius_scale must be non-negative, got {radius_scale!r}")
        lo, hi = mass_range
        if not 0.0 < lo <= hi:
            raise ValueError(f"mass_range must satisfy 0 < min <= max, got {mass_range!r}")

        self.width = float(width)
        self.height = float(height)
        self.G = float(G)
        self.friction = float(friction)
        self.max_velocity = float(max_velocity)
        self.substeps = int(substeps)
        self.mass_range = (float(lo), float(hi))
        self.radius_scale = float(radius_scale)
        self.workers = int(workers)

        self.bodies = []
        self._commands = CommandQueue()
        self._rng = random.Random(seed)
        self._executor = None

        self.stats = {
            'steps': 0,
            'collisions': 0,
            'step_ms': 0.0,
        }
        logger.info("simulation %gx%g G=%g friction=%g max_velocity=%g substeps=%d workers=%d",
                    self.width, self.height, self.G, self.friction, self.max_velocity,
                    self.substeps, self.workers)

    # --- worker pool ---

    def _get_executor(self):
        if self.workers <= 1:
            return None
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="nbody-force")
            logger.info("started force pool with %d workers", self.workers)
        return self._executor

    def close(self):
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
            logger.info("force pool stopped")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # --- collection ---

    def add_body(self, body):
        self.bodies.append(body)
        return body

    def _clamp_to_arena(self, pos, radius):
        x = min(max(pos.x, radius), self.width - radius)
        y = min(max(pos.y, radius), self.height - radius)
        return Vec2(x, y)

    def spawn(self, pos=None):
        """Append a body with random mass. It is placed at `pos` (clamped into the arena) or at random."""
        mass = self._rng.uniform(*self.mass_range)
        radius = radius_for_mass(mass, self.radius_scale)
        if pos is None:
            x = self._rng.uniform(min(radius, self.width / 2), max(self.width - radius, self.width / 2))
            y = self._rng.uniform(min(radius, self.height / 2), max(self.height - radius, self.height / 2))
            pos = Vec2(x, y)
        else:
            pos = self._clamp_to_arena(pos if isinstance(pos, Vec2) else Vec2(pos[0], pos[1]), radius)
        body = self.add_body(Body(pos, mass=mass, radius=radius))
        logger.debug("spawned %r", body)
        return body

    def populate(self, count):
        for _ in range(int(count)):
            self.spawn()
        logger.info("populated %d bodies (total %d)", count, len(self.bodies))

    def drag(self, target):
        moved = 0
        for b in self.bodies:
            if b.within_reach(target):
                b.pos = Vec2(target.x, target.y)
                b.vel = Vec2(0.0, 0.0)
                moved += 1
        return moved

    def toggle_freeze(self, target):
        flipped = 0
        for b in self.bodies:
            if b.within_reach(target):
                b.frozen = not b.frozen
                flipped += 1
        return flipped

    def remove(self, target):
        before = len(self.bodies)
        self.bodies = [b for b in self.bodies if not b.within_reach(target)]
        return before - len(self.bodies)

    def clear(self):
        n = len(self.bodies)
        self.bodies = []
        logger.info("cleared %d bodies", n)

    # --- commands ---

    def submit(self, command):
        self._commands.push(command)

    def apply_pending(self):
        applied = 0
        for command in self._commands.drain():
            affected = command.apply(self)
            logger.debug("applied %r (%d bodies)", command, affected)
            applied += 1
        return applied

    @property
    def pending(self):
        return len(self._commands)

    # --- stepping ---

    def step(self, dt=config.DT):
        """
        Apply queued commands, then advance one frame:
        forces -> substepped integration -> pairwise collisions -> boundaries.
        """
        self.apply_pending()
        if not self.bodies:
            return

        t0 = time.perf_counter()
        forces = compute_forces(self.bodies, self.G, executor=self._get_executor())
        integrate_substeps(self.bodies, forces, dt, self.substeps, self.max_velocity)
        collisions = handle_collisions(self.bodies, self.friction)
        handle_boundaries(self.bodies, self.width, self.height, self.friction)
        elapsed_ms = (time.perf_counter() - t0) * 1000.0

        self.stats['steps'] += 1
        self.stats['collisions'] = collisions
        self.stats['step_ms'] = elapsed_ms
        logger.debug("step %d: %d bodies, %d collisions, %.2f ms",
                     self.stats['steps'], len(self.bodies), collisions, elapsed_ms)

    # --- read-only access for rendering ---

    def views(self):
        return tuple(b.view() for b in self.bodies)

    def kinetic_energy(self):
        return sum(b.kinetic_energy() for b in self.bodies)

    def __len__(self):
        return len(self.bodies)

    def __iter__(self):
        return iter(self.views())

    def __repr__(self):
        return f"<Simulation bodies={len(self.bodies)} steps={self.stats['steps']}>"
