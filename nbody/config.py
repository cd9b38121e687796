"""Tunable simulation parameters, overridable through environment variables."""

import os
from typing import Optional


def _env_float(name, default):
    return float(os.getenv(name, str(default)))


def _env_int(name, default):
    return int(os.getenv(name, str(default)))


# Arena
WIDTH = _env_int("NBODY_WIDTH", 800)
HEIGHT = _env_int("NBODY_HEIGHT", 600)

# Physics
G = _env_float("NBODY_G", 1.0)
FRICTION = _env_float("NBODY_FRICTION", 0.9)
MAX_VELOCITY = _env_float("NBODY_MAX_VELOCITY", 500.0)
SUBSTEPS = _env_int("NBODY_SUBSTEPS", 4)
DT = _env_float("NBODY_DT", 0.1)

# Bodies
INITIAL_BODIES = _env_int("NBODY_BODIES", 3)
MASS_MIN = _env_float("NBODY_MASS_MIN", 100.0)
MASS_MAX = _env_float("NBODY_MASS_MAX", 1000.0)
RADIUS_SCALE = _env_float("NBODY_RADIUS_SCALE", 1.0)

# Force field parallelism
WORKERS = _env_int("NBODY_WORKERS", min(8, os.cpu_count() or 1))
SEED: Optional[int] = int(os.environ["NBODY_SEED"]) if os.getenv("NBODY_SEED") else None

# Logging settings
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

__all__ = [
    "WIDTH",
    "HEIGHT",
    "G",
    "FRICTION",
    "MAX_VELOCITY",
    "SUBSTEPS",
    "DT",
    "INITIAL_BODIES",
    "MASS_MIN",
    "MASS_MAX",
    "RADIUS_SCALE",
    "WORKERS",
    "SEED",
    "LOG_LEVEL",
    "LOG_FORMAT",
]
