"""
Interaction commands produced by the input layer.

Commands are queued on the simulation and applied between steps, so input
handling never overlaps with a step in flight.
"""

from collections import deque
from dataclasses import dataclass
from typing import Optional

from .Vec2 import Vec2


@dataclass(frozen=True)
class Spawn:
    pos: Optional[Vec2] = None

    def apply(self, sim):
        sim.spawn(self.pos)
        return 1


@dataclass(frozen=True)
class Drag:
    target: Vec2

    def apply(self, sim):
        return sim.drag(self.target)


@dataclass(frozen=True)
class ToggleFreeze:
    target: Vec2

    def apply(self, sim):
        return sim.toggle_freeze(self.target)


@dataclass(frozen=True)
class Remove:
    target: Vec2

    def apply(self, sim):
        return sim.remove(self.target)


@dataclass(frozen=True)
class Clear:
    def apply(self, sim):
        n = len(sim)
        sim.clear()
        return n


COMMAND_TYPES = (Spawn, Drag, ToggleFreeze, Remove, Clear)


class CommandQueue:
    """FIFO of pending commands."""

    def __init__(self):
        self._pending = deque()

    def push(self, command):
        if not isinstance(command, COMMAND_TYPES):
            raise TypeError(f"not a simulation command: {command!r}")
        self._pending.append(command)

    def drain(self):
        while self._pending:
            yield self._pending.popleft()

    def __len__(self):
        return len(self._pending)
