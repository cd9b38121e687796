import numpy as np

# Upper bound on cells of one (rows x n) distance block; keeps a chunk at a few MB.
CHUNK_CELLS = 1 << 18


class Snapshot:
    """
    Immutable copy of the per-body data a stage needs to read.

    Arrays are taken once at the start of a stage and flagged read-only, so
    nothing written during the stage (forces, velocities) can leak back into
    what the stage observes.
    """

    def __init__(self, bodies):
        n = len(bodies)
        self.n = n
        self.x = np.fromiter((b.pos.x for b in bodies), dtype=np.float64, count=n)
        self.y = np.fromiter((b.pos.y for b in bodies), dtype=np.float64, count=n)
        self.mass = np.fromiter((b.mass for b in bodies), dtype=np.float64, count=n)
        self.radius = np.fromiter((b.radius for b in bodies), dtype=np.float64, count=n)
        for arr in (self.x, self.y, self.mass, self.radius):
            arr.flags.writeable = False

    def __len__(self):
        return self.n

    def deltas(self, start, end):
        """Return (dx, dy, dist) blocks of shape (end-start, n) from rows start..end to every body."""
        dx = self.x[None, :] - self.x[start:end, None]
        dy = self.y[None, :] - self.y[start:end, None]
        return dx, dy, np.hypot(dx, dy)


def default_chunk_rows(n):
    return max(1, CHUNK_CELLS // max(1, n))


def row_chunks(n, chunk_rows=None):
    """Split range(n) into contiguous (start, end) row blocks."""
    if chunk_rows is None:
        chunk_rows = default_chunk_rows(n)
    chunk_rows = max(1, int(chunk_rows))
    return [(start, min(start + chunk_rows, n)) for start in range(0, n, chunk_rows)]
