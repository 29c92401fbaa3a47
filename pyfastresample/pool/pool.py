"""
Taichi field pool for PyFastResample.

Temporary device fields are expensive to allocate in Taichi (each allocation
may trigger a new SNode tree), so they are recycled: callers borrow a field
with a given dtype and shape, use it for one pass, and release it back.

    tmp = pool.get_temp_field(ti.f32, (ny * nx * 4,))
    kernel(tmp.field, ...)
    tmp.release()

Fields belong to the Taichi runtime that was active when they were created.
Call taipool.clear() after re-running ti.init().

Author: B.G.
"""

import taichi as ti


class TPField:
    """A pooled Taichi field and its borrow state."""

    def __init__(self, pool, dtype, shape):
        self._pool = pool
        self.dtype = dtype
        self.shape = tuple(shape)
        self.field = ti.field(dtype=dtype, shape=self.shape)
        self.in_use = False

    @property
    def key(self):
        return (self.dtype, self.shape)

    def release(self):
        """Give the field back to its pool. Releasing twice is an error."""
        if not self.in_use:
            raise RuntimeError("Field released twice")
        self.in_use = False
        self._pool._free(self)


class TaiPool:
    """Keeps released fields grouped by (dtype, shape) for reuse."""

    def __init__(self):
        self._available = {}
        self.n_allocated = 0

    def get_tpfield(self, dtype=ti.f32, shape=(1,)):
        if isinstance(shape, int):
            shape = (shape,)
        key = (dtype, tuple(shape))
        bucket = self._available.get(key)
        if bucket:
            tpf = bucket.pop()
        else:
            tpf = TPField(self, dtype, shape)
            self.n_allocated += 1
        tpf.in_use = True
        return tpf

    def _free(self, tpf):
        self._available.setdefault(tpf.key, []).append(tpf)

    def n_available(self):
        return sum(len(v) for v in self._available.values())

    def clear(self):
        """Forget every cached field (required after a new ti.init)."""
        self._available = {}
        self.n_allocated = 0


taipool = TaiPool()


def get_temp_field(dtype, shape):
    """Borrow a field from the global pool."""
    return taipool.get_tpfield(dtype=dtype, shape=shape)
