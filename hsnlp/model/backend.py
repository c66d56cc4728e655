# -*- coding: utf-8 -*-
"""Numeric backends for derivative storage.

Two backends are available:

* ``DENSE``: every coefficient is stored in a Numpy array, zero or not;
* ``SPARSE``: only explicitly set coefficients are stored, in coordinate
  format (vals, rows, cols), and returned as a SciPy COO matrix.

Functions write their derivatives once, against the storage interface, and
the backend chosen at construction time decides how they are held.
"""

import numpy as np
from scipy import sparse as sp

from hsnlp.tools.exceptions import IndexOutOfRange

__docformat__ = 'restructuredtext'

DENSE = "dense"
SPARSE = "sparse"

BACKENDS = (DENSE, SPARSE)


def check_backend(backend):
    """Return `backend` if it names a known backend, raise otherwise."""
    if backend not in BACKENDS:
        raise ValueError("Unknown backend %r, should be one of %s" %
                         (backend, ", ".join(BACKENDS)))
    return backend


class DerivativeStorage(object):
    """Write-only container for gradient or Jacobian coefficients.

    A storage has a fixed shape, ``(n,)`` for a gradient or ``(m, n)``
    for a Jacobian. Coefficients are set with ``storage[j] = v``,
    ``storage[i, j] = v`` or ``storage.set_entry(i, j, v)``. Gradients are
    stored as a single row, so that ``storage[j]`` and
    ``storage.set_entry(0, j, v)`` are equivalent.
    """

    def __init__(self, shape):
        if len(shape) == 1:
            self.vector = True
            self.nrow, self.ncol = 1, shape[0]
        elif len(shape) == 2:
            self.vector = False
            self.nrow, self.ncol = shape
        else:
            raise ValueError("Storage must be one- or two-dimensional")
        self.shape = tuple(shape)

    def _index(self, key):
        if isinstance(key, tuple):
            if len(key) != 2:
                raise IndexOutOfRange("Invalid index %r" % (key,))
            row, col = key
        elif self.vector:
            row, col = 0, key
        else:
            raise IndexOutOfRange("Jacobian coefficients need a (row, col) "
                                  "index, got %r" % (key,))
        row, col = int(row), int(col)
        if not (0 <= row < self.nrow and 0 <= col < self.ncol):
            raise IndexOutOfRange("Index (%d, %d) out of range for shape %s" %
                                  (row, col, self.shape))
        return row, col

    def __setitem__(self, key, value):
        row, col = self._index(key)
        self.set_entry(row, col, value)

    def set_entry(self, row, col, value):
        """Set coefficient (row, col) to `value`."""
        raise NotImplementedError("Please subclass")

    def row_items(self, row):
        """Iterate over the (col, value) pairs stored in `row`."""
        raise NotImplementedError("Please subclass")

    def finalize(self):
        """Return the backend representation of the stored coefficients."""
        raise NotImplementedError("Please subclass")


class DenseStorage(DerivativeStorage):
    """Zero-filled Numpy storage overwritten coefficient by coefficient."""

    def __init__(self, shape):
        super(DenseStorage, self).__init__(shape)
        self.values = np.zeros((self.nrow, self.ncol))

    def set_entry(self, row, col, value):
        row, col = self._index((row, col))
        self.values[row, col] = value

    def row_items(self, row):
        return enumerate(self.values[row, :])

    def finalize(self):
        if self.vector:
            return self.values[0, :].copy()
        return self.values


class SparseStorage(DerivativeStorage):
    """Coordinate storage holding only explicitly set coefficients.

    Coefficients are kept in insertion order. Setting a coefficient twice
    overwrites the previous value, as in the dense storage.
    """

    def __init__(self, shape):
        super(SparseStorage, self).__init__(shape)
        self.entries = {}

    @property
    def nnz(self):
        """Number of explicitly set coefficients."""
        return len(self.entries)

    def set_entry(self, row, col, value):
        row, col = self._index((row, col))
        self.entries[(row, col)] = float(value)

    def row_items(self, row):
        return [(col, val) for (r, col), val in self.entries.items()
                if r == row]

    def coord(self):
        """Return stored coefficients in coordinate format (vals, rows, cols)."""
        nnz = self.nnz
        vals = np.empty(nnz)
        rows = np.empty(nnz, dtype=np.int64)
        cols = np.empty(nnz, dtype=np.int64)
        for k, ((row, col), val) in enumerate(self.entries.items()):
            vals[k] = val
            rows[k] = row
            cols[k] = col
        return (vals, rows, cols)

    def finalize(self):
        vals, rows, cols = self.coord()
        return sp.coo_matrix((vals, (rows, cols)),
                             shape=(self.nrow, self.ncol))


def make_storage(backend, shape):
    """Create an empty storage of `shape` for `backend`."""
    if check_backend(backend) == SPARSE:
        return SparseStorage(shape)
    return DenseStorage(shape)


def to_dense(a):
    """Return a dense Numpy array from a dense array or a SciPy matrix.

    Sparse gradients are returned as a single row of shape (1, n).
    """
    if sp.issparse(a):
        return a.toarray()
    return np.asarray(a, dtype=float)


def sparsity_pattern(a):
    """Return the (rows, cols) of the explicitly stored coefficients of `a`.

    For a dense array, every coefficient is explicitly stored.
    """
    if sp.issparse(a):
        coo = a.tocoo()
        return (coo.row.copy(), coo.col.copy())
    a = np.asarray(a)
    if a.ndim == 1:
        a = a.reshape(1, -1)
    rows, cols = np.indices(a.shape)
    return (rows.ravel(), cols.ravel())
