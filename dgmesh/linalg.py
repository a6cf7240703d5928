# Copyright 2024, m3shware
#
# Permission is hereby granted, free of charge, to any person obtaining a
# copy of this software and associated documentation files (the "Software"),
# to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense,
# and/or sell copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
# FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
# IN THE SOFTWARE.

""" Vector math and sparse linear algebra.

Small, non-vectorized helpers for vectors in 3-space and a thin layer
over :mod:`scipy.sparse` used to assemble and solve the linear systems
that arise in discrete differential geometry.
"""

import math
import numpy as np
import scipy.sparse as sp
import scipy.sparse.linalg


def angle(v, w, a=None, deg=False):
    r""" Angle between vectors.

    Angle between vectors :math:`\mathbf{v}` and :math:`\mathbf{w}` in
    radians. To obtain an oriented angle an axis vector :math:`\mathbf{a}`
    has to be specified.

    Parameters
    ----------
    v, w : ~numpy.ndarray, shape (3, )
        Vector in 3-space.
    a : ~numpy.ndarray, shape (3, ), optional
        Axis vector in 3-space.
    deg : bool, optional
        Convert result from radians to degrees.

    Returns
    -------
    float
        Angle in degrees or radians.

    Note
    ----
    If an axis vector is defined the sign is determined via the right-hand
    rule. None of the vectors may be the zero vector.
    """
    # Yields a value between 0 and pi. The sign is fixed below if an axis
    # vector was specified.
    phi = math.acos(clamp(dot(v, w) / (norm(v) * norm(w)), -1.0, 1.0))

    if deg:
        phi = math.degrees(phi)

    if a is not None and dot(a, cross(v, w)) < 0.0:
        phi *= -1.0

    return phi


def clamp(x, lo, hi):
    """ Clamp value to range.

    Parameters
    ----------
    x : float
        Value to clamp.
    lo : float
        Lower bound.
    hi : float
        Upper bound.

    Returns
    -------
    float
        `x` clamped to the closed interval [`lo`, `hi`].

    Note
    ----
    To prevent data type changes arguments should not mix :class:`int` and
    :class:`float` values.
    """
    assert lo <= hi

    return max(min(x, hi), lo)


def cross(u, v):
    r""" Cross product.

    Alternative to NumPy's vectorized :func:`~numpy.cross` function.

    Parameters
    ----------
    u, v : array_like, shape (3, )
        Vector in :math:`\mathbb{R}^3`.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Cross product of vectors :math:`\mathbf{u}` and :math:`\mathbf{v}`.
    """
    # Unpacking will also catch any problem with array shape.
    u0, u1, u2 = u
    v0, v1, v2 = v

    return np.array([u1*v2 - u2*v1,
                     u2*v0 - u0*v2,
                     u0*v1 - u1*v0])


def dot(u, v):
    r""" Dot product.

    Parameters
    ----------
    u, v : array_like, shape (n, )
        Vector in :math:`\mathbb{R}^n`.

    Returns
    -------
    float
        Inner product of vectors `u` and `v`.
    """
    return float(np.dot(u, v))


def sqrd(u):
    """ Squared length of vector.
    """
    return dot(u, u)


def norm(u):
    r""" Length of vector.

    Alternative to NumPy's vectorized :func:`~numpy.linalg.norm` function.

    Parameters
    ----------
    u : array_like, shape (n, )
        Vector in :math:`\mathbb{R}^n`.

    Returns
    -------
    float
        Euclidean length of the vector :math:`\mathbf{u}`.
    """
    return math.sqrt(sqrd(u))


def unit(u):
    r""" Vector normalization.

    Parameters
    ----------
    u : ~numpy.ndarray, shape (n, )
        Vector in :math:`\mathbb{R}^n`.

    Returns
    -------
    ~numpy.ndarray, shape (n, )
        Normalized copy of input vector.

    Note
    ----
    No error checking (division by zero, input vector shape) is performed.
    """
    return np.asarray(u) / norm(u)


class Triplet:
    """ Sparse matrix builder.

    Collects the nonzero entries of an :math:`m \\times n` matrix as
    (value, row, column) triplets. Entries added more than once for the
    same position are summed when the matrix is assembled via
    :func:`sparse`.

    Parameters
    ----------
    m : int
        Number of rows.
    n : int
        Number of columns.
    dtype : data-type, optional
        Entry type, :obj:`complex` for complex matrices.


    .. code-block:: python
       :linenos:

        T = Triplet(2, 2)

        T.add_entry(1.0, 0, 0)
        T.add_entry(2.0, 1, 1)

        A = sparse(T)
    """

    def __init__(self, m, n, dtype=float):
        self._shape = (m, n)
        self._dtype = np.dtype(dtype)

        self._data = []
        self._rows = []
        self._cols = []

    def __len__(self):
        return len(self._data)

    @property
    def shape(self):
        """ Matrix shape.

        :type: (int, int)
        """
        return self._shape

    @property
    def dtype(self):
        """ Entry type.

        :type: numpy.dtype
        """
        return self._dtype

    def add_entry(self, value, i, j):
        """ Add matrix entry.

        Parameters
        ----------
        value : float or complex
            Entry value.
        i : int
            Row index.
        j : int
            Column index.

        Raises
        ------
        IndexError
            If the position is outside of the matrix.
        """
        m, n = self._shape
        i = int(i)
        j = int(j)

        if not (0 <= i < m and 0 <= j < n):
            raise IndexError(f'entry ({i}, {j}) out of range for {m}x{n}')

        self._data.append(value)
        self._rows.append(i)
        self._cols.append(j)


def sparse(triplet):
    """ Assemble sparse matrix.

    Parameters
    ----------
    triplet : Triplet
        Matrix entries.

    Returns
    -------
    scipy.sparse.csc_array
        Compressed sparse column matrix. Duplicate entries are summed.
    """
    data = np.array(triplet._data, dtype=triplet.dtype)
    rows = np.array(triplet._rows, dtype=int)
    cols = np.array(triplet._cols, dtype=int)

    return sp.csc_array((data, (rows, cols)), shape=triplet.shape)


def diagonal(values):
    """ Sparse diagonal matrix.

    Parameters
    ----------
    values : array_like, shape (n, )
        Diagonal entries.

    Returns
    -------
    scipy.sparse.csc_array
        Diagonal matrix of shape (n, n).
    """
    values = np.asarray(values, dtype=float)
    return sp.diags_array(values, offsets=0, shape=(len(values),) * 2,
                          format='csc')


def identity(n):
    """ Sparse identity matrix.
    """
    return sp.eye_array(n, format='csc')


def solve_positive_definite(A, b):
    """ Solve a symmetric positive definite system.

    Uses a sparse LU factorization in symmetric mode, i.e., with a fill
    reducing ordering of :math:`A + A^T` and diagonal pivoting.

    Parameters
    ----------
    A : sparse array, shape (n, n)
        Symmetric (or Hermitian) positive definite matrix.
    b : array_like, shape (n, ) or (n, k)
        Right hand side.

    Raises
    ------
    RuntimeError
        If the matrix is singular.

    Returns
    -------
    ~numpy.ndarray
        Solution with the same shape as `b`.
    """
    A, b = _promote(A, b)
    lu = scipy.sparse.linalg.splu(A,
                                  permc_spec='MMD_AT_PLUS_A',
                                  diag_pivot_thresh=0.0,
                                  options=dict(SymmetricMode=True))

    return lu.solve(b)


def solve_square(A, b):
    """ Solve a general square system.

    Parameters
    ----------
    A : sparse array, shape (n, n)
        Non-singular matrix.
    b : array_like, shape (n, ) or (n, k)
        Right hand side.

    Raises
    ------
    RuntimeError
        If the matrix is singular.

    Returns
    -------
    ~numpy.ndarray
        Solution with the same shape as `b`.
    """
    A, b = _promote(A, b)
    return scipy.sparse.linalg.splu(A).solve(b)


def solve_least_squares(A, b, tol=1e-12):
    r""" Solve a linear least squares problem.

    Minimizes :math:`\| A\mathbf{x} - \mathbf{b} \|` for a rectangular
    matrix :math:`A` with the iterative LSQR method.

    Parameters
    ----------
    A : sparse array, shape (m, n)
        System matrix.
    b : array_like, shape (m, ) or (m, k)
        Right hand side. Columns are solved for one by one.
    tol : float, optional
        Stopping tolerance passed as `atol` and `btol` to
        :func:`scipy.sparse.linalg.lsqr`.

    Returns
    -------
    ~numpy.ndarray, shape (n, ) or (n, k)
        Least squares solution.
    """
    A = sp.csr_array(A)
    b = np.asarray(b, dtype=float)

    def lsqr(rhs):
        return scipy.sparse.linalg.lsqr(A, rhs, atol=tol, btol=tol,
                                        iter_lim=10 * max(A.shape))[0]

    if b.ndim == 1:
        return lsqr(b)

    return np.column_stack([lsqr(col) for col in b.T])


def _promote(A, b):
    # SuperLU solves in the dtype of the factored matrix.
    b = np.asarray(b)
    dtype = np.result_type(A.dtype, b.dtype, float)

    return sp.csc_array(A, dtype=dtype), b.astype(dtype)
