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

""" Tests for vector helpers and the sparse linear algebra layer.
"""

import math

import numpy as np
import pytest
import scipy.sparse as sp

import dgmesh.linalg as linalg


class TestVectorHelpers:

    def test_cross(self):
        x = np.array([1.0, 0.0, 0.0])
        y = np.array([0.0, 1.0, 0.0])

        assert np.array_equal(linalg.cross(x, y), [0.0, 0.0, 1.0])
        assert np.allclose(linalg.cross([1, 2, 3], [4, 5, 6]),
                           np.cross([1, 2, 3], [4, 5, 6]))

    def test_cross_shape(self):
        with pytest.raises(ValueError):
            linalg.cross([1.0, 2.0], [3.0, 4.0])

    def test_norms(self):
        u = np.array([3.0, 4.0, 0.0])

        assert linalg.dot(u, u) == 25.0
        assert linalg.sqrd(u) == 25.0
        assert linalg.norm(u) == 5.0
        assert np.allclose(linalg.unit(u), [0.6, 0.8, 0.0])

    def test_clamp(self):
        assert linalg.clamp(2.0, -1.0, 1.0) == 1.0
        assert linalg.clamp(-2.0, -1.0, 1.0) == -1.0
        assert linalg.clamp(0.5, -1.0, 1.0) == 0.5

    def test_angle(self):
        x = np.array([1.0, 0.0, 0.0])
        y = np.array([0.0, 1.0, 0.0])
        z = np.array([0.0, 0.0, 1.0])

        assert linalg.angle(x, y) == pytest.approx(0.5 * math.pi)
        assert linalg.angle(x, y, deg=True) == pytest.approx(90.0)
        assert linalg.angle(x, y, a=-z) == pytest.approx(-0.5 * math.pi)
        assert linalg.angle(x, x) == pytest.approx(0.0)


class TestTriplet:

    def test_duplicates_are_summed(self):
        T = linalg.Triplet(2, 3)

        T.add_entry(1.0, 0, 0)
        T.add_entry(2.0, 0, 0)
        T.add_entry(-1.0, 1, 2)

        A = linalg.sparse(T)

        assert len(T) == 3
        assert A.shape == (2, 3)
        assert sp.issparse(A)
        assert np.array_equal(A.toarray(), [[3.0, 0.0, 0.0],
                                            [0.0, 0.0, -1.0]])

    def test_out_of_range(self):
        T = linalg.Triplet(2, 2)

        with pytest.raises(IndexError):
            T.add_entry(1.0, 2, 0)

        with pytest.raises(IndexError):
            T.add_entry(1.0, 0, -1)

    def test_empty(self):
        A = linalg.sparse(linalg.Triplet(3, 3))

        assert A.nnz == 0
        assert A.shape == (3, 3)

    def test_complex_entries(self):
        T = linalg.Triplet(2, 2, dtype=complex)

        T.add_entry(1.0, 0, 0)
        T.add_entry(2.0j, 0, 1)
        T.add_entry(1.0 - 1.0j, 0, 1)

        A = linalg.sparse(T)

        assert T.dtype == np.complex128
        assert A.dtype == np.complex128
        assert np.array_equal(A.toarray(), [[1.0, 1.0 + 1.0j],
                                            [0.0, 0.0]])

    def test_diagonal_and_identity(self):
        D = linalg.diagonal([1.0, 2.0])

        assert np.array_equal(D.toarray(), np.diag([1.0, 2.0]))
        assert np.array_equal(linalg.identity(3).toarray(), np.eye(3))


@pytest.fixture
def spd():
    """ 1D Dirichlet Laplacian.
    """
    n = 6
    T = linalg.Triplet(n, n)

    for i in range(n):
        T.add_entry(2.0, i, i)

        if i > 0:
            T.add_entry(-1.0, i, i - 1)
            T.add_entry(-1.0, i - 1, i)

    return linalg.sparse(T)


class TestSolvers:

    def test_positive_definite(self, spd):
        x = np.arange(6.0)
        b = spd @ x

        assert np.allclose(linalg.solve_positive_definite(spd, b), x)

    def test_positive_definite_multiple_rhs(self, spd):
        X = np.column_stack([np.ones(6), np.arange(6.0)])
        B = spd @ X

        assert np.allclose(linalg.solve_positive_definite(spd, B), X)

    def test_positive_definite_complex_rhs(self, spd):
        x = np.arange(6.0) - 2.0j

        assert np.allclose(linalg.solve_positive_definite(spd, spd @ x), x)

    def test_square(self):
        A = sp.csc_array(np.array([[0.0, 2.0, 0.0],
                                   [1.0, 0.0, 0.0],
                                   [0.0, 1.0, 3.0]]))
        x = np.array([1.0, -1.0, 2.0])

        assert np.allclose(linalg.solve_square(A, A @ x), x)

    def test_singular(self):
        A = sp.csc_array(np.zeros((2, 2)))

        with pytest.raises(RuntimeError):
            linalg.solve_square(A, np.ones(2))

    def test_least_squares(self):
        # Fit a line through points that lie exactly on it.
        t = np.linspace(0.0, 1.0, 5)
        A = sp.csr_array(np.column_stack([np.ones_like(t), t]))
        b = 2.0 + 3.0 * t

        assert np.allclose(linalg.solve_least_squares(A, b), [2.0, 3.0])

    def test_least_squares_residual(self):
        A = sp.csr_array(np.array([[1.0], [1.0]]))
        b = np.array([0.0, 2.0])

        assert np.allclose(linalg.solve_least_squares(A, b), [1.0])

    def test_least_squares_multiple_rhs(self):
        A = sp.csr_array(np.eye(3))
        B = np.arange(6.0).reshape(3, 2)

        assert np.allclose(linalg.solve_least_squares(A, B), B)
