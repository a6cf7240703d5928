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

""" Shared mesh fixtures.

Each fixture returns a fresh ``(points, indices)`` triangle soup. The
index lists are flat, three entries per triangle.
"""

import numpy as np
import pytest

from dgmesh.hds import Mesh


def soup_quad():
    points = np.array([[0.0, 0.0, 0.0],
                       [1.0, 0.0, 0.0],
                       [1.0, 1.0, 0.0],
                       [0.0, 1.0, 0.0]])

    return points, [0, 1, 2, 0, 2, 3]


def soup_tetrahedron():
    points = np.array([[0.0, 0.0, 0.0],
                       [1.0, 0.0, 0.0],
                       [0.0, 1.0, 0.0],
                       [0.0, 0.0, 1.0]])

    return points, [0, 2, 1, 0, 1, 3, 0, 3, 2, 1, 2, 3]


def soup_octahedron():
    points = np.array([[1.0, 0.0, 0.0],
                       [-1.0, 0.0, 0.0],
                       [0.0, 1.0, 0.0],
                       [0.0, -1.0, 0.0],
                       [0.0, 0.0, 1.0],
                       [0.0, 0.0, -1.0]])

    indices = [0, 2, 4, 2, 1, 4, 1, 3, 4, 3, 0, 4,
               2, 0, 5, 1, 2, 5, 3, 1, 5, 0, 3, 5]

    return points, indices


def soup_grid():
    """ Unit square split into 2x2 quads, two triangles per quad.

    Vertex ``3*j + i`` is located at ``(i/2, j/2, 0)``. Vertex 4 is the
    only interior vertex.
    """
    points = np.array([[0.5 * i, 0.5 * j, 0.0]
                       for j in range(3) for i in range(3)])

    indices = []

    for j in range(2):
        for i in range(2):
            a = 3*j + i
            indices.extend([a, a + 1, a + 4, a, a + 4, a + 3])

    return points, indices


@pytest.fixture
def quad():
    return soup_quad()


@pytest.fixture
def tetrahedron():
    return soup_tetrahedron()


@pytest.fixture
def octahedron():
    return soup_octahedron()


@pytest.fixture
def grid():
    return soup_grid()


@pytest.fixture
def bowtie():
    """ Two quads that share a single vertex.
    """
    points = np.array([[0.0, 0.0, 0.0],
                       [1.0, 0.0, 0.0],
                       [1.0, 1.0, 0.0],
                       [0.0, 1.0, 0.0],
                       [-1.0, 0.0, 0.0],
                       [-1.0, -1.0, 0.0],
                       [0.0, -1.0, 0.0]])

    return points, [0, 1, 2, 0, 2, 3, 0, 4, 5, 0, 5, 6]


@pytest.fixture
def fin():
    """ Three triangles attached to a common edge.
    """
    points = np.array([[0.0, 0.0, 0.0],
                       [1.0, 0.0, 0.0],
                       [0.5, 1.0, 0.0],
                       [0.5, -1.0, 0.0],
                       [0.5, 0.0, 1.0]])

    return points, [0, 1, 2, 1, 0, 3, 1, 0, 4]


@pytest.fixture
def fin_reversed():
    """ Third triangle on a common edge, opposite to the second one.
    """
    points = np.array([[0.0, 0.0, 0.0],
                       [1.0, 0.0, 0.0],
                       [0.5, 1.0, 0.0],
                       [0.5, -1.0, 0.0],
                       [0.5, 0.0, 1.0]])

    return points, [0, 1, 2, 1, 0, 3, 0, 1, 4]


@pytest.fixture
def pinched_tetrahedra():
    """ Two closed tetrahedra that share a single vertex.
    """
    points, indices = soup_tetrahedron()
    points = np.vstack([points, -points[1:]])
    lookup = [0, 4, 5, 6]

    return points, [lookup[i] for i in indices]


@pytest.fixture
def flipped():
    """ Two triangles with incompatible orientations.
    """
    points, _ = soup_quad()
    return points, [0, 1, 2, 2, 0, 3]


@pytest.fixture
def isolated_vertex():
    points, indices = soup_quad()
    points = np.vstack([points, [[2.0, 2.0, 0.0]]])

    return points, indices


@pytest.fixture
def triangle():
    points, _ = soup_quad()
    return points[:3], [0, 1, 2]


@pytest.fixture(params=['quad', 'tetrahedron', 'octahedron', 'grid'])
def mesh(request):
    """ Manifold meshes with and without boundary.
    """
    soups = {'quad': soup_quad,
             'tetrahedron': soup_tetrahedron,
             'octahedron': soup_octahedron,
             'grid': soup_grid}

    return Mesh(*soups[request.param]())
