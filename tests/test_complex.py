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

""" Tests for simplicial complex operators.
"""

import numpy as np
import pytest

from dgmesh.complex import SimplicialComplexOperators
from dgmesh.hds import Mesh
from dgmesh.subset import MeshSubset


def edge_between(mesh, i, j):
    for e in mesh.edges:
        if set(int(v) for v in e) == {i, j}:
            return e

    raise KeyError((i, j))


@pytest.fixture
def grid_mesh(grid):
    return Mesh(*grid)


@pytest.fixture
def ops(grid_mesh):
    return SimplicialComplexOperators(grid_mesh)


class TestIncidenceMatrices:

    def test_shapes(self, grid_mesh, ops):
        assert ops.A0.shape == (16, 9)
        assert ops.A1.shape == (8, 16)

    def test_vertex_edge(self, grid_mesh, ops):
        A0 = ops.A0.toarray()

        assert np.all(A0.sum(axis=1) == 2)

        for e in grid_mesh.edges:
            assert set(np.flatnonzero(A0[e])) == set(int(v) for v in e)

        degrees = [v.degree for v in grid_mesh.vertices]

        assert np.array_equal(A0.sum(axis=0), degrees)

    def test_edge_face(self, grid_mesh, ops):
        A1 = ops.A1.toarray()

        assert np.all(A1.sum(axis=1) == 3)

        for e in grid_mesh.edges:
            assert A1[:, e].sum() == (1 if e.boundary else 2)

    def test_indicator_vectors(self, ops):
        S = MeshSubset(vertices=[1, 4], edges=[0], faces=[7])

        assert np.array_equal(np.flatnonzero(ops.vertex_vector(S)), [1, 4])
        assert np.array_equal(np.flatnonzero(ops.edge_vector(S)), [0])
        assert np.array_equal(np.flatnonzero(ops.face_vector(S)), [7])
        assert len(ops.edge_vector(S)) == 16


class TestStarClosureLink:

    def test_star_of_interior_vertex(self, grid_mesh, ops):
        S = MeshSubset(vertices=[4])
        star = ops.star(S)

        assert star.vertices == {4}
        assert star.edges == set(int(e) for e in
                                 grid_mesh.vertices[4].adjacent_edges())
        assert star.faces == set(int(f) for f in
                                 grid_mesh.vertices[4].adjacent_faces())
        assert len(star.faces) == 6

        # The argument is left unchanged.
        assert S == MeshSubset(vertices=[4])

    def test_closure_of_face(self, grid_mesh, ops):
        f = grid_mesh.faces[0]
        closure = ops.closure(MeshSubset(faces=[f]))

        assert closure.faces == {0}
        assert closure.edges == set(int(e) for e in f.adjacent_edges())
        assert closure.vertices == set(int(v) for v in f)

    def test_link_of_interior_vertex(self, ops):
        link = ops.link(MeshSubset(vertices=[4]))

        assert link.vertices == {0, 1, 3, 5, 7, 8}
        assert len(link.edges) == 6
        assert not link.faces
        assert ops.is_pure_complex(link) == 1

    def test_link_of_edge(self, grid_mesh, ops):
        # Interior diagonal edge of the first quad.
        e = edge_between(grid_mesh, 0, 4)
        link = ops.link(MeshSubset(edges=[e]))

        assert link == MeshSubset(vertices=[1, 3])

    @pytest.mark.parametrize('subset', [
        MeshSubset(vertices=[0]),
        MeshSubset(vertices=[4], edges=[2]),
        MeshSubset(edges=[5, 6, 7]),
        MeshSubset(faces=[1, 6]),
        MeshSubset(vertices=[8], faces=[2]),
    ])
    def test_idempotence(self, ops, subset):
        star = ops.star(subset)
        closure = ops.closure(subset)

        assert ops.star(star) == star
        assert ops.closure(closure) == closure

    def test_closure_is_complex(self, ops):
        S = MeshSubset(vertices=[2], edges=[3], faces=[5])

        assert not ops.is_complex(S)
        assert ops.is_complex(ops.closure(S))


class TestPureComplex:

    def test_empty(self, ops):
        assert ops.is_pure_complex(MeshSubset()) == 0

    def test_vertices(self, ops):
        assert ops.is_pure_complex(MeshSubset(vertices=[0, 8])) == 0

    def test_edges(self, grid_mesh, ops):
        e = edge_between(grid_mesh, 0, 1)
        S = ops.closure(MeshSubset(edges=[e]))

        assert ops.is_pure_complex(S) == 1

    def test_faces(self, ops):
        S = ops.closure(MeshSubset(faces=[0, 1, 2]))

        assert ops.is_pure_complex(S) == 2

    def test_not_pure(self, ops):
        S = ops.closure(MeshSubset(faces=[0]))
        S.add_vertex(8)

        assert ops.is_complex(S)
        assert ops.is_pure_complex(S) == -1

    def test_dangling_edge(self, grid_mesh, ops):
        S = ops.closure(MeshSubset(faces=[0]))
        S.add_subset(ops.closure(MeshSubset(edges=[edge_between(grid_mesh,
                                                                 1, 2)])))

        assert ops.is_pure_complex(S) == -1

    def test_not_complex(self, ops):
        assert ops.is_pure_complex(MeshSubset(faces=[0])) == -1


class TestBoundary:

    def test_boundary_of_all_faces(self, grid_mesh, ops):
        S = ops.closure(MeshSubset(faces=range(8)))
        boundary = ops.boundary(S)

        assert boundary.vertices == {0, 1, 2, 3, 5, 6, 7, 8}
        assert boundary.edges == set(int(e) for e in grid_mesh.edges
                                     if e.boundary)
        assert not boundary.faces

    def test_boundary_of_star_is_link(self, ops):
        S = MeshSubset(vertices=[4])

        assert ops.boundary(ops.closure(ops.star(S))) == ops.link(S)

    def test_boundary_of_path(self, grid_mesh, ops):
        path = [edge_between(grid_mesh, 0, 1), edge_between(grid_mesh, 1, 2)]
        S = ops.closure(MeshSubset(edges=path))

        assert ops.boundary(S) == MeshSubset(vertices=[0, 2])

    def test_boundary_of_vertices(self, ops):
        assert not ops.boundary(MeshSubset(vertices=[0, 1]))

    @pytest.mark.parametrize('faces', [[0], [0, 1], [1, 3, 4], range(8)])
    def test_double_boundary_vanishes(self, ops, faces):
        S = ops.closure(MeshSubset(faces=faces))

        assert ops.boundary(ops.boundary(S)) == MeshSubset()

    def test_closed_surface(self, octahedron):
        mesh = Mesh(*octahedron)
        ops = SimplicialComplexOperators(mesh)

        S = ops.closure(MeshSubset(faces=range(8)))

        assert ops.is_pure_complex(S) == 2
        assert not ops.boundary(S)
