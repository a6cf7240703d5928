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

""" Simplicial complex operators.

Operators on subsets of a triangle mesh viewed as a simplicial complex.
Vertices, edges, and faces are the 0-, 1-, and 2-simplices. All
operators are implemented with the vertex-edge and edge-face incidence
matrices of the mesh and return new :class:`~dgmesh.subset.MeshSubset`
instances.
"""

import numpy as np
import scipy.sparse as sp

import dgmesh.linalg as linalg

from dgmesh.subset import MeshSubset


class SimplicialComplexOperators:
    """ Star, closure, link, and boundary of mesh subsets.

    Parameters
    ----------
    mesh : Mesh
        A mesh whose items have been indexed, i.e., any successfully
        built mesh.


    The link of a vertex is the ring of edges and vertices opposite to
    it:

    >>> ops = SimplicialComplexOperators(mesh)
    >>> L = ops.link(MeshSubset(vertices=[v]))
    """

    def __init__(self, mesh):
        self._mesh = mesh

        nv, ne, nf = mesh.size

        self.A0 = self.build_vertex_edge_adjacency_matrix(mesh)
        self.A1 = self.build_edge_face_adjacency_matrix(mesh)

        assert self.A0.shape == (ne, nv)
        assert self.A1.shape == (nf, ne)

    @staticmethod
    def build_vertex_edge_adjacency_matrix(mesh):
        """ Vertex-edge incidence matrix.

        Parameters
        ----------
        mesh : Mesh
            Indexed mesh.

        Returns
        -------
        scipy.sparse.csr_array
            Matrix of shape (|E|, |V|). The entry in row ``e`` and column
            ``v`` is one if vertex ``v`` is an endpoint of edge ``e``.
        """
        nv, ne, _ = mesh.size
        T = linalg.Triplet(ne, nv)

        for v in mesh.vertices:
            for e in v.adjacent_edges():
                T.add_entry(1.0, e, v)

        return sp.csr_array(linalg.sparse(T))

    @staticmethod
    def build_edge_face_adjacency_matrix(mesh):
        """ Edge-face incidence matrix.

        Parameters
        ----------
        mesh : Mesh
            Indexed mesh.

        Returns
        -------
        scipy.sparse.csr_array
            Matrix of shape (|F|, |E|). The entry in row ``f`` and column
            ``e`` is one if edge ``e`` bounds face ``f``.
        """
        _, ne, nf = mesh.size
        T = linalg.Triplet(nf, ne)

        for f in mesh.faces:
            for e in f.adjacent_edges():
                T.add_entry(1.0, f, e)

        return sp.csr_array(linalg.sparse(T))

    def vertex_vector(self, subset):
        """ Indicator vector of selected vertices.

        Parameters
        ----------
        subset : MeshSubset
            Selection.

        Returns
        -------
        ~numpy.ndarray, shape (|V|, )
            One for selected vertices, zero elsewhere.
        """
        return _indicator(self.A0.shape[1], subset.vertices)

    def edge_vector(self, subset):
        """ Indicator vector of selected edges.
        """
        return _indicator(self.A0.shape[0], subset.edges)

    def face_vector(self, subset):
        """ Indicator vector of selected faces.
        """
        return _indicator(self.A1.shape[0], subset.faces)

    def star(self, subset):
        """ Star of a subset.

        All simplices that contain a simplex of `subset`.

        Parameters
        ----------
        subset : MeshSubset
            Selection.

        Returns
        -------
        MeshSubset
            `subset` plus all edges incident to its vertices plus all
            faces incident to any of the resulting edges.
        """
        star = subset.copy()

        star.add_edges(_support(self.A0 @ self.vertex_vector(star)))
        star.add_faces(_support(self.A1 @ self.edge_vector(star)))

        return star

    def closure(self, subset):
        """ Closure of a subset.

        The smallest simplicial complex that contains `subset`.

        Parameters
        ----------
        subset : MeshSubset
            Selection.

        Returns
        -------
        MeshSubset
            `subset` plus all edges of its faces plus all vertices of the
            resulting edges.
        """
        closure = subset.copy()

        closure.add_edges(_support(self.A1.T @ self.face_vector(closure)))
        closure.add_vertices(_support(self.A0.T @ self.edge_vector(closure)))

        return closure

    def link(self, subset):
        """ Link of a subset.

        Parameters
        ----------
        subset : MeshSubset
            Selection.

        Returns
        -------
        MeshSubset
            The closure of the star minus the star of the closure.
        """
        return self.closure(self.star(subset)) - \
            self.star(self.closure(subset))

    def is_complex(self, subset):
        """ Simplicial complex test.

        Returns
        -------
        bool
            :obj:`True` if `subset` is closed under taking faces.
        """
        return self.closure(subset) == subset

    def is_pure_complex(self, subset):
        """ Pure simplicial complex test.

        A complex is pure if every simplex is contained in a simplex of
        maximal dimension.

        Parameters
        ----------
        subset : MeshSubset
            Selection.

        Returns
        -------
        int
            The dimension (0, 1, or 2) of a pure complex, -1 if `subset`
            is not a pure complex. The empty subset has dimension 0.
        """
        if not self.is_complex(subset):
            return -1

        if subset.faces:
            top = MeshSubset(faces=subset.faces)
            return 2 if self.closure(top) == subset else -1

        if subset.edges:
            top = MeshSubset(edges=subset.edges)
            return 1 if self.closure(top) == subset else -1

        return 0

    def boundary(self, subset):
        """ Boundary of a subset.

        If `subset` contains faces, the closure of the edges contained in
        exactly one selected face. Otherwise, if it contains edges, the
        vertices contained in exactly one selected edge. The boundary is
        empty in all other cases.

        Parameters
        ----------
        subset : MeshSubset
            Selection, usually a pure complex.

        Returns
        -------
        MeshSubset
            Boundary subset.
        """
        if subset.faces:
            count = self.A1.T @ self.face_vector(subset)
            edges = np.flatnonzero(count == 1)

            return self.closure(MeshSubset(edges=edges))

        if subset.edges:
            count = self.A0.T @ self.edge_vector(subset)
            return MeshSubset(vertices=np.flatnonzero(count == 1))

        return MeshSubset()


def _indicator(n, indices):
    x = np.zeros(n)
    x[list(indices)] = 1.0

    return x


def _support(x):
    """ Indices of nonzero entries.
    """
    return np.flatnonzero(x)
