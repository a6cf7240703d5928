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

""" Mesh subsets.

A :class:`MeshSubset` is a selection of vertices, edges, and faces of a
mesh, stored as three sets of element indices. Mesh items can be passed
directly wherever an index is expected since they implement
:meth:`~object.__index__`.
"""

from operator import index


class MeshSubset:
    """ Selection of mesh items.

    Parameters
    ----------
    vertices : iterable, optional
        Vertex indices (or vertices).
    edges : iterable, optional
        Edge indices (or edges).
    faces : iterable, optional
        Face indices (or faces).


    Subsets behave like sets:

    >>> S = MeshSubset(vertices=[0, 1])
    >>> T = MeshSubset(edges=[3])
    >>> len(S | T)
    3
    """

    def __init__(self, vertices=(), edges=(), faces=()):
        self.vertices = set(index(v) for v in vertices)
        self.edges = set(index(e) for e in edges)
        self.faces = set(index(f) for f in faces)

    def __repr__(self):
        return (f'MeshSubset(vertices={sorted(self.vertices)}, ' +
                f'edges={sorted(self.edges)}, faces={sorted(self.faces)})')

    def __len__(self):
        """ Total number of selected items.
        """
        return len(self.vertices) + len(self.edges) + len(self.faces)

    def __bool__(self):
        return len(self) > 0

    def __eq__(self, other):
        if not isinstance(other, MeshSubset):
            return NotImplemented

        return (self.vertices == other.vertices and
                self.edges == other.edges and
                self.faces == other.faces)

    def __or__(self, other):
        """ Union of subsets.
        """
        result = self.copy()
        result.add_subset(other)

        return result

    def __sub__(self, other):
        """ Difference of subsets.
        """
        result = self.copy()
        result.remove_subset(other)

        return result

    # Subsets are mutable and compare by value.
    __hash__ = None

    def copy(self):
        """ Deep copy.

        Returns
        -------
        MeshSubset
            A subset that shares no state with ``self``.
        """
        return MeshSubset(self.vertices, self.edges, self.faces)

    def clear(self):
        """ Remove all items.
        """
        self.vertices.clear()
        self.edges.clear()
        self.faces.clear()

    def add_vertex(self, vertex):
        self.vertices.add(index(vertex))

    def add_vertices(self, vertices):
        self.vertices.update(index(v) for v in vertices)

    def remove_vertex(self, vertex):
        """ Remove vertex.

        Removing a vertex that is not in the subset is not an error.
        """
        self.vertices.discard(index(vertex))

    def remove_vertices(self, vertices):
        self.vertices.difference_update(index(v) for v in vertices)

    def add_edge(self, edge):
        self.edges.add(index(edge))

    def add_edges(self, edges):
        self.edges.update(index(e) for e in edges)

    def remove_edge(self, edge):
        self.edges.discard(index(edge))

    def remove_edges(self, edges):
        self.edges.difference_update(index(e) for e in edges)

    def add_face(self, face):
        self.faces.add(index(face))

    def add_faces(self, faces):
        self.faces.update(index(f) for f in faces)

    def remove_face(self, face):
        self.faces.discard(index(face))

    def remove_faces(self, faces):
        self.faces.difference_update(index(f) for f in faces)

    def add_subset(self, subset):
        """ Add all items of another subset.

        Parameters
        ----------
        subset : MeshSubset
            Items to add.
        """
        self.vertices |= subset.vertices
        self.edges |= subset.edges
        self.faces |= subset.faces

    def remove_subset(self, subset):
        """ Remove all items of another subset.

        Parameters
        ----------
        subset : MeshSubset
            Items to remove.
        """
        self.vertices -= subset.vertices
        self.edges -= subset.edges
        self.faces -= subset.faces
