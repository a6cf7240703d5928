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

""" Discrete exterior calculus.

Discrete differential forms on a triangle mesh are arrays of values
associated with vertices (0-forms), edges (1-forms), or faces (2-forms),
ordered by element index. The operators below map between such arrays.
All operators are returned as sparse matrices.

Edges are oriented by their :attr:`~dgmesh.hds.Edge.halfedge`. Faces are
oriented counter-clockwise.
"""

import dgmesh.linalg as linalg
import dgmesh.traits as traits


def hodge_star_0form(mesh):
    """ Hodge star on primal 0-forms.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh instance.

    Returns
    -------
    scipy.sparse.csc_array
        Diagonal matrix of shape (|V|, |V|) holding barycentric dual
        areas.
    """
    n = len(mesh.vertices)
    T = linalg.Triplet(n, n)

    for v in mesh.vertices:
        T.add_entry(traits.barycentric_dual_area(v), v, v)

    return linalg.sparse(T)


def hodge_star_1form(mesh):
    """ Hodge star on primal 1-forms.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh instance.

    Returns
    -------
    scipy.sparse.csc_array
        Diagonal matrix of shape (|E|, |E|) holding the cotan weights
        (ratio of dual to primal edge length) of all edges.
    """
    n = len(mesh.edges)
    T = linalg.Triplet(n, n)

    for e in mesh.edges:
        h = e.halfedge
        T.add_entry(0.5 * (traits.cotan(h) + traits.cotan(h.twin)), e, e)

    return linalg.sparse(T)


def hodge_star_2form(mesh):
    """ Hodge star on primal 2-forms.

    Returns
    -------
    scipy.sparse.csc_array
        Diagonal matrix of shape (|F|, |F|) holding reciprocal face
        areas.
    """
    n = len(mesh.faces)
    T = linalg.Triplet(n, n)

    for f in mesh.faces:
        T.add_entry(1.0 / traits.face_area(f), f, f)

    return linalg.sparse(T)


def exterior_derivative_0form(mesh):
    """ Exterior derivative on 0-forms.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh instance.

    Returns
    -------
    scipy.sparse.csc_array
        Signed incidence matrix of shape (|E|, |V|). Row ``e`` holds
        ``1`` in the column of the origin of ``e.halfedge`` and ``-1`` in
        the column of its target.
    """
    nv, ne, _ = mesh.size
    T = linalg.Triplet(ne, nv)

    for e in mesh.edges:
        h = e.halfedge

        T.add_entry(1.0, e, h.vertex)
        T.add_entry(-1.0, e, h.target)

    return linalg.sparse(T)


def exterior_derivative_1form(mesh):
    """ Exterior derivative on 1-forms.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh instance.

    Returns
    -------
    scipy.sparse.csc_array
        Signed incidence matrix of shape (|F|, |E|). The sign of an entry
        is positive if the edge is oriented like the face boundary.

    Note
    ----
    The composition ``d1 @ d0`` vanishes.
    """
    _, ne, nf = mesh.size
    T = linalg.Triplet(nf, ne)

    for f in mesh.faces:
        for h in f.adjacent_halfedges():
            sign = 1.0 if h.edge.halfedge is h else -1.0
            T.add_entry(sign, f, h.edge)

    return linalg.sparse(T)
