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

""" Mesh construction and geometry options.

Enumerations that configure how a :class:`~dgmesh.hds.Mesh` is built and
how geometric traits are evaluated.

Note
----
Python enumerations cannot be subclassed. Additional options have to be
added here.
"""

from enum import Enum
from enum import auto


class IndexingMode(Enum):
    """ Element indexing enumeration.

    Controls the final build step that assigns an :attr:`index` to every
    mesh element. Each element family (vertices, edges, faces, halfedges,
    corners, boundary loops) is indexed independently.
    """

    SEQUENTIAL = auto()
    """ Sequential indexing.

    Indices follow the storage order of the element lists. Vertex indices
    coincide with positions in the input soup."""

    PERMUTED = auto()
    """ Random permutation.

    Indices are a random permutation of the storage order. Useful to test
    that algorithms don't rely on elements being indexed in input order."""


class NormalWeighting(Enum):
    """ Vertex normal weighting enumeration.

    Selects how the normals of incident faces (or edges) are combined by
    :func:`~dgmesh.traits.vertex_normal`.
    """

    EQUAL = auto()
    """ Unit face normals, equally weighted."""

    AREA = auto()
    """ Face normals weighted by face area."""

    ANGLE = auto()
    """ Face normals weighted by the corner angle at the vertex."""

    GAUSS_CURVATURE = auto()
    """ Gradient of total area weighted by dihedral angles."""

    MEAN_CURVATURE = auto()
    """ Cotan Laplacian of the vertex position."""

    SPHERE_INSCRIBED = auto()
    """ Normal of the sphere inscribed in the incident faces."""
