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

""" Geometric mesh traits.

Convenience functions to compute common and often used geometric mesh
traits like edge lengths, face normals and areas, dual areas, discrete
curvatures, and the cotan Laplacian. Functions taking a single mesh
item read vertex coordinates via :attr:`~dgmesh.hds.Vertex.point`.

Boundary loops are accepted wherever a face is expected. Their area is
zero and their normal is undefined (:obj:`np.nan` entries).
"""

import math
import numpy as np

import dgmesh.linalg as linalg

from dgmesh.flags import NormalWeighting


def halfedge_vector(halfedge):
    """ Halfedge vector.

    Parameters
    ----------
    halfedge : Halfedge
        Halfedge of a mesh.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Target minus origin coordinates.
    """
    return halfedge.vector


def edge_length(edge):
    """ Edge length.

    Parameters
    ----------
    edge : Edge
        Edge of a mesh.

    Returns
    -------
    float
        Euclidean distance of the edge end points.
    """
    return linalg.norm(edge.halfedge.vector)


def midpoint(edge):
    a, b = edge
    return 0.5 * (a.point + b.point)


def mean_edge_length(mesh):
    """ Average edge length.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh instance.

    Returns
    -------
    float
        Mean of all edge lengths.
    """
    return sum(edge_length(e) for e in mesh.edges) / len(mesh.edges)


def face_area(face):
    """ Face area.

    Parameters
    ----------
    face : Face
        Face of a mesh.

    Returns
    -------
    float
        Triangle area, zero for boundary loops.
    """
    if face.boundary_loop:
        return 0.0

    h = face.halfedge

    return 0.5 * linalg.norm(linalg.cross(h.vector, -h.prev.vector))


def total_area(mesh):
    """ Surface area.
    """
    return sum(face_area(f) for f in mesh.faces)


def face_normal(face):
    """ Face normal.

    Parameters
    ----------
    face : Face
        Face of a mesh.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Unit normal vector, oriented by the counter-clockwise traversal
        of the face vertices. Boundary loops don't have a normal, all
        entries are :obj:`np.nan` in this case.
    """
    if face.boundary_loop:
        return np.full(3, np.nan)

    h = face.halfedge

    return linalg.unit(linalg.cross(h.vector, -h.prev.vector))


def face_normals(mesh):
    """ Face normals.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh instance.

    Returns
    -------
    ~numpy.ndarray, shape (m, 3)
        Unit normal vectors for a mesh with m faces, row ``i`` belongs
        to the face with index ``i``.
    """
    normals = np.empty((len(mesh.faces), 3))

    for f in mesh.faces:
        normals[f] = face_normal(f)

    return normals


def centroid(face):
    """ Barycenter of a face.

    For boundary loops the midpoint of the edge of :attr:`Face.halfedge`
    is returned.
    """
    h = face.halfedge
    a = h.vertex.point
    b = h.next.vertex.point

    if face.boundary_loop:
        return 0.5 * (a + b)

    c = h.prev.vertex.point

    return (a + b + c) / 3.0


def circumcenter(face):
    """ Circumcenter of a face.

    Parameters
    ----------
    face : Face
        Face of a mesh.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Center of the circumcircle of a triangle. For boundary loops the
        midpoint of the edge of :attr:`Face.halfedge` is returned.
    """
    h = face.halfedge
    a = h.vertex.point
    b = h.next.vertex.point

    if face.boundary_loop:
        return 0.5 * (a + b)

    c = h.prev.vertex.point

    ab = b - a
    ac = c - a
    w = linalg.cross(ab, ac)

    u = linalg.cross(w, ab) * linalg.sqrd(ac)
    v = linalg.cross(ac, w) * linalg.sqrd(ab)

    return a + (u + v) / (2.0 * linalg.sqrd(w))


def orthonormal_bases(face):
    """ Orthonormal tangent frame of a face.

    Returns
    -------
    e1, e2 : ~numpy.ndarray, shape (3, )
        Unit vectors that span the face plane, ``e1`` is parallel to the
        vector of :attr:`Face.halfedge`.
    """
    e1 = linalg.unit(face.halfedge.vector)
    e2 = linalg.cross(face_normal(face), e1)

    return e1, e2


def corner_angle(corner):
    """ Interior angle of a corner.

    Parameters
    ----------
    corner : Corner
        Corner of a mesh.

    Returns
    -------
    float
        Angle in radians, a value in [0, pi].
    """
    h = corner.halfedge

    u = linalg.unit(h.prev.vector)
    v = linalg.unit(-h.next.vector)

    return math.acos(linalg.clamp(linalg.dot(u, v), -1.0, 1.0))


def cotan(halfedge):
    """ Cotangent of the angle opposite to a halfedge.

    Parameters
    ----------
    halfedge : Halfedge
        Halfedge of a mesh.

    Returns
    -------
    float
        Cotangent of the angle at the corner opposite to `halfedge` in
        its face. Zero for boundary halfedges.
    """
    if halfedge.boundary:
        return 0.0

    u = halfedge.prev.vector
    v = -halfedge.next.vector

    return linalg.dot(u, v) / linalg.norm(linalg.cross(u, v))


def dihedral_angle(halfedge):
    r""" Signed dihedral angle.

    Angle (in radians) between the normals of the faces adjacent to the
    edge of `halfedge`. The sign is determined by the right-hand rule
    with the halfedge vector as axis, i.e., the angle is positive for
    convex edges.

    Parameters
    ----------
    halfedge : Halfedge
        Halfedge of a mesh.

    Returns
    -------
    float
        A value in :math:`(-\pi, \pi]`, zero for boundary edges.
    """
    if halfedge.boundary or halfedge.twin.boundary:
        return 0.0

    n1 = face_normal(halfedge.face)
    n2 = face_normal(halfedge.twin.face)
    w = linalg.unit(halfedge.vector)

    cos_theta = linalg.dot(n1, n2)
    sin_theta = linalg.dot(linalg.cross(n1, n2), w)

    return math.atan2(sin_theta, cos_theta)


def barycentric_dual_area(vertex):
    """ Barycentric dual area.

    One third of the area of all incident faces.
    """
    return sum(face_area(f) for f in vertex.adjacent_faces()) / 3.0


def circumcentric_dual_area(vertex):
    """ Circumcentric dual area.

    Area of the Voronoi cell of `vertex` restricted to the incident
    faces, computed with the cotan formula. The value can be negative
    for obtuse triangles.

    Parameters
    ----------
    vertex : Vertex
        Vertex of a mesh.

    Returns
    -------
    float
        Dual area.
    """
    area = 0.0

    for h in vertex.adjacent_halfedges():
        u2 = linalg.sqrd(h.prev.vector)
        v2 = linalg.sqrd(h.vector)

        area += (u2 * cotan(h.prev) + v2 * cotan(h)) / 8.0

    return area


def vertex_normal(vertex, weighting=NormalWeighting.EQUAL):
    """ Vertex normal.

    Parameters
    ----------
    vertex : Vertex
        Vertex of a mesh.
    weighting : NormalWeighting, optional
        How contributions of the vertex neighborhood are weighted.

    Returns
    -------
    ~numpy.ndarray, shape (3, )
        Unit normal vector.

    Raises
    ------
    ValueError
        For an unknown weighting.

    Note
    ----
    The curvature based weightings degenerate for flat vertex
    neighborhoods. The result contains :obj:`np.nan` values in this
    case.
    """
    normal = np.zeros(3)

    if weighting is NormalWeighting.EQUAL:
        for f in vertex.adjacent_faces():
            normal += face_normal(f)
    elif weighting is NormalWeighting.AREA:
        for f in vertex.adjacent_faces():
            normal += face_area(f) * face_normal(f)
    elif weighting is NormalWeighting.ANGLE:
        for c in vertex.adjacent_corners():
            normal += corner_angle(c) * face_normal(c.face)
    elif weighting is NormalWeighting.GAUSS_CURVATURE:
        for h in vertex.adjacent_halfedges():
            weight = 0.5 * dihedral_angle(h) / edge_length(h.edge)
            normal -= weight * h.vector
    elif weighting is NormalWeighting.MEAN_CURVATURE:
        for h in vertex.adjacent_halfedges():
            weight = 0.5 * (cotan(h) + cotan(h.twin))
            normal -= weight * h.vector
    elif weighting is NormalWeighting.SPHERE_INSCRIBED:
        for c in vertex.adjacent_corners():
            u = c.halfedge.prev.vector
            v = -c.halfedge.next.vector
            normal += linalg.cross(u, v) / (linalg.sqrd(u) * linalg.sqrd(v))
    else:
        raise ValueError(f'unknown weighting {weighting!r}')

    with np.errstate(invalid='ignore', divide='ignore'):
        return normal / np.linalg.norm(normal)


def vertex_normals(mesh, weighting=NormalWeighting.EQUAL):
    """ Vertex normals.

    Returns
    -------
    ~numpy.ndarray, shape (n, 3)
        Unit normal vectors, row ``i`` belongs to the vertex with index
        ``i``.
    """
    normals = np.empty((len(mesh.vertices), 3))

    for v in mesh.vertices:
        normals[v] = vertex_normal(v, weighting)

    return normals


def angle_defect(vertex):
    r""" Angle defect.

    For an interior vertex with :math:`k` incident angles
    :math:`\alpha_i`, the value :math:`2\pi - \sum_{i=1}^k \alpha_i` is
    called angular defect or discrete Gaussian curvature. Boundary
    vertices use :math:`\pi` in place of :math:`2\pi`.
    """
    angle_sum = sum(corner_angle(c) for c in vertex.adjacent_corners())

    return (math.pi if vertex.boundary else 2.0 * math.pi) - angle_sum


def total_angle_defect(mesh):
    r""" Total angle defect.

    For a closed mesh the value equals :math:`2\pi\chi` by the discrete
    Gauss-Bonnet theorem, :math:`\chi` the Euler characteristic.
    """
    return sum(angle_defect(v) for v in mesh.vertices)


def scalar_gauss_curvature(vertex):
    """ Integrated Gaussian curvature, the angle defect.
    """
    return angle_defect(vertex)


def scalar_mean_curvature(vertex):
    """ Integrated mean curvature.

    Parameters
    ----------
    vertex : Vertex
        Vertex of a mesh.

    Returns
    -------
    float
        Half the sum of edge lengths times dihedral angles over all
        incident edges.
    """
    return sum(0.5 * edge_length(h.edge) * dihedral_angle(h)
               for h in vertex.adjacent_halfedges())


def principal_curvatures(vertex):
    """ Principal curvatures.

    Pointwise curvatures obtained from the integrated Gaussian and mean
    curvature divided by the circumcentric dual area.

    Parameters
    ----------
    vertex : Vertex
        Vertex of a mesh.

    Returns
    -------
    k1, k2 : float
        Principal curvatures, ordered such that ``abs(k1) <= abs(k2)``.
    """
    area = circumcentric_dual_area(vertex)

    H = scalar_mean_curvature(vertex) / area
    K = angle_defect(vertex) / area

    # Rounding can make the discriminant slightly negative for umbilic
    # points.
    d = math.sqrt(max(H * H - K, 0.0))

    k1, k2 = H - d, H + d

    if abs(k1) > abs(k2):
        k1, k2 = k2, k1

    return k1, k2


def laplace_matrix(mesh, shift=1e-8):
    """ Cotan Laplace matrix.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh instance.
    shift : float, optional
        Added to the diagonal. A small positive value makes the matrix
        positive definite.

    Returns
    -------
    scipy.sparse.csc_array
        Symmetric matrix of shape (n, n) with rows and columns indexed by
        vertex index. Positive semi-definite for ``shift=0`` (Delaunay
        meshes) with the constant vector in its kernel.
    """
    return _cotan_laplacian(mesh, shift, float)


def complex_laplace_matrix(mesh, shift=1e-8):
    """ Complex cotan Laplace matrix.

    Same entries as :func:`laplace_matrix`, stored with a complex dtype
    for use with complex valued vertex functions (e.g., tangent vectors
    encoded as complex numbers).

    Returns
    -------
    scipy.sparse.csc_array
        Hermitian matrix of shape (n, n) and dtype :obj:`complex`.
    """
    return _cotan_laplacian(mesh, shift, complex)


def _cotan_laplacian(mesh, shift, dtype):
    n = len(mesh.vertices)
    T = linalg.Triplet(n, n, dtype=dtype)

    for v in mesh.vertices:
        total = shift

        for h in v.adjacent_halfedges():
            weight = 0.5 * (cotan(h) + cotan(h.twin))
            total += weight

            T.add_entry(-weight, v, h.target)

        T.add_entry(total, v, v)

    return linalg.sparse(T)


def mass_matrix(mesh):
    """ Lumped mass matrix.

    Returns
    -------
    scipy.sparse.csc_array
        Diagonal matrix of barycentric dual areas.
    """
    areas = np.zeros(len(mesh.vertices))

    for v in mesh.vertices:
        areas[v] = barycentric_dual_area(v)

    return linalg.diagonal(areas)


def normalize(mesh, rescale=True):
    """ Center and rescale vertex coordinates.

    Translates the center of mass of the vertices to the origin and
    scales the mesh to fit into the unit sphere. Modifies
    :attr:`~dgmesh.hds.Mesh.points` in place.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh instance.
    rescale : bool, optional
        Scale to unit radius.
    """
    points = mesh.points

    points -= np.mean(points, axis=0)

    if rescale:
        points /= np.max(np.linalg.norm(points, axis=-1))
