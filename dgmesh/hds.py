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

""" Halfedge data structure.

An orientable 2-manifold triangle mesh (with or without boundary) is
described by six containers owned by a :class:`Mesh` instance:

    - a list of :class:`Vertex` objects,
    - a list of :class:`Edge` objects,
    - a list of :class:`Face` objects,
    - a list of :class:`Halfedge` objects,
    - a list of :class:`Corner` objects,
    - and a list of boundary loops (:class:`Face` objects with their
      :attr:`~Face.boundary_loop` flag set).

The containers are filled in a single pass by :meth:`Mesh.build` from a
triangle soup and never modified afterwards. Each hole of the mesh is
closed by an imaginary face, a boundary loop, whose halfedges run in
clockwise order. Hence every halfedge has a twin and every face, interior
or not, is a closed cycle of halfedges.

Note
----
To ease debugging, this module relies on assertions which can slow down
script execution. You can disable assertions by running in optimized mode
via the "-O" command line argument.
"""

from itertools import chain
from pathlib import Path
from time import perf_counter

import numpy as np

import dgmesh.obj as obj
import dgmesh.iterators as iterators

from dgmesh.flags import IndexingMode
from dgmesh.iterators import Circulator


class Mesh:
    """ Mesh kernel.

    The combinatorics of a mesh can be built by reading from a file or
    by converting a sequence of vertex coordinates and a sequence of
    triangle definitions to its halfedge representation.

    Parameters
    ----------
    points : array_like, optional
        Vertex coordinates, one point per row.
    faces : array_like, optional
        Triangle definitions, 0-based vertex indexing. Either a flat
        sequence of indices (stride 3) or a sequence of index triples.
    name : str, optional
        Name tag.
    indexing : IndexingMode, optional
        How element indices are assigned.
    seed : int, optional
        Seed of the random number generator used for
        :attr:`~dgmesh.flags.IndexingMode.PERMUTED` indexing.

    Raises
    ------
    NonManifoldError
        When trying to initialize a mesh from non-manifold data.


    Use :meth:`build` to load a soup without exception handling:

    .. code-block:: python
       :linenos:

        mesh = Mesh()

        if not mesh.build((points, faces)):
            print(mesh.error)
    """

    def __init__(self, points=None, faces=None, *, name=None,
                 indexing=IndexingMode.SEQUENTIAL, seed=None):
        """ Initialize from vertex and face lists.
        """
        if points is None and faces is not None:
            msg = "face definitions require 'points' argument != None"
            raise ValueError(msg)

        self._clear()
        self._error = None

        if points is not None:
            self._build(points, [] if faces is None else faces,
                        indexing, seed)

        # The corresponding property setter will strip any directory
        # prefix and type suffix from the name.
        self.name = name

    def __repr__(self):
        nv, ne, nf = self.size
        return f'Mesh(|V|={nv}, |E|={ne}, |F|={nf})'

    def __iter__(self):
        """ Face iterator.

        The returned iterator visits all interior faces of a mesh in
        storage order. Boundary loops are not visited.

        Yields
        ------
        Face
            Next face in storage order traversal.
        """
        return iter(self._faces)

    def __bool__(self):
        return True

    @property
    def points(self):
        """ Vertex coordinate array.

        Direct read and write access to vertex coordinates. Row ``i``
        holds the coordinates of the vertex with index ``i``. Changing
        the size of the coordinate array is likely to break the halfedge
        data structure.

        :type: ~numpy.ndarray

        Note
        ----
        Vertices are valid array indices. ``mesh.points[v]`` and
        ``v.point`` refer to the same row, regardless of the
        :class:`~dgmesh.flags.IndexingMode` used during construction.
        """
        return self._points

    @points.setter
    def points(self, value):
        self._points = np.asarray(value)

    @property
    def vertices(self):
        """ Vertex list.

        Read access to the vertex list. This list should not be modified
        directly.

        :type: list[Vertex]
        """
        return self._verts

    @property
    def edges(self):
        """ Edge list.

        :type: list[Edge]
        """
        return self._edges

    @property
    def faces(self):
        """ Face list.

        Interior faces only. Boundary loops are stored separately in
        :attr:`boundary_loops`.

        :type: list[Face]

        This is **not** the list passed as argument `faces` during mesh
        construction but it can be generated easly with a list
        comprehension:

        >>> faces = [[int(v) for v in f] for f in mesh]
        """
        return self._faces

    @property
    def halfedges(self):
        """ Halfedge list.

        Interior halfedges are stored first, in the order of the input
        triangles. Halfedges of boundary loops follow.

        :type: list[Halfedge]
        """
        return self._halfs

    @property
    def corners(self):
        """ Corner list.

        One corner per interior halfedge, in the same order.

        :type: list[Corner]
        """
        return self._corners

    @property
    def boundary_loops(self):
        """ Boundary loop list.

        Imaginary faces that close the holes of a mesh. Their indices
        form an index space of their own.

        :type: list[Face]
        """
        return self._loops

    @property
    def size(self):
        """ Mesh size.

        The attribute value :math:`(v, e, f)` holds the number of
        vertices, the number of edges, and the number of faces. Boundary
        loops don't count as faces.

        :type: (int, int, int)
        """
        assert len(self._halfs) == 2 * len(self._edges)

        return len(self._verts), len(self._edges), len(self._faces)

    @property
    def euler_characteristic(self):
        r""" Euler characteristic.

        The value :math:`\chi = |V| - |E| + |F|`. For a closed orientable
        surface of genus :math:`g` one has :math:`\chi = 2 - 2g`, each
        boundary loop lowers the value by one.

        :type: int
        """
        nv, ne, nf = self.size
        return nv - ne + nf

    @property
    def error(self):
        """ Build error.

        The exception that caused the most recent call of :meth:`build`
        to fail, :obj:`None` if the build succeeded.

        :type: NonManifoldError or None
        """
        return self._error

    @property
    def name(self):
        """ Name property.

        :type: str

        Note
        ----
        The returned string does not include a type suffix!
        """
        return self._name

    @name.setter
    def name(self, value):
        self._name = value if value is None else Path(value).stem

    @classmethod
    def read(cls, filename, *args, quiet=True, **kwargs):
        """ Read mesh from file.

        Read mesh combinatorics (face definitions) and vertex coordinates
        from an OBJ file. Additional data is read on request.

        Parameters
        ----------
        filename : str
            Name of an OBJ file.
        *args
            Variable number of arguments of type :class:`str`.
        quiet : bool, optional
            Suppress console output.
        **kwargs
            Passed on to :class:`Mesh`.

        Raises
        ------
        ValueError
            If the file contains non-triangular faces.
        NonManifoldError
            If the file does not describe a manifold triangle mesh.

        Returns
        -------
        mesh : Mesh
            Mesh object.
        data : ndarray or tuple(ndarray, ...)
            Data blocks as requested via `args`. If a data block could
            not be read, a :obj:`None` value is returned.


        Vertex normals or texture coordinates stored in a file can be
        read via

        >>> mesh, vecs, uvs = Mesh.read(filename, 'vn', 'vt')
        """
        CBOLD = '\33[1m'                    # bold text, white on black
        CEND = '\33[0m'

        if not quiet:
            start = perf_counter()
            print(f'reading {CBOLD}{Path(filename).name}{CEND}', end=' ...')

        if 'v' in args:
            raise ValueError("'v' cannot be used as argument")

        if 'f' in args:
            raise ValueError("'f' cannot be used as argument")

        # The *data expression will assign a list of all return values not
        # assigned to a name to data.
        verts, faces, *data = obj.read(filename, 'v', 'f', *args)
        soup = obj.to_soup(verts, faces)

        if not quiet:
            print(f' done ({perf_counter()-start:.3f} sec)')

            for arg, block in zip(args, data):
                print(f"\t├─ data block '{arg}' " +
                      f"of size {np.shape(block)}")

            print(f'\t├─ {len(soup.positions)} vertices')
            print(f'\t└─ {len(soup.indices) // 3} faces')

        mesh = cls(*soup, name=filename, **kwargs)

        if args:
            return mesh, *data

        return mesh

    def write(self, filename, quiet=True, **data):
        """ Write mesh to file.

        Data arrays, like vertex normals and texture coordinates, can be
        saved by passing them as keyword arguments.

        Parameters
        ----------
        filename : str
            Name of an OBJ file.
        quiet : bool, optional
            Suppress console output.
        **data
            Arbitrary keyword arguments.

        Note
        ----
        The standard OBJ tags 'v' and 'f' may not be used as keywords
        since they are implicitly used when writing mesh data to an OBJ
        file.
        """
        CBOLD = '\33[1m'                    # bold text, white on black
        CEND = '\33[0m'

        if 'v' in data.keys():
            raise ValueError("'v' may not be used as data tag")

        if 'f' in data.keys():
            raise ValueError("'f' may not be used as data tag")

        for tag in ('vt', 'vn'):
            if tag in data.keys() and len(data[tag]) != len(self._points):
                msg = (f"size of data block '{tag}' ({len(data[tag])}) " +
                       f'!= number of vertices ({len(self._points)})')
                raise ValueError(msg)

        if not quiet:
            start = perf_counter()
            print(f'writing {CBOLD}{Path(filename).name}{CEND}', end=' ...')

        obj.write(filename, v=self._points,
                  f=([int(v) for v in f] for f in self), **data)

        if not quiet:
            print(f' done ({perf_counter()-start:.3} sec)')

    def build(self, soup, *, indexing=IndexingMode.SEQUENTIAL, seed=None,
              quiet=False):
        """ Build halfedge mesh from triangle soup.

        Discards all elements of the mesh and rebuilds the mesh from
        scratch.

        Parameters
        ----------
        soup : PolygonSoup or (array_like, array_like)
            Vertex positions and triangle indices.
        indexing : IndexingMode, optional
            How element indices are assigned.
        seed : int, optional
            Random seed for permuted indexing.
        quiet : bool, optional
            Suppress the console diagnostic printed on failure.

        Raises
        ------
        ValueError
            If the soup is malformed (wrong array shapes, triangles with
            repeated vertices).
        IndexError
            If triangle indices refer to non-existing vertices.

        Returns
        -------
        bool
            :obj:`True` on success. On failure :obj:`False` is returned,
            the reason is available as :attr:`error` and the mesh is left
            in an unspecified state. It must not be used until rebuilt.
        """
        CWHITERED = '\33[41m'               # white on red background
        CEND = '\33[0m'

        positions, indices = soup

        try:
            self._build(positions, indices, indexing, seed)
        except NonManifoldError as err:
            self._error = err

            if not quiet:
                print(f'{CWHITERED}{type(err).__name__}: {err}{CEND}')

            return False

        return True

    def _clear(self):
        """ Remove all mesh items.
        """
        self._points = np.empty((0, 3))
        self._verts = []
        self._edges = []
        self._faces = []
        self._halfs = []
        self._corners = []
        self._loops = []

    def _build(self, positions, indices, indexing, seed):
        """ Build halfedge mesh.

        Implementation of :meth:`build`. Failure is signaled by raising
        the appropriate :class:`NonManifoldError` subclass.
        """
        self._error = None
        self._clear()

        points = np.array(positions, dtype=float)

        if points.size == 0:
            points = points.reshape(0, 3)

        if points.ndim != 2:
            msg = f'points of shape (n, k) expected, got {points.shape}'
            raise ValueError(msg)

        tris = np.asarray(indices, dtype=int).reshape(-1)

        if len(tris) % 3 != 0:
            raise ValueError('number of face indices not a multiple of 3')

        if len(tris) > 0:
            if tris.min() < 0 or tris.max() >= len(points):
                raise IndexError('face index out of range')

            t = tris.reshape(-1, 3)

            if np.any((t[:, 0] == t[:, 1]) | (t[:, 1] == t[:, 2]) |
                      (t[:, 2] == t[:, 0])):
                raise ValueError('face contains duplicate vertices')

        # Plain Python integers are much faster to work with than NumPy
        # scalars in the loops below.
        tris = tris.tolist()

        self._preallocate(len(points), tris)
        self._points = points

        for i in range(len(points)):
            self._verts[i] = Vertex(i, parent=self)

        self._build_interior(tris)
        self._build_boundary(len(tris))
        self._build_corners(len(tris))

        self._validate()
        self._index_elements(indexing, seed)

    def _preallocate(self, num_verts, tris):
        """ Preallocate element lists.

        Counts edges via canonical vertex pairs. The number of boundary
        halfedges follows from the imbalance of pair occurrences. All
        containers get their final sizes, except the list of boundary
        loops whose size is not known in advance.
        """
        keys = set()
        num_bdry = 0

        for I in range(0, len(tris), 3):
            for J in range(3):
                i = tris[I + J]
                j = tris[I + (J + 1) % 3]

                key = (i, j) if i < j else (j, i)

                if key in keys:
                    num_bdry -= 1
                else:
                    keys.add(key)
                    num_bdry += 1

        num_edges = len(keys)
        num_faces = len(tris) // 3
        num_halfs = 2 * num_edges

        self._verts = [None] * num_verts
        self._edges = [None] * num_edges
        self._faces = [None] * num_faces
        self._halfs = [None] * num_halfs
        self._corners = [None] * (num_halfs - num_bdry)
        self._loops = []

    def _build_interior(self, tris):
        """ Create interior halfedges, edges, and faces.

        Raises
        ------
        NonManifoldEdgeError
            If an edge is used by more than two triangles or twice in
            the same direction.
        """
        verts = self._verts
        halfs = self._halfs

        # Maps canonical vertex pairs to the first halfedge that was
        # created for the pair.
        existing = dict()
        num_edges = 0

        for I in range(0, len(tris), 3):
            # Dry run. Nothing is created if any edge of the triangle
            # cannot be added. An edge can be added if it is new or if
            # it is used once, in the opposite direction.
            for J in range(3):
                i = tris[I + J]
                j = tris[I + (J + 1) % 3]
                h = existing.get((i, j) if i < j else (j, i))

                if h is not None and (h._twin is not None or
                                      h._vertex._idx == i):
                    msg = f'edge ({i}, {j}) is non-manifold'
                    raise NonManifoldEdgeError(msg)

            f = Face(I // 3)
            self._faces[I // 3] = f

            for J in range(3):
                halfs[I + J] = Halfedge(I + J)

            for J in range(3):
                K = (J + 1) % 3
                i = tris[I + J]
                j = tris[I + K]

                # The current halfedge goes from vertex i to vertex j.
                h = halfs[I + J]
                h._next = halfs[I + K]
                h._prev = halfs[I + (J + 2) % 3]
                h._boundary = False

                v = verts[i]
                h._vertex = v
                v._halfedge = h

                h._face = f
                f._halfedge = h

                key = (i, j) if i < j else (j, i)
                twin = existing.get(key)

                if twin is not None:
                    # A halfedge between vertex i and j was created
                    # before. It is the twin of the current halfedge.
                    h._twin = twin
                    twin._twin = h
                    h._edge = twin._edge
                else:
                    e = Edge(num_edges)
                    self._edges[num_edges] = e
                    num_edges += 1

                    h._edge = e
                    e._halfedge = h
                    existing[key] = h

    def _build_boundary(self, num_interior):
        """ Create boundary loops.

        Every interior halfedge without twin lies on the boundary of a
        hole. Each hole is closed by a boundary loop, a cycle of boundary
        halfedges that runs clockwise, i.e., opposite to the orientation
        of the interior halfedges it pairs with.
        """
        halfs = self._halfs

        # Halfedges whose twin pointer is final. Twin pointers of the
        # halfedges along the hole currently walked are set on the fly,
        # they are registered once the loop is closed.
        paired = set(h for h in halfs[:num_interior] if h._twin is not None)
        k = num_interior

        for h in halfs[:num_interior]:
            if h in paired:
                continue

            loop = Face(len(self._loops), boundary_loop=True)
            self._loops.append(loop)

            cycle = []
            he = h

            while True:
                bh = Halfedge(k)
                halfs[k] = bh
                k += 1

                cycle.append(bh)

                # Rotate about the target vertex of he until we find the
                # next halfedge along the hole.
                nh = he._next

                while nh in paired:
                    nh = nh._twin._next

                bh._vertex = nh._vertex
                bh._edge = he._edge
                bh._boundary = True

                bh._face = loop
                loop._halfedge = bh

                bh._twin = he
                he._twin = bh

                he = nh

                if he is h:
                    break

            # Boundary halfedges are linked in clockwise order.
            n = len(cycle)

            for j, bh in enumerate(cycle):
                bh._next = cycle[j - 1]
                bh._prev = cycle[(j + 1) % n]

                paired.add(bh)
                paired.add(bh._twin)

        assert k == len(halfs)

    def _build_corners(self, num_interior):
        """ Create one corner per interior halfedge.
        """
        for i, h in enumerate(self._halfs[:num_interior]):
            c = Corner(i, h)
            h._corner = c
            self._corners[i] = c

    def _validate(self):
        """ Detect isolated and non-manifold items.

        Raises
        ------
        IsolatedVertexError
            If a vertex has no incident face.
        IsolatedFaceError
            If all edges of a face are boundary edges.
        NonManifoldVertexError
            If the faces about a vertex don't form a single fan.
        """
        for v in self._verts:
            if v._halfedge is None:
                raise IsolatedVertexError(f'vertex #{v._idx} is isolated')

        for f in self._faces:
            if all(h._twin._boundary for h in f._hiter()):
                raise IsolatedFaceError(f'face #{f._idx} is isolated')

        # Count faces and boundary loops per vertex. For a vertex with
        # a single (closed or open) fan of triangles the count equals
        # the number of outgoing halfedges reachable by rotation.
        count = [0] * len(self._verts)

        for f in chain(self._faces, self._loops):
            for v in f._viter():
                count[v._idx] += 1

        for v in self._verts:
            if count[v._idx] != v.degree:
                msg = f'vertex #{v._idx} is non-manifold'
                raise NonManifoldVertexError(msg)

    def _index_elements(self, indexing, seed):
        """ Assign element indices.

        Each element family is indexed independently. The vertex
        coordinate array is reordered to match vertex indices.
        """
        families = (self._verts, self._edges, self._faces,
                    self._halfs, self._corners, self._loops)

        if indexing is IndexingMode.SEQUENTIAL:
            for items in families:
                for i, item in enumerate(items):
                    item._idx = i
        elif indexing is IndexingMode.PERMUTED:
            rng = np.random.default_rng(seed)

            for items in families:
                for item, i in zip(items, rng.permutation(len(items))):
                    item._idx = int(i)

            # Row v.index of the new array holds the coordinates of v.
            points = np.empty_like(self._points)
            points[[v._idx for v in self._verts]] = self._points
            self._points = points
        else:
            raise ValueError(f'unknown indexing mode {indexing!r}')

    def _check(self):
        """ Perform sanity checks.
        """
        for items in (self._verts, self._edges, self._faces, self._halfs,
                      self._corners, self._loops):
            assert sorted(item._idx for item in items) == \
                list(range(len(items)))

        assert len(self._halfs) == 2 * len(self._edges)
        assert len(self._corners) == 3 * len(self._faces)
        assert len(self._points) == len(self._verts)

        for v in self._verts:
            v._check()

        for e in self._edges:
            e._check()

        for h in self._halfs:
            h._check()

        for f in chain(self._faces, self._loops):
            f._check()

        for c in self._corners:
            c._check()

    def _viter(self, ccw=True):
        """ Vertex list traversal.
        """
        return iter(self._verts) if ccw else reversed(self._verts)

    def _eiter(self, ccw=True):
        """ Edge list traversal.
        """
        return iter(self._edges) if ccw else reversed(self._edges)

    def _fiter(self, ccw=True):
        """ Face list traversal.
        """
        return iter(self._faces) if ccw else reversed(self._faces)

    def _hiter(self, ccw=True):
        """ Halfedge list traversal.
        """
        return iter(self._halfs) if ccw else reversed(self._halfs)

    def _citer(self, ccw=True):
        """ Corner list traversal.
        """
        return iter(self._corners) if ccw else reversed(self._corners)


class Vertex:
    """ Vertex class.

    Vertices are created by a :class:`Mesh` during construction. The
    coordinates of a vertex can be accessed via the :attr:`point`
    property.

    Parameters
    ----------
    index : int
        Vertex index.
    parent : Mesh, optional
        The parent mesh object.

    Note
    ----
    In addition to :attr:`index`, implementations of the special functions
    :meth:`~object.__int__` and :meth:`~object.__index__` are provided.
    The latter makes it possible to use vertex instances as list indices.
    """

    def __init__(self, index, parent=None):
        self._idx = index
        self._mesh = parent
        self._halfedge = None

    def __repr__(self):
        return f'Vertex({self._idx})'

    def __str__(self):
        try:
            point = self.point
        except (AttributeError, IndexError):
            point = '[None]'

        return f'v {self._idx} {point}'

    def __index__(self):
        """ Vertex index.

        Vertices can be used directly as list and array indices, i.e.,
        one can write ``some_list[v]`` instead of the slightly longer
        ``some_list[v.index]`` expression.

        Returns
        -------
        int
            Vertex index.
        """
        return self._idx

    def __int__(self):
        return self._idx

    def __bool__(self):
        return True

    def __array__(self, dtype=None, copy=None):
        """ Experimental NumPy support.

        Parameters
        ----------
        dtype : data-type, optional
            The desired data type for the array.
        copy : bool, optional
            If :obj:`True` then the array data is copied. If :obj:`None`,
            a copy will only be made if necessary. For :obj:`False` it
            raises a :class:`ValueError` if a copy cannot be avoided.

        Returns
        -------
        ~numpy.ndarray
            Array of vertex coordinates.
        """
        return np.array(self._mesh._points[self._idx, ...],
                        dtype=dtype, copy=copy)

    @property
    def index(self):
        """ Vertex index.

        A value in ``range(len(mesh.vertices))``. Same as ``int(self)``.

        :type: int
        """
        return self._idx

    @property
    def point(self):
        """ Vertex coordinates.

        Read and write access to vertex coordinates. View of the
        vertex coordinate array. Requires a valid parent mesh.

        :type: ~numpy.ndarray
        """
        return self._mesh._points[self._idx, ...]

    @point.setter
    def point(self, value):
        self._mesh._points[self._idx, ...] = value

    @property
    def halfedge(self):
        """ Outward pointing halfedge.

        A halfedge that starts at the vertex or :obj:`None` for isolated
        vertices. Never a boundary halfedge.

        :type: Halfedge
        """
        return self._halfedge

    @property
    def degree(self):
        """ Vertex degree.

        The number of adjacent vertices, equivalent to the number of
        incident edges, also called the valence of a vertex.

        :type: int
        """
        return len(self.adjacent_edges())

    @property
    def boundary(self):
        """ Topological state.

        A vertex is defined to be a boundary vertex if it is the origin
        of a boundary halfedge.

        :type: bool
        """
        return any(h._boundary for h in self._hiter())

    @property
    def isolated(self):
        """ Topological state.

        A vertex is isolated if its :attr:`~Vertex.halfedge` attribute
        holds a :obj:`None` value. Isolated vertices are rejected during
        mesh construction.

        :type: bool
        """
        return self._halfedge is None

    def adjacent_vertices(self, ccw=True):
        """ Adjacent vertex circulator.

        Parameters
        ----------
        ccw : bool, optional
            Counter-clockwise (default) or clockwise traversal.

        Returns
        -------
        Circulator
            Yields the target vertices of outgoing halfedges.
        """
        return Circulator(self._halfedge, iterators.vertex_step(ccw),
                          _target)

    def adjacent_edges(self, ccw=True):
        """ Incident edge circulator.

        Parameters
        ----------
        ccw : bool, optional
            Counter-clockwise (default) or clockwise traversal.

        Returns
        -------
        Circulator
        """
        return Circulator(self._halfedge, iterators.vertex_step(ccw),
                          _edge)

    def adjacent_faces(self, ccw=True):
        """ Incident face circulator.

        Boundary loops are skipped. A boundary vertex has one incident
        face less than its degree.

        Parameters
        ----------
        ccw : bool, optional
            Counter-clockwise (default) or clockwise traversal.

        Returns
        -------
        Circulator
        """
        return Circulator(self._halfedge, iterators.vertex_step(ccw),
                          _face, _on_boundary)

    def adjacent_halfedges(self, ccw=True):
        """ Outgoing halfedge circulator.

        Parameters
        ----------
        ccw : bool, optional
            Counter-clockwise (default) or clockwise traversal.

        Returns
        -------
        Circulator
        """
        return Circulator(self._halfedge, iterators.vertex_step(ccw),
                          _self)

    def adjacent_corners(self, ccw=True):
        """ Incident corner circulator.

        Yields the corners located at the vertex, one per incident face.

        Parameters
        ----------
        ccw : bool, optional
            Counter-clockwise (default) or clockwise traversal.

        Returns
        -------
        Circulator
        """
        return Circulator(self._halfedge, iterators.vertex_step(ccw),
                          _next_corner, _on_boundary)

    def _check(self):
        """ Perform sanity checks.
        """
        assert self._halfedge is not None
        assert self._halfedge._vertex is self
        assert not self._halfedge._boundary

        halfs = list(self._hiter())

        # One rotation about the vertex visits each outgoing halfedge
        # once and the clockwise walk is the reverse of the ccw walk.
        assert len(set(halfs)) == len(halfs) == self.degree
        assert halfs[1:] == list(self._hiter(False))[1:][::-1]
        assert all(h._vertex is self for h in halfs)

        num_faces = len(self.adjacent_faces())
        assert num_faces == self.degree - (1 if self.boundary else 0)

    def _viter(self, ccw=True):
        return self.adjacent_vertices(ccw)

    def _eiter(self, ccw=True):
        return self.adjacent_edges(ccw)

    def _fiter(self, ccw=True):
        return self.adjacent_faces(ccw)

    def _hiter(self, ccw=True):
        return self.adjacent_halfedges(ccw)

    def _citer(self, ccw=True):
        return self.adjacent_corners(ccw)


class Edge:
    """ Edge class.

    An undirected edge, represented by a pair of twin halfedges.

    Parameters
    ----------
    index : int
        Edge index.
    """

    def __init__(self, index):
        self._idx = index
        self._halfedge = None

    def __repr__(self):
        return f'Edge({self._idx})'

    def __index__(self):
        return self._idx

    def __int__(self):
        return self._idx

    def __bool__(self):
        return True

    def __iter__(self):
        """ Vertex iterator.

        Yields
        ------
        Vertex
            Origin and target of :attr:`halfedge`.
        """
        yield self._halfedge._vertex
        yield self._halfedge._twin._vertex

    @property
    def index(self):
        """ Edge index.

        :type: int
        """
        return self._idx

    @property
    def halfedge(self):
        """ Incident halfedge.

        One of the two halfedges of the edge. Never a boundary halfedge.

        :type: Halfedge
        """
        return self._halfedge

    @property
    def boundary(self):
        """ Topological state.

        An edge is a boundary edge if one of its two halfedges belongs
        to a boundary loop.

        :type: bool
        """
        h = self._halfedge
        return h._boundary or h._twin._boundary

    def _check(self):
        """ Perform sanity checks.
        """
        h = self._halfedge

        assert h._edge is self
        assert h._twin._edge is self
        assert h._twin._twin is h
        assert h._twin is not h


class Halfedge:
    """ Halfedge class.

    Halfedges store references to their base vertex, their edge, the
    successor, predecessor, and twin halfedge, the incident face (the face
    to its left) and the opposite corner. A closed loop of
    halfedges defines a face and its orientation. Successor and
    predecessor refer to the next and previous halfedge in such a loop.

    Parameters
    ----------
    index : int
        Halfedge index.
    """

    def __init__(self, index):
        self._idx = index

        self._vertex = None
        self._edge = None
        self._face = None
        self._corner = None

        self._next = None
        self._prev = None
        self._twin = None

        self._boundary = None

    def __repr__(self):
        return f'Halfedge({self._idx})'

    def __str__(self):
        return f'h {self._idx} ({self._vertex._idx}, {self.target._idx})'

    def __index__(self):
        return self._idx

    def __int__(self):
        return self._idx

    def __bool__(self):
        return True

    def __iter__(self):
        """ Vertex iterator.

        Yields
        ------
        Vertex
            Origin and target vertex.
        """
        yield self._vertex
        yield self._twin._vertex

    @property
    def index(self):
        """ Halfedge index.

        :type: int
        """
        return self._idx

    @property
    def vertex(self):
        """ Origin vertex.

        :type: Vertex
        """
        return self._vertex

    @property
    def target(self):
        """ Target vertex.

        :type: Vertex
        """
        return self._twin._vertex

    @property
    def edge(self):
        """ Underlying edge.

        :type: Edge
        """
        return self._edge

    @property
    def face(self):
        """ Incident face.

        The face to the left of the halfedge. A boundary loop if the
        halfedge is a boundary halfedge.

        :type: Face
        """
        return self._face

    @property
    def corner(self):
        """ Opposite corner.

        :obj:`None` for boundary halfedges.

        :type: Corner or None
        """
        return self._corner

    @property
    def next(self):
        """ Successor halfedge.

        :type: Halfedge
        """
        return self._next

    @property
    def prev(self):
        """ Predecessor halfedge.

        :type: Halfedge
        """
        return self._prev

    @property
    def twin(self):
        """ Oppositely oriented halfedge.

        :type: Halfedge
        """
        return self._twin

    @property
    def boundary(self):
        """ Topological state.

        :obj:`True` if the halfedge belongs to a boundary loop.

        :type: bool
        """
        return self._boundary

    @property
    def vector(self):
        """ Halfedge vector.

        Target vertex coordinates minus origin vertex coordinates.

        :type: ~numpy.ndarray
        """
        return self._next._vertex.point - self._vertex.point

    def _compute_loop_len(self):
        """ Length of halfedge loop.

        Length of the closed halfedge loop starting at ``self``. For a
        boundary halfedge this is the length of the corresponding boundary
        curve.

        Returns
        -------
        int
            Length of halfedge loop.
        """
        loop_len = 0
        h = self

        while True:
            loop_len += 1
            h = h._next

            if h is self:
                return loop_len

    def _check(self):
        """ Perform sanity checks.
        """
        assert self._twin._twin is self
        assert self._twin._edge is self._edge
        assert self._twin._vertex is self._next._vertex

        assert self._next._prev is self
        assert self._prev._next is self
        assert self._next._face is self._face

        assert not (self._boundary and self._twin._boundary)
        assert self._boundary == self._face._boundary_loop

        if self._boundary:
            assert self._corner is None
        else:
            assert self._corner._halfedge is self
            assert self._compute_loop_len() == 3


class Face:
    """ Face class.

    In a halfedge based mesh representation a face is defined by the
    closed loop of halfedges starting at the :attr:`halfedge` attribute.
    The same class represents the boundary loops of a mesh.

    Parameters
    ----------
    index : int
        Face index.
    boundary_loop : bool, optional
        Marks imaginary faces that close holes.


    The vertices of a face can be visited in several ways:

    .. code-block:: python
       :linenos:

        for v in f:
            print(v)

        for v in f.adjacent_vertices(ccw=False):
            print(v)
    """

    def __init__(self, index, boundary_loop=False):
        self._idx = index
        self._halfedge = None
        self._boundary_loop = boundary_loop

        # Initialize lazy attributes/properties.
        self._valence = None

    def __repr__(self):
        if self._boundary_loop:
            return f'Face({self._idx}, boundary_loop=True)'

        return f'Face({self._idx})'

    def __str__(self):
        return f'f {self._idx} {[int(v) for v in self]}'

    def __index__(self):
        """ Face index.

        Faces can be used directly as list and array indices.

        Returns
        -------
        int
            Face index.
        """
        return self._idx

    def __int__(self):
        return self._idx

    def __len__(self):
        """ Face valence.

        The number of incident vertices, three for interior faces.

        Returns
        -------
        int
            Number of vertices.
        """
        if self._valence is None:
            self._valence = self._halfedge._compute_loop_len()

        return self._valence

    def __bool__(self):
        return True

    def __array__(self, dtype=None, copy=None):
        """ Experimental NumPy support.

        Returns
        -------
        ~numpy.ndarray
            Array of vertex coordinates.
        """
        return np.array([v.point for v in self], dtype=dtype, copy=copy)

    def __iter__(self):
        """ Vertex iterator.

        The returned :term:`iterator` visits the vertices of ``self``
        starting with the ``self.halfedge.vertex`` vertex.

        Yields
        ------
        Vertex
            Next vertex in counter-clockwise traversal.
        """
        return iter(self.adjacent_vertices())

    @property
    def index(self):
        """ Face index.

        A value in ``range(len(mesh.faces))`` for interior faces and in
        ``range(len(mesh.boundary_loops))`` for boundary loops.

        :type: int
        """
        return self._idx

    @property
    def halfedge(self):
        """ Incident halfedge.

        One of the incident halfedges.

        :type: Halfedge
        """
        return self._halfedge

    @property
    def valence(self):
        """ Face valence.

        Number of incident vertices. Same as ``len(self)``.

        :type: int
        """
        return len(self)

    @property
    def boundary_loop(self):
        """ Face type.

        :obj:`True` for the imaginary faces that close holes.

        :type: bool
        """
        return self._boundary_loop

    @property
    def boundary(self):
        """ Topological state.

        A face is defined to be a boundary face if one of the incident
        edges is a boundary edge. Boundary loops are boundary faces.

        :type: bool

        Note
        ----
        A face only incident with boundary vertices is **not** classified
        as a boundary face.
        """
        return any(h._boundary or h._twin._boundary for h in self._hiter())

    def adjacent_vertices(self, ccw=True):
        """ Incident vertex circulator.

        Parameters
        ----------
        ccw : bool, optional
            Counter-clockwise (default) or clockwise traversal.

        Returns
        -------
        Circulator
        """
        return Circulator(self._halfedge, iterators.face_step(ccw),
                          _origin)

    def adjacent_edges(self, ccw=True):
        """ Incident edge circulator.

        Parameters
        ----------
        ccw : bool, optional
            Counter-clockwise (default) or clockwise traversal.

        Returns
        -------
        Circulator
        """
        return Circulator(self._halfedge, iterators.face_step(ccw), _edge)

    def adjacent_faces(self, ccw=True):
        """ Edge-adjacent face circulator.

        Two faces are adjacent if they share a common edge. Boundary
        loops are skipped.

        Parameters
        ----------
        ccw : bool, optional
            Counter-clockwise (default) or clockwise traversal.

        Returns
        -------
        Circulator
        """
        return Circulator(self._halfedge, iterators.face_step(ccw),
                          _twin_face, _twin_on_boundary)

    def adjacent_halfedges(self, ccw=True):
        """ Incident halfedge circulator.

        Parameters
        ----------
        ccw : bool, optional
            Counter-clockwise (default) or clockwise traversal.

        Returns
        -------
        Circulator
        """
        return Circulator(self._halfedge, iterators.face_step(ccw), _self)

    def adjacent_corners(self, ccw=True):
        """ Incident corner circulator.

        The first corner is the one opposite to the successor (the
        predecessor for clockwise traversal) of :attr:`halfedge`. Boundary
        loops have no corners.

        Parameters
        ----------
        ccw : bool, optional
            Counter-clockwise (default) or clockwise traversal.

        Returns
        -------
        Circulator
        """
        step = iterators.face_step(ccw)
        return Circulator(self._halfedge, step, lambda h: step(h)._corner,
                          _on_boundary)

    def _check(self):
        """ Perform sanity checks.
        """
        assert self._halfedge._face is self
        assert self._halfedge._boundary == self._boundary_loop

        halfs = list(self._hiter())

        assert len(halfs) == len(self)
        assert halfs[1:] == list(self._hiter(False))[1:][::-1]

        if not self._boundary_loop:
            assert len(self) == 3
            assert len(self.adjacent_corners()) == 3

    def _viter(self, ccw=True):
        return self.adjacent_vertices(ccw)

    def _eiter(self, ccw=True):
        return self.adjacent_edges(ccw)

    def _fiter(self, ccw=True):
        return self.adjacent_faces(ccw)

    def _hiter(self, ccw=True):
        return self.adjacent_halfedges(ccw)

    def _citer(self, ccw=True):
        return self.adjacent_corners(ccw)


class Corner:
    """ Corner class.

    A corner is the angle of a triangle at one of its vertices. It is
    identified with the halfedge opposite to it.

    Parameters
    ----------
    index : int
        Corner index.
    halfedge : Halfedge
        The opposite halfedge.
    """

    def __init__(self, index, halfedge):
        self._idx = index
        self._halfedge = halfedge

    def __repr__(self):
        return f'Corner({self._idx})'

    def __index__(self):
        return self._idx

    def __int__(self):
        return self._idx

    def __bool__(self):
        return True

    @property
    def index(self):
        """ Corner index.

        :type: int
        """
        return self._idx

    @property
    def halfedge(self):
        """ Opposite halfedge.

        :type: Halfedge
        """
        return self._halfedge

    @property
    def vertex(self):
        """ The vertex the corner is located at.

        :type: Vertex
        """
        return self._halfedge._prev._vertex

    @property
    def face(self):
        """ The face the corner belongs to.

        :type: Face
        """
        return self._halfedge._face

    @property
    def next(self):
        """ Next corner in counter-clockwise order within the face.

        :type: Corner
        """
        return self._halfedge._next._corner

    @property
    def prev(self):
        """ Previous corner in counter-clockwise order within the face.

        :type: Corner
        """
        return self._halfedge._prev._corner

    def _check(self):
        """ Perform sanity checks.
        """
        assert self._halfedge._corner is self
        assert self.next.prev is self
        assert self._halfedge._prev._next._corner is self


# Extraction and skip functions used with circulators.

def _self(h):
    return h


def _origin(h):
    return h._vertex


def _target(h):
    return h._twin._vertex


def _edge(h):
    return h._edge


def _face(h):
    return h._face


def _twin_face(h):
    return h._twin._face


def _next_corner(h):
    return h._next._corner


def _on_boundary(h):
    return h._boundary


def _twin_on_boundary(h):
    return h._twin._boundary


class NonManifoldError(Exception):
    """ Manifold exception base class.

    Raised if input data violates the manifold condition.
    """

    pass


class NonManifoldEdgeError(NonManifoldError):
    """ Non-manifold edge.

    An edge shared by more than two triangles, or by two triangles
    that induce opposite orientations.
    """

    pass


class NonManifoldVertexError(NonManifoldError):
    """ Non-manifold vertex.

    The triangles incident to a vertex do not form a single fan, e.g.,
    the center vertex of a bow tie.
    """

    pass


class IsolatedVertexError(NonManifoldError):
    """ Isolated vertex.

    A vertex not referenced by any triangle.
    """

    pass


class IsolatedFaceError(NonManifoldError):
    """ Isolated face.

    A triangle whose edges are all boundary edges.
    """

    pass
