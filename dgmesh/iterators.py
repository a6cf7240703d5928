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

""" Combinatorial mesh item neighborhood iterators.

Adjacent/incident mesh items are visited in counter-clockwise order as
determined by the mesh orientation. Passing ``ccw=False`` reverses the
traversal direction (clockwise order).

Every traversal is driven by a :class:`Circulator`, a restartable walk
along a cycle of halfedges. A circulator stores the start halfedge, a
step function, and an extraction function. Each call to ``iter()`` starts
a fresh walk, so a circulator can be iterated any number of times and
several walks over the same neighborhood do not interfere.

Note
----
When applied to a :class:`~dgmesh.hds.Mesh` instance, the iterators of
this module visit the corresponding mesh item container in storage order
(reverse storage order for ``ccw=False``).
"""


def _rotate_ccw(h):
    """ Next outgoing halfedge in counter-clockwise order.
    """
    return h._twin._next


def _rotate_cw(h):
    """ Next outgoing halfedge in clockwise order.
    """
    return h._prev._twin


def _advance(h):
    return h._next


def _retreat(h):
    return h._prev


def vertex_step(ccw=True):
    """ Step function for walks about a vertex.

    Parameters
    ----------
    ccw : bool, optional
        Traversal direction.

    Returns
    -------
    callable
        Maps an outgoing halfedge to the next outgoing halfedge.
    """
    return _rotate_ccw if ccw else _rotate_cw


def face_step(ccw=True):
    """ Step function for walks around a face.

    Parameters
    ----------
    ccw : bool, optional
        Traversal direction.

    Returns
    -------
    callable
        Maps a halfedge of a face to its successor (or predecessor).
    """
    return _advance if ccw else _retreat


class Circulator:
    """ Restartable neighborhood traversal.

    Walks the halfedge cycle that starts at `halfedge` and is generated
    by repeated application of `step`. For every halfedge ``h`` of the
    cycle the value ``item(h)`` is yielded, unless ``skip(h)`` is true.
    The walk terminates when it returns to its start halfedge.

    Parameters
    ----------
    halfedge : Halfedge
        Start halfedge.
    step : callable
        Maps a halfedge to the next halfedge of the cycle.
    item : callable
        Maps a halfedge to the yielded mesh item.
    skip : callable, optional
        Predicate that marks halfedges that don't contribute an item.


    Circulators are usually obtained from mesh items:

    >>> for w in v.adjacent_vertices():
    ...     pass

    Note
    ----
    If halfedges are skipped, the walk starts at the first halfedge (in
    the direction of `step`) that is not skipped. Skipping is re-applied
    at every step since a walk about a vertex can enter boundary territory
    more than once.
    """

    __slots__ = ('_halfedge', '_step', '_item', '_skip')

    def __init__(self, halfedge, step, item, skip=None):
        self._halfedge = halfedge
        self._step = step
        self._item = item
        self._skip = skip

    def __repr__(self):
        return f'Circulator({self._halfedge!r})'

    def __iter__(self):
        return (self._item(h) for h in self._walk())

    def __len__(self):
        """ Number of items.

        Walks the cycle once. The returned value is the number of items
        a traversal produces.

        Returns
        -------
        int
            Number of items.
        """
        return sum(1 for _ in self._walk())

    def _walk(self):
        """ Halfedge walk generator.
        """
        start = self._halfedge
        step = self._step
        skip = self._skip

        if start is None:
            return

        if skip is not None:
            first = start

            # Advance the start of the walk to a halfedge that contributes
            # an item. Nothing to do if all halfedges are skipped.
            while skip(start):
                start = step(start)

                if start is first:
                    return

        h = start

        while True:
            if skip is None or not skip(h):
                yield h

            h = step(h)

            if h is start:
                return


def verts(obj, ccw=True):
    """ Vertex iterator.

    The returned iterator traverses adjacent/incident vertices
    of `obj` depending on its type:

    .. table::
       :width: 100%
       :widths: 20, 80

       =============== ================================================
       :class:`Vertex` ↺ traversal of adjacent vertices
       --------------- ------------------------------------------------
       :class:`Face`   ↺ traversal of incident vertices
       --------------- ------------------------------------------------
       :class:`Mesh`   in-order traversal of :attr:`~Mesh.vertices`
       =============== ================================================

    Parameters
    ----------
    obj : Vertex or Face or Mesh
        The base object.
    ccw : bool, optional
        Traversal direction.

    Yields
    ------
    Vertex
    """
    return iter(obj._viter(ccw))


def halfs(obj, ccw=True):
    """ Halfedge iterator

    The returned iterator traverses incident halfedges of `obj`
    depending on its type:

    .. table::
       :width: 100%
       :widths: 20, 80

       =============== ================================================
       :class:`Vertex` ↺ traversal of outward pointing halfedges
       --------------- ------------------------------------------------
       :class:`Face`   ↺ traversal of incident halfedges
       --------------- ------------------------------------------------
       :class:`Mesh`   in-order traversal of :attr:`~Mesh.halfedges`
       =============== ================================================

    Parameters
    ----------
    obj : Vertex or Face or Mesh
        The base object.
    ccw : bool, optional
        Traversal direction.

    Yields
    ------
    Halfedge
    """
    return iter(obj._hiter(ccw))


def edges(obj, ccw=True):
    """ Edge iterator.

    Parameters
    ----------
    obj : Vertex or Face or Mesh
        The base object.
    ccw : bool, optional
        Traversal direction.

    Yields
    ------
    Edge
    """
    return iter(obj._eiter(ccw))


def faces(obj, ccw=True):
    r""" Face iterator.

    A vertex :math:`v` and a face :math:`f` are incident if
    :math:`v \in f`. Two faces are incident if they share a common edge.
    The returned iterator visits the incident faces of `obj` depending
    on its type:

    .. table::
       :width: 100%
       :widths: 20, 80

       =============== ================================================
       :class:`Vertex` ↺ traversal of incident faces
       --------------- ------------------------------------------------
       :class:`Face`   ↺ traversal of edge-adjacent faces
       --------------- ------------------------------------------------
       :class:`Mesh`   in-order traversal of :attr:`~Mesh.faces`
       =============== ================================================

    Parameters
    ----------
    obj : Vertex or Face or Mesh
        The base object.
    ccw : bool, optional
        Traversal direction.

    Yields
    ------
    Face

    Note
    ----
    Boundary loops are never reported as adjacent faces.
    """
    return iter(obj._fiter(ccw))


def corners(obj, ccw=True):
    """ Corner iterator.

    Parameters
    ----------
    obj : Vertex or Face or Mesh
        The base object.
    ccw : bool, optional
        Traversal direction.

    Yields
    ------
    Corner
    """
    return iter(obj._citer(ccw))
