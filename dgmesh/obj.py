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

""" OBJ file I/O.

Low-level functions to read and write OBJ files. Only the statements
needed to describe polygon soups are supported: vertex coordinates 'v',
texture coordinates 'vt', vertex normals 'vn', and faces 'f'. Complete
specifications can be found in the `Advanced Visualizer Manual`.
"""

from collections import namedtuple

import numpy as np


PolygonSoup = namedtuple('PolygonSoup', ['positions', 'indices'])
PolygonSoup.__doc__ = """ Triangle soup.

Vertex positions and a flat list of triangle vertex indices, three
consecutive entries per triangle. Input of :meth:`dgmesh.hds.Mesh.build`.
"""
PolygonSoup.positions.__doc__ = 'Vertex coordinates, shape (n, 3).'
PolygonSoup.indices.__doc__ = 'Flat list of 0-based vertex indices.'


def _parse_vertex(block):
    """ Parse vertex definition.

    Returned values can be negative (relative offsets). If positive,
    indices are 1-based.

    Parameters
    ----------
    block : str
        A v/vt/vn string representing a vertex definition as encountered
        when reading 'f' statements.

    Raises
    ------
    ValueError
        If the string could not be parsed.

    Returns
    -------
    v : int
        Vertex index.
    vt : int or None
        Vertex texture index.
    vn : int or None
        Vertex normal index.
    """
    bits = block.split('/')

    # Forms v, v/vt, v//vn, and v/vt/vn. An empty middle entry marks a
    # missing texture index.
    if len(bits) > 3 or not bits[0]:
        raise ValueError('invalid vertex definition: ' + block)

    v = int(bits[0])
    vt = int(bits[1]) if len(bits) > 1 and bits[1] else None
    vn = int(bits[2]) if len(bits) > 2 and bits[2] else None

    if len(bits) > 1 and not bits[1] and vn is None:
        raise ValueError('invalid vertex definition: ' + block)

    return v, vt, vn


def read(filename, *args):
    """ Read from file.

    Assumes an OBJ-like file structure, i.e., a text file where each
    line starts with a tag. Lines whose tag is contained in `args` are
    read. The returned data blocks store line data along their first
    axis. Data blocks are returned in the same order as given in `args`.
    If no corresponding data is found in the file the requested data
    block is represented as :obj:`None`.

    Parameters
    ----------
    filename : str
        Name of an OBJ file.
    *args
        Variable number of arguments of type :class:`str`.

    Raises
    ------
    ValueError
        If any argument is not of type :class:`str` or if a line could
        not be parsed.

    Returns
    -------
    object or tuple(object, ...)
        Data blocks corresponding to line tags given in `args`.


    To read vertices and vertex normals from an OBJ file do

    >>> v, vn = read('input-file.obj', 'v', 'vn')

    Data blocks are returend as objects of type :class:`~numpy.ndarray`.
    This assumes that data associated with a specific tag is homogeneous.
    The exception being the 'f' tag returning ``list[list[int]]`` with
    0-based vertex indices. Texture and normal indices of face statements
    are discarded.
    """
    if not args:
        return None

    if any((not isinstance(arg, str) for arg in args)):
        raise ValueError("arguments have to be of type 'str'")

    rows = {arg: [] for arg in args}

    # The number of encountered vertex coordinates. Needed to resolve
    # negative (relative) vertex indices.
    vcnt = 0

    with open(filename, 'r') as file:
        for line in file:
            blocks = line.split()

            if not blocks or blocks[0].startswith('#'):
                continue

            tag = blocks[0]

            if tag == 'v':
                vcnt += 1

            if tag not in rows:
                continue

            if tag == 'f':
                face = []

                for block in blocks[1:]:
                    v = _parse_vertex(block)[0]
                    face.append(vcnt + v if v < 0 else v - 1)

                rows['f'].append(face)
            else:
                rows[tag].append([float(block) for block in blocks[1:]])

    blocks = []

    for arg in args:
        if arg == 'f':
            blocks.append(rows[arg] if rows[arg] else None)
        else:
            blocks.append(np.array(rows[arg]) if rows[arg] else None)

    if len(args) == 1:
        return blocks[0]

    return tuple(blocks)


def to_soup(positions, faces):
    """ Convert vertex and face lists to a triangle soup.

    Parameters
    ----------
    positions : array_like or None
        Vertex coordinates.
    faces : list[list[int]] or None
        Face definitions, 0-based vertex indexing.

    Raises
    ------
    ValueError
        If a face is not a triangle.

    Returns
    -------
    PolygonSoup
        Positions as float array of shape (n, 3) and flat index list.
    """
    points = np.empty((0, 3)) if positions is None else \
        np.asarray(positions, dtype=float)

    indices = []

    for i, face in enumerate([] if faces is None else faces):
        if len(face) != 3:
            msg = f'face #{i} has {len(face)} vertices, triangles expected'
            raise ValueError(msg)

        indices.extend(face)

    return PolygonSoup(points, indices)


def read_soup(filename):
    """ Read triangle soup from file.

    Parameters
    ----------
    filename : str
        Name of an OBJ file.

    Raises
    ------
    ValueError
        If the file contains non-triangular faces.

    Returns
    -------
    PolygonSoup
        Vertex positions and flat triangle index list.
    """
    return to_soup(*read(filename, 'v', 'f'))


def write(filename, *, f=None, **data):
    """ Write to file.

    Face data is expected as a nested list. Each entry of a face (a
    vertex definition) can be a single integer or a 3-tuple of integers.
    Tuple entries are interpreted as v/vt/vn triples, missing entries
    have to be specified with a :obj:`None` value.

    Parameters
    ----------
    filename : str
        Name of output file.
    f : list
        Face definitions, 0-based vertex indexing.
    **data
        Keyword arguments.


    Data blocks to be stored in the file are passed via keyword arguments:

    >>> write('output-file.obj', v=points, f=faces)

    This assumes that each data block can be interpreted as a
    2-dimensional array. The contents of each row are written to a line
    that starts with the given tag.
    """
    with open(filename, 'w') as file:
        for key, value in data.items():
            for row in value:
                file.write(' '.join([key] + [f'{x}' for x in row]) + '\n')

        for face in ([] if f is None else f):
            file.write(' '.join(['f'] + [_format_vertex(v) for v in face]))
            file.write('\n')


def write_soup(filename, soup):
    """ Write triangle soup to file.

    Parameters
    ----------
    filename : str
        Name of output file.
    soup : PolygonSoup
        Vertex positions and flat triangle index list.
    """
    positions, indices = soup
    indices = list(indices)

    faces = [indices[i:i + 3] for i in range(0, len(indices), 3)]
    write(filename, v=positions, f=faces)


def _format_vertex(vertex):
    """ Format a vertex definition of an 'f' statement.
    """
    try:
        v = vertex[0] + 1
    except TypeError:
        return f'{int(vertex) + 1}'

    vt = '' if vertex[1] is None else vertex[1] + 1

    if vertex[2] is not None:
        return f'{v}/{vt}/{vertex[2] + 1}'

    if vertex[1] is not None:
        return f'{v}/{vt}'

    return f'{v}'
