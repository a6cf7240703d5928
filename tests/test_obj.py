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

""" Tests for OBJ file I/O.
"""

import numpy as np
import pytest

import dgmesh.obj as obj

from dgmesh.hds import Mesh, NonManifoldEdgeError
from dgmesh.obj import PolygonSoup


OCTAHEDRON = """\
# octahedron
v 1 0 0
v -1 0 0
v 0 1 0
v 0 -1 0
v 0 0 1
v 0 0 -1
vn 1 0 0
vn -1 0 0
vn 0 1 0
vn 0 -1 0
vn 0 0 1
vn 0 0 -1

f 1 3 5
f 3//3 2//2 5//5
f 2/1 4/1 5/1
f 4/1/4 1/1/1 5/1/5
f 3 1 6
f -5 -4 -1
f 4 2 6
f 1 4 6
"""


@pytest.fixture
def obj_file(tmp_path):
    path = tmp_path / 'octahedron.obj'
    path.write_text(OCTAHEDRON)

    return path


class TestRead:

    def test_vertices(self, obj_file):
        v = obj.read(obj_file, 'v')

        assert v.shape == (6, 3)
        assert np.array_equal(v[4], [0.0, 0.0, 1.0])

    def test_faces(self, obj_file):
        f = obj.read(obj_file, 'f')

        assert len(f) == 8
        assert f[0] == [0, 2, 4]
        assert f[1] == [2, 1, 4]
        assert f[3] == [3, 0, 4]

    def test_negative_indices(self, obj_file):
        f = obj.read(obj_file, 'f')

        assert f[5] == [1, 2, 5]

    def test_multiple_blocks(self, obj_file):
        v, vn, vt = obj.read(obj_file, 'v', 'vn', 'vt')

        assert np.array_equal(v, vn)
        assert vt is None

    def test_no_arguments(self, obj_file):
        assert obj.read(obj_file) is None

    def test_invalid_argument(self, obj_file):
        with pytest.raises(ValueError):
            obj.read(obj_file, 1)

    @pytest.mark.parametrize('line', ['f 1/2/3/4 2 3', 'f 1/ 2 3', 'f x 2 3'])
    def test_invalid_face(self, tmp_path, line):
        path = tmp_path / 'broken.obj'
        path.write_text('v 0 0 0\nv 1 0 0\nv 0 1 0\n' + line + '\n')

        with pytest.raises(ValueError):
            obj.read(path, 'f')


class TestSoup:

    def test_read_soup(self, obj_file):
        soup = obj.read_soup(obj_file)

        assert isinstance(soup, PolygonSoup)
        assert soup.positions.shape == (6, 3)
        assert len(soup.indices) == 24
        assert soup.indices[:3] == [0, 2, 4]

    def test_rejects_polygons(self, tmp_path):
        path = tmp_path / 'quad.obj'
        path.write_text('v 0 0 0\nv 1 0 0\nv 1 1 0\nv 0 1 0\nf 1 2 3 4\n')

        with pytest.raises(ValueError, match='triangles expected'):
            obj.read_soup(path)

    def test_soup_builds_mesh(self, obj_file):
        mesh = Mesh()

        assert mesh.build(obj.read_soup(obj_file))
        assert mesh.euler_characteristic == 2

    def test_write_soup(self, tmp_path, quad):
        path = tmp_path / 'quad.obj'
        obj.write_soup(path, quad)

        soup = obj.read_soup(path)

        assert np.allclose(soup.positions, quad[0])
        assert soup.indices == quad[1]


class TestWrite:

    def test_vertex_definitions(self, tmp_path):
        path = tmp_path / 'faces.obj'
        obj.write(path, f=[[0, 1, 2], [(0, None, 1), (1, 2, None), (2, 0, 0)]])

        lines = path.read_text().splitlines()

        assert lines == ['f 1 2 3', 'f 1//2 2/3 3/1/1']

    def test_data_blocks(self, tmp_path):
        path = tmp_path / 'points.obj'
        obj.write(path, v=[[0.0, 1.0, 2.0]], vt=[[0.5, 0.5]])

        assert path.read_text() == 'v 0.0 1.0 2.0\nvt 0.5 0.5\n'


class TestMeshIO:

    def test_read(self, obj_file):
        mesh = Mesh.read(obj_file)

        assert mesh.size == (6, 12, 8)
        assert mesh.name == 'octahedron'

    def test_read_data(self, obj_file):
        mesh, vn = Mesh.read(obj_file, 'vn')

        assert np.array_equal(vn, mesh.points)

    def test_read_verbose(self, obj_file, capsys):
        Mesh.read(obj_file, quiet=False)

        out = capsys.readouterr().out

        assert 'octahedron.obj' in out
        assert '6 vertices' in out
        assert '8 faces' in out

    def test_read_reserved_tags(self, obj_file):
        with pytest.raises(ValueError):
            Mesh.read(obj_file, 'v')

    def test_read_non_manifold(self, tmp_path):
        path = tmp_path / 'fin.obj'
        path.write_text('v 0 0 0\nv 1 0 0\nv 0 1 0\nv 0 -1 0\nv 0 0 1\n' +
                        'f 1 2 3\nf 2 1 4\nf 2 1 5\n')

        with pytest.raises(NonManifoldEdgeError):
            Mesh.read(path)

    def test_write_read(self, tmp_path, grid):
        path = tmp_path / 'grid.obj'

        Mesh(*grid).write(path)
        mesh = Mesh.read(path)

        assert mesh.size == (9, 16, 8)
        assert np.allclose(mesh.points, grid[0])

    def test_write_data(self, tmp_path, quad):
        path = tmp_path / 'quad.obj'
        mesh = Mesh(*quad)

        mesh.write(path, vn=np.tile([0.0, 0.0, 1.0], (4, 1)))
        _, vn = Mesh.read(path, 'vn')

        assert vn.shape == (4, 3)

    def test_write_data_size(self, tmp_path, quad):
        with pytest.raises(ValueError):
            Mesh(*quad).write(tmp_path / 'quad.obj', vn=np.zeros((3, 3)))

    def test_write_reserved_tags(self, tmp_path, quad):
        with pytest.raises(ValueError):
            Mesh(*quad).write(tmp_path / 'quad.obj', f=[])
