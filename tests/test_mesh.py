import numpy as np
import pytest

from pixelforge.ray import Ray
from pixelforge.raytrace.material import Lambertian
from pixelforge.raytrace.mesh import Mesh
from pixelforge.transform import Transform

TRIANGLE_OBJ = """# a single triangle
v -1 -1 0
v 0 1 0
v 1 -1 0
vn 0 0 -1
vt 0 0
f 1 2 3
"""


@pytest.fixture
def material():
    return Lambertian((0.8, 0.8, 0.8))


def _write(tmp_path, text, name="model.obj"):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_load_reads_face_vertices(tmp_path, material):
    mesh = Mesh(material)
    mesh.load(_write(tmp_path, TRIANGLE_OBJ))
    assert len(mesh.vertices) == 3
    assert np.allclose(mesh.vertices[1], [0, 1, 0])


def test_load_slash_forms_match_plain(tmp_path, material):
    plain = Mesh(material)
    plain.load(_write(tmp_path, TRIANGLE_OBJ))
    slashed = Mesh(material)
    slashed.load(_write(tmp_path, TRIANGLE_OBJ.replace("f 1 2 3", "f 1/1/1 2//1 3/1/1"), "s.obj"))
    assert len(slashed.vertices) == len(plain.vertices)
    for a, b in zip(plain.vertices, slashed.vertices):
        assert np.allclose(a, b)


def test_load_quad_keeps_all_face_vertices(tmp_path, material):
    text = "v 0 0 0\nv 1 0 0\nv 1 1 0\nv 0 1 0\nf 1 2 3 4\n"
    mesh = Mesh(material)
    mesh.load(_write(tmp_path, text))
    assert len(mesh.vertices) == 4


def test_load_missing_file(tmp_path, material):
    with pytest.raises(OSError):
        Mesh(material).load(tmp_path / "absent.obj")


def test_load_bad_index(tmp_path, material):
    with pytest.raises(ValueError):
        Mesh(material).load(_write(tmp_path, "v 0 0 0\nf 1 2 9\n"))


def test_update_transforms_and_bounds(tmp_path, material):
    transform = Transform(position=(0, 0, 5), scale=2.0)
    mesh = Mesh(material, transform)
    mesh.load(_write(tmp_path, TRIANGLE_OBJ))
    mesh.update()
    for local, world in zip(mesh.vertices, mesh.world_vertices):
        assert np.allclose(world, transform.apply(local))
    distances = [np.linalg.norm(v - mesh.center) for v in mesh.world_vertices]
    assert max(distances) == pytest.approx(mesh.radius)
    assert np.allclose(sum(mesh.world_vertices) / 3, mesh.center)


def test_hit_after_update(tmp_path, material):
    mesh = Mesh(material, Transform(position=(0, 0, 5)))
    mesh.load(_write(tmp_path, TRIANGLE_OBJ))
    mesh.update()
    ray = Ray((0, 0, -5), (0, 0, 1))
    hit = mesh.hit(ray, 0.001, 100.0)
    assert hit is not None
    assert hit.point[2] == pytest.approx(5.0)
    assert np.linalg.norm(hit.normal) == pytest.approx(1.0)
    assert hit.material is material


def test_miss_outside_bounds(tmp_path, material):
    mesh = Mesh(material)
    mesh.load(_write(tmp_path, TRIANGLE_OBJ))
    mesh.update()
    assert mesh.hit(Ray((10, 10, -5), (0, 0, 1)), 0.001, 100.0) is None


def test_empty_mesh_never_hit(material):
    mesh = Mesh(material)
    mesh.update()
    assert mesh.hit(Ray((0, 0, -5), (0, 0, 1)), 0.001, 100.0) is None


def test_vertices_given_directly(material):
    mesh = Mesh(material, None, [(-1, -1, 0), (0, 1, 0), (1, -1, 0)])
    mesh.update()
    hit = mesh.hit(Ray((0, 0, -5), (0, 0, 1)), 0.001, 100.0)
    assert hit is not None
    assert hit.point[2] == pytest.approx(0.0)