import numpy as np
import pytest

from pixelforge.ray import Ray
from pixelforge.raytrace.material import Lambertian
from pixelforge.raytrace.objects import (
    Plane,
    SceneObject,
    Sphere,
    Triangle,
    plane_raycast,
    sphere_raycast,
    triangle_raycast,
)
from pixelforge.transform import Transform

FRONT = ((-1.0, -1.0, 0.0), (0.0, 1.0, 0.0), (1.0, -1.0, 0.0))


@pytest.fixture
def material():
    return Lambertian((0.5, 0.5, 0.5))


def test_scene_object_is_abstract(material):
    with pytest.raises(TypeError):
        SceneObject(material)


def test_sphere_raycast_point_lies_on_sphere():
    ray = Ray((0, 0, -5), (0, 0, 1))
    t = sphere_raycast(ray, (0, 0, 0), 1.0, 0.001, 100.0)
    assert t is not None
    assert np.linalg.norm(ray.at(t)) == pytest.approx(1.0)
    assert ray.at(t)[2] < 0


def test_sphere_raycast_far_root_when_near_is_out_of_range():
    ray = Ray((0, 0, -5), (0, 0, 1))
    near = sphere_raycast(ray, (0, 0, 0), 1.0, 0.001, 100.0)
    far = sphere_raycast(ray, (0, 0, 0), 1.0, near + 0.5, 100.0)
    assert far is not None and far > near
    assert np.linalg.norm(ray.at(far)) == pytest.approx(1.0)


def test_sphere_raycast_miss():
    ray = Ray((0, 5, -5), (0, 0, 1))
    assert sphere_raycast(ray, (0, 0, 0), 1.0, 0.001, 100.0) is None


def test_sphere_raycast_beyond_max_distance():
    ray = Ray((0, 0, -50), (0, 0, 1))
    assert sphere_raycast(ray, (0, 0, 0), 1.0, 0.001, 10.0) is None


def test_sphere_hit_uses_scaled_radius(material):
    center = (1.0, 2.0, 3.0)
    sphere = Sphere(Transform(position=center, scale=2.0), 1.0, material)
    ray = Ray((1.0, 2.0, -10.0), (0, 0, 1))
    hit = sphere.hit(ray, 0.001, 100.0)
    assert hit is not None
    assert np.linalg.norm(hit.point - np.array(center)) == pytest.approx(2.0)
    assert np.linalg.norm(hit.normal) == pytest.approx(1.0)
    assert np.allclose(hit.normal * 2.0, hit.point - np.array(center))
    assert hit.material is material


def test_plane_raycast_reaches_plane():
    ray = Ray((0, 5, 0), (0, -1, 0))
    t = plane_raycast(ray, (0, 0, 0), (0, 1, 0), 0.001, 100.0)
    assert t is not None
    assert ray.at(t)[1] == pytest.approx(0.0)


def test_plane_raycast_parallel_and_behind():
    assert plane_raycast(Ray((0, 5, 0), (1, 0, 0)), (0, 0, 0), (0, 1, 0), 0.001, 100.0) is None
    assert plane_raycast(Ray((0, 5, 0), (0, 1, 0)), (0, 0, 0), (0, 1, 0), 0.001, 100.0) is None


def test_plane_raycast_range_is_exclusive():
    ray = Ray((0, 5, 0), (0, -1, 0))
    t = plane_raycast(ray, (0, 0, 0), (0, 1, 0), 0.001, 100.0)
    assert plane_raycast(ray, (0, 0, 0), (0, 1, 0), 0.001, t) is None
    assert plane_raycast(ray, (0, 0, 0), (0, 1, 0), t, 100.0) is None


def test_plane_hit_rotated(material):
    transform = Transform(position=(2.0, 0.0, 0.0), rotation=(0.0, 0.0, 90.0))
    plane = Plane(transform, material)
    ray = Ray((10.0, 0.5, 0.5), (-1.0, 0.0, 0.0))
    hit = plane.hit(ray, 0.001, 100.0)
    assert hit is not None
    assert np.allclose(hit.normal, transform.up())
    assert float(np.dot(hit.point - transform.position, hit.normal)) == pytest.approx(0.0, abs=1e-9)
    assert hit.material is material


def test_triangle_raycast_front_face():
    ray = Ray((0, 0, -5), (0, 0, 1))
    t = triangle_raycast(ray, *FRONT, 0.001, 100.0)
    assert t is not None
    assert ray.at(t)[2] == pytest.approx(0.0)


def test_triangle_raycast_back_face_culled():
    ray = Ray((0, 0, -5), (0, 0, 1))
    v1, v2, v3 = FRONT
    assert triangle_raycast(ray, v1, v3, v2, 0.001, 100.0) is None


def test_triangle_raycast_outside():
    ray = Ray((5, 0, -5), (0, 0, 1))
    assert triangle_raycast(ray, *FRONT, 0.001, 100.0) is None


def test_triangle_needs_update_before_hit(material):
    triangle = Triangle(*FRONT, material, Transform(position=(0, 0, 3)))
    ray = Ray((0, 0, -5), (0, 0, 1))
    assert triangle.hit(ray, 0.001, 100.0) is None
    triangle.update()
    hit = triangle.hit(ray, 0.001, 100.0)
    assert hit is not None
    assert hit.point[2] == pytest.approx(3.0)
    assert np.linalg.norm(hit.normal) == pytest.approx(1.0)
    assert float(np.dot(hit.normal, ray.direction)) < 0
    assert hit.material is material