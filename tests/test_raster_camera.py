import numpy as np
import pytest

from pixelforge.raster.camera import Camera


def test_default_view_is_identity():
    camera = Camera(10, 10)
    assert np.allclose(camera.model_to_view((1, 2, 3)), [1, 2, 3])


def test_eye_maps_to_origin_and_target_ahead():
    camera = Camera(10, 10)
    camera.set_view((0, 0, -10), (0, 0, 0))
    assert np.allclose(camera.model_to_view((0, 0, -10)), [0, 0, 0])
    assert np.allclose(camera.model_to_view((0, 0, 0)), [0, 0, 10])


def test_view_preserves_distance_to_eye():
    camera = Camera(10, 10)
    eye = np.array([3.0, 4.0, -2.0])
    camera.set_view(eye, (1, 0, 5))
    point = np.array([-2.0, 7.0, 1.5])
    view = camera.model_to_view(point)
    assert np.isclose(np.linalg.norm(view), np.linalg.norm(point - eye))


def test_projection_maps_near_and_far_to_unit_depth_range():
    camera = Camera(10, 10)
    camera.set_projection(60.0, 1.0, 0.1, 100.0)
    near = camera.view_to_projection((0, 0, 0.1))
    far = camera.view_to_projection((0, 0, 100.0))
    assert np.isclose(near[2] / near[3], 0.0)
    assert np.isclose(far[2] / far[3], 1.0)


def test_point_ahead_lands_in_screen_centre():
    camera = Camera(100, 50)
    camera.set_view((0, 0, -10), (0, 0, 0))
    camera.set_projection(60.0, 2.0, 0.1, 100.0)
    view = camera.model_to_view((0, 0, 0))
    assert camera.to_screen(view) == (50, 25)


def test_point_behind_camera_is_not_visible():
    camera = Camera(100, 50)
    camera.set_projection(60.0, 2.0, 0.1, 100.0)
    assert camera.to_screen((0, 0, -10)) == (-1, -1)


def test_point_before_near_plane_is_not_visible():
    camera = Camera(100, 50)
    camera.set_projection(60.0, 2.0, 0.1, 100.0)
    assert camera.to_screen((0, 0, 0.01)) == (-1, -1)


def test_zero_w_is_not_visible():
    camera = Camera(100, 50)
    camera.projection = np.zeros((4, 4))
    assert camera.to_screen((1, 1, 1)) == (-1, -1)


def test_degenerate_view_raises():
    camera = Camera(10, 10)
    with pytest.raises(ValueError):
        camera.set_view((1, 1, 1), (1, 1, 1))