import math

import numpy as np
import pytest

from bananaengine.camera import Camera


def project(matrix, point):
    clip = matrix @ np.array([*point, 1.0])
    return clip[:3] / clip[3]


def test_default_camera_has_identity_matrices():
    cam = Camera()
    assert np.allclose(cam.view_matrix, np.identity(4))
    assert np.allclose(cam.perspective_view_projection, np.identity(4))
    assert np.allclose(cam.orthographic_view_projection, np.identity(4))
    assert (cam.width, cam.height) == (1, 1)


def test_view_moves_camera_position_to_origin():
    cam = Camera()
    cam.position = (5.0, -2.0, 3.0)
    moved = cam.view_matrix @ np.array([5.0, -2.0, 3.0, 1.0])
    assert np.allclose(moved, [0, 0, 0, 1])
    assert np.allclose(cam.position, [5.0, -2.0, 3.0])


def test_view_undoes_rotation():
    cam = Camera(rotation=math.pi / 2)
    rotated = cam.view_matrix @ np.array([0.0, 1.0, 0.0, 1.0])
    assert np.allclose(rotated, [1, 0, 0, 1])
    assert cam.rotation == pytest.approx(math.pi / 2)


def test_position_getter_returns_copy():
    cam = Camera()
    pos = cam.position
    pos[0] = 42
    assert np.allclose(cam.position, [0, 0, 0])


def test_orthographic_maps_window_corners_to_ndc():
    cam = Camera()
    cam.set_window_dimension(800, 600)
    assert np.allclose(project(cam.orthographic_view_projection, (0, 0, -1))[:2], [-1, -1])
    assert np.allclose(project(cam.orthographic_view_projection, (800, 600, -1))[:2], [1, 1])


def test_perspective_near_and_far_planes():
    cam = Camera()
    cam.set_window_dimension(2, 2)
    assert project(cam.perspective_view_projection, (0, 0, -0.1))[2] == pytest.approx(-1.0)
    assert project(cam.perspective_view_projection, (0, 0, -1000.0))[2] == pytest.approx(1.0)


def test_perspective_field_of_view_edge():
    cam = Camera()
    cam.set_window_dimension(4, 4)
    ndc = project(cam.perspective_view_projection, (3.0, 3.0, -3.0))
    assert ndc[0] == pytest.approx(1.0)
    assert ndc[1] == pytest.approx(1.0)


def test_window_dimension_is_stored():
    cam = Camera()
    cam.set_window_dimension(1280, 720)
    assert (cam.width, cam.height) == (1280, 720)


def test_view_projection_follows_position_change():
    cam = Camera()
    cam.set_window_dimension(100, 100)
    before = project(cam.orthographic_view_projection, (50, 50, -1))
    cam.position = (50.0, 50.0, 0.0)
    after = project(cam.orthographic_view_projection, (100, 100, -1))
    assert np.allclose(before, after)


def test_invalid_dimension_raises():
    cam = Camera()
    with pytest.raises(ValueError):
        cam.set_window_dimension(0, 10)


def test_invalid_position_raises():
    with pytest.raises(ValueError):
        Camera(position=(1, 2))