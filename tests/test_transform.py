import numpy as np
import pytest

from bananaengine.transform import Projection, Transform


def test_projection_values_follow_declaration_order():
    assert [Projection(v) for v in (0, 1, 2)] == [
        Projection.NONE,
        Projection.ORTHOGRAPHIC,
        Projection.PERSPECTIVE,
    ]
    assert Projection(0) is Projection.NONE


def test_default_transform_is_zeroed():
    t = Transform()
    assert np.array_equal(t.pos, np.zeros(3))
    assert np.array_equal(t.size, np.zeros(3))
    assert np.array_equal(t.color, np.zeros(4))
    assert t.rotation == 0.0
    assert t.proj is Projection.NONE


def test_values_are_stored():
    t = Transform((1, 2, 3), (4, 5, 6), (0.1, 0.2, 0.3, 1.0), 45, Projection.PERSPECTIVE)
    assert np.allclose(t.pos, [1, 2, 3])
    assert np.allclose(t.size, [4, 5, 6])
    assert np.allclose(t.color, [0.1, 0.2, 0.3, 1.0])
    assert t.rotation == 45.0
    assert t.proj is Projection.PERSPECTIVE


def test_proj_accepts_plain_int():
    t = Transform(proj=1)
    assert t.proj is Projection.ORTHOGRAPHIC


def test_wrong_vector_length_raises():
    with pytest.raises(ValueError):
        Transform(pos=(1, 2))
    with pytest.raises(ValueError):
        Transform(color=(1, 2, 3))


def test_invalid_projection_raises():
    with pytest.raises(ValueError):
        Transform(proj=7)


def test_copy_is_equal_and_independent():
    t = Transform((1, 2, 3), (1, 1, 1), (1, 1, 1, 1), 10, Projection.ORTHOGRAPHIC)
    c = t.copy()
    assert c == t
    c.pos[0] += 5
    assert c != t
    assert t.pos[0] == 1


def test_components_are_mutable_in_place():
    t = Transform(size=(0.2, 0.2, 0))
    t.size[1] += 1.0
    assert t.size[1] == pytest.approx(1.2)