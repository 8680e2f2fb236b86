import numpy as np

from handwrecognizer.encoding.normalizer import normalize_stroke


def test_coordinates_are_scaled_into_unit_square():
    stroke = np.array([[10.0, 5.0, 0], [30.0, 25.0, 8], [20.0, 45.0, 16]])
    normalized = normalize_stroke(stroke)
    assert normalized[:, :2].min() >= 0.0
    assert normalized[:, :2].max() <= 1.0
    assert normalized[0, 0] == 0.0  # minimum x
    assert normalized[0, 1] == 0.0  # minimum y
    assert normalized[1, 0] == 1.0
    assert normalized[2, 1] == 1.0
    np.testing.assert_allclose(normalized[2, 0], 0.5)


def test_axes_are_scaled_independently():
    stroke = np.array([[0.0, 0.0, 0], [100.0, 1.0, 1]])
    normalized = normalize_stroke(stroke)
    np.testing.assert_allclose(normalized[:, :2], [[0.0, 0.0], [1.0, 1.0]])


def test_timestamps_pass_through():
    stroke = np.array([[0.0, 0.0, 1000], [2.0, 3.0, 1250]])
    np.testing.assert_array_equal(normalize_stroke(stroke)[:, 2], [1000, 1250])


def test_degenerate_axis_maps_to_zero():
    stroke = np.array([[4.0, 7.0, 0], [4.0, 9.0, 5], [4.0, 8.0, 10]])
    normalized = normalize_stroke(stroke)
    assert np.all(np.isfinite(normalized))
    np.testing.assert_array_equal(normalized[:, 0], [0.0, 0.0, 0.0])


def test_single_point_stroke_is_finite():
    normalized = normalize_stroke(np.array([[3.0, 3.0, 0]]))
    np.testing.assert_array_equal(normalized, [[0.0, 0.0, 0.0]])


def test_input_is_not_modified():
    stroke = np.array([[10.0, 5.0, 0], [30.0, 25.0, 8]])
    stroke.flags.writeable = False
    normalize_stroke(stroke)
    np.testing.assert_array_equal(stroke, [[10.0, 5.0, 0], [30.0, 25.0, 8]])
