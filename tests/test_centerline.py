import numpy as np
import pytest

from guidewire_navigation_demo.centerline import (
    CenterlineError,
    as_centerline,
    catmull_rom,
    load_centerline,
    point_at,
    resample,
)


def test_point_at_start_is_first_point(straight, curved):
    for line in (straight, curved):
        np.testing.assert_allclose(point_at(line, 0.0), line[0])


def test_point_at_end_is_last_point(straight, curved):
    for line in (straight, curved):
        np.testing.assert_allclose(point_at(line, 1.0), line[-1], atol=1e-2)


def test_point_at_two_points():
    line = as_centerline([[0, 0, 0], [0, 0, 10]])
    np.testing.assert_allclose(point_at(line, 0.0), [0, 0, 0])
    np.testing.assert_allclose(point_at(line, 0.5), [0, 0, 5])
    np.testing.assert_allclose(point_at(line, 1.0), [0, 0, 10], atol=1e-2)


def test_point_at_degenerate_centerlines():
    np.testing.assert_allclose(point_at(as_centerline([]), 0.3), [0, 0, 0])
    np.testing.assert_allclose(point_at(as_centerline([[1, 2, 3]]), 0.7), [1, 2, 3])


def test_point_at_clamps_out_of_range(curved):
    np.testing.assert_allclose(point_at(curved, -5.0), curved[0])
    np.testing.assert_allclose(point_at(curved, 7.0), point_at(curved, 1.0))
    np.testing.assert_allclose(point_at(curved, float("nan")), curved[0])


def test_point_at_is_deterministic(curved):
    np.testing.assert_array_equal(point_at(curved, 0.4321), point_at(curved, 0.4321))


def test_catmull_passes_through_control_points():
    p = [np.array(v, dtype=float) for v in ([0, 0, 0], [1, 0, 0], [2, 1, 0], [3, 3, 1])]
    np.testing.assert_allclose(catmull_rom(*p, 0.0), p[1])
    np.testing.assert_allclose(catmull_rom(*p, 1.0), p[2])


def test_linear_method_blends_neighbours(straight):
    # 直线上两种插值一致
    for u in (0.1, 0.37, 0.8):
        np.testing.assert_allclose(point_at(straight, u, "linear"), point_at(straight, u), atol=1e-9)
    np.testing.assert_allclose(point_at(straight, 0.5, "linear"), [0, 0, 79.0])


def test_unknown_method_raises(straight):
    with pytest.raises(ValueError):
        point_at(straight, 0.5, "bezier")


def test_resample_shape_and_ends(curved):
    pts = resample(curved, 0.6, 50)
    assert pts.shape == (50, 3)
    np.testing.assert_allclose(pts[0], curved[0])
    np.testing.assert_allclose(pts[-1], point_at(curved, 0.6))


def test_resample_minimum_length(straight):
    pts = resample(straight, 0.0, 10)
    np.testing.assert_allclose(pts[-1], point_at(straight, 1e-3))
    assert pts[-1][2] > 0


def test_resample_is_repeatable(curved):
    np.testing.assert_array_equal(resample(curved, 0.3, 80), resample(curved, 0.3, 80))


def test_resample_sample_count():
    line = as_centerline([[0, 0, 0], [0, 0, 1]])
    assert resample(line, 1.0, 1).shape == (1, 3)
    with pytest.raises(ValueError):
        resample(line, 1.0, 0)


def test_as_centerline_rejects_non_finite():
    with pytest.raises(CenterlineError):
        as_centerline([[0, 0, 0], [0, np.nan, 1]])
    with pytest.raises(CenterlineError):
        as_centerline([[0, 0, 0], [np.inf, 0, 1]])


def test_as_centerline_rejects_bad_shape():
    with pytest.raises(CenterlineError):
        as_centerline([[0, 0], [1, 1]])
    with pytest.raises(CenterlineError):
        as_centerline([1, 2, 3])


def test_as_centerline_is_read_only():
    line = as_centerline([[0, 0, 0], [0, 0, 1]])
    with pytest.raises(ValueError):
        line[0, 0] = 5.0


def test_load_centerline_text(tmp_path):
    path = tmp_path / "vessel.csv"
    path.write_text("0,0,0\n0,0,1\n0,1,2\n", encoding="utf-8")
    line = load_centerline(str(path))
    assert line.shape == (3, 3)
    np.testing.assert_allclose(line[2], [0, 1, 2])

    path = tmp_path / "vessel.txt"
    path.write_text("0 0 0\n1 0 0\n", encoding="utf-8")
    assert load_centerline(str(path)).shape == (2, 3)


def test_load_centerline_npy_with_smoothing(tmp_path):
    rng = np.random.default_rng(0)
    points = np.column_stack([rng.normal(0, 0.5, 50), np.zeros(50), np.arange(50.0)])
    path = tmp_path / "vessel.npy"
    np.save(path, points)

    raw = load_centerline(str(path))
    smooth = load_centerline(str(path), smooth_sigma=3.0)
    assert smooth.shape == raw.shape
    assert np.std(smooth[:, 0]) < np.std(raw[:, 0])


def test_load_centerline_rejects_nan(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("0 0 0\nnan 0 1\n", encoding="utf-8")
    with pytest.raises(CenterlineError):
        load_centerline(str(path))


def test_load_demo_centerlines():
    assert load_centerline("straight").shape == (80, 3)
    assert load_centerline("curved").shape == (160, 3)


def test_linear_method_on_curved_vessel(curved):
    u = 20.5 / 159
    seg = u * (len(curved) - 1)
    i = int(np.floor(seg))
    t = seg - i
    expected = curved[i] + (curved[i + 1] - curved[i]) * t

    linear = point_at(curved, u, "linear")
    np.testing.assert_allclose(linear, expected)
    assert np.linalg.norm(linear - point_at(curved, u)) > 1e-3
    # 采样点上两种插值一致
    np.testing.assert_allclose(point_at(curved, 20 / 159, "linear"), point_at(curved, 20 / 159), atol=1e-9)


def test_plain_point_lists_are_accepted():
    points = [(0, 0, 2 * i) for i in range(10)]
    np.testing.assert_allclose(point_at(points, 0.5), [0, 0, 9.0])
    np.testing.assert_allclose(point_at(points, 0.5, "linear"), [0, 0, 9.0])
    assert resample([list(p) for p in points], 1.0, 5).shape == (5, 3)
    np.testing.assert_allclose(point_at([], 0.5), [0, 0, 0])
