import numpy as np
import pytest

from guidewire_navigation_demo.centerline import as_centerline
from guidewire_navigation_demo.radius_model import (
    BASELINE_RADIUS,
    DEFAULT_RADIUS_MODEL,
    NO_STENOSIS,
    CallableRadiusModel,
    Stenosis,
    StenosisRadiusModel,
    radius_profile,
)


def test_peak_stenosis_on_straight_vessel(straight):
    assert DEFAULT_RADIUS_MODEL(straight, 0.55) == pytest.approx(1.12, abs=1e-3)


def test_far_from_stenosis_is_baseline(straight):
    assert DEFAULT_RADIUS_MODEL(straight, 0.1) == pytest.approx(BASELINE_RADIUS, abs=1e-3)


def test_no_stenosis_is_baseline_everywhere(straight):
    for u in (0.0, 0.3, 0.55, 0.99):
        assert NO_STENOSIS.effective_radius(straight, u) == pytest.approx(2.8, abs=1e-3)


def test_radius_is_deterministic(curved):
    assert DEFAULT_RADIUS_MODEL(curved, 0.42) == DEFAULT_RADIUS_MODEL(curved, 0.42)


def test_full_occlusion_is_floored(straight):
    model = StenosisRadiusModel(stenoses=(Stenosis(center=0.5, width=0.05, depth=1.0),))
    assert model(straight, 0.5) == pytest.approx(0.6)


def test_multiple_lesions_compose(straight):
    model = StenosisRadiusModel(stenoses=(Stenosis(0.3, 0.05, 0.5), Stenosis(0.7, 0.05, 0.25)))
    assert model(straight, 0.3) == pytest.approx(2.8 * 0.5, rel=1e-3)
    assert model(straight, 0.7) == pytest.approx(2.8 * 0.75, rel=1e-3)
    assert model(straight, 0.5) == pytest.approx(2.8, rel=1e-2)


def test_custom_profile_replaces_gaussian(straight):
    model = StenosisRadiusModel(profile=lambda u: 0.5)
    assert model(straight, 0.55) == pytest.approx(1.4, abs=1e-3)


def test_bend_penalty_is_capped():
    theta = np.linspace(0.0, 2 * np.pi, 100)
    loop = as_centerline(np.column_stack([10 * np.cos(theta), 10 * np.sin(theta), np.zeros(100)]))
    assert NO_STENOSIS.bend_penalty(loop, 0.5) == pytest.approx(0.6)
    assert NO_STENOSIS(loop, 0.5) == pytest.approx(2.8 * 0.4)


def test_bend_reduces_radius(curved, straight):
    us = np.linspace(0.05, 0.95, 19)
    assert all(NO_STENOSIS(curved, u) <= NO_STENOSIS(straight, u) + 1e-4 for u in us)
    assert any(NO_STENOSIS(curved, u) < 2.7 for u in us)


def test_stenosis_validation():
    with pytest.raises(ValueError):
        Stenosis(width=0.0)
    with pytest.raises(ValueError):
        Stenosis(depth=1.5)
    with pytest.raises(ValueError):
        Stenosis(depth=-0.1)


def test_callable_model(straight):
    model = CallableRadiusModel(lambda centerline, u: 1.0 + u)
    assert model(straight, 0.25) == pytest.approx(1.25)
    assert model.effective_radius(straight, 0.5) == pytest.approx(1.5)


def test_radius_profile_respects_floor(curved):
    us, radii = radius_profile(curved, sample_count=40)
    assert us.shape == radii.shape == (40,)
    assert np.all(radii >= 0.6)
    assert radii.min() < 2.0


def test_vessel_end_keeps_baseline_radius(straight):
    assert NO_STENOSIS(straight, 1.0) == pytest.approx(2.8, abs=1e-3)
    _, radii = radius_profile(straight, NO_STENOSIS, 200)
    np.testing.assert_allclose(radii, 2.8, atol=1e-3)
