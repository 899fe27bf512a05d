import matplotlib
import pytest

from guidewire_navigation_demo.centerline import curved_centerline, straight_centerline
from guidewire_navigation_demo.navigation import input_from_keys

matplotlib.use("Agg")


@pytest.fixture
def straight():
    return straight_centerline()


@pytest.fixture
def curved():
    return curved_centerline()


@pytest.fixture
def advance():
    return input_from_keys(advance=True)
