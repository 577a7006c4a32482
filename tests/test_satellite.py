import pytest

from tankbattle.satellite import GridSatelliteView


def test_new_view_is_blank():
    view = GridSatelliteView(3, 2)
    assert all(view.get_object_at(x, y) == " " for x in range(3) for y in range(2))


def test_set_then_get_round_trip():
    view = GridSatelliteView(4, 3)
    view.set_object_at(3, 2, "#")
    view.set_object_at(0, 1, "1")
    assert view.get_object_at(3, 2) == "#"
    assert view.get_object_at(0, 1) == "1"
    assert view.get_object_at(2, 1) == " "


@pytest.mark.parametrize("x, y", [(4, 0), (0, 3), (10, 10), (-1, 0)])
def test_outside_returns_ampersand(x, y):
    assert GridSatelliteView(4, 3).get_object_at(x, y) == "&"


def test_default_view_is_empty():
    assert GridSatelliteView().get_object_at(0, 0) == "&"


def test_set_outside_raises():
    view = GridSatelliteView(2, 2)
    with pytest.raises(IndexError):
        view.set_object_at(2, 0, "#")
    with pytest.raises(IndexError):
        view.set_object_at(0, -1, "#")


def test_initialize_resizes_and_clears():
    view = GridSatelliteView(2, 2)
    view.set_object_at(1, 1, "@")
    view.initialize(3, 1)
    assert view.get_object_at(1, 1) == "&"
    assert view.get_object_at(2, 0) == " "
    assert (view.width, view.height) == (3, 1)