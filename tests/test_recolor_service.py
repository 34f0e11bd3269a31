import numpy as np
import pytest

from wallpaint.errors import NoRegionSelected, OutOfBounds
from wallpaint.models.color import Color
from wallpaint.models.region import Region
from wallpaint.services.recolor_service import RecolorService
from wallpaint.services.region_service import RegionService

svc = RecolorService()


def test_grey_rgba_scenario_paints_everything(rgba_grey):
    rgba_grey.pixels[..., 3] = np.arange(16, dtype=np.uint8).reshape(4, 4)
    region = RegionService().detect(rgba_grey, 1, 1, threshold=50)

    svc.apply(rgba_grey, region, Color(255, 0, 0))

    assert (rgba_grey.pixels[..., :3] == (255, 0, 0)).all()
    assert rgba_grey.pixels[..., 3].tolist() == np.arange(16).reshape(4, 4).tolist()


def test_bounds_are_inclusive_and_outside_untouched(make_buffer):
    buf = make_buffer(6, 5, (10, 10, 10))
    before = buf.pixels.copy()
    region = Region(left=1, top=1, right=3, bottom=2)

    svc.apply(buf, region, Color(1, 2, 3))

    inside = np.zeros((5, 6), dtype=bool)
    inside[1:3, 1:4] = True
    assert (buf.pixels[inside] == (1, 2, 3)).all()
    assert np.array_equal(buf.pixels[~inside], before[~inside])
    # the column just right of the region keeps its color
    assert all(buf.get_pixel(4, y) == (10, 10, 10) for y in range(5))


def test_single_point_region(make_buffer):
    buf = make_buffer(3, 3, (0, 0, 0))
    svc.apply(buf, Region.point(2, 0), Color(9, 9, 9))
    assert buf.get_pixel(2, 0) == (9, 9, 9)
    assert int(buf.pixels.sum()) == 27


def test_no_region(rgba_grey):
    before = rgba_grey.pixels.copy()
    with pytest.raises(NoRegionSelected, match="select a wall region first"):
        svc.apply(rgba_grey, None, Color(255, 0, 0))
    assert np.array_equal(before, rgba_grey.pixels)


def test_region_outside_buffer(rgba_grey):
    with pytest.raises(OutOfBounds):
        svc.apply(rgba_grey, Region(0, 0, 4, 3), Color(255, 0, 0))
