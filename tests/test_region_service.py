import numpy as np
import pytest

from wallpaint.errors import OutOfBounds
from wallpaint.models.pixel_buffer import PixelBuffer
from wallpaint.models.region import Region
from wallpaint.repositories.region_repository import RegionRepository
from wallpaint.services.region_service import RegionService

svc = RegionService()
repo = RegionRepository()


@pytest.mark.parametrize("seed", [(0, 0), (1, 1), (3, 2), (4, 0), (0, 2)])
def test_uniform_buffer_is_full_extent(make_buffer, seed):
    buf = make_buffer(5, 3, (90, 140, 30))
    assert svc.detect(buf, *seed) == Region(0, 0, 4, 2)


def test_grey_rgba_scenario(rgba_grey):
    assert svc.detect(rgba_grey, 1, 1, threshold=50) == Region(0, 0, 3, 3)


def test_single_dark_corner_is_walked_around(rgba_grey):
    # (3, 3) fails the test but row 3 and column 3 are still reachable
    rgba_grey.set_pixel(3, 3, (0, 0, 0))
    assert svc.detect(rgba_grey, 0, 0, threshold=50) == Region(0, 0, 3, 3)


def test_dark_last_row_and_column_are_excluded(rgba_grey):
    rgba_grey.pixels[3, :, :3] = 0
    rgba_grey.pixels[:, 3, :3] = 0
    assert svc.detect(rgba_grey, 0, 0, threshold=50) == Region(0, 0, 2, 2)


def test_isolated_seed_is_single_point(make_buffer):
    buf = make_buffer(5, 5, (0, 0, 0))
    buf.set_pixel(2, 3, (200, 200, 200))
    assert svc.detect(buf, 2, 3) == Region(2, 3, 2, 3)


def test_threshold_is_strict(make_buffer):
    buf = make_buffer(2, 1, (100, 100, 100))
    buf.set_pixel(1, 0, (120, 115, 115))  # diff = 50
    assert svc.detect(buf, 0, 0, threshold=50) == Region.point(0, 0)
    assert svc.detect(buf, 0, 0, threshold=51) == Region(0, 0, 1, 0)


def test_diagonal_neighbours_do_not_connect(make_buffer):
    buf = make_buffer(3, 3, (0, 0, 0))
    buf.set_pixel(0, 0, (255, 255, 255))
    buf.set_pixel(1, 1, (255, 255, 255))
    assert svc.detect(buf, 0, 0) == Region.point(0, 0)


def test_region_is_bounding_box_not_mask(make_buffer):
    # L-shaped wall: its box also covers the "sky" corner
    buf = make_buffer(6, 6, (30, 60, 200))
    buf.pixels[:, 0, :3] = (220, 210, 190)
    buf.pixels[5, :, :3] = (220, 210, 190)
    region = svc.detect(buf, 0, 0)
    assert region == Region(0, 0, 5, 5)
    assert buf.get_pixel(5, 0) == (30, 60, 200)


def test_similarity_is_against_seed_not_neighbour(make_buffer):
    # gradual ramp: each step is small but the far end is far from the seed
    buf = make_buffer(10, 1, (0, 0, 0))
    for x in range(10):
        buf.set_pixel(x, 0, (x * 10, x * 10, 0))
    assert svc.detect(buf, 0, 0, threshold=50) == Region(0, 0, 2, 0)


@pytest.mark.parametrize("seed", [(-1, 0), (0, -1), (4, 0), (0, 4), (10, 10)])
def test_seed_out_of_bounds(rgba_grey, seed):
    with pytest.raises(OutOfBounds):
        svc.detect(rgba_grey, *seed)


def test_default_threshold_from_env(monkeypatch, make_buffer):
    monkeypatch.setenv("WALL_THRESHOLD", "5")
    buf = make_buffer(2, 1, (100, 100, 100))
    buf.set_pixel(1, 0, (103, 103, 100))
    assert RegionService().detect(buf, 0, 0) == Region.point(0, 0)
    monkeypatch.delenv("WALL_THRESHOLD")
    assert RegionService().detect(buf, 0, 0) == Region(0, 0, 1, 0)


def test_detect_does_not_modify_buffer(rgba_grey):
    before = rgba_grey.pixels.copy()
    svc.detect(rgba_grey, 2, 2)
    assert np.array_equal(before, rgba_grey.pixels)


def test_large_uniform_image(make_buffer):
    buf = make_buffer(300, 200, (128, 128, 128))
    assert svc.detect(buf, 150, 100) == Region(0, 0, 299, 199)


# Visiting each pixel once must give the same region as any other exhaustive
# traversal of the same 4-connected component.
@pytest.mark.parametrize("rng_seed", range(25))
def test_visited_set_traversal_matches_connected_components(rng_seed):
    rng = np.random.default_rng(rng_seed)
    h, w = rng.integers(1, 40, size=2)
    levels = np.array([[40, 40, 40], [60, 50, 45], [200, 30, 30], [220, 220, 210]], dtype=np.uint8)
    pixels = levels[rng.integers(0, len(levels), size=(h, w))]
    if rng_seed % 2:
        pixels = np.dstack([pixels, rng.integers(0, 256, size=(h, w), dtype=np.uint8)])
    buf = PixelBuffer(pixels)

    for _ in range(5):
        x, y = int(rng.integers(0, w)), int(rng.integers(0, h))
        threshold = int(rng.choice([1, 30, 50, 80]))
        expected = repo.connected_component(buf.pixels, x, y, threshold)
        assert svc.detect(buf, x, y, threshold) == expected


def test_zero_threshold_keeps_seed_point(make_buffer):
    buf = make_buffer(3, 3)
    assert repo.flood_fill(buf.pixels, 1, 1, 0) == Region.point(1, 1)
    assert repo.connected_component(buf.pixels, 1, 1, 0) == Region.point(1, 1)


def test_similarity_mask_ignores_alpha():
    pixels = np.array([[[10, 10, 10, 0], [10, 10, 10, 255]]], dtype=np.uint8)
    mask = RegionRepository.similarity_mask(pixels, (10, 10, 10), 1)
    assert mask.tolist() == [[True, True]]
