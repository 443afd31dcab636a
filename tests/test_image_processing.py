import cv2
import numpy as np
import pytest

from mcq_scanner import config
from mcq_scanner.image_processing import (
    find_sheet_quad,
    load_image,
    normalize_channels,
    rectify,
)


def _photo_with_sheet(corners, size=(900, 750)):
    """Dark background with a bright, slightly skewed sheet on it."""
    h, w = size
    image = np.zeros((h, w, 3), dtype=np.uint8)
    cv2.fillConvexPoly(image, np.array(corners, dtype=np.int32), (255, 255, 255))
    return image


SHEET_CORNERS = [(80, 60), (660, 90), (690, 840), (50, 810)]


def test_normalize_channels_gray_to_bgr():
    gray = np.full((40, 60), 77, dtype=np.uint8)

    bgr = normalize_channels(gray)

    assert bgr.shape == (40, 60, 3)
    assert (bgr == 77).all()


def test_normalize_channels_drops_alpha():
    bgra = np.zeros((40, 60, 4), dtype=np.uint8)
    bgra[..., 0] = 10
    bgra[..., 1] = 20
    bgra[..., 2] = 30
    bgra[..., 3] = 255

    bgr = normalize_channels(bgra)

    assert bgr.shape == (40, 60, 3)
    assert tuple(bgr[0, 0]) == (10, 20, 30)


def test_rectify_returns_none_and_empty_input_unchanged():
    empty = np.zeros((0, 0, 3), dtype=np.uint8)

    assert rectify(None) is None
    assert rectify(empty) is empty


def test_rectify_solid_image_is_returned_unwarped():
    solid = np.full((240, 320, 3), 128, dtype=np.uint8)

    result = rectify(solid)

    assert result is not solid
    assert result.shape == solid.shape
    np.testing.assert_array_equal(result, solid)


def test_rectify_solid_gray_image_comes_back_as_bgr():
    solid = np.full((240, 320), 200, dtype=np.uint8)

    result = rectify(solid)

    assert result.shape == (240, 320, 3)
    assert (result == 200).all()


def test_find_sheet_quad_locates_sheet_corners():
    image = _photo_with_sheet(SHEET_CORNERS)

    quad = find_sheet_quad(image)

    assert quad is not None
    # The detected outline hugs the sheet edge, a few pixels outside it
    for found, expected in zip(quad, SHEET_CORNERS):
        assert np.hypot(found[0] - expected[0], found[1] - expected[1]) < 15


def test_rectify_warps_sheet_to_canonical_size():
    image = _photo_with_sheet(SHEET_CORNERS)

    result = rectify(image)

    assert result.shape == (config.SHEET_HEIGHT, config.SHEET_WIDTH, 3)
    # Everything well inside the canvas is sheet
    inner = result[50:-50, 50:-50]
    assert inner.mean() > 250


def test_rectify_maps_sheet_corners_to_canvas_corners():
    image = _photo_with_sheet(SHEET_CORNERS)
    # Colored patches just inside each sheet corner
    patches = [(0, 0, 255), (0, 255, 0), (255, 0, 0), (0, 255, 255)]
    centroid = np.mean(SHEET_CORNERS, axis=0)
    for (x, y), color in zip(SHEET_CORNERS, patches):
        px, py = np.array([x, y]) + 0.12 * (centroid - np.array([x, y]))
        cv2.circle(image, (int(px), int(py)), 20, color, -1)

    result = rectify(image)

    h, w = result.shape[:2]
    canvas_corners = [(0, 0), (w - 1, 0), (w - 1, h - 1), (0, h - 1)]
    canvas_centroid = np.array([w / 2, h / 2])
    for (x, y), color in zip(canvas_corners, patches):
        px, py = np.array([x, y]) + 0.12 * (canvas_centroid - np.array([x, y]))
        sample = result[int(py), int(px)].astype(int)
        assert np.abs(sample - np.array(color)).max() < 40


def test_load_image_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_image(str(tmp_path / "missing.png"))


def test_load_image_reads_file(tmp_path):
    path = tmp_path / "sheet.png"
    cv2.imwrite(str(path), np.full((30, 40, 3), 90, dtype=np.uint8))

    image = load_image(str(path))

    assert image.shape == (30, 40, 3)
