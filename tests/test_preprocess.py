import numpy as np
import pytest

from thinline.errors import InvalidArgument
from thinline.types import ForegroundPolarity
from thinline.vision.preprocess import foreground_mask, from_foreground_mask, load_grayscale_image, to_luminance


def test_to_luminance_averages_color_channels():
    rgba = np.zeros((2, 2, 4), dtype=np.uint8)
    rgba[..., 0] = 90
    rgba[..., 1] = 30
    rgba[..., 2] = 60
    rgba[..., 3] = 255

    gray = to_luminance(rgba)

    assert gray.dtype == np.uint8
    assert gray.shape == (2, 2)
    assert np.all(gray == 60)


@pytest.mark.parametrize(
    "image",
    [np.zeros((3, 3), dtype=np.float32), np.zeros((3, 3, 2), dtype=np.uint8), np.zeros(5, dtype=np.uint8)],
)
def test_to_luminance_rejects_unsupported_images(image):
    with pytest.raises(InvalidArgument):
        to_luminance(image)


def test_foreground_mask_follows_polarity():
    image = np.array([[0, 255], [255, 0]], dtype=np.uint8)

    black = foreground_mask(image, ForegroundPolarity.BLACK)
    white = foreground_mask(image, ForegroundPolarity.WHITE)

    assert black.tolist() == [[True, False], [False, True]]
    assert np.array_equal(white, ~black)
    assert np.array_equal(from_foreground_mask(black, ForegroundPolarity.BLACK), image)
    assert np.array_equal(from_foreground_mask(white, ForegroundPolarity.WHITE), image)


def test_foreground_mask_rejects_gray_values():
    with pytest.raises(InvalidArgument):
        foreground_mask(np.array([[0, 17]], dtype=np.uint8), ForegroundPolarity.BLACK)


def test_load_grayscale_image_missing_file(tmp_path):
    pytest.importorskip("cv2")
    with pytest.raises(FileNotFoundError):
        load_grayscale_image(tmp_path / "missing.png")
