from __future__ import annotations

import logging

import numpy as np
import numpy.typing as npt
from scipy import ndimage as ndi

from thinline.types import BinaryImage, EdgeOperator, ForegroundPolarity, GrayImage
from thinline.vision.preprocess import from_foreground_mask, to_luminance
from thinline.vision.threshold import validate_level

LOGGER = logging.getLogger(__name__)

SOBEL_NORTH = np.array(
    [
        [1.0, 2.0, 1.0],
        [0.0, 0.0, 0.0],
        [-1.0, -2.0, -1.0],
    ]
)
SOBEL_SOUTH = -SOBEL_NORTH
SOBEL_EAST = np.array(
    [
        [-1.0, 0.0, 1.0],
        [-2.0, 0.0, 2.0],
        [-1.0, 0.0, 1.0],
    ]
)
SOBEL_WEST = -SOBEL_EAST

# Response of a Sobel kernel to a full-range (0 to 255) step edge.
_FULL_SCALE = 4.0 * 255.0


def _response(gray: npt.NDArray[np.float64], kernel: np.ndarray) -> npt.NDArray[np.float64]:
    return ndi.correlate(gray, kernel, mode="constant", cval=0.0)


def gradient_magnitude(
    image: np.ndarray,
    operator: EdgeOperator = EdgeOperator.SOBEL4,
) -> npt.NDArray[np.float64]:
    """Edge strength in ``[0, 1]`` per pixel.

    The 1-pixel frame where the 3x3 kernel does not fit is zero.
    """
    # Integer-valued samples keep the kernel sums exact, so flat regions give 0.
    gray = to_luminance(image).astype(np.float64)
    operator = EdgeOperator.parse(operator)
    if gray.size == 0:
        return np.zeros(gray.shape, dtype=np.float64)

    if operator is EdgeOperator.SOBEL:
        vertical = np.maximum(_response(gray, SOBEL_NORTH), 0.0)
        horizontal = np.maximum(_response(gray, SOBEL_EAST), 0.0)
    else:
        vertical = (_response(gray, SOBEL_NORTH) - _response(gray, SOBEL_SOUTH)) / 2.0
        horizontal = (_response(gray, SOBEL_EAST) - _response(gray, SOBEL_WEST)) / 2.0

    magnitude = np.clip(np.hypot(vertical, horizontal) / _FULL_SCALE, 0.0, 1.0)
    magnitude[:1, :] = 0.0
    magnitude[-1:, :] = 0.0
    magnitude[:, :1] = 0.0
    magnitude[:, -1:] = 0.0
    return magnitude


def detect_edges(
    image: np.ndarray,
    threshold: float | None = None,
    polarity: ForegroundPolarity = ForegroundPolarity.BLACK,
    operator: EdgeOperator = EdgeOperator.SOBEL4,
) -> GrayImage | BinaryImage:
    """Sobel edge detection.

    Without ``threshold`` the gradient image is returned with edges drawn in the
    foreground tone of ``polarity``. With ``threshold`` pixels whose magnitude is
    at least the level become foreground and the rest background.
    """
    level = validate_level(threshold) if threshold is not None else None
    polarity = ForegroundPolarity.parse(polarity)
    magnitude = gradient_magnitude(image, operator)

    if level is not None:
        edges = magnitude >= level
        LOGGER.debug("edge threshold %.3f kept %d px", level, int(edges.sum()))
        return from_foreground_mask(edges, polarity)

    strength = np.rint(magnitude * 255.0).astype(np.uint8)
    if polarity is ForegroundPolarity.BLACK:
        # Dark edges on a light background.
        strength = 255 - strength
    return strength
