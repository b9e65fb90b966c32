from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt

from thinline.errors import InvalidArgument
from thinline.types import BinaryImage, ForegroundMask, ForegroundPolarity
from thinline.vision.preprocess import from_foreground_mask, to_luminance

GRAY_LEVELS = 256


def validate_level(level: float) -> float:
    try:
        value = float(level)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"Threshold level must be a number, got {level!r}") from exc
    if not math.isfinite(value) or not 0.0 <= value <= 1.0:
        raise InvalidArgument(f"Threshold level must be within [0.0, 1.0], got {level!r}")
    return value


def luminance_mask(
    luminance: npt.NDArray[np.floating],
    level: float,
    polarity: ForegroundPolarity,
) -> ForegroundMask:
    # Black and White are mirror images of the same comparison.
    if polarity is ForegroundPolarity.BLACK:
        return luminance < level
    return luminance >= level


def threshold(
    image: np.ndarray,
    level: float,
    polarity: ForegroundPolarity = ForegroundPolarity.BLACK,
) -> BinaryImage:
    """Binarize ``image`` at ``level``, a fraction of the 256 gray levels.

    Gray value ``v`` has luminance ``v / 256``, so ``level=0.0`` selects no gray
    level and ``level=1.0`` selects every gray level as darker than the cutoff.
    """
    value = validate_level(level)
    polarity = ForegroundPolarity.parse(polarity)
    gray = to_luminance(image)
    luminance = gray.astype(np.float64) / GRAY_LEVELS
    return from_foreground_mask(luminance_mask(luminance, value, polarity), polarity)
