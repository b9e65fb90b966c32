from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np

from thinline.errors import InvalidArgument
from thinline.types import BinaryImage, ForegroundMask, ForegroundPolarity, GrayImage


def load_grayscale_image(path: str | Path) -> GrayImage:
    image_path = Path(path)
    gray = cv2.imread(str(image_path), cv2.IMREAD_GRAYSCALE)
    if gray is None:
        raise FileNotFoundError(f"Failed to read image: {image_path}")
    return gray


def save_image(image: GrayImage, path: str | Path) -> Path:
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(out_path), image):
        raise OSError(f"Failed to write image: {out_path}")
    return out_path


def to_luminance(image: np.ndarray) -> GrayImage:
    if image.dtype != np.uint8:
        raise InvalidArgument(f"Unsupported image dtype: {image.dtype} (expected uint8)")
    if image.ndim == 2:
        return image
    if image.ndim == 3 and image.shape[2] in (3, 4):
        # Use channel-average to stay agnostic to RGB/BGR caller convention.
        rgb = image[:, :, :3].astype(np.float32)
        gray = np.rint(np.mean(rgb, axis=2))
        return np.clip(gray, 0, 255).astype(np.uint8)
    raise InvalidArgument(f"Unsupported image shape: {image.shape}")


def is_binary(image: np.ndarray) -> bool:
    return bool(np.all((image == 0) | (image == 255)))


def foreground_mask(image: BinaryImage, polarity: ForegroundPolarity) -> ForegroundMask:
    if image.ndim != 2:
        raise InvalidArgument(f"Binary image must be 2-D, got shape {image.shape}")
    if not is_binary(image):
        values = np.unique(image[(image != 0) & (image != 255)])
        raise InvalidArgument(
            f"Image is not binary: found values {values[:5].tolist()} besides 0 and 255; threshold it first"
        )
    return image == polarity.foreground_value


def from_foreground_mask(mask: ForegroundMask, polarity: ForegroundPolarity) -> BinaryImage:
    out = np.full(mask.shape, polarity.background_value, dtype=np.uint8)
    out[mask] = polarity.foreground_value
    return out
