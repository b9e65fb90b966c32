from __future__ import annotations

from pathlib import Path

import cv2

from thinline.types import ForegroundMask, GrayImage

SKELETON_COLOR = (0, 0, 255)


def save_skeleton_overlay(gray: GrayImage, skeleton: ForegroundMask, out_path: str | Path) -> None:
    """Draw skeleton pixels in red over the input image."""
    base = cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)
    base[skeleton] = SKELETON_COLOR
    cv2.imwrite(str(Path(out_path)), base)
