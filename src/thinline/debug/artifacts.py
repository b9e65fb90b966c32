from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import cv2

from thinline.types import GrayImage


def ensure_debug_dir(path: str | Path) -> Path:
    out = Path(path)
    out.mkdir(parents=True, exist_ok=True)
    return out


def save_gray_png(image: GrayImage, out_path: str | Path) -> None:
    cv2.imwrite(str(out_path), image)


def save_report_json(report: dict[str, Any], out_path: str | Path) -> None:
    Path(out_path).write_text(json.dumps(report, indent=2), encoding="utf-8")
