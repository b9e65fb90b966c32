from __future__ import annotations

import logging
from pathlib import Path
from time import perf_counter
from typing import Any

import numpy as np
from skimage.measure import label

from thinline.config import AppConfig
from thinline.debug.artifacts import ensure_debug_dir, save_gray_png, save_report_json
from thinline.debug.overlays import save_skeleton_overlay
from thinline.types import ForegroundMask, GrayImage, PipelineResult
from thinline.vision.edge_detection import detect_edges
from thinline.vision.preprocess import foreground_mask, is_binary, load_grayscale_image, save_image, to_luminance
from thinline.vision.thinning import thin_image_edges
from thinline.vision.threshold import threshold

LOGGER = logging.getLogger(__name__)


def _count_components(mask: ForegroundMask) -> int:
    if not mask.any():
        return 0
    return int(label(mask, connectivity=2).max())


def default_output_path(image_path: str | Path) -> Path:
    path = Path(image_path)
    return path.with_name(f"{path.stem}_thin.png")


def process_image(gray: np.ndarray, cfg: AppConfig) -> tuple[GrayImage, GrayImage, dict[str, Any]]:
    """Run the configured stages on an in-memory image.

    Returns the image fed to thinning, the final image and the run report.
    """
    polarity = cfg.foreground
    work = to_luminance(gray)
    h, w = work.shape
    report: dict[str, Any] = {
        "image_size": [int(w), int(h)],
        "foreground": polarity.value,
        "stages": [],
        "timings": {},
        "warnings": [],
    }

    edge_binarized = False
    if cfg.edge.enable:
        t0 = perf_counter()
        work = detect_edges(
            work,
            threshold=cfg.edge.threshold,
            polarity=polarity,
            operator=cfg.edge.operator,
        )
        edge_binarized = cfg.edge.threshold is not None
        report["stages"].append(f"edge_detection:{cfg.edge.operator.value}")
        report["timings"]["edge_detection"] = perf_counter() - t0

    if cfg.threshold.enable and not edge_binarized:
        t1 = perf_counter()
        work = threshold(work, cfg.threshold.level, polarity)
        report["stages"].append("threshold")
        report["timings"]["threshold"] = perf_counter() - t1

    prepared = work
    if not cfg.thinning.enable:
        if is_binary(prepared):
            mask = foreground_mask(prepared, polarity)
            report["foreground_px"] = int(mask.sum())
            report["components_before"] = _count_components(mask)
        return prepared, prepared, report

    # Rejects non-binary input before any work is done.
    mask_before = foreground_mask(prepared, polarity)
    report["components_before"] = _count_components(mask_before)

    t2 = perf_counter()
    result = thin_image_edges(
        prepared,
        method=cfg.thinning.method,
        polarity=polarity,
        max_iterations=cfg.thinning.max_iterations,
    )
    report["stages"].append(f"thinning:{cfg.thinning.method.value}")
    report["timings"]["thinning"] = perf_counter() - t2
    report["method"] = cfg.thinning.method.value
    report["thinning"] = {
        "iterations": result.iterations,
        "deleted_px": result.deleted_px,
        "converged": result.converged,
        "state": result.state.value,
    }
    if not result.converged:
        report["warnings"].append(
            f"thinning stopped after thinning.max_iterations={cfg.thinning.max_iterations} without converging"
        )

    mask_after = foreground_mask(result.image, polarity)
    report["foreground_px"] = int(mask_after.sum())
    report["components_after"] = _count_components(mask_after)
    if report["components_after"] != report["components_before"]:
        report["warnings"].append(
            "component count changed during thinning: "
            f"{report['components_before']} -> {report['components_after']}"
        )

    LOGGER.info(
        "pipeline stages=%s foreground_px=%d",
        ",".join(report["stages"]),
        report["foreground_px"],
    )
    return prepared, result.image, report


def run_pipeline(
    image_path: str | Path,
    output_path: str | Path | None,
    cfg: AppConfig,
    debug_dir: str | Path | None = None,
) -> PipelineResult:
    t0 = perf_counter()
    gray = load_grayscale_image(image_path)
    load_time = perf_counter() - t0

    prepared, output, report = process_image(gray, cfg)
    report["timings"]["load"] = load_time

    out_path = save_image(output, output_path if output_path is not None else default_output_path(image_path))
    report["output_path"] = str(out_path)
    for warning in report["warnings"]:
        LOGGER.warning(warning)

    if debug_dir is not None:
        dbg = ensure_debug_dir(debug_dir)
        save_gray_png(gray, dbg / "01_input.png")
        save_gray_png(prepared, dbg / "02_binary.png")
        save_gray_png(output, dbg / "03_skeleton.png")
        if is_binary(output):
            save_skeleton_overlay(gray, foreground_mask(output, cfg.foreground), dbg / "04_overlay.png")
        save_report_json(report, dbg / "report.json")

    return PipelineResult(output_path=out_path, report=report)
