import json

import numpy as np
import pytest

cv2 = pytest.importorskip("cv2")
pytest.importorskip("skimage")

from thinline.config import AppConfig
from thinline.errors import InvalidArgument
from thinline.pipeline import default_output_path, process_image, run_pipeline
from thinline.vision.preprocess import is_binary


def _dark_bar() -> np.ndarray:
    gray = np.full((5, 12), 255, dtype=np.uint8)
    gray[1:4, 1:11] = 30
    return gray


def _threshold_cfg() -> AppConfig:
    cfg = AppConfig()
    cfg.threshold.enable = True
    cfg.threshold.level = 0.5
    return cfg


def test_process_image_thresholds_then_thins():
    prepared, output, report = process_image(_dark_bar(), _threshold_cfg())

    assert is_binary(prepared)
    assert np.array_equal(np.argwhere(output == 0), [[2, c] for c in range(2, 9)])
    assert report["stages"] == ["threshold", "thinning:modified"]
    assert report["thinning"] == {"iterations": 2, "deleted_px": 23, "converged": True, "state": "converged"}
    assert report["components_before"] == 1
    assert report["components_after"] == 1
    assert report["foreground_px"] == 7
    assert report["warnings"] == []


def test_process_image_rejects_gray_input_without_threshold():
    with pytest.raises(InvalidArgument):
        process_image(_dark_bar(), AppConfig())


def test_process_image_reports_non_convergence():
    cfg = _threshold_cfg()
    cfg.thinning.max_iterations = 1

    _, _, report = process_image(_dark_bar(), cfg)

    assert report["thinning"]["state"] == "aborted"
    assert any("max_iterations" in w for w in report["warnings"])


def test_edge_detection_feeds_thinning():
    gray = np.zeros((8, 8), dtype=np.uint8)
    gray[:, 4:] = 255
    cfg = AppConfig(foreground="white")
    cfg.edge.enable = True
    cfg.edge.threshold = 0.5

    prepared, output, report = process_image(gray, cfg)

    assert int((prepared == 255).sum()) == 12
    assert is_binary(output)
    assert report["stages"][0] == "edge_detection:sobel4"
    assert report["thinning"]["converged"]
    assert 0 < report["foreground_px"] < 12


def test_no_thin_returns_preprocessed_image():
    cfg = _threshold_cfg()
    cfg.thinning.enable = False

    prepared, output, report = process_image(_dark_bar(), cfg)

    assert output is prepared
    assert "thinning" not in report
    assert report["foreground_px"] == 30


def test_run_pipeline_writes_output_and_debug_artifacts(tmp_path):
    image_path = tmp_path / "bar.png"
    cv2.imwrite(str(image_path), _dark_bar())
    debug_dir = tmp_path / "debug"

    result = run_pipeline(image_path=image_path, output_path=None, cfg=_threshold_cfg(), debug_dir=debug_dir)

    assert result.output_path == default_output_path(image_path)
    assert result.output_path.name == "bar_thin.png"
    written = cv2.imread(str(result.output_path), cv2.IMREAD_GRAYSCALE)
    assert int((written == 0).sum()) == 7

    for name in ("01_input.png", "02_binary.png", "03_skeleton.png", "04_overlay.png", "report.json"):
        assert (debug_dir / name).exists()
    report = json.loads((debug_dir / "report.json").read_text(encoding="utf-8"))
    assert report["thinning"]["iterations"] == 2
    assert "load" in report["timings"]


def test_run_pipeline_missing_image_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        run_pipeline(tmp_path / "missing.png", tmp_path / "out.png", AppConfig())
