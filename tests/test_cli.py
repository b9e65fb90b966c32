import numpy as np
import pytest
from typer.testing import CliRunner

cv2 = pytest.importorskip("cv2")

from thinline.cli import app

runner = CliRunner()


def test_run_thresholds_and_thins(tmp_path):
    gray = np.full((5, 12), 255, dtype=np.uint8)
    gray[1:4, 1:11] = 30
    image_path = tmp_path / "bar.png"
    out_path = tmp_path / "out.png"
    cv2.imwrite(str(image_path), gray)

    result = runner.invoke(
        app,
        ["run", "--image", str(image_path), "--out", str(out_path), "--threshold", "0.5", "--method", "s"],
    )

    assert result.exit_code == 0, result.output
    written = cv2.imread(str(out_path), cv2.IMREAD_GRAYSCALE)
    assert int((written == 0).sum()) == 7


def test_run_rejects_out_of_range_threshold(tmp_path):
    image_path = tmp_path / "flat.png"
    cv2.imwrite(str(image_path), np.full((4, 4), 255, dtype=np.uint8))

    result = runner.invoke(app, ["run", "--image", str(image_path), "--threshold", "1.5"])

    assert result.exit_code == 1
    assert not (tmp_path / "flat_thin.png").exists()
