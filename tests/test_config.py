import pytest
from pydantic import ValidationError

from thinline.config import AppConfig, EdgeConfig, ThresholdConfig, load_config
from thinline.types import EdgeOperator, ForegroundPolarity, MarkingMethod


def test_defaults():
    cfg = load_config(None)

    assert cfg.foreground is ForegroundPolarity.BLACK
    assert cfg.thinning.method is MarkingMethod.MODIFIED
    assert cfg.thinning.enable
    assert cfg.thinning.max_iterations is None
    assert not cfg.threshold.enable
    assert not cfg.edge.enable


def test_load_yaml_with_short_names(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "foreground: W\n"
        "edge:\n"
        "  enable: true\n"
        "  operator: s\n"
        "  threshold: 0.25\n"
        "thinning:\n"
        "  method: standard\n"
        "  max_iterations: 40\n",
        encoding="utf-8",
    )

    cfg = load_config(path)

    assert cfg.foreground is ForegroundPolarity.WHITE
    assert cfg.edge.operator is EdgeOperator.SOBEL
    assert cfg.edge.threshold == 0.25
    assert cfg.thinning.method is MarkingMethod.STANDARD
    assert cfg.thinning.max_iterations == 40


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == AppConfig()


def test_missing_config_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize("level", [1.5, -0.2, float("nan")])
def test_threshold_level_out_of_range_is_rejected(level):
    with pytest.raises(ValidationError):
        ThresholdConfig(level=level)
    with pytest.raises(ValidationError):
        EdgeConfig(threshold=level)


def test_edge_threshold_may_be_disabled():
    assert EdgeConfig(threshold=None).threshold is None


@pytest.mark.parametrize(
    "raw",
    [
        {"foreground": "grey"},
        {"thinning": {"method": "hilditch"}},
        {"thinning": {"max_iterations": 0}},
        {"edge": {"operator": "canny"}},
    ],
)
def test_invalid_choices_are_rejected(raw):
    with pytest.raises(ValidationError):
        AppConfig.model_validate(raw)
