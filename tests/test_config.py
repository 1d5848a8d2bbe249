import logging

import pytest

from tablayeso.config import DEFAULT_NORMS_PATH, EstimatorConfig


def test_defaults():
    config = EstimatorConfig()
    assert config.panel_coverage_m2 == pytest.approx(2.98)
    assert config.small_area_threshold_m2 == pytest.approx(1.5)
    assert config.track_stock_length_m == pytest.approx(3.05)
    assert config.channel_stock_length_m == pytest.approx(3.66)
    assert config.angle_stock_length_m == pytest.approx(2.44)
    assert config.default_post_spacing_m == pytest.approx(0.40)
    assert config.default_plenum_m == pytest.approx(0.50)


def test_shipped_norms_file_matches_defaults():
    assert DEFAULT_NORMS_PATH.exists()
    assert EstimatorConfig.load() == EstimatorConfig()


def test_load_overrides_from_yaml(tmp_path):
    path = tmp_path / "norms.yaml"
    path.write_text("norms:\n  panel_coverage_m2: 2.5\n  screws_per_panel: 30\n")

    config = EstimatorConfig.load(path)

    assert config.panel_coverage_m2 == pytest.approx(2.5)
    assert config.screws_per_panel == 30
    assert config.track_stock_length_m == pytest.approx(3.05)


def test_load_accepts_top_level_mapping(tmp_path):
    path = tmp_path / "norms.yaml"
    path.write_text("compound_coverage_m2: 20\n")

    assert EstimatorConfig.load(path).compound_coverage_m2 == 20


def test_missing_file_uses_defaults(tmp_path):
    assert EstimatorConfig.load(tmp_path / "missing.yaml") == EstimatorConfig()


def test_unreadable_yaml_warns_and_uses_defaults(tmp_path, caplog):
    path = tmp_path / "norms.yaml"
    path.write_text("norms: [unclosed\n")

    with caplog.at_level(logging.WARNING, logger="tablayeso.config"):
        config = EstimatorConfig.load(path)

    assert config == EstimatorConfig()
    assert "Could not load norms" in caplog.text


def test_unknown_keys_are_ignored(caplog):
    with caplog.at_level(logging.WARNING, logger="tablayeso.config"):
        config = EstimatorConfig.from_dict({"board_colour": "white", "nails_per_angle": 6})

    assert config.nails_per_angle == 6
    assert "board_colour" in caplog.text


def test_to_dict_round_trips_through_from_dict():
    config = EstimatorConfig(furring_spacing_m=0.6)
    assert EstimatorConfig.from_dict(config.to_dict()) == config
