"""Tests for configuration handling and the command-line pipeline."""

import logging

import numpy as np
import pytest

from stripstress.app import compute_and_render, main
from stripstress.config import (
    DEFAULT_LOAD,
    INTERACTIVE_GRID,
    STANDALONE_GRID,
    Config,
    config_from_mapping,
    load_config,
)
from stripstress.logging_config import setup_logging
from stripstress.parameters import GridSpec, LoadParameters
from stripstress.solvers.field import StressField
from stripstress.visualization.colors import RGB
from stripstress.visualization.surface import ImageSurface


class TestPresets:
    def test_defaults(self):
        assert DEFAULT_LOAD == LoadParameters(b=5, q=10)
        assert STANDALONE_GRID.shape == (20000, 20000)
        assert INTERACTIVE_GRID.shape == (1400, 2800)

    def test_config_defaults(self):
        config = Config()
        assert config.load == DEFAULT_LOAD
        assert config.grid == INTERACTIVE_GRID
        assert config.render.graph_distance == 2


class TestConfigFromMapping:
    def test_partial_override(self):
        config = config_from_mapping({"load": {"q": 25}, "grid": {"s": 10}})
        assert config.load == LoadParameters(b=5, q=25)
        assert config.grid == GridSpec(s=10, w=7, h=7)

    def test_render_gradient(self):
        config = config_from_mapping({"render": {"gradient": [[0, 0, 0], [255, 255, 255]]}})
        assert config.render.gradient.low == RGB(0, 0, 0)
        assert config.render.gradient.high == RGB(255, 255, 255)

    def test_unknown_table(self):
        with pytest.raises(ValueError):
            config_from_mapping({"soil": {}})

    def test_unknown_key(self):
        with pytest.raises(ValueError):
            config_from_mapping({"load": {"width": 3}})

    def test_invalid_value(self):
        with pytest.raises(ValueError):
            config_from_mapping({"grid": {"s": 0}})

    @pytest.mark.parametrize(
        "data",
        [
            {"render": 3},
            {"load": [1, 2]},
            {"render": {"font_size": "x"}},
            {"render": {"visibility_threshold": "high"}},
            {"load": {"b": "wide"}},
            {"render": {"gradient": [[0, 0, 0]]}},
            {"render": {"gradient": "red"}},
            {"render": {"gradient": [[0, 0], [255, 255, 255]]}},
        ],
    )
    def test_malformed_tables(self, data):
        with pytest.raises(ValueError):
            config_from_mapping(data)


class TestLoadConfig:
    def test_toml(self, tmp_path):
        path = tmp_path / "chart.toml"
        path.write_text(
            "[load]\nb = 2.0\nq = 100.0\n\n"
            "[grid]\ns = 20\nw = 3\nh = 4\n\n"
            "[render]\ngraph_distance = 4\nvisibility_threshold = 0.1\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.load == LoadParameters(b=2, q=100)
        assert config.grid == GridSpec(s=20, w=3, h=4)
        assert config.render.graph_distance == 4
        assert config.render.visibility_threshold == pytest.approx(0.1)

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[load\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)

    def test_wrong_types_reported_by_main(self, tmp_path):
        path = tmp_path / "types.toml"
        path.write_text('[render]\nfont_size = "x"\n', encoding="utf-8")
        try:
            assert main(["--config", str(path), "-s", "5", "-w", "1", "--height", "1"]) == 2
        finally:
            logging.getLogger("stripstress").handlers.clear()


class TestComputeAndRender:
    def test_returns_field_and_surface(self):
        field, surface = compute_and_render(LoadParameters(b=5, q=10), GridSpec(s=5, w=1, h=1))
        assert isinstance(field, StressField)
        assert isinstance(surface, ImageSurface)
        assert (surface.width, surface.height) == (800, 800)
        assert np.any(surface.pixels != 255)

    def test_recomputes_on_each_call(self):
        grid = GridSpec(s=5, w=1, h=1)
        f1, _ = compute_and_render(LoadParameters(b=5, q=10), grid)
        f2, _ = compute_and_render(LoadParameters(b=5, q=20), grid)
        np.testing.assert_allclose(f2.values, 2.0 * f1.values)


class TestMain:
    ARGS = ["--b", "5", "--q", "10", "-s", "5", "-w", "1", "--height", "1", "--canvas", "200x150"]

    def teardown_method(self):
        logging.getLogger("stripstress").handlers.clear()

    def test_writes_outputs(self, tmp_path, capsys):
        pytest.importorskip("matplotlib")
        png = tmp_path / "chart.png"
        csv = tmp_path / "field.csv"
        assert main(self.ARGS + ["-o", str(png), "--csv", str(csv)]) == 0
        assert png.exists()
        assert len(csv.read_text().splitlines()) == 51
        assert "StressField(shape=(5, 10)" in capsys.readouterr().out

    def test_unwritable_chart(self, tmp_path):
        pytest.importorskip("matplotlib")
        csv = tmp_path / "field.csv"
        png = tmp_path / "missing" / "chart.png"
        assert main(self.ARGS + ["--csv", str(csv), "-o", str(png)]) == 2
        assert not png.exists()
        assert not csv.exists()

    def test_unwritable_csv(self, tmp_path):
        png = tmp_path / "chart.png"
        csv = tmp_path / "missing" / "field.csv"
        assert main(self.ARGS + ["--csv", str(csv), "-o", str(png)]) == 2
        assert not png.exists()

    def test_invalid_load(self):
        assert main(["--b", "-1", "-s", "5", "-w", "1", "--height", "1"]) == 2

    def test_bad_canvas(self):
        with pytest.raises(SystemExit):
            main(["--canvas", "wide"])


class TestLogging:
    def test_setup_is_idempotent(self, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging(logging.DEBUG, log_file=str(log_file))
        setup_logging(logging.DEBUG, log_file=str(log_file))
        logger = logging.getLogger("stripstress")
        assert len(logger.handlers) == 2
        logger.debug("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

    def test_returns_package_logger(self):
        logger = setup_logging(logging.WARNING)
        try:
            assert logger is logging.getLogger("stripstress")
            assert logger.level == logging.WARNING
            (handler,) = logger.handlers
            assert handler.level == logging.WARNING
            assert handler.formatter.datefmt == "%H:%M:%S"
        finally:
            logger.handlers.clear()
