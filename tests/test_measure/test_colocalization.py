"""Tests for hcvcoloc.measure.colocalization."""

from __future__ import annotations

import numpy as np
import pytest

from hcvcoloc.core.exceptions import EmptyInputError, ShapeMismatchError
from hcvcoloc.core.models import Channel, VoxelVolume, default_channels
from hcvcoloc.measure.colocalization import ColocalizationAnalyzer, colocalized_fraction


class TestColocalizedFraction:
    def test_fraction_of_signal(self):
        a = np.array([0.0, 10.0, 20.0, 30.0])
        b = np.array([0.0, 0.0, 50.0, 50.0])
        assert colocalized_fraction(a, b, 5.0, 10.0) == pytest.approx(50.0 / 60.0)

    def test_full_overlap(self):
        a = np.arange(1.0, 9.0).reshape(2, 2, 2)
        assert colocalized_fraction(a, a, 0.0, 0.0) == 1.0

    def test_no_overlap(self):
        a = np.array([100.0, 0.0])
        b = np.array([0.0, 100.0])
        assert colocalized_fraction(a, b, 10.0, 10.0) == 0.0

    def test_order_matters(self):
        a = np.array([10.0, 10.0, 0.0])
        b = np.array([10.0, 0.0, 10.0])
        assert colocalized_fraction(a, b, 1.0, 1.0) == pytest.approx(0.5)
        assert colocalized_fraction(b, a, 1.0, 1.0) == pytest.approx(0.5)
        b = np.array([30.0, 0.0, 10.0])
        assert colocalized_fraction(b, a, 1.0, 1.0) == pytest.approx(0.75)

    def test_threshold_is_exclusive(self):
        a = np.array([10.0, 20.0])
        b = np.array([10.0, 10.0])
        with pytest.raises(EmptyInputError):
            colocalized_fraction(a, b, 20.0, 0.0)
        assert colocalized_fraction(a, b, 10.0, 10.0) == 0.0

    def test_shape_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            colocalized_fraction(np.ones((2, 2)), np.ones((2, 3)), 0.0, 0.0)

    def test_empty(self):
        with pytest.raises(EmptyInputError):
            colocalized_fraction(np.array([]), np.array([]), 0.0, 0.0)


class TestColocalizationAnalyzer:
    def test_default_pairs(self):
        assert ColocalizationAnalyzer().pairs == [("Core", "ER"), ("Core", "LDs")]

    def test_analyze(self):
        base = default_channels()
        channels = {
            "Core": Channel(2, "Core", threshold=5.0, max=30.0),
            "ER": Channel(1, "ER", threshold=10.0, max=50.0),
            "LDs": Channel(3, "LDs", threshold=0.0, max=1.0),
            "Nucleus": base["Nucleus"],
        }
        shape = (1, 1, 4)
        volumes = {
            "Core": VoxelVolume(np.array([0.0, 10.0, 20.0, 30.0]).reshape(shape)),
            "ER": VoxelVolume(np.array([0.0, 0.0, 50.0, 50.0]).reshape(shape)),
            "LDs": VoxelVolume(np.array([1.0, 1.0, 1.0, 1.0]).reshape(shape)),
            "Nucleus": VoxelVolume(np.zeros(shape)),
        }
        result = ColocalizationAnalyzer().analyze(
            channels, volumes, group="control", sample_id="cell_01",
        )
        assert result.coefficients[("Core", "ER")] == pytest.approx(50.0 / 60.0)
        assert result.coefficients[("Core", "LDs")] == 1.0
        assert set(result.channels) == {"Core", "ER", "LDs"}
        assert result.channels["ER"].threshold == 10.0
        assert (result.group, result.sample_id) == ("control", "cell_01")

    def test_unknown_channel(self, hcv_volumes):
        analyzer = ColocalizationAnalyzer([("Core", "Golgi")])
        with pytest.raises(KeyError, match="Golgi"):
            analyzer.analyze(default_channels(), hcv_volumes)

    def test_no_pairs(self):
        with pytest.raises(ValueError):
            ColocalizationAnalyzer([])
