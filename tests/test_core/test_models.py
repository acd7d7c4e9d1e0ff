"""Tests for hcvcoloc.core.models."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import numpy as np
import pytest

from hcvcoloc.core.models import (
    STATISTICS_COLUMNS,
    BinaryMask,
    Channel,
    ColocalizationResult,
    ObjectPopulation,
    PopulationSummary,
    SampleStatistics,
    VoxelVolume,
    default_channels,
)


class TestChannel:
    def test_default_layout(self):
        channels = default_channels()
        assert list(channels) == ["ER", "Core", "LDs", "Nucleus"]
        assert [ch.index for ch in channels.values()] == [1, 2, 3, 4]
        assert channels["Core"].color == 65535

    def test_fresh_channels_per_call(self):
        assert default_channels() is not default_channels()

    def test_frozen(self):
        ch = Channel(index=1, name="ER")
        with pytest.raises(FrozenInstanceError):
            ch.threshold = 5.0

    def test_in_range(self):
        assert Channel(1, "ER", threshold=20.0, max=200.0).in_range
        assert not Channel(1, "ER", threshold=250.0, max=200.0).in_range


class TestVoxelVolume:
    def test_unit_voxels_by_default(self):
        vol = VoxelVolume(np.zeros((2, 3, 4)))
        assert vol.extent_max == (2.0, 3.0, 4.0)
        assert vol.voxel_size == (1.0, 1.0, 1.0)
        assert vol.voxel_volume == 1.0

    def test_physical_extent(self):
        vol = VoxelVolume(
            np.zeros((2, 4, 4)), extent_min=(0, 0, 0), extent_max=(1.0, 2.0, 2.0),
        )
        assert vol.voxel_size == (0.5, 0.5, 0.5)
        assert vol.voxel_volume == pytest.approx(0.125)

    def test_rejects_non_3d(self):
        with pytest.raises(ValueError, match="3D"):
            VoxelVolume(np.zeros((4, 4)))

    def test_samples_flattened(self):
        vol = VoxelVolume(np.arange(8).reshape(2, 2, 2))
        np.testing.assert_array_equal(vol.samples(), np.arange(8))


class TestBinaryMask:
    def test_counts_and_volume(self):
        data = np.zeros((4, 4, 4), dtype=np.uint8)
        data[0] = 1
        mask = BinaryMask(data, extent_max=(2.0, 2.0, 2.0))
        assert mask.voxel_count == 16
        assert mask.volume == pytest.approx(16 * 0.125)

    def test_rejects_non_binary(self):
        with pytest.raises(ValueError, match="0 or 1"):
            BinaryMask(np.full((2, 2, 2), 2))

    def test_bool_input(self):
        mask = BinaryMask(np.ones((2, 2, 2), dtype=bool))
        assert mask.data.dtype == np.uint8
        assert mask.voxel_count == 8

    def test_same_grid(self):
        a = BinaryMask(np.zeros((4, 4, 4)))
        b = BinaryMask(np.ones((4, 4, 4)))
        c = BinaryMask(np.zeros((4, 4, 4)), extent_max=(8.0, 8.0, 8.0))
        assert a.same_grid(b)
        assert not a.same_grid(c)


class TestColocalizationResult:
    def test_row_matches_columns(self):
        channels = default_channels()
        result = ColocalizationResult(
            group="g1",
            sample_id="s1",
            coefficients={("Core", "ER"): 0.5, ("Core", "LDs"): 0.25},
            channels={name: channels[name] for name in ("LDs", "Core", "ER")},
        )
        columns = result.columns()
        row = result.as_row()
        assert len(columns) == len(row)
        assert columns[:4] == ["Group", "Sample", "Core/ER", "Core/LDs"]
        # Channel context is ordered by channel index.
        assert columns[4:] == [
            "ER max", "ER thr", "Core max", "Core thr", "LDs max", "LDs thr",
        ]
        assert row[:4] == ["g1", "s1", 0.5, 0.25]

    def test_mappings_read_only(self):
        coefficients = {("Core", "ER"): 0.5}
        channels = {"Core": Channel(2, "Core"), "ER": Channel(1, "ER")}
        result = ColocalizationResult("g1", "s1", coefficients, channels)
        with pytest.raises(TypeError):
            result.coefficients[("Core", "ER")] = 0.9
        with pytest.raises(TypeError):
            result.channels["LDs"] = Channel(3, "LDs")

    def test_detached_from_caller_dicts(self):
        coefficients = {("Core", "ER"): 0.5}
        result = ColocalizationResult("g1", "s1", coefficients, {})
        coefficients[("Core", "ER")] = 0.9
        coefficients[("Core", "LDs")] = 0.1
        assert dict(result.coefficients) == {("Core", "ER"): 0.5}


class TestObjectPopulation:
    def test_coerces_arrays(self):
        pop = ObjectPopulation("LDs", [1, 2, 3], sphericities=[[0.9, 0.8, 0.7]])
        assert pop.volumes.dtype == np.float64
        assert pop.sphericities.shape == (3,)
        assert len(pop) == 3

    def test_empty(self):
        assert len(ObjectPopulation("ER", [])) == 0

    def test_sphericity_count_must_match(self):
        with pytest.raises(ValueError, match="2 sphericities for 3 volumes"):
            ObjectPopulation("LDs", [1.0, 2.0, 3.0], sphericities=[0.9, 0.8])


class TestSampleStatistics:
    def test_row_order(self):
        s = PopulationSummary(count=5, min=1, max=5, median=3, sum=15, mean=3, std=1.5)
        sph = PopulationSummary(count=5, min=0.5, max=0.9, median=0.7, sum=3.5, mean=0.7, std=0.1)
        er = PopulationSummary(count=1, min=10, max=10, median=10, sum=10, mean=10, std=0.0)
        stats = SampleStatistics(
            group="g", sample_id="s", ld_volume=s, ld_sphericity=sph,
            er_volume=er, core_volume=er, nucleus_volume=er,
            coloc_core_ld_volume=2.0, coloc_core_er_volume=4.0,
        )
        row = stats.as_row()
        assert len(row) == len(STATISTICS_COLUMNS)
        assert row[:8] == ["g", "s", 5, 1, 5, 3, 15, 1.5]
        assert row[8:10] == [0.7, 0.1]
        assert row[-2:] == [2.0, 4.0]
