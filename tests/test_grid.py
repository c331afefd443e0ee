"""Tests for cost-grid seeding and quantization (tinysdf.grid)."""

import numpy as np
import numpy.testing as npt
import pytest

from tinysdf import INF, build_cost_grids, quantize_sdf


def _grids(width: int, height: int, capacity: int = 0):
    n = max(capacity, width * height)
    return np.full(n, -1.0), np.full(n, -1.0)


# ===========================================================================
# build_cost_grids
# ===========================================================================

class TestBuildCostGrids:
    def test_outside_rect(self):
        outer, inner = _grids(6, 6)
        o, i = build_cost_grids(np.ones((2, 2)), 6, 6, outer, inner)
        assert o[0, 0] == INF
        assert i[0, 0] == 0.0
        assert o[5, 5] == INF
        assert i[5, 5] == 0.0

    def test_centred_with_floor_offset(self):
        # (7 - 2) // 2 == 2 on both axes
        outer, inner = _grids(7, 7)
        o, i = build_cost_grids(np.ones((2, 2)), 7, 7, outer, inner)
        npt.assert_array_equal(np.argwhere(o == 0.0), [[2, 2], [2, 3], [3, 2], [3, 3]])
        npt.assert_array_equal(np.argwhere(i == INF), [[2, 2], [2, 3], [3, 2], [3, 3]])

    def test_full_and_empty_coverage(self):
        outer, inner = _grids(4, 3)
        alpha = np.array([[1.0, 0.0]])
        o, i = build_cost_grids(alpha, 4, 3, outer, inner)
        # offset (4 - 2) // 2 == 1
        assert o[1, 1] == 0.0 and i[1, 1] == INF
        assert o[1, 2] == INF and i[1, 2] == 0.0

    def test_partial_coverage(self):
        outer, inner = _grids(5, 5)
        alpha = np.array([[0.25, 0.5, 0.75]])
        o, i = build_cost_grids(alpha, 5, 5, outer, inner)
        # offset (5 - 3) // 2 == 1
        npt.assert_allclose(o[1, 1:4], [0.0625, 0.0, 0.0])
        npt.assert_allclose(i[1, 1:4], [0.0, 0.0, 0.0625])

    def test_returns_views_into_flat_grids(self):
        outer, inner = _grids(4, 4)
        o, i = build_cost_grids(np.ones((2, 2)), 4, 4, outer, inner)
        assert o.shape == (4, 4)
        assert np.shares_memory(o, outer)
        assert np.shares_memory(i, inner)

    def test_leaves_tail_of_grid_alone(self):
        outer, inner = _grids(3, 3, capacity=16)
        build_cost_grids(np.ones((1, 1)), 3, 3, outer, inner)
        npt.assert_array_equal(outer[9:], -1.0)
        npt.assert_array_equal(inner[9:], -1.0)

    def test_overwrites_previous_glyph(self):
        outer, inner = _grids(6, 6)
        build_cost_grids(np.ones((4, 4)), 6, 6, outer, inner)
        o, i = build_cost_grids(np.zeros((2, 2)), 6, 6, outer, inner)
        npt.assert_array_equal(o, INF)
        npt.assert_array_equal(i, 0.0)


# ===========================================================================
# quantize_sdf
# ===========================================================================

class TestQuantizeSdf:
    def test_zero_distance_hits_cutoff_level(self):
        z = np.zeros((2, 2))
        npt.assert_array_equal(quantize_sdf(z, z, 8, 0.25), 191)

    def test_saturates_inside_and_outside(self):
        far = np.full(1, 1e4)
        zero = np.zeros(1)
        assert quantize_sdf(zero, far, 8, 0.25)[0] == 255
        assert quantize_sdf(far, zero, 8, 0.25)[0] == 0

    def test_rounds_half_up(self):
        # d == 0.5, radius 1: 255 - 127.5 == 127.5 -> 128
        out = quantize_sdf(np.array([0.25]), np.array([0.0]), 1, 0.0)
        assert out[0] == 128
        # d == -0.5, cutoff 0.5: 255 - 255 * 0 == 255
        out = quantize_sdf(np.array([0.0]), np.array([0.25]), 1, 0.5)
        assert out[0] == 255

    def test_one_radius_outside(self):
        # d == radius -> 255 - 255 * (1 + 0) == 0
        out = quantize_sdf(np.array([64.0]), np.array([0.0]), 8, 0.0)
        assert out[0] == 0

    def test_dtype_and_shape(self):
        out = quantize_sdf(np.zeros((3, 5)), np.ones((3, 5)), 8, 0.25)
        assert out.dtype == np.uint8
        assert out.shape == (3, 5)

    @pytest.mark.parametrize("cutoff", [0.0, 0.25, 0.5, 0.75])
    def test_cutoff_shifts_edge(self, cutoff):
        z = np.zeros(1)
        expected = np.floor(255 * (1 - cutoff) + 0.5)
        assert quantize_sdf(z, z, 8, cutoff)[0] == expected
