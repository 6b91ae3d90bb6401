# tests/test_curvature.py
"""Test windowed curvature and bending profiles."""

import numpy as np
import pytest

from curvedna.core.sequence import NORMAL_BRACKET, SequencePath
from curvedna.utils.step_params import default_step_table

WEDGE = 0.02


@pytest.fixture
def planar_arc(uniform_table):
    """Zero twist with a constant wedge: every step turns the axis by WEDGE about x."""
    table = uniform_table(rise=3.4, twist=0.0, wedge=WEDGE, direction=np.pi / 2)
    return SequencePath.from_string("A" * 41, table, name="arc")


def _unset(values):
    return [i for i, v in enumerate(values) if v is None]


def test_short_sequence_is_noop(straight_table):
    path = SequencePath.from_string("ACGTAC", straight_table)  # 5 steps

    path.compute_curvature(3)
    path.compute_bending(3)

    assert all(s.curvature is None for s in path.steps)
    assert all(s.avg_normal is None for s in path.steps)
    assert all(s.bending is None for s in path.steps)


def test_acgt_guard(straight_table):
    path = SequencePath.from_string("ACGT", straight_table)

    for bracket in (2, 3, 10):
        path.compute_curvature(bracket)
        path.compute_bending(bracket)

    assert path.curvature_profile() == []
    assert path.bending_profile() == []


def test_guard_passes_but_window_is_empty(straight_table):
    """n == 2 * bracket leaves nothing in range and must not fail."""
    path = SequencePath.from_string("A" * 7, straight_table)  # 6 steps

    path.compute_curvature(3)
    path.compute_bending(3)

    assert path.curvature_profile() == []
    assert path.bending_profile() == []


def test_curvature_unset_boundaries(random_table):
    path = SequencePath.from_string("ACGTTGCAAGCTTCGATCGG" * 2, random_table)
    n = len(path.steps)
    bracket = 3

    path.compute_curvature(bracket)

    reach = bracket + NORMAL_BRACKET
    unset = _unset([s.curvature for s in path.steps])
    assert unset == list(range(0, reach)) + list(range(n - reach, n))

    avg_unset = _unset([s.avg_normal for s in path.steps])
    assert avg_unset == list(range(0, NORMAL_BRACKET)) + list(range(n - NORMAL_BRACKET, n))


def test_bending_unset_boundaries(random_table):
    path = SequencePath.from_string("ACGTTGCAAGCTTCGATCGG" * 2, random_table)
    n = len(path.steps)
    bracket = 4

    path.compute_bending(bracket)

    unset = _unset([s.bending for s in path.steps])
    assert unset == list(range(0, bracket)) + list(range(n - bracket, n))
    # bending never touches the curvature fields
    assert all(s.curvature is None for s in path.steps)


def test_straight_path_has_zero_angles(straight_table):
    path = SequencePath.from_string("A" * 40, straight_table)

    path.compute_curvature(5)
    path.compute_bending(5)

    assert path.curvature_profile()
    assert np.allclose([v for _, v in path.curvature_profile()], 0.0, atol=1e-6)
    assert np.allclose([v for _, v in path.bending_profile()], 0.0, atol=1e-6)


def test_bending_of_planar_arc(planar_arc):
    bracket = 4
    planar_arc.compute_bending(bracket)

    values = [v for _, v in planar_arc.bending_profile()]
    assert len(values) == len(planar_arc.steps) - 2 * bracket
    assert np.allclose(values, 2 * bracket * WEDGE)


def test_curvature_of_planar_arc_uses_fixed_denominator(planar_arc):
    """Averaged normals are not renormalised, so their length enters the angle."""
    bracket = 4
    planar_arc.compute_curvature(bracket)

    offsets = np.arange(-NORMAL_BRACKET, NORMAL_BRACKET + 1)
    weights = np.where(np.abs(offsets) == NORMAL_BRACKET, 0.5, 1.0)
    shrink = np.sum(weights * np.cos(offsets * WEDGE)) / (2 * NORMAL_BRACKET)
    expected = np.arccos(shrink**2 * np.cos(2 * bracket * WEDGE))

    values = [v for _, v in planar_arc.curvature_profile()]
    assert values
    assert np.allclose(values, expected)

    mid = planar_arc.steps[len(planar_arc.steps) // 2]
    assert np.isclose(np.linalg.norm(mid.avg_normal), shrink)


def test_angles_within_range():
    path = SequencePath.from_string("AAAAAACGCGTTTTTTGGGCCCATAT" * 5, default_step_table())

    path.compute_curvature(5)
    path.compute_bending(5)

    values = [v for _, v in path.curvature_profile() + path.bending_profile()]
    assert values
    assert all(0.0 <= v <= np.pi for v in values)


def test_a_tracts_bend_more_than_mixed_sequence():
    """Phased A-tracts accumulate wedge into a visible bend."""
    table = default_step_table()
    phased = SequencePath.from_string("GCAAAAAATGCAAAAAATGC" * 4, table)
    mixed = SequencePath.from_string("GCATGCATGCATGCATGCAT" * 4, table)

    for path in (phased, mixed):
        path.compute_curvature(5)

    assert max(v for _, v in phased.curvature_profile()) > max(v for _, v in mixed.curvature_profile())


def test_passes_are_idempotent(random_table):
    path = SequencePath.from_string("GATTACACGTTGCAAG" * 3, random_table)

    path.compute_curvature(4)
    path.compute_bending(4)
    first = (path.curvature_profile(), path.bending_profile())

    path.compute_curvature(4)
    path.compute_bending(4)
    assert (path.curvature_profile(), path.bending_profile()) == first


def test_rerun_with_new_bracket_replaces_values(random_table):
    path = SequencePath.from_string("GATTACACGTTGCAAG" * 3, random_table)
    n = len(path.steps)

    path.compute_bending(2)
    path.compute_bending(6)

    assert [i for i, _ in path.bending_profile()] == list(range(6, n - 6))


def test_curvature_and_bending_independent(random_table):
    a = SequencePath.from_string("GATTACACGTTGCAAG" * 3, random_table)
    b = SequencePath.from_string("GATTACACGTTGCAAG" * 3, random_table)

    a.compute_curvature(3)
    a.compute_bending(3)
    b.compute_bending(3)
    b.compute_curvature(3)

    assert a.curvature_profile() == b.curvature_profile()
    assert a.bending_profile() == b.bending_profile()


@pytest.mark.parametrize("bracket", [0, -1, 2.5, True])
def test_invalid_bracket(straight_table, bracket):
    path = SequencePath.from_string("A" * 30, straight_table)

    with pytest.raises(ValueError):
        path.compute_curvature(bracket)
    with pytest.raises(ValueError):
        path.compute_bending(bracket)
