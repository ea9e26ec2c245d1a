import random

import pytest

from noguess.errors import ConfigurationError, InvariantViolation
from noguess.sampler import exclusion_zone, sample_mine_positions


def test_unconstrained_layout_has_exact_count_in_bounds():
    rng = random.Random(1)
    for _ in range(50):
        mines = sample_mine_positions(6, 7, 12, rng=rng)
        assert len(mines) == 12
        assert all(0 <= x < 6 and 0 <= y < 7 for x, y in mines)


def test_anchor_neighborhood_stays_clear():
    rng = random.Random(3)
    zone = {(x, y) for x in (1, 2, 3) for y in (1, 2, 3)}
    for _ in range(200):
        mines = sample_mine_positions(5, 5, 5, anchor=(2, 2), rng=rng)
        assert len(mines) == 5
        assert not mines & zone


def test_tightest_layout_that_keeps_full_zone():
    # 25 - 9 = 16 mines fill every cell outside the 3x3.
    mines = sample_mine_positions(5, 5, 16, anchor=(2, 2), rng=random.Random(0))
    assert len(mines) == 16
    assert not mines & exclusion_zone(5, 5, 16, (2, 2))


def test_dense_board_only_protects_anchor():
    assert exclusion_zone(5, 5, 17, (2, 2)) == frozenset({(2, 2)})
    rng = random.Random(5)
    for _ in range(20):
        mines = sample_mine_positions(5, 5, 24, anchor=(2, 2), rng=rng)
        assert len(mines) == 24
        assert (2, 2) not in mines


def test_corner_anchor_zone_is_clipped():
    assert exclusion_zone(4, 4, 3, (0, 0)) == frozenset({(0, 0), (0, 1), (1, 0), (1, 1)})


def test_mine_count_must_leave_a_safe_cell():
    with pytest.raises(ConfigurationError):
        sample_mine_positions(3, 3, 9)
    with pytest.raises(ConfigurationError):
        sample_mine_positions(3, 3, -1)
    with pytest.raises(ConfigurationError):
        sample_mine_positions(0, 3, 1)


def test_anchor_outside_board_is_rejected():
    with pytest.raises(InvariantViolation):
        sample_mine_positions(3, 3, 1, anchor=(5, 5))


def test_same_seed_same_layout():
    a = sample_mine_positions(9, 9, 10, rng=random.Random(42))
    b = sample_mine_positions(9, 9, 10, rng=random.Random(42))
    assert a == b
