import logging
import random

import pytest

import noguess.generator as generator_module
from noguess.board import Board
from noguess.errors import ConfigurationError, GenerationExhausted, InvariantViolation
from noguess.generator import (
    BoardGenerator,
    ExhaustionPolicy,
    GenerationConfig,
    GenerationStrategy,
    find_zero_cell,
    generate_board,
)
from noguess.solver import is_solvable


def test_config_coerces_strings_to_enums():
    cfg = GenerationConfig(5, 5, 3, strategy="deferred_safe_start", on_exhaustion="fail")
    assert cfg.strategy is GenerationStrategy.DEFERRED_SAFE_START
    assert cfg.on_exhaustion is ExhaustionPolicy.FAIL
    assert cfg.total_cells == 25


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(rows=3, cols=3, mine_count=9),
        dict(rows=3, cols=3, mine_count=10),
        dict(rows=0, cols=3, mine_count=0),
        dict(rows=3, cols=-1, mine_count=0),
        dict(rows=3, cols=3, mine_count=-1),
        dict(rows=3, cols=3, mine_count=1, attempt_cap=0),
        dict(rows=3, cols=3, mine_count=1, strategy="random"),
        dict(rows=3, cols=3, mine_count=1, on_exhaustion="retry"),
    ],
)
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        GenerationConfig(**kwargs)


def test_mine_count_equal_to_cells_rejected_before_sampling(monkeypatch):
    calls = []
    monkeypatch.setattr(
        generator_module, "sample_mine_positions", lambda *a, **k: calls.append(a)
    )
    with pytest.raises(ConfigurationError):
        BoardGenerator(GenerationConfig(4, 4, 16)).generate()
    assert calls == []


def test_find_zero_cell_scans_row_major():
    assert find_zero_cell(Board.from_layout(3, 3, [(2, 2)])) == (0, 0)
    assert find_zero_cell(Board.from_layout(3, 3, [(0, 0)])) == (0, 2)


def test_no_zero_cell_skips_verifier(monkeypatch):
    layout = frozenset({(0, 1), (1, 0)})
    assert find_zero_cell(Board.from_layout(2, 2, layout)) is None

    verifier_calls = []
    monkeypatch.setattr(generator_module, "sample_mine_positions", lambda *a, **k: layout)
    monkeypatch.setattr(
        generator_module, "is_solvable", lambda *a: verifier_calls.append(a) or True
    )

    result = BoardGenerator(GenerationConfig(2, 2, 2, attempt_cap=3)).generate()
    assert verifier_calls == []
    assert not result.verified
    assert result.attempts == 3
    assert result.skipped_attempts == 3
    assert result.start_cell is None
    assert result.board.mine_positions() == layout


def test_sparse_board_is_verified_with_seed():
    result = BoardGenerator(GenerationConfig(9, 9, 10, seed=1234)).generate()
    assert result.verified
    assert not result.exhausted
    assert 1 <= result.attempts <= 500
    assert result.start_cell is not None
    assert result.board.mine_count == 10
    assert is_solvable(result.board, result.start_cell)


def test_same_seed_same_board():
    a = generate_board(GenerationConfig(9, 9, 10, seed=99))
    b = generate_board(GenerationConfig(9, 9, 10, seed=99))
    assert a.board.mine_positions() == b.board.mine_positions()
    assert a.attempts == b.attempts


def test_first_verified_layout_is_accepted(monkeypatch):
    layouts = iter([frozenset({(1, 1)}), frozenset({(2, 2)})])
    monkeypatch.setattr(
        generator_module, "sample_mine_positions", lambda *a, **k: next(layouts)
    )
    result = BoardGenerator(GenerationConfig(3, 3, 1)).generate()
    assert result.verified
    assert result.attempts == 2
    assert result.skipped_attempts == 1
    assert result.start_cell == (0, 0)
    assert result.board.mine_positions() == frozenset({(2, 2)})


def test_exhaustion_degrades_to_last_layout(monkeypatch, caplog):
    layouts = iter(
        [
            frozenset({(0, 0), (0, 2)}),
            frozenset({(3, 3), (0, 2)}),
            frozenset({(0, 0), (0, 2)}),
            frozenset({(3, 3), (1, 1)}),
        ]
    )
    monkeypatch.setattr(
        generator_module, "sample_mine_positions", lambda *a, **k: next(layouts)
    )
    monkeypatch.setattr(generator_module, "is_solvable", lambda *a: False)

    with caplog.at_level(logging.WARNING, logger="noguess.generator"):
        result = BoardGenerator(GenerationConfig(4, 4, 2, attempt_cap=4)).generate()

    assert not result.verified
    assert result.exhausted
    assert result.attempts == 4
    assert result.rejected_attempts == 4
    assert result.board.mine_positions() == frozenset({(3, 3), (1, 1)})
    assert "unverified layout" in caplog.text


def test_exhaustion_can_fail_hard(monkeypatch):
    monkeypatch.setattr(generator_module, "is_solvable", lambda *a: False)
    cfg = GenerationConfig(5, 5, 3, attempt_cap=2, on_exhaustion="fail", seed=1)
    with pytest.raises(GenerationExhausted) as excinfo:
        BoardGenerator(cfg).generate()
    assert excinfo.value.attempts == 2


def test_deferred_board_waits_for_first_move():
    gen = BoardGenerator(
        GenerationConfig(5, 5, 5, strategy="deferred_safe_start"), rng=random.Random(8)
    )
    result = gen.generate()
    assert not result.verified
    assert not result.exhausted
    assert result.attempts == 0
    assert not result.board.mines_placed
    assert result.board.mine_count == 5

    outcome = result.board.reveal(2, 2)
    assert not outcome.hit_mine
    assert result.board.mines_placed
    assert result.board.mine_count == 5
    assert (2, 2) in outcome.opened


def test_deferred_never_mines_first_move_neighborhood():
    zone = {(x, y) for x in (1, 2, 3) for y in (1, 2, 3)}
    for seed in range(100):
        gen = BoardGenerator(
            GenerationConfig(5, 5, 5, strategy="deferred_safe_start", seed=seed)
        )
        board = gen.generate().board
        gen.on_first_move((2, 2))
        assert not board.mine_positions() & zone


def test_deferred_dense_board_keeps_first_move_safe():
    for seed in range(20):
        gen = BoardGenerator(
            GenerationConfig(5, 5, 20, strategy="deferred_safe_start", seed=seed)
        )
        board = gen.generate().board
        assert not board.reveal(2, 2).hit_mine


def test_session_first_move_then_reveal():
    gen = BoardGenerator(
        GenerationConfig(5, 5, 5, strategy="deferred_safe_start", seed=4)
    )
    board = gen.generate().board
    gen.on_first_move((2, 2))
    layout = board.mine_positions()

    outcome = board.reveal(2, 2)
    assert not outcome.hit_mine
    assert (2, 2) in outcome.opened
    assert board.mine_positions() == layout


def test_each_deferred_board_gets_its_own_mines():
    gen = BoardGenerator(
        GenerationConfig(5, 5, 5, strategy="deferred_safe_start", seed=6)
    )
    first = gen.generate().board
    second = gen.generate().board

    assert not first.reveal(0, 0).hit_mine
    assert first.mines_placed
    assert not second.mines_placed

    assert not second.reveal(4, 4).hit_mine
    assert second.mine_count == 5


def test_rejected_first_move_can_be_retried():
    gen = BoardGenerator(GenerationConfig(5, 5, 5, strategy="deferred_safe_start"))
    board = gen.generate().board
    with pytest.raises(InvariantViolation):
        gen.on_first_move((9, 9))
    assert not board.mines_placed

    gen.on_first_move((2, 2))
    assert board.mine_count == 5


def test_first_move_handled_only_once():
    gen = BoardGenerator(GenerationConfig(5, 5, 5, strategy="deferred_safe_start"))
    gen.generate()
    gen.on_first_move((0, 0))
    with pytest.raises(InvariantViolation):
        gen.on_first_move((1, 1))


def test_first_move_hook_rejected_for_eager_strategy():
    gen = BoardGenerator(GenerationConfig(9, 9, 10, seed=3))
    with pytest.raises(InvariantViolation):
        gen.on_first_move((0, 0))


def test_first_move_before_generate_rejected():
    gen = BoardGenerator(GenerationConfig(5, 5, 5, strategy="deferred_safe_start"))
    with pytest.raises(InvariantViolation):
        gen.on_first_move((0, 0))
