import numpy as np
import pytest

from palette_opt.colour_convert import make_colour
from palette_opt.core_types import Move
from palette_opt.moves import apply_move, neighbour_moves, random_move

from conftest import colours


def test_mid_range_palette_has_thirty_moves():
    grey = colours(*[(128, 128, 128)] * 5)
    moves = neighbour_moves(grey, 10)
    assert len(moves) == 30
    assert {m.delta for m in moves} == {10, -10}


def test_moves_respect_channel_bounds():
    edge = colours((255, 0, 128), (0, 0, 0), (255, 255, 255), (1, 254, 9), (9, 9, 9))
    moves = neighbour_moves(edge, 10)
    assert Move(0, "r", 10) not in moves
    assert Move(0, "r", -10) in moves
    assert Move(0, "g", -10) not in moves
    assert Move(0, "g", 10) in moves
    # colour 1 is black: only + moves, colour 2 is white: only - moves
    assert all(m.delta > 0 for m in moves if m.palette_index == 1)
    assert all(m.delta < 0 for m in moves if m.palette_index == 2)


def test_zero_step_has_no_moves(palette):
    assert neighbour_moves(palette, 0) == []


def test_apply_move_clamps_and_rebuilds_colour():
    pal = colours((250, 5, 100), (0, 0, 0), (1, 1, 1), (2, 2, 2), (3, 3, 3))
    up = apply_move(pal, Move(0, "r", 10))
    assert up[0].rgb == (255, 5, 100)
    assert up[0] == make_colour((255, 5, 100))
    assert up[0].lab == make_colour((255, 5, 100)).lab
    down = apply_move(pal, Move(0, "g", -10))
    assert down[0].rgb == (250, 0, 100)
    # original untouched, other genes shared
    assert pal[0].rgb == (250, 5, 100)
    assert up[1:] == pal[1:]
    assert isinstance(up, tuple)


def test_apply_move_rejects_bad_index(palette):
    with pytest.raises(IndexError):
        apply_move(palette, Move(5, "r", 10))


def test_random_move_is_a_neighbour(palette):
    rng = np.random.default_rng(7)
    options = neighbour_moves(palette, 15)
    for _ in range(20):
        assert random_move(palette, 15, rng) in options
    assert random_move(palette, 0, rng) is None
