# palette_opt/moves.py
from __future__ import annotations

"""
Neighbour moves for single-solution search.

A move nudges one RGB channel of one palette colour by +/- step. Applying a move
never edits a Colour in place: the channel is clamped and the whole colour is
rebuilt so its derived Lab/LCh/OkLab/luminance rows stay consistent.

Exports:
  neighbour_moves(palette, step) -> list[Move]
  apply_move(palette, move) -> Palette
  random_move(palette, step, rng) -> Move | None
"""

from typing import List, Optional, Sequence

import numpy as np

from .colour_convert import make_colour
from .core_types import CHANNEL_INDEX, CHANNELS, Colour, Move, Palette


def neighbour_moves(palette: Sequence[Colour], step: int) -> List[Move]:
    """
    All single-channel moves for the palette, up to 6 per colour.

    +step is offered while a channel is below 255 and -step while it is above 0;
    a move that overshoots is clamped when applied.
    """
    step = abs(int(step))
    if step == 0:
        return []
    moves: List[Move] = []
    for index, colour in enumerate(palette):
        for channel in CHANNELS:
            value = colour.rgb[CHANNEL_INDEX[channel]]
            if value < 255:
                moves.append(Move(index, channel, step))
            if value > 0:
                moves.append(Move(index, channel, -step))
    return moves


def apply_move(palette: Sequence[Colour], move: Move) -> Palette:
    """Return a new palette with the move applied to a rebuilt colour."""
    if not 0 <= move.palette_index < len(palette):
        raise IndexError(f"move index {move.palette_index} outside palette")
    target = palette[move.palette_index]
    rgb = list(target.rgb)
    ch = CHANNEL_INDEX[move.channel]
    rgb[ch] = rgb[ch] + int(move.delta)
    moved = make_colour(rgb, alpha=target.alpha)

    out = list(palette)
    out[move.palette_index] = moved
    return tuple(out)


def random_move(
    palette: Sequence[Colour], step: int, rng: np.random.Generator
) -> Optional[Move]:
    """One neighbour move drawn uniformly, or None when there are none."""
    moves = neighbour_moves(palette, step)
    if not moves:
        return None
    return moves[int(rng.integers(len(moves)))]


__all__ = ["neighbour_moves", "apply_move", "random_move"]
