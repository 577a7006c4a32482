"""Directions on the wrapping board and text helpers for actions and results."""

from __future__ import annotations

import time
from enum import IntEnum

from .common import ActionRequest, GameResult


class Direction(IntEnum):
    """One of eight compass directions, in clockwise-numbered order."""

    U = 0
    UR = 1
    R = 2
    DR = 3
    D = 4
    DL = 5
    L = 6
    UL = 7


_OFFSETS = {
    Direction.U: (0, 1),
    Direction.UR: (1, 1),
    Direction.R: (1, 0),
    Direction.DR: (1, -1),
    Direction.D: (0, -1),
    Direction.DL: (-1, -1),
    Direction.L: (-1, 0),
    Direction.UL: (-1, 1),
}

_ARROWS = {
    Direction.U: "↓",
    Direction.UR: "↘",
    Direction.R: "→",
    Direction.DR: "↗",
    Direction.D: "↑",
    Direction.DL: "↖",
    Direction.L: "←",
    Direction.UL: "↙",
}


def move(loc: tuple[int, int], width: int, height: int, direction: Direction) -> tuple[int, int]:
    """Return the cell one step from ``loc`` in ``direction``, wrapping at the edges."""
    dx, dy = _OFFSETS[Direction(direction)]
    x, y = loc
    return (x + dx) % width, (y + dy) % height


def _turn(direction: Direction, steps: int) -> Direction:
    return Direction((int(direction) + steps) % 8)


def rotate_quarter_right(direction: Direction) -> Direction:
    """Turn a quarter to the right."""
    return _turn(direction, -2)


def rotate_quarter_left(direction: Direction) -> Direction:
    """Turn a quarter to the left."""
    return _turn(direction, 2)


def rotate_eighth_right(direction: Direction) -> Direction:
    """Turn an eighth to the right."""
    return _turn(direction, -1)


def rotate_eighth_left(direction: Direction) -> Direction:
    """Turn an eighth to the left."""
    return _turn(direction, 1)


def rotate(current: Direction, rotation: Direction) -> Direction:
    """Return ``current`` turned by the relative direction ``rotation``."""
    return _turn(current, -int(rotation))


def opposite_direction(direction: Direction) -> Direction:
    """Return the direction pointing the other way."""
    return _turn(direction, 4)


def action_name(action: ActionRequest) -> str:
    """Return the name of ``action`` as written in game logs."""
    return action.value


def direction_arrow(direction: Direction) -> str:
    """Return the arrow used to draw a shell heading in ``direction``."""
    return _ARROWS[Direction(direction)]


def format_game_result(game_result: GameResult, map_width: int, map_height: int) -> str:
    """Render a game result and its final board as text."""
    if len(game_result.remaining_tanks) >= 2:
        tanks1 = str(game_result.remaining_tanks[0])
        tanks2 = str(game_result.remaining_tanks[1])
    else:
        tanks1 = tanks2 = ""
    rows = []
    state = game_result.game_state
    for y in range(map_height):
        cells = (state.get_object_at(x, y) for x in range(map_width))
        rows.append("".join("_" if c == " " else c for c in cells) + "\n")
    return (
        f"Winner: {game_result.winner}, Reason: {game_result.reason.value}, "
        f"Rounds: {game_result.rounds}, P1 Tanks: {tanks1}, P2 Tanks: {tanks2}, "
        f"Final State: \n" + "".join(rows)
    )


def time_based_string() -> str:
    """Return the nanosecond part of the current time as nine digits."""
    return f"{time.time_ns() % 10**9:09d}"


def base_name(path: str) -> str:
    """Return the file name of ``path`` without directories or extension."""
    start = max(path.rfind("/"), path.rfind("\\")) + 1
    dot = path.rfind(".")
    end = len(path) if dot == -1 or dot < start else dot
    return path[start:end]