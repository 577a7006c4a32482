"""Battle information built by a player from a board snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field

from .common import BattleInfo
from .objects import Shell

Position = tuple[int, int]


@dataclass
class BoardBattleInfo(BattleInfo):
    """A board snapshot and the positions of everything on it.

    The board is indexed ``board[y][x]``; the receiving tank sits at the
    cell marked ``'%'``.
    """

    board: list[list[str]] = field(default_factory=list)
    max_steps: int = 0
    tank_position: Position = (0, 0)
    num_of_shells: int = 0
    friendly_tanks: list[Position] = field(default_factory=list)
    enemy_tanks: list[Position] = field(default_factory=list)
    mines: list[Position] = field(default_factory=list)
    walls: list[Position] = field(default_factory=list)
    shells: list[Position] = field(default_factory=list)
    tracked_shells: list[Shell] = field(default_factory=list)


def _cells(board):
    for y, row in enumerate(board):
        for x, symbol in enumerate(row):
            yield (x, y), symbol


def from_player_one_view(board, max_steps: int) -> BoardBattleInfo:
    """Build battle information for a tank of player 1.

    Tanks marked ``'1'`` are friends, ``'2'`` enemies; every shell seen on
    the board is also counted in ``num_of_shells``.
    """
    info = BoardBattleInfo(board=[list(row) for row in board], max_steps=max_steps)
    for pos, symbol in _cells(info.board):
        if symbol == "#":
            info.walls.append(pos)
        elif symbol == "1":
            info.friendly_tanks.append(pos)
        elif symbol == "2":
            info.enemy_tanks.append(pos)
        elif symbol == "@":
            info.mines.append(pos)
        elif symbol == "%":
            info.tank_position = pos
        elif symbol == "*":
            info.shells.append(pos)
            info.num_of_shells += 1
    return info


def from_player_two_view(board, max_steps: int, tracked_shells) -> BoardBattleInfo:
    """Build battle information for a tank of player 2.

    Tanks marked ``'2'`` are friends, ``'1'`` enemies; the receiving tank is
    counted among its friends.
    """
    info = BoardBattleInfo(
        board=[list(row) for row in board],
        max_steps=max_steps,
        tracked_shells=list(tracked_shells),
    )
    for pos, symbol in _cells(info.board):
        if symbol == "#":
            info.walls.append(pos)
        elif symbol == "1":
            info.enemy_tanks.append(pos)
        elif symbol == "2":
            info.friendly_tanks.append(pos)
        elif symbol == "@":
            info.mines.append(pos)
        elif symbol == "*":
            info.shells.append(pos)
        elif symbol == "%":
            info.tank_position = pos
            info.friendly_tanks.append(pos)
    return info