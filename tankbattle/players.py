"""Players that turn satellite snapshots into battle information for their tanks."""

from __future__ import annotations

from .battle_info import from_player_one_view, from_player_two_view
from .common import Player, SatelliteView, TankAlgorithm
from .geometry import Direction, move, opposite_direction
from .objects import Shell

Board = list[list[str]]


class BasePlayer(Player):
    """A player that knows the board size and the game's limits."""

    def __init__(
        self, player_index: int, x: int, y: int, max_steps: int, num_shells: int
    ) -> None:
        self.player_index = player_index
        self.width = x
        self.height = y
        self.max_steps = max_steps
        self.num_shells = num_shells

    def board_from_view(self, satellite_view: SatelliteView) -> Board:
        """Copy ``satellite_view`` into rows, indexed ``board[y][x]``."""
        return [
            [satellite_view.get_object_at(x, y) for x in range(self.width)]
            for y in range(self.height)
        ]


class SnapshotPlayer(BasePlayer):
    """Hands each tank a fresh snapshot seen from player 1's side."""

    def update_tank_with_battle_info(
        self, tank: TankAlgorithm, satellite_view: SatelliteView
    ) -> None:
        """Build battle information from the view and pass it to ``tank``."""
        info = from_player_one_view(self.board_from_view(satellite_view), self.max_steps)
        info.num_of_shells = self.num_shells
        tank.update_battle_info(info)


class ShellTrackingPlayer(BasePlayer):
    """Seen from player 2's side; compares consecutive snapshots to guess
    which way every shell on the board is flying."""

    def __init__(
        self, player_index: int, x: int, y: int, max_steps: int, num_shells: int
    ) -> None:
        super().__init__(player_index, x, y, max_steps, num_shells)
        self.board: Board = []
        self.shells: list[Shell] = []

    def update_tank_with_battle_info(
        self, tank: TankAlgorithm, satellite_view: SatelliteView
    ) -> None:
        """Build battle information, with tracked shells, and pass it to ``tank``."""
        new_board = self.board_from_view(satellite_view)
        self._update_shells(self.board, new_board)
        self.board = new_board
        info = from_player_two_view(new_board, self.max_steps, self.shells)
        info.num_of_shells = self.num_shells
        tank.update_battle_info(info)

    def _shell_direction(self, old_board: Board, location: tuple[int, int]) -> Direction:
        if not old_board:
            return Direction.U
        for direction in Direction:
            previous = location
            for _ in range(2):
                previous = move(previous, self.width, self.height, direction)
            px, py = previous
            if old_board[py][px] == "*":
                return opposite_direction(direction)
        return Direction.U

    def _update_shells(self, old_board: Board, new_board: Board) -> None:
        locations = [
            (x, y)
            for y, row in enumerate(new_board)
            for x, symbol in enumerate(row)
            if symbol == "*"
        ]
        self.shells = [
            Shell(x, y, self._shell_direction(old_board, (x, y))) for x, y in locations
        ]