"""Core interfaces shared by game managers, players and tank algorithms."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable


class ActionRequest(Enum):
    """An action a tank algorithm may ask its tank to perform."""

    MOVE_FORWARD = "MoveForward"
    MOVE_BACKWARD = "MoveBackward"
    ROTATE_LEFT_90 = "RotateLeft90"
    ROTATE_RIGHT_90 = "RotateRight90"
    ROTATE_LEFT_45 = "RotateLeft45"
    ROTATE_RIGHT_45 = "RotateRight45"
    SHOOT = "Shoot"
    GET_BATTLE_INFO = "GetBattleInfo"
    DO_NOTHING = "DoNothing"


class Reason(Enum):
    """Why a game ended."""

    ALL_TANKS_DEAD = "ALL_TANKS_DEAD"
    MAX_STEPS = "MAX_STEPS"
    ZERO_SHELLS = "ZERO_SHELLS"


class SatelliteView(ABC):
    """A read-only snapshot of the board, one character per cell."""

    @abstractmethod
    def get_object_at(self, x: int, y: int) -> str:
        """Return the symbol at column ``x`` and row ``y``."""


class BattleInfo:
    """Information a player hands to one of its tanks."""


class TankAlgorithm(ABC):
    """Decides, turn by turn, what a single tank does."""

    @abstractmethod
    def get_action(self) -> ActionRequest:
        """Return the action for the current turn."""

    @abstractmethod
    def update_battle_info(self, info: BattleInfo) -> None:
        """Receive fresh battle information from the owning player."""


class Player(ABC):
    """Owns a team of tanks and feeds them battle information."""

    @abstractmethod
    def update_tank_with_battle_info(
        self, tank: TankAlgorithm, satellite_view: SatelliteView
    ) -> None:
        """Build battle information from ``satellite_view`` and pass it to ``tank``."""


TankAlgorithmFactory = Callable[[int, int], TankAlgorithm]
PlayerFactory = Callable[[int, int, int, int, int], Player]


@dataclass
class GameResult:
    """The outcome of one game; ``winner`` 0 means a tie."""

    winner: int = 0
    reason: Reason = Reason.ALL_TANKS_DEAD
    remaining_tanks: list[int] = field(default_factory=list)
    game_state: SatelliteView | None = None
    rounds: int = 0


class AbstractGameManager(ABC):
    """Runs a single game between two players on one map."""

    @abstractmethod
    def run(
        self,
        map_width: int,
        map_height: int,
        game_map: SatelliteView,
        map_name: str,
        max_steps: int,
        num_shells: int,
        player1: Player,
        name1: str,
        player2: Player,
        name2: str,
        player1_tank_algo_factory: TankAlgorithmFactory,
        player2_tank_algo_factory: TankAlgorithmFactory,
    ) -> GameResult:
        """Play the game to its end and return the result."""


GameManagerFactory = Callable[[bool], AbstractGameManager]