"""Things that occupy cells of the battlefield: walls, mines, shells and tanks."""

from __future__ import annotations

from dataclasses import dataclass

from .common import ActionRequest, TankAlgorithm
from .geometry import (
    Direction,
    rotate_eighth_left,
    rotate_eighth_right,
    rotate_quarter_left,
    rotate_quarter_right,
)


@dataclass(eq=False)
class GameObject:
    """Anything placed on the board, located at column ``x`` and row ``y``."""

    x: int
    y: int

    @property
    def position(self) -> tuple[int, int]:
        """The ``(x, y)`` cell the object occupies."""
        return self.x, self.y


@dataclass(eq=False)
class Shell(GameObject):
    """A shell flying across the board in a fixed direction."""

    direction: Direction


@dataclass(eq=False)
class Wall(GameObject):
    """A wall; the first hit weakens it, the second destroys it."""

    weak: bool = False

    def become_weak(self) -> None:
        """Mark the wall as weakened by a hit."""
        self.weak = True


@dataclass(eq=False)
class Mine(GameObject):
    """A mine that destroys any tank entering its cell."""


@dataclass(eq=False)
class Tank(GameObject):
    """A tank, its ammunition and the state of its pending action.

    A tank moves backward when ``backward_count`` reaches 2, or when it asks
    to move backward again while ``backward_count`` is 3.
    """

    direction: Direction
    serial: int
    player: int
    tank_index: int
    shell_num: int
    tank_algorithm: TankAlgorithm | None = None
    backward_count: int = 0
    shoot_cooldown: int = 0
    action_to_perform: ActionRequest = ActionRequest.DO_NOTHING
    bad_move: bool = False
    death_reason: str = ""

    def rotate_quarter(self, right: bool) -> None:
        """Turn a quarter to the right, or to the left when ``right`` is false."""
        self.direction = (
            rotate_quarter_right(self.direction) if right else rotate_quarter_left(self.direction)
        )

    def rotate_eighth(self, right: bool) -> None:
        """Turn an eighth to the right, or to the left when ``right`` is false."""
        self.direction = (
            rotate_eighth_right(self.direction) if right else rotate_eighth_left(self.direction)
        )

    def record_death(self, reason: str) -> None:
        """Remember why the tank was destroyed; only the first reason is kept."""
        if not self.death_reason:
            self.death_reason = reason

    def describe(self) -> str:
        """Return a one-line summary of the tank's state."""
        return (
            f"Tank No. {self.serial}: Player: {self.player}, Tank index: {self.tank_index}, "
            f"Shell number: {self.shell_num}, backward counter: {self.backward_count}, "
            f"shoot cooldown: {self.shoot_cooldown}, direction: {Direction(self.direction).name}"
        )