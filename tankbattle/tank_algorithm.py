"""Tank algorithms: a rotate-and-shoot tank and a path-finding tank."""

from __future__ import annotations

from abc import abstractmethod
from collections import deque

from .battle_info import BoardBattleInfo
from .common import ActionRequest, BattleInfo, TankAlgorithm
from .geometry import (
    Direction,
    move,
    rotate,
    rotate_eighth_left,
    rotate_eighth_right,
    rotate_quarter_left,
    rotate_quarter_right,
)

Position = tuple[int, int]

SHOOT_COOLDOWN = 5

_ROTATIONS = {
    ActionRequest.ROTATE_LEFT_45: rotate_eighth_left,
    ActionRequest.ROTATE_RIGHT_45: rotate_eighth_right,
    ActionRequest.ROTATE_LEFT_90: rotate_quarter_left,
    ActionRequest.ROTATE_RIGHT_90: rotate_quarter_right,
}

# Rotation needed for each clockwise-numbered difference between goal and heading.
_TURNS = {
    1: ActionRequest.ROTATE_LEFT_45,
    2: ActionRequest.ROTATE_LEFT_90,
    3: ActionRequest.ROTATE_LEFT_90,
    4: ActionRequest.ROTATE_RIGHT_90,
    5: ActionRequest.ROTATE_RIGHT_90,
    6: ActionRequest.ROTATE_RIGHT_90,
    7: ActionRequest.ROTATE_RIGHT_45,
}

_SHELL_BLOCKERS = frozenset("12#")
_MOVE_BLOCKERS = frozenset("12#@")


class BaseTankAlgorithm(TankAlgorithm):
    """State and manoeuvres shared by the tank algorithms.

    The tank keeps its own idea of where it is and where it faces, updating
    both as it issues actions between two battle-information updates.
    """

    def __init__(self, player_index: int, tank_index: int) -> None:
        self.player_index = player_index
        self.tank_index = tank_index
        self.direction = Direction.L if player_index == 1 else Direction.R
        self.position: Position = (0, 0)
        self.num_of_shells = 0
        self.shoot_cooldown = 0
        self.board_width = 0
        self.board_height = 0
        self.board: list[list[str]] = []
        self.length_to_look = 0
        self.last_action_was_shoot = False
        self.battle_info = BoardBattleInfo()

    def update_battle_info(self, info: BattleInfo) -> None:
        """Take over the board snapshot and counters from ``info``."""
        if not isinstance(info, BoardBattleInfo):
            raise TypeError(f"expected BoardBattleInfo, got {type(info).__name__}")
        self.battle_info = info
        self.position = info.tank_position
        self.board = [list(row) for row in info.board]
        self.board_height = len(self.board)
        self.board_width = len(self.board[0])
        self.num_of_shells = info.num_of_shells
        self.length_to_look = info.max_steps

    @abstractmethod
    def get_action(self) -> ActionRequest:
        """Return the action for the current turn."""

    @abstractmethod
    def _escape_shell(self) -> ActionRequest:
        """Return the action that dodges an incoming shell."""

    @abstractmethod
    def _aligned_action(self) -> ActionRequest:
        """Return the action taken when already facing the goal direction."""

    # ---- board queries ----

    def _step(self, position: Position, direction: Direction) -> Position:
        return move(position, self.board_width, self.board_height, direction)

    def _at(self, position: Position) -> str:
        x, y = position
        return self.board[y][x]

    def _blocks_shell(self, position: Position) -> bool:
        return self._at(position) in _SHELL_BLOCKERS

    def _is_available(self, position: Position) -> bool:
        return self._at(position) not in _MOVE_BLOCKERS

    def _is_direction_available(self, relative: Direction) -> bool:
        target = self._step(self.position, rotate(self.direction, relative))
        return self._is_available(target)

    def _is_attacked_from(self, relative: Direction) -> bool:
        heading = rotate(self.direction, relative)
        position = self.position
        for _ in range(self.length_to_look):
            position = self._step(position, heading)
            if self._at(position) == "*":
                return True
            if self._blocks_shell(position):
                return False
        return False

    def _is_tank_in_front(self, info: BoardBattleInfo) -> bool:
        friends = set(info.friendly_tanks)
        enemies = set(info.enemy_tanks)
        position = self.position
        for _ in range(self.length_to_look):
            position = self._step(position, self.direction)
            if self._at(position) == "#":
                return False
            if position in friends:
                return False
            if position in enemies:
                return True
        return False

    # ---- actions ----

    def _move_forward(self) -> ActionRequest:
        self.position = self._step(self.position, self.direction)
        self.last_action_was_shoot = False
        return ActionRequest.MOVE_FORWARD

    def _rotate(self, action: ActionRequest) -> ActionRequest:
        self.direction = _ROTATIONS[action](self.direction)
        self.last_action_was_shoot = False
        return action

    def _shoot(self) -> ActionRequest:
        if self.shoot_cooldown <= 0:
            self.shoot_cooldown = SHOOT_COOLDOWN
            self.last_action_was_shoot = True
            return ActionRequest.SHOOT
        return ActionRequest.DO_NOTHING

    def _do_nothing(self) -> ActionRequest:
        self.last_action_was_shoot = False
        return ActionRequest.DO_NOTHING

    def _perform(self, action: ActionRequest) -> ActionRequest:
        if action is ActionRequest.MOVE_FORWARD:
            return self._move_forward()
        if action is ActionRequest.SHOOT:
            return self._shoot()
        if action in _ROTATIONS:
            return self._rotate(action)
        return self._do_nothing()

    def _first_available(self, options, fallback: ActionRequest) -> ActionRequest:
        for relative, action in options:
            if self._is_direction_available(relative):
                return self._perform(action)
        return self._perform(fallback)

    def _change_direction(self, goal: Direction) -> ActionRequest:
        difference = (int(goal) - int(self.direction)) % 8
        if difference == 0:
            return self._aligned_action()
        return self._rotate(_TURNS[difference])

    # ---- escape manoeuvres ----

    def _escape_sides(self, left: bool) -> ActionRequest:
        options = [
            (Direction.U, ActionRequest.MOVE_FORWARD),
            (Direction.UL, ActionRequest.ROTATE_LEFT_45),
            (Direction.UR, ActionRequest.ROTATE_RIGHT_45),
            (Direction.DL, ActionRequest.ROTATE_LEFT_90),
            (Direction.DR, ActionRequest.ROTATE_RIGHT_90),
            (Direction.D, ActionRequest.ROTATE_RIGHT_90),
        ]
        fallback = ActionRequest.ROTATE_LEFT_90 if left else ActionRequest.ROTATE_RIGHT_90
        return self._first_available(options, fallback)

    def _escape_front_or_back(self, front: bool) -> ActionRequest:
        if front and self.shoot_cooldown == 0 and self.num_of_shells > 0:
            return self._shoot()
        options = [
            (Direction.R, ActionRequest.ROTATE_RIGHT_90),
            (Direction.L, ActionRequest.ROTATE_LEFT_90),
            (Direction.UL, ActionRequest.ROTATE_LEFT_45),
            (Direction.UR, ActionRequest.ROTATE_RIGHT_45),
            (Direction.DL, ActionRequest.ROTATE_LEFT_90),
            (Direction.DR, ActionRequest.ROTATE_RIGHT_90),
        ]
        return self._first_available(options, ActionRequest.ROTATE_RIGHT_90)

    def _escape_diagonal_left(self, front: bool) -> ActionRequest:
        options = [
            (Direction.U, ActionRequest.MOVE_FORWARD),
            (Direction.R, ActionRequest.ROTATE_RIGHT_90),
            (Direction.L, ActionRequest.ROTATE_LEFT_90),
            (Direction.UR, ActionRequest.ROTATE_RIGHT_45),
            (Direction.DL, ActionRequest.ROTATE_LEFT_90),
            (Direction.D, ActionRequest.ROTATE_RIGHT_90),
        ]
        fallback = ActionRequest.ROTATE_LEFT_45 if front else ActionRequest.ROTATE_RIGHT_90
        return self._first_available(options, fallback)

    def _escape_diagonal_right(self, front: bool) -> ActionRequest:
        options = [
            (Direction.U, ActionRequest.MOVE_FORWARD),
            (Direction.R, ActionRequest.ROTATE_RIGHT_90),
            (Direction.L, ActionRequest.ROTATE_LEFT_90),
            (Direction.UL, ActionRequest.ROTATE_LEFT_45),
            (Direction.DR, ActionRequest.ROTATE_RIGHT_90),
            (Direction.D, ActionRequest.ROTATE_RIGHT_90),
        ]
        fallback = ActionRequest.ROTATE_RIGHT_45 if front else ActionRequest.ROTATE_LEFT_90
        return self._first_available(options, fallback)


class RotatingTankAlgorithm(BaseTankAlgorithm):
    """Asks for battle information every other turn, dodges shells and
    turns to face the closest enemy, shooting once it is lined up."""

    def __init__(self, player_index: int, tank_index: int) -> None:
        super().__init__(player_index, tank_index)
        self.turn_number = -1
        self.battle_info = BoardBattleInfo(board=[["1"]])

    def get_action(self) -> ActionRequest:
        """Return the action for the current turn."""
        if self.shoot_cooldown > 0:
            self.shoot_cooldown -= 1

        self.turn_number += 1
        if self.turn_number % 2 == 0:
            return ActionRequest.GET_BATTLE_INFO

        action = self._escape_shell()
        if action is not ActionRequest.DO_NOTHING:
            return action

        if self._is_tank_in_front(self.battle_info):
            return self._shoot()

        target = self._closest_enemy()
        return self._change_direction(self._direction_towards(target))

    def _escape_shell(self) -> ActionRequest:
        attacked = self._is_attacked_from
        if attacked(Direction.U) and self.last_action_was_shoot:
            return self._do_nothing()
        if attacked(Direction.U):
            return self._escape_front_or_back(front=True)
        if attacked(Direction.L):
            return self._escape_sides(left=True)
        if attacked(Direction.R):
            return self._escape_sides(left=False)
        if attacked(Direction.UL):
            return self._escape_diagonal_left(front=True)
        if attacked(Direction.DR):
            return self._escape_diagonal_left(front=False)
        if attacked(Direction.UR):
            return self._escape_diagonal_right(front=True)
        if attacked(Direction.DL):
            return self._escape_diagonal_right(front=False)
        if attacked(Direction.D):
            return self._escape_front_or_back(front=False)
        return self._do_nothing()

    def _aligned_action(self) -> ActionRequest:
        if self.shoot_cooldown == 0 and self.num_of_shells > 0:
            return self._shoot()
        return self._do_nothing()

    def _closest_enemy(self) -> Position:
        closest_distance = self.length_to_look
        closest: Position = (0, 0)
        x, y = self.position
        for enemy in self.battle_info.enemy_tanks:
            dx = abs(x - enemy[0])
            dy = abs(y - enemy[1])
            distance = min(dx, self.board_width - dx) + min(dy, self.board_height - dy)
            if distance < closest_distance:
                closest_distance = distance
                closest = enemy
        return closest

    def _direction_towards(self, enemy: Position) -> Direction:
        x_delta = self.position[0] - enemy[0]
        y_delta = self.position[1] - enemy[1]
        if abs(y_delta) > self.board_height // 2:
            y_delta = y_delta - self.board_height if y_delta > 0 else y_delta + self.board_height
        if abs(x_delta) > self.board_width // 2:
            x_delta = x_delta - self.board_width if x_delta > 0 else x_delta + self.board_width

        if y_delta < 0 and x_delta == 0:
            return Direction.U
        if y_delta < 0 and x_delta < 0:
            return Direction.UR
        if y_delta == 0 and x_delta < 0:
            return Direction.R
        if y_delta > 0 and x_delta < 0:
            return Direction.DR
        if y_delta > 0 and x_delta == 0:
            return Direction.D
        if y_delta > 0 and x_delta > 0:
            return Direction.DL
        if y_delta == 0 and x_delta > 0:
            return Direction.L
        if y_delta < 0 and x_delta > 0:
            return Direction.UL
        return Direction.U


class PathfindingTankAlgorithm(BaseTankAlgorithm):
    """Dodges tracked shells and drives towards the nearest enemy found by
    breadth-first search; tanks of a team take turns asking for information."""

    def __init__(self, player_index: int, tank_index: int) -> None:
        super().__init__(player_index, tank_index)
        self.battle_info = BoardBattleInfo(board=[["2"]])
        self.is_only_tank = True
        self.turn_number = -1
        self.turns_to_get_battle_info = -1

    def get_action(self) -> ActionRequest:
        """Return the action for the current turn."""
        self._update_turns_to_get_battle_info()
        self.is_only_tank = len(self.battle_info.friendly_tanks) <= 1
        self.turn_number += 1

        if self.shoot_cooldown > 0:
            self.shoot_cooldown -= 1

        if self.is_only_tank and self.turn_number % 2 == 0:
            return ActionRequest.GET_BATTLE_INFO
        if not self.is_only_tank and self.turns_to_get_battle_info <= 0:
            return ActionRequest.GET_BATTLE_INFO

        if self._is_attacked():
            return self._escape_shell()

        if (
            self._is_tank_in_front(self.battle_info)
            and self.shoot_cooldown == 0
            and self.num_of_shells > 0
        ):
            return self._shoot()

        return self._find_direction_towards_enemy()

    def _update_turns_to_get_battle_info(self) -> None:
        friends = len(self.battle_info.friendly_tanks)
        if friends == 1:
            return
        if self.turns_to_get_battle_info <= -1:
            counter = 0
            for row in self.board:
                for symbol in row:
                    if symbol == "2":
                        counter += 1
                    elif symbol == "%":
                        self.turns_to_get_battle_info = counter
        elif self.turns_to_get_battle_info == 0:
            self.turns_to_get_battle_info = friends - 1
        else:
            self.turns_to_get_battle_info -= 1

    def _is_free(self, position: Position) -> bool:
        return self._at(position) not in "2#@*"

    def _find_direction_towards_enemy(self) -> ActionRequest:
        enemies = set(self.battle_info.enemy_tanks)
        visited = {self.position}
        queue: deque[tuple[Position, Direction | None]] = deque([(self.position, None)])
        first_round = True
        while queue:
            position, first_direction = queue.popleft()
            for direction in Direction:
                neighbour = self._step(position, direction)
                if neighbour in visited:
                    continue
                visited.add(neighbour)
                if not self._is_free(neighbour):
                    continue
                if first_round:
                    first_direction = direction
                if neighbour in enemies:
                    return self._change_direction(first_direction)
                queue.append((neighbour, first_direction))
            first_round = False
        return self._shoot()

    def _aligned_action(self) -> ActionRequest:
        if self._is_direction_available(Direction.U):
            return self._move_forward()
        return self._do_nothing()

    def _is_attacked(self) -> bool:
        if self._is_attacked_from(Direction.U) and self.last_action_was_shoot:
            return False
        for shell in self.battle_info.tracked_shells:
            position = (shell.x, shell.y)
            for _ in range(self.length_to_look):
                if position == self.position:
                    return True
                position = self._step(position, shell.direction)
        return False

    def _escape_shell(self) -> ActionRequest:
        options = [
            (Direction.U, ActionRequest.MOVE_FORWARD),
            (Direction.UR, ActionRequest.ROTATE_RIGHT_45),
            (Direction.R, ActionRequest.ROTATE_RIGHT_90),
            (Direction.UL, ActionRequest.ROTATE_LEFT_45),
            (Direction.L, ActionRequest.ROTATE_LEFT_90),
            (Direction.D, ActionRequest.ROTATE_LEFT_45),
        ]
        return self._first_available(options, ActionRequest.ROTATE_LEFT_45)