"""The game manager: runs one game between two players, step by step."""

from __future__ import annotations

from .board import SHOOT_COOLDOWN, Board
from .common import (
    AbstractGameManager,
    ActionRequest,
    GameResult,
    Player,
    Reason,
    SatelliteView,
    TankAlgorithmFactory,
)
from .geometry import Direction, action_name, move, opposite_direction, time_based_string
from .objects import Tank, Wall
from .satellite import GridSatelliteView

SUDDEN_DEATH_STEPS = 40

_ROTATIONS = {
    ActionRequest.ROTATE_LEFT_45: ("rotate_eighth", False),
    ActionRequest.ROTATE_RIGHT_45: ("rotate_eighth", True),
    ActionRequest.ROTATE_LEFT_90: ("rotate_quarter", False),
    ActionRequest.ROTATE_RIGHT_90: ("rotate_quarter", True),
}


def _moves_backward(action: ActionRequest, backward_count: int) -> bool:
    return (action is ActionRequest.MOVE_BACKWARD and backward_count == 3) or (
        backward_count == 2 and action is not ActionRequest.MOVE_FORWARD
    )


class GameManager(AbstractGameManager):
    """Runs games, printing every step and, when verbose, logging to a file."""

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose
        self.output_file_name = ""
        self._reset()

    def _reset(self) -> None:
        self._width = 0
        self._height = 0
        self._max_steps = 0
        self._num_shells = 0
        self._board = Board(0, 0)
        self._players: dict[int, Player] = {}
        self._output_messages: list[str] = []

    # ---- running ----

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
        """Play the game on ``game_map`` to its end and return the result."""
        self._reset()
        self._width = map_width
        self._height = map_height
        self._max_steps = max_steps
        self._num_shells = num_shells
        self._players = {1: player1, 2: player2}
        self._board = Board(map_width, map_height, self._on_tank_killed)

        if self.verbose:
            self.output_file_name = (
                f"output_{map_name}_{name1}_{name2}_{time_based_string()}.txt"
            )

        total = self._populate(
            game_map, {1: player1_tank_algo_factory, 2: player2_tank_algo_factory}
        )
        try:
            result = self._starting_result()
            if result is None:
                self._output_messages = [""] * total
                result = self._play()
        finally:
            self._reset()
        return result

    def _populate(self, game_map: SatelliteView, factories) -> int:
        serial = 0
        counts = {1: 0, 2: 0}
        headings = {1: Direction.L, 2: Direction.R}
        for y in range(self._height):
            for x in range(self._width):
                symbol = game_map.get_object_at(x, y)
                if symbol == "#":
                    self._board.add_wall(x, y)
                elif symbol == "@":
                    self._board.add_mine(x, y)
                elif symbol in ("1", "2"):
                    player = int(symbol)
                    index = counts[player]
                    self._board.add_tank(
                        Tank(
                            x,
                            y,
                            headings[player],
                            serial,
                            player,
                            index,
                            self._num_shells,
                            factories[player](player, index),
                        )
                    )
                    counts[player] += 1
                    serial += 1
        return serial

    def _living(self) -> tuple[int, int]:
        return self._board.living_tanks(1), self._board.living_tanks(2)

    @staticmethod
    def _outcome_message(living1: int, living2: int) -> str:
        if living1 == 0 and living2 == 0:
            return "Tie, both players have zero tanks"
        if living2 == 0:
            return f"Player 1 won with {living1} tanks still alive"
        return f"Player 2 won with {living2} tanks still alive"

    def _starting_result(self) -> GameResult | None:
        living1, living2 = self._living()
        if living1 and living2:
            return None
        result = self._make_result(Reason.ALL_TANKS_DEAD, 0)
        if self.verbose:
            try:
                with open(self.output_file_name, "w", encoding="utf-8") as out:
                    out.write(self._outcome_message(living1, living2) + "\n")
            except OSError:
                print("Error: Output file couldn't be opened")
        return result

    def _play(self) -> GameResult:
        sudden_death_counter = 0
        sudden_death = False
        step_counter = 1
        if self.verbose:
            self._clear_output_file()
        print(
            f"map_width: {self._width}, map_height: {self._height}, "
            f"max_steps: {self._max_steps}, num_shells: {self._num_shells}, Initial board:"
        )
        print(self._board.render(), end="")

        while sudden_death_counter != SUDDEN_DEATH_STEPS and step_counter <= self._max_steps:
            print(f"-------------- Step {step_counter} --------------")
            self._step()
            print(f"After step {step_counter}:")
            for tank in self._board.tanks:
                print(tank.describe())
            print(self._board.render(), end="")
            if sudden_death:
                sudden_death_counter += 1
            if self._check_result():
                return self._make_result(Reason.ALL_TANKS_DEAD, step_counter)
            if not sudden_death:
                sudden_death = self._all_out_of_shells()
            step_counter += 1

        if step_counter > self._max_steps:
            result = self._make_result(Reason.MAX_STEPS, self._max_steps)
            if self.verbose:
                living1, living2 = self._living()
                self._write_line(
                    f"Tie, reached max steps = {self._max_steps}, player 1 has "
                    f"{living1} tanks, player 2 has {living2} tanks"
                )
            return result

        result = self._make_result(Reason.ZERO_SHELLS, step_counter - 1)
        if self.verbose:
            self._write_line(
                f"Tie, both players have zero shells for {SUDDEN_DEATH_STEPS} steps"
            )
        return result

    # ---- one step ----

    def _step(self) -> None:
        self._output_messages = ["killed"] * len(self._output_messages)
        for tank in self._board.tanks:
            tank.action_to_perform = tank.tank_algorithm.get_action()
            self._output_messages[tank.serial] = action_name(tank.action_to_perform)

        self._check_action_legality()
        satellite = self._board.to_satellite_view()

        # First half-step: only shells move.
        self._board.resolve_midway_collisions(True)
        self._move_all_shells()
        self._board.resolve_cell_collisions()

        # Second half-step: shells move again and tanks act.
        self._board.resolve_midway_collisions(False)
        self._move_all_shells()
        for tank in list(self._board.tanks):
            self._perform_action(tank, satellite)
        self._board.resolve_cell_collisions()

        for tank in self._board.tanks:
            count = tank.backward_count
            if count < 3 and (
                tank.action_to_perform is ActionRequest.MOVE_BACKWARD or count > 0
            ):
                tank.backward_count += 1
            if tank.shoot_cooldown > 0:
                tank.shoot_cooldown -= 1
            tank.bad_move = False

        if self.verbose:
            self._write_line(", ".join(self._output_messages))

    def _move_all_shells(self) -> None:
        for shell in list(self._board.shells):
            self._board.move_object(shell)

    def _wall_at(self, position: tuple[int, int]) -> bool:
        return any(isinstance(obj, Wall) for obj in self._board.objects_at(*position))

    def _set_bad_step(self, tank: Tank, reset_backward_count: bool) -> None:
        tank.bad_move = True
        self._output_messages[tank.serial] += " (ignored)"
        tank.action_to_perform = ActionRequest.DO_NOTHING
        if reset_backward_count:
            tank.backward_count = 0

    def _check_action_legality(self) -> None:
        for tank in self._board.tanks:
            action = tank.action_to_perform
            count = tank.backward_count
            here = (tank.x, tank.y)
            if action is ActionRequest.MOVE_FORWARD and count in (0, 3):
                target = move(here, self._width, self._height, tank.direction)
                if self._wall_at(target):
                    self._set_bad_step(tank, True)
            elif _moves_backward(action, count):
                target = move(here, self._width, self._height, opposite_direction(tank.direction))
                if self._wall_at(target):
                    self._set_bad_step(tank, True)
            elif action is ActionRequest.SHOOT and count in (0, 3):
                if tank.shoot_cooldown != 0 or tank.shell_num == 0:
                    self._set_bad_step(tank, True)
            if action is not ActionRequest.MOVE_FORWARD and tank.backward_count in (1, 2):
                self._set_bad_step(tank, False)

    def _perform_action(self, tank: Tank, satellite: GridSatelliteView) -> None:
        action = tank.action_to_perform
        count = tank.backward_count
        if count == 3 and action is not ActionRequest.MOVE_BACKWARD:
            tank.backward_count = 0

        if action is ActionRequest.MOVE_FORWARD:
            if count in (0, 3):
                self._board.move_object(tank, tank.direction)
            tank.backward_count = 0
        elif _moves_backward(action, count):
            tank.action_to_perform = ActionRequest.MOVE_BACKWARD
            self._board.move_object(tank, opposite_direction(tank.direction))
        elif action in _ROTATIONS:
            method, right = _ROTATIONS[action]
            getattr(tank, method)(right)
        elif action is ActionRequest.SHOOT:
            self._perform_shoot(tank)
        elif action is ActionRequest.GET_BATTLE_INFO:
            self._perform_get_battle_info(tank, satellite)

    def _perform_shoot(self, tank: Tank) -> None:
        x, y = move((tank.x, tank.y), self._width, self._height, tank.direction)
        self._board.add_shell(x, y, tank.direction)
        tank.shell_num -= 1
        tank.shoot_cooldown = SHOOT_COOLDOWN

    def _perform_get_battle_info(self, tank: Tank, satellite: GridSatelliteView) -> None:
        saved = satellite.get_object_at(tank.x, tank.y)
        satellite.set_object_at(tank.x, tank.y, "%")
        try:
            player = self._players[1] if tank.player == 1 else self._players[2]
            player.update_tank_with_battle_info(tank.tank_algorithm, satellite)
        finally:
            satellite.set_object_at(tank.x, tank.y, saved)

    # ---- bookkeeping ----

    def _on_tank_killed(self, tank: Tank) -> None:
        if 0 <= tank.serial < len(self._output_messages):
            self._output_messages[tank.serial] += " (killed)"

    def _all_out_of_shells(self) -> bool:
        return all(tank.shell_num == 0 for tank in self._board.tanks)

    def _check_result(self) -> bool:
        living1, living2 = self._living()
        if living1 and living2:
            return False
        if self.verbose:
            self._write_line(self._outcome_message(living1, living2))
        return True

    def _make_result(self, reason: Reason, rounds: int) -> GameResult:
        living1, living2 = self._living()
        winner = 0
        if reason is Reason.ALL_TANKS_DEAD:
            if living1 and not living2:
                winner = 1
            elif living2 and not living1:
                winner = 2
        return GameResult(
            winner=winner,
            reason=reason,
            remaining_tanks=[living1, living2],
            game_state=self._board.to_satellite_view(),
            rounds=rounds,
        )

    def _clear_output_file(self) -> None:
        try:
            with open(self.output_file_name, "w", encoding="utf-8"):
                pass
        except OSError:
            print("Unable to open output file")

    def _write_line(self, content: str) -> None:
        try:
            with open(self.output_file_name, "a", encoding="utf-8") as out:
                out.write(content + "\n")
        except OSError:
            print("Unable to open output file")