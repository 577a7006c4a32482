"""Reads map files and runs a single battle between two registered algorithms."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping

from .game_manager import GameManager
from .geometry import base_name, format_game_result
from .players import ShellTrackingPlayer, SnapshotPlayer
from .registry import (
    algorithm_registrar,
    game_manager_registrar,
    register_game_manager,
    register_player,
    register_tank_algorithm,
)
from .satellite import GridSatelliteView
from .tank_algorithm import PathfindingTankAlgorithm, RotatingTankAlgorithm

MISSING_CELLS = "There are missing rows or columns!"
EXTRA_CELLS = "There are additional rows or columns beyond the required!"

DEFAULT_GAME_MANAGER = "GameManager"
DEFAULT_ALGORITHM1 = "Algorithm1"
DEFAULT_ALGORITHM2 = "Algorithm2"

_BOARD_SYMBOLS = frozenset("#12@")


class BoardFormatError(Exception):
    """A map file cannot be opened or its header cannot be read."""


@dataclass
class BoardInfo:
    """A map read from a file, with the game's limits."""

    map_width: int = 0
    map_height: int = 0
    max_steps: int = 0
    num_shells: int = 0
    map: GridSatelliteView = field(default_factory=GridSatelliteView)
    problems: list[str] = field(default_factory=list)


def _load_game_manager() -> None:
    register_game_manager(GameManager)


def _load_snapshot_algorithm() -> None:
    register_player(SnapshotPlayer)
    register_tank_algorithm(RotatingTankAlgorithm)


def _load_tracking_algorithm() -> None:
    register_player(ShellTrackingPlayer)
    register_tank_algorithm(PathfindingTankAlgorithm)


_DEFAULT_PLUGINS: dict[str, Callable[[], None]] = {
    DEFAULT_GAME_MANAGER: _load_game_manager,
    DEFAULT_ALGORITHM1: _load_snapshot_algorithm,
    DEFAULT_ALGORITHM2: _load_tracking_algorithm,
}


class _TextReader:
    """Reads lines, then single characters, from a text."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def line(self) -> str | None:
        if self.pos >= len(self.text):
            return None
        end = self.text.find("\n", self.pos)
        if end == -1:
            line, self.pos = self.text[self.pos :], len(self.text)
        else:
            line, self.pos = self.text[self.pos : end], end + 1
        return line

    def char(self) -> str | None:
        if self.pos >= len(self.text):
            return None
        ch = self.text[self.pos]
        self.pos += 1
        return ch

    def skip_line(self) -> None:
        while (ch := self.char()) is not None and ch != "\n":
            pass

    def exhausted(self) -> bool:
        return self.pos >= len(self.text)


def _parse_header_value(line: str, key: str) -> int:
    match = re.search(re.escape(key) + r"\s*=\s*([0-9]+)", line)
    if match is None:
        raise BoardFormatError(f"Error: Could not parse {key} from line: {line}")
    return int(match.group(1))


class Simulator:
    """Loads maps and plug-ins by name and runs battles between them.

    A plug-in is a callable that registers factories with the registrars,
    looked up by the base name of the path it is asked for.
    """

    def __init__(
        self,
        plugins: Mapping[str, Callable[[], None]] | None = None,
        errors_file: str | Path = "input_errors.txt",
    ) -> None:
        self.plugins = dict(_DEFAULT_PLUGINS if plugins is None else plugins)
        self.errors_file = Path(errors_file)

    # ---- reading maps ----

    def read_board(self, input_file) -> BoardInfo:
        """Read a map file; size problems are recorded, header problems raise."""
        try:
            with open(input_file, encoding="latin-1", newline="") as handle:
                text = handle.read()
        except OSError as err:
            raise BoardFormatError(f"Error: Cannot open file {input_file}") from err

        reader = _TextReader(text)
        info = BoardInfo()
        if reader.line() is None:
            raise BoardFormatError("Error: File is empty or missing description line.")
        for key, attribute in (
            ("MaxSteps", "max_steps"),
            ("NumShells", "num_shells"),
            ("Rows", "map_height"),
            ("Cols", "map_width"),
        ):
            line = reader.line()
            if line is None:
                raise BoardFormatError(f"Missing {key} line")
            setattr(info, attribute, _parse_header_value(line, key))

        info.map.initialize(info.map_width, info.map_height)
        self._read_board_lines(reader, info)
        return info

    def _read_board_lines(self, reader: _TextReader, info: BoardInfo) -> None:
        width, height = info.map_width, info.map_height
        underflow = overflow = False
        ch = ""
        for y in range(height):
            for x in range(width + 1):
                got = reader.char()
                eof = got is None
                if not eof:
                    ch = got
                if (ch == "\n" and x == width) or (eof and x == width and y == height - 1):
                    break
                if (ch == "\n" or eof) and x < width:
                    underflow = True
                    break
                if ch != "\n" and x == width:
                    overflow = True
                    reader.skip_line()
                elif ch in _BOARD_SYMBOLS:
                    info.map.set_object_at(x, y, ch)
        if not reader.exhausted():
            overflow = True

        if underflow:
            info.problems.append(MISSING_CELLS)
        if overflow:
            info.problems.append(EXTRA_CELLS)
        if info.problems:
            with open(self.errors_file, "w", encoding="utf-8") as out:
                out.write("".join(problem + "\n" for problem in info.problems))

    # ---- battles ----

    def _load(self, registrar, name: str):
        entry = registrar.create_entry(name)
        loader = self.plugins.get(base_name(name))
        if loader is None:
            print(f"Error loading {name}: no such plug-in", file=sys.stderr)
            return None
        loader()
        registrar.validate_last()
        return entry

    def debug_battle(
        self, map_file, game_manager_name: str, algorithm1_name: str, algorithm2_name: str
    ) -> bool:
        """Run one verbose battle on ``map_file`` and print its result.

        Returns False when a plug-in cannot be found.
        """
        board_info = self.read_board(map_file)
        managers = game_manager_registrar()
        algorithms = algorithm_registrar()
        try:
            manager_entry = self._load(managers, game_manager_name)
            if manager_entry is None:
                return False
            algorithm1 = self._load(algorithms, algorithm1_name)
            if algorithm1 is None:
                return False
            algorithm2 = self._load(algorithms, algorithm2_name)
            if algorithm2 is None:
                return False

            width, height = board_info.map_width, board_info.map_height
            steps, shells = board_info.max_steps, board_info.num_shells
            manager = manager_entry.create_game_manager(True)
            player1 = algorithm1.create_player(1, width, height, steps, shells)
            player2 = algorithm2.create_player(2, width, height, steps, shells)
            result = manager.run(
                width,
                height,
                board_info.map,
                base_name(str(map_file)),
                steps,
                shells,
                player1,
                base_name(algorithm1_name),
                player2,
                base_name(algorithm2_name),
                algorithm1.tank_algorithm_factory,
                algorithm2.tank_algorithm_factory,
            )
            print(format_game_result(result, width, height), end="")
            return True
        finally:
            managers.clear()
            algorithms.clear()


def main(argv=None) -> int:
    """Run a debug battle on the map file named by the first argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        program = Path(sys.argv[0]).name if sys.argv and sys.argv[0] else "simulator"
        print(f"Usage: {program} <input_file>\n", file=sys.stderr)
        return 1
    try:
        Simulator().debug_battle(
            args[0], DEFAULT_GAME_MANAGER, DEFAULT_ALGORITHM1, DEFAULT_ALGORITHM2
        )
    except BoardFormatError as err:
        print(err)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())