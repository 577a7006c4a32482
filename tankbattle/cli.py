"""Command-line parsing and validation for the simulator."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, replace
from enum import Enum


class Mode(Enum):
    """How the simulator pits algorithms and game managers against each other."""

    COMPARATIVE = "comparative"
    COMPETITIVE = "competition"


@dataclass
class SimulationConfig:
    """Settings gathered from the command line."""

    mode: Mode | None = None
    game_map_file: str = ""
    game_maps_folder: str = ""
    game_manager_file: str = ""
    game_managers_folder: str = ""
    algorithm1: str = ""
    algorithm2: str = ""
    algorithms_folder: str = ""
    num_threads: int = 1
    verbose: bool = False


_MODE_FLAGS = {
    "-comparative": Mode.COMPARATIVE,
    "-competition": Mode.COMPETITIVE,
}

# Argument key -> configuration field, in the order missing keys are reported.
_KEYS = {
    Mode.COMPARATIVE: {
        "game_map": "game_map_file",
        "game_managers_folder": "game_managers_folder",
        "algorithm1": "algorithm1",
        "algorithm2": "algorithm2",
    },
    Mode.COMPETITIVE: {
        "game_maps_folder": "game_maps_folder",
        "game_manager": "game_manager_file",
        "algorithms_folder": "algorithms_folder",
    },
}

_FILES = {
    Mode.COMPARATIVE: ("game_map_file", "algorithm1", "algorithm2"),
    Mode.COMPETITIVE: ("game_manager_file",),
}

_FOLDERS = {
    Mode.COMPARATIVE: ("game_managers_folder",),
    Mode.COMPETITIVE: ("algorithms_folder", "game_maps_folder"),
}

_USAGE = {
    Mode.COMPARATIVE: "  ./simulator_<ids> -comparative game_map=<file> "
    "game_managers_folder=<folder> algorithm1=<file> algorithm2=<file> "
    "[num_threads=<num>] [-verbose]\n",
    Mode.COMPETITIVE: "  ./simulator_<ids> -competition game_maps_folder=<folder> "
    "game_manager=<file> algorithms_folder=<folder> [num_threads=<num>] [-verbose]\n",
}

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1


def _leading_int(text: str) -> int:
    """Read the integer at the start of ``text``; trailing text is ignored."""
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"no integer in {text!r}")
    value = int(match.group(1))
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(f"{value} is out of range")
    return value


class CommandLineParser:
    """Parses simulator arguments (without the program name) and checks paths."""

    def __init__(self, argv) -> None:
        self.argv = list(argv)
        self.has_mode = False
        self.config = SimulationConfig()
        self.arguments: list[str] = []
        self.missing_arguments: list[str] = []
        self.unsupported_arguments: list[str] = []
        self.file_errors: list[str] = []
        self.folder_errors: list[str] = []

    def parse(self) -> bool:
        """Parse and validate the arguments; return whether all of them are usable."""
        self.has_mode = False
        self.config = SimulationConfig()
        self.arguments = []
        self.missing_arguments = []
        self.unsupported_arguments = []
        self.file_errors = []
        self.folder_errors = []

        self._parse_mode()
        if not self.has_mode:
            return False
        self._parse_arguments()
        self._validate_paths()
        return not (
            self.unsupported_arguments
            or self.missing_arguments
            or self.file_errors
            or self.folder_errors
        )

    def _parse_mode(self) -> None:
        for arg in self.argv:
            if arg == "-verbose" and not self.config.verbose:
                self.config.verbose = True
            elif arg in _MODE_FLAGS and not self.has_mode:
                self.config.mode = _MODE_FLAGS[arg]
                self.has_mode = True
            else:
                self.arguments.append(arg)

    def _parse_arguments(self) -> None:
        keys = _KEYS[self.config.mode]
        values: dict[str, str] = {}
        seen: set[str] = set()
        num_threads: int | None = None
        for arg in self.arguments:
            key, eq, value = arg.partition("=")
            if not eq:
                self.unsupported_arguments.append(arg)
            elif key in keys and key not in seen:
                values[keys[key]] = value
                seen.add(key)
            elif key == "num_threads" and num_threads is None:
                try:
                    num_threads = _leading_int(value)
                except ValueError:
                    self.unsupported_arguments.append(arg)
            else:
                self.unsupported_arguments.append(arg)
        if num_threads is not None:
            values["num_threads"] = num_threads
        self.config = replace(self.config, **values)
        self.missing_arguments = [key for key in keys if key not in seen]

    def _validate_paths(self) -> None:
        mode = self.config.mode
        for name in _FILES[mode]:
            self._validate_file(getattr(self.config, name))
        for name in _FOLDERS[mode]:
            self._validate_folder(getattr(self.config, name))

    def _validate_file(self, path: str) -> None:
        if not os.path.exists(path):
            self.file_errors.append(f"{path} doesn't exist")
            return
        try:
            with open(path, "rb"):
                pass
        except OSError:
            self.file_errors.append(f"{path} cannot be opened")

    def _validate_folder(self, path: str) -> None:
        if not os.path.exists(path):
            self.folder_errors.append(f"{path} doesn't exist")
        elif not os.path.isdir(path):
            self.folder_errors.append(f"{path} cannot be traversed")

    def usage_with_errors(self) -> str:
        """Describe every problem found by ``parse`` followed by the usage line."""
        if not self.has_mode:
            return (
                "Missing Mode Argument.\n"
                "Usage: ./simulator_<submitter_ids> -comparative ... or -competition ... "
                "with required arguments.\n"
            )
        mode_title = "Comparative" if self.config.mode is Mode.COMPARATIVE else "Compatitive"
        sections = [
            ("Unsupported Arguments (Including Duplicates):", self.unsupported_arguments),
            (f"Missing Arguments for {mode_title} Mode:", self.missing_arguments),
            ("File Arguments Problems:", self.file_errors),
            ("Folder Arguments Problems:", self.folder_errors),
        ]
        lines = []
        for title, items in sections:
            if items:
                lines.append(title)
                lines.extend(items)
        text = "".join(line + "\n" for line in lines)
        return text + "\nUsage:\n" + _USAGE[self.config.mode]