"""Registries of game managers, players and tank algorithms, by name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .common import (
    AbstractGameManager,
    GameManagerFactory,
    Player,
    PlayerFactory,
    TankAlgorithm,
    TankAlgorithmFactory,
)


class BadRegistrationError(Exception):
    """A registration entry lacks its name or one of its factories."""

    def __init__(self, name: str, has_name: bool, factories: dict[str, bool]) -> None:
        self.name = name
        self.has_name = has_name
        self.factories = dict(factories)
        missing = [kind for kind, present in self.factories.items() if not present]
        if not has_name:
            missing.insert(0, "name")
        super().__init__(f"bad registration {name!r}: missing {', '.join(missing)}")


@dataclass
class AlgorithmEntry:
    """A named pair of player and tank algorithm factories."""

    name: str
    player_factory: PlayerFactory | None = None
    tank_algorithm_factory: TankAlgorithmFactory | None = None

    def create_player(self, player_index, x, y, max_steps, num_shells) -> Player:
        """Build a player with the registered factory."""
        if self.player_factory is None:
            raise RuntimeError(f"{self.name!r} has no player factory")
        return self.player_factory(player_index, x, y, max_steps, num_shells)

    def create_tank_algorithm(self, player_index, tank_index) -> TankAlgorithm:
        """Build a tank algorithm with the registered factory."""
        if self.tank_algorithm_factory is None:
            raise RuntimeError(f"{self.name!r} has no tank algorithm factory")
        return self.tank_algorithm_factory(player_index, tank_index)


class AlgorithmRegistrar:
    """Ordered entries of algorithms; factories attach to the newest entry."""

    def __init__(self) -> None:
        self._entries: list[AlgorithmEntry] = []

    def _last(self) -> AlgorithmEntry:
        if not self._entries:
            raise IndexError("no algorithm entry has been created")
        return self._entries[-1]

    def create_entry(self, name: str) -> AlgorithmEntry:
        """Start a new entry named ``name``."""
        entry = AlgorithmEntry(name)
        self._entries.append(entry)
        return entry

    def add_player_factory(self, factory: PlayerFactory) -> None:
        """Attach a player factory to the newest entry."""
        last = self._last()
        if last.player_factory is not None:
            raise ValueError(f"{last.name!r} already has a player factory")
        last.player_factory = factory

    def add_tank_algorithm_factory(self, factory: TankAlgorithmFactory) -> None:
        """Attach a tank algorithm factory to the newest entry."""
        last = self._last()
        if last.tank_algorithm_factory is not None:
            raise ValueError(f"{last.name!r} already has a tank algorithm factory")
        last.tank_algorithm_factory = factory

    def validate_last(self) -> None:
        """Raise BadRegistrationError unless the newest entry is complete."""
        last = self._last()
        has_name = last.name != ""
        has_player = last.player_factory is not None
        has_tank = last.tank_algorithm_factory is not None
        if not (has_name and has_player and has_tank):
            raise BadRegistrationError(
                last.name,
                has_name,
                {"player_factory": has_player, "tank_algorithm_factory": has_tank},
            )

    def remove_last(self) -> None:
        """Drop the newest entry."""
        self._entries.pop()

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def __getitem__(self, index: int) -> AlgorithmEntry:
        return self._entries[index]

    def __iter__(self) -> Iterator[AlgorithmEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class GameManagerEntry:
    """A named game manager factory."""

    name: str
    game_manager_factory: GameManagerFactory | None = None

    def create_game_manager(self, verbose: bool) -> AbstractGameManager:
        """Build a game manager with the registered factory."""
        if self.game_manager_factory is None:
            raise RuntimeError(f"{self.name!r} has no game manager factory")
        return self.game_manager_factory(verbose)


class GameManagerRegistrar:
    """Ordered entries of game managers; factories attach to the newest entry."""

    def __init__(self) -> None:
        self._entries: list[GameManagerEntry] = []

    def _last(self) -> GameManagerEntry:
        if not self._entries:
            raise IndexError("no game manager entry has been created")
        return self._entries[-1]

    def create_entry(self, name: str) -> GameManagerEntry:
        """Start a new entry named ``name``."""
        entry = GameManagerEntry(name)
        self._entries.append(entry)
        return entry

    def add_game_manager_factory(self, factory: GameManagerFactory) -> None:
        """Attach a game manager factory to the newest entry."""
        last = self._last()
        if last.game_manager_factory is not None:
            raise ValueError(f"{last.name!r} already has a game manager factory")
        last.game_manager_factory = factory

    def validate_last(self) -> None:
        """Raise BadRegistrationError unless the newest entry is complete."""
        last = self._last()
        has_name = last.name != ""
        has_factory = last.game_manager_factory is not None
        if not (has_name and has_factory):
            raise BadRegistrationError(
                last.name, has_name, {"game_manager_factory": has_factory}
            )

    def remove_last(self) -> None:
        """Drop the newest entry."""
        self._entries.pop()

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def __getitem__(self, index: int) -> GameManagerEntry:
        return self._entries[index]

    def __iter__(self) -> Iterator[GameManagerEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


_ALGORITHMS = AlgorithmRegistrar()
_GAME_MANAGERS = GameManagerRegistrar()


def algorithm_registrar() -> AlgorithmRegistrar:
    """Return the process-wide algorithm registrar."""
    return _ALGORITHMS


def game_manager_registrar() -> GameManagerRegistrar:
    """Return the process-wide game manager registrar."""
    return _GAME_MANAGERS


def register_player(cls):
    """Class decorator: register ``cls`` as the player factory of the newest entry."""
    _ALGORITHMS.add_player_factory(cls)
    return cls


def register_tank_algorithm(cls):
    """Class decorator: register ``cls`` as the tank algorithm factory of the newest entry."""
    _ALGORITHMS.add_tank_algorithm_factory(cls)
    return cls


def register_game_manager(cls):
    """Class decorator: register ``cls`` as the factory of the newest game manager entry."""
    _GAME_MANAGERS.add_game_manager_factory(cls)
    return cls