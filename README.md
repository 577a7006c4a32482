# tankbattle

A turn-based tank battle simulator. Two players command tanks on a wrapping
(toroidal) board that also holds walls and mines. On every step each tank asks
its algorithm for an action. The game manager then moves shells and tanks,
resolves collisions and decides whether the game is over.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

## Map files

A map file has five header lines followed by the board rows:

```
A short description of the map
MaxSteps = 500
NumShells = 16
Rows = 4
Cols = 10
##########
#1      2#
#   @    #
##########
```

The first line is ignored. Each of the next four lines must contain its key
followed by `=` and a whole number, in this order: `MaxSteps`, `NumShells`,
`Rows` (board height) and `Cols` (board width).

Cell symbols:

- `#` wall
- `1` tank of player 1
- `2` tank of player 2
- `@` mine
- any other character: empty

`Simulator.read_board` raises `BoardFormatError` when the file cannot be opened
or a header line is missing or cannot be parsed. If the board itself has
missing or extra rows or columns, reading goes on. The problems are listed in
`BoardInfo.problems` and written to `input_errors.txt`, or to the file passed as
`errors_file` to `Simulator`.

## Running a battle

```
tankbattle path/to/map.txt
```

This runs one verbose game on the map. Player 1 is a `SnapshotPlayer` with
`RotatingTankAlgorithm` tanks. Player 2 is a `ShellTrackingPlayer` with
`PathfindingTankAlgorithm` tanks.

While the game runs, the board and the state of every tank are printed after
each step. At the end, the result is printed: the winner, the reason, the
number of rounds, the tanks left to each player, and the final board (`_` marks
an empty cell).

Because the game is verbose, it also writes a log file named
`output_<map>_<name1>_<name2>_<stamp>.txt`. The log has one line per step
listing every tank's action, marked `(ignored)` or `(killed)` where that
applies, and ends with the outcome.

The command exits with status 1 when no map file is given or the map header
cannot be read.

## Using it as a library

```python
from tankbattle.simulator import Simulator
from tankbattle.game_manager import GameManager
from tankbattle.players import SnapshotPlayer, ShellTrackingPlayer
from tankbattle.tank_algorithm import RotatingTankAlgorithm, PathfindingTankAlgorithm
from tankbattle.geometry import format_game_result

info = Simulator().read_board("map.txt")
w, h = info.map_width, info.map_height
manager = GameManager(verbose=False)
result = manager.run(
    w, h, info.map, "map",
    info.max_steps, info.num_shells,
    SnapshotPlayer(1, w, h, info.max_steps, info.num_shells), "p1",
    ShellTrackingPlayer(2, w, h, info.max_steps, info.num_shells), "p2",
    RotatingTankAlgorithm, PathfindingTankAlgorithm,
)
print(result.winner, result.reason, result.rounds, result.remaining_tanks)
print(format_game_result(result, w, h))
```

`GameManager` always prints the board after each step. `verbose` only controls
whether the log file is written.

### Main modules

- `tankbattle.common`: the interfaces `SatelliteView`, `BattleInfo`,
  `TankAlgorithm`, `Player` and `AbstractGameManager`, the `ActionRequest` and
  `Reason` enums, and the `GameResult` dataclass.
- `tankbattle.geometry`: `Direction`, wrapping `move`, the rotation helpers,
  `opposite_direction`, `format_game_result` and `base_name`.
- `tankbattle.satellite`: `GridSatelliteView`, a settable grid. Outside the
  board it reports `'&'`.
- `tankbattle.objects`: `Tank`, `Shell`, `Wall` and `Mine`.
- `tankbattle.board`: `Board`, which holds the cells and applies the collision
  rules.
- `tankbattle.battle_info`: `BoardBattleInfo`, built by
  `from_player_one_view` or `from_player_two_view`.
- `tankbattle.players` and `tankbattle.tank_algorithm`: the built-in players
  and tank algorithms.
- `tankbattle.registry`: the registrars and the `register_player`,
  `register_tank_algorithm` and `register_game_manager` class decorators.
- `tankbattle.cli`: `CommandLineParser`, `SimulationConfig` and `Mode`.

### Plug-ins

A `Simulator` finds its game manager and algorithms through a mapping from name
to a loader callable. The default names are `GameManager`, `Algorithm1` and
`Algorithm2`. A loader registers factories with the process-wide registrars
(`algorithm_registrar()`, `game_manager_registrar()`). It does this with the
`register_*` decorators, which attach a factory to the entry that was created
last. `Simulator.debug_battle` creates that entry for each name and then calls
the loader.

To use your own players, tank algorithms or game managers, pass your own
mapping:

```python
from tankbattle.registry import register_player, register_tank_algorithm

def load_mine():
    register_player(MyPlayer)
    register_tank_algorithm(MyTankAlgorithm)

Simulator(plugins={..., "Mine": load_mine})
```

## Game rules in brief

- The board wraps around at every edge.
- Shells move twice per step. Tanks act once per step.
- Objects that would pass through each other are destroyed.
- A shell weakens a wall; a second hit destroys it.
- Tanks are destroyed by shells, by other tanks in the same cell, and by mines.
- Moving backward takes effect after a two-step wait. During the wait, any
  action other than moving forward is ignored.
- After shooting, a tank must wait before it can shoot again.

A game ends when:

- all tanks of one or both players are destroyed (`ALL_TANKS_DEAD`),
- the step limit is reached (`MAX_STEPS`), or
- every tank has run out of shells and 40 more steps have passed
  (`ZERO_SHELLS`).

A winner of `0` means a tie.

## What it does not do

`tankbattle.cli.CommandLineParser` understands the `-comparative` and
`-competition` modes, their `key=value` arguments, `num_threads` and
`-verbose`. It checks that the named files and folders exist and can describe
every problem with `usage_with_errors()`. Nothing in the package runs those
modes, however. The `tankbattle` command only plays a single debug battle on
one map. The package does not run tournaments over folders of maps, game
managers or algorithms, does not use threads, and does not load plug-ins from
files on disk. Plug-ins are Python callables that you pass to `Simulator`.