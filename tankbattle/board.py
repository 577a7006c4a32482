"""The battlefield: cells of objects on a wrapping grid, and collision rules."""

from __future__ import annotations

from typing import Callable

from .common import ActionRequest
from .geometry import Direction, direction_arrow, move, opposite_direction
from .objects import GameObject, Mine, Shell, Tank, Wall
from .satellite import GridSatelliteView

SHOOT_COOLDOWN = 5


def _planned_direction(tank: Tank) -> Direction | None:
    """The direction a tank will move or shoot towards this step, if any."""
    action = tank.action_to_perform
    count = tank.backward_count
    if action is ActionRequest.MOVE_FORWARD and count in (0, 3):
        return tank.direction
    if (action is ActionRequest.MOVE_BACKWARD and count == 3) or (
        count == 2 and action is not ActionRequest.MOVE_FORWARD
    ):
        return opposite_direction(tank.direction)
    if action is ActionRequest.SHOOT and count in (0, 3):
        return tank.direction
    return None


class Board:
    """Every object in play, both by cell and by kind, in order of arrival."""

    def __init__(
        self,
        width: int,
        height: int,
        on_tank_killed: Callable[[Tank], None] | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.on_tank_killed = on_tank_killed
        self._cells: list[list[list[GameObject]]] = [
            [[] for _ in range(height)] for _ in range(width)
        ]
        self.tanks: list[Tank] = []
        self.shells: list[Shell] = []
        self.walls: list[Wall] = []
        self.mines: list[Mine] = []

    # ---- adding and removing ----

    def _place(self, obj: GameObject, group: list) -> None:
        group.append(obj)
        self._cells[obj.x][obj.y].append(obj)

    def add_tank(self, tank: Tank) -> Tank:
        """Put ``tank`` on the board at its own position."""
        self._place(tank, self.tanks)
        return tank

    def add_wall(self, x: int, y: int) -> Wall:
        """Build a wall at ``(x, y)``."""
        wall = Wall(x, y)
        self._place(wall, self.walls)
        return wall

    def add_mine(self, x: int, y: int) -> Mine:
        """Lay a mine at ``(x, y)``."""
        mine = Mine(x, y)
        self._place(mine, self.mines)
        return mine

    def add_shell(self, x: int, y: int, direction: Direction) -> Shell:
        """Launch a shell at ``(x, y)`` flying in ``direction``."""
        shell = Shell(x, y, direction)
        self._place(shell, self.shells)
        return shell

    def objects_at(self, x: int, y: int) -> list[GameObject]:
        """Return the objects in cell ``(x, y)``, oldest first."""
        return list(self._cells[x][y])

    def _group_of(self, obj: GameObject) -> list:
        if isinstance(obj, Tank):
            return self.tanks
        if isinstance(obj, Shell):
            return self.shells
        if isinstance(obj, Wall):
            return self.walls
        if isinstance(obj, Mine):
            return self.mines
        raise TypeError(f"unknown board object {type(obj).__name__}")

    def remove(self, obj: GameObject) -> None:
        """Take ``obj`` off the board; removing it twice has no effect."""
        cell = self._cells[obj.x][obj.y]
        if obj in cell:
            cell.remove(obj)
        group = self._group_of(obj)
        if obj not in group:
            return
        group.remove(obj)
        if isinstance(obj, Tank) and self.on_tank_killed is not None:
            self.on_tank_killed(obj)

    def empty_cell(self, x: int, y: int) -> None:
        """Remove everything in cell ``(x, y)``."""
        for obj in list(self._cells[x][y]):
            self.remove(obj)
        self._cells[x][y].clear()

    def move_object(self, obj: GameObject, direction: Direction | None = None) -> None:
        """Move ``obj`` one cell; a shell defaults to its own heading."""
        if direction is None:
            if not isinstance(obj, Shell):
                raise ValueError("only a shell can move without an explicit direction")
            direction = obj.direction
        new_x, new_y = move((obj.x, obj.y), self.width, self.height, direction)
        cell = self._cells[obj.x][obj.y]
        if obj in cell:
            cell.remove(obj)
        self._cells[new_x][new_y].append(obj)
        obj.x, obj.y = new_x, new_y

    # ---- queries ----

    def living_tanks(self, player: int) -> int:
        """Count the tanks of ``player`` still on the board."""
        return sum(1 for tank in self.tanks if tank.player == player)

    def _cell_positions(self):
        for x in range(self.width):
            for y in range(self.height):
                yield x, y

    def to_satellite_view(self) -> GridSatelliteView:
        """Snapshot the board, showing the newest object in each cell."""
        view = GridSatelliteView(self.width, self.height)
        for x, y in self._cell_positions():
            cell = self._cells[x][y]
            if not cell:
                continue
            top = cell[-1]
            if isinstance(top, Shell):
                view.set_object_at(x, y, "*")
            elif isinstance(top, Mine):
                view.set_object_at(x, y, "@")
            elif isinstance(top, Wall):
                view.set_object_at(x, y, "#")
            elif isinstance(top, Tank) and top.player in (1, 2):
                view.set_object_at(x, y, str(top.player))
        return view

    def render(self) -> str:
        """Draw the board row by row, with arrows for shells and ``_`` for empty cells."""
        lines = []
        for y in range(self.height):
            chars = []
            for x in range(self.width):
                cell = self._cells[x][y]
                if not cell:
                    chars.append("_")
                    continue
                top = cell[-1]
                if isinstance(top, Tank):
                    chars.append(str(top.player))
                elif isinstance(top, Shell):
                    chars.append(direction_arrow(top.direction))
                elif isinstance(top, Wall):
                    chars.append("#")
                elif isinstance(top, Mine):
                    chars.append("@")
            lines.append("".join(chars) + "\n")
        return "".join(lines)

    # ---- collisions ----

    def _midway_partner(self, obj: GameObject, only_shells: bool) -> GameObject | None:
        if isinstance(obj, Shell):
            ours = obj.direction
        elif isinstance(obj, Tank):
            if only_shells:
                return None
            ours = _planned_direction(obj)
            if ours is None:
                return None
        else:
            return None
        nx, ny = move((obj.x, obj.y), self.width, self.height, ours)
        for other in self._cells[nx][ny]:
            if isinstance(other, Tank):
                if only_shells:
                    continue
                theirs = _planned_direction(other)
                if theirs is None:
                    continue
                if opposite_direction(theirs) == ours:
                    return other
            elif isinstance(other, Shell):
                if opposite_direction(other.direction) == ours:
                    return other
        return None

    def resolve_midway_collisions(self, only_shells: bool) -> None:
        """Destroy objects that would pass through each other this half-step.

        A tank caught while shooting survives: its shot is spent on the
        collision instead.
        """
        movers: list[GameObject] = list(self.shells)
        if not only_shells:
            movers.extend(self.tanks)
        collided = [
            partner
            for partner in (self._midway_partner(obj, only_shells) for obj in movers)
            if partner is not None
        ]
        for obj in collided:
            if isinstance(obj, Tank) and obj.action_to_perform is ActionRequest.SHOOT:
                obj.action_to_perform = ActionRequest.DO_NOTHING
                obj.shell_num -= 1
                obj.shoot_cooldown = SHOOT_COOLDOWN
                continue
            self.remove(obj)

    def _resolve_cell(self, x: int, y: int) -> None:
        cell = self._cells[x][y]
        tanks = sum(isinstance(o, Tank) for o in cell)
        shells = sum(isinstance(o, Shell) for o in cell)
        walls = sum(isinstance(o, Wall) for o in cell)
        mines = sum(isinstance(o, Mine) for o in cell)
        if walls == 1:
            if shells >= 2:
                self.empty_cell(x, y)
            elif shells == 1:
                for obj in list(cell):
                    if isinstance(obj, Wall):
                        if obj.weak:
                            self.remove(obj)
                        else:
                            obj.become_weak()
                    elif isinstance(obj, Shell):
                        self.remove(obj)
        elif tanks > 1 or tanks + shells >= 2 or (mines == 1 and tanks != 0):
            self.empty_cell(x, y)

    def resolve_cell_collisions(self) -> None:
        """Apply hits in every cell: shells against walls, tanks, shells and mines."""
        for x, y in self._cell_positions():
            self._resolve_cell(x, y)