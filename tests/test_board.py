import pytest

from tankbattle.board import Board
from tankbattle.common import ActionRequest
from tankbattle.geometry import Direction
from tankbattle.objects import Tank


def make_tank(x, y, direction=Direction.L, serial=0, player=1, shells=3):
    return Tank(x, y, direction, serial, player, serial, shells)


@pytest.fixture
def killed():
    return []


@pytest.fixture
def board(killed):
    return Board(5, 5, killed.append)


def test_added_objects_are_in_their_cells(board):
    wall = board.add_wall(1, 2)
    mine = board.add_mine(1, 2)
    tank = board.add_tank(make_tank(3, 3))
    assert board.objects_at(1, 2) == [wall, mine]
    assert board.objects_at(3, 3) == [tank]
    assert board.tanks == [tank]
    assert board.walls == [wall]
    assert board.mines == [mine]


def test_move_wraps_and_updates_position(board):
    shell = board.add_shell(4, 0, Direction.R)
    board.move_object(shell)
    assert (shell.x, shell.y) == (0, 0)
    assert board.objects_at(0, 0) == [shell]
    assert board.objects_at(4, 0) == []


def test_tank_needs_explicit_direction(board):
    tank = board.add_tank(make_tank(2, 2))
    with pytest.raises(ValueError):
        board.move_object(tank)
    board.move_object(tank, Direction.L)
    assert (tank.x, tank.y) == (1, 2)


def test_remove_tank_reports_kill_once(board, killed):
    tank = board.add_tank(make_tank(2, 2, player=2))
    assert board.living_tanks(2) == 1
    board.remove(tank)
    board.remove(tank)
    assert killed == [tank]
    assert board.living_tanks(2) == 0
    assert board.objects_at(2, 2) == []


def test_two_tanks_in_a_cell_destroy_each_other(board, killed):
    a = board.add_tank(make_tank(1, 1, serial=0, player=1))
    b = board.add_tank(make_tank(1, 1, serial=1, player=2))
    board.resolve_cell_collisions()
    assert board.objects_at(1, 1) == []
    assert killed == [a, b]


def test_shell_hits_tank(board, killed):
    tank = board.add_tank(make_tank(1, 1))
    board.add_shell(1, 1, Direction.U)
    board.resolve_cell_collisions()
    assert board.objects_at(1, 1) == []
    assert board.shells == []
    assert killed == [tank]


def test_wall_weakens_then_falls(board):
    wall = board.add_wall(2, 2)
    board.add_shell(2, 2, Direction.U)
    board.resolve_cell_collisions()
    assert wall.weak
    assert board.objects_at(2, 2) == [wall]
    assert board.shells == []
    board.add_shell(2, 2, Direction.U)
    board.resolve_cell_collisions()
    assert board.objects_at(2, 2) == []
    assert board.walls == []


def test_two_shells_bring_down_a_wall(board):
    board.add_wall(2, 2)
    board.add_shell(2, 2, Direction.U)
    board.add_shell(2, 2, Direction.D)
    board.resolve_cell_collisions()
    assert board.objects_at(2, 2) == []
    assert board.walls == [] and board.shells == []


def test_mine_kills_tank_but_stays_alone(board, killed):
    lone = board.add_mine(0, 0)
    board.add_mine(3, 3)
    tank = board.add_tank(make_tank(3, 3))
    board.resolve_cell_collisions()
    assert board.objects_at(3, 3) == []
    assert killed == [tank]
    assert board.mines == [lone]


def test_shells_passing_each_other_collide(board):
    board.add_shell(1, 1, Direction.R)
    board.add_shell(2, 1, Direction.L)
    board.resolve_midway_collisions(only_shells=True)
    assert board.shells == []


def test_shell_half_step_ignores_tanks(board, killed):
    shell = board.add_shell(1, 1, Direction.R)
    tank = board.add_tank(make_tank(2, 1, direction=Direction.L))
    tank.action_to_perform = ActionRequest.MOVE_FORWARD
    board.resolve_midway_collisions(only_shells=True)
    assert board.shells == [shell]
    assert board.tanks == [tank]
    board.resolve_midway_collisions(only_shells=False)
    assert board.shells == []
    assert killed == [tank]


def test_shooting_tank_spends_shot_on_midway_shell(board, killed):
    board.add_shell(1, 1, Direction.R)
    tank = board.add_tank(make_tank(2, 1, direction=Direction.L, shells=3))
    tank.action_to_perform = ActionRequest.SHOOT
    board.resolve_midway_collisions(only_shells=False)
    assert board.shells == []
    assert board.tanks == [tank]
    assert killed == []
    assert tank.action_to_perform is ActionRequest.DO_NOTHING
    assert tank.shell_num == 2
    assert tank.shoot_cooldown == 5


def test_satellite_view_shows_top_objects(board):
    board.add_wall(0, 0)
    board.add_mine(1, 0)
    board.add_shell(2, 0, Direction.U)
    board.add_tank(make_tank(3, 0, player=1))
    board.add_tank(make_tank(4, 0, player=2))
    view = board.to_satellite_view()
    assert [view.get_object_at(x, 0) for x in range(5)] == ["#", "@", "*", "1", "2"]
    assert view.get_object_at(0, 1) == " "


def test_render_shape_and_symbols():
    board = Board(3, 2)
    board.add_wall(0, 0)
    board.add_tank(make_tank(2, 1, player=2))
    board.add_shell(1, 1, Direction.R)
    text = board.render()
    assert text == "#__\n_→2\n"
    assert all(len(line) == 3 for line in text.splitlines())