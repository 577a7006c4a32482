from tankbattle.battle_info import BoardBattleInfo, from_player_one_view, from_player_two_view
from tankbattle.geometry import Direction
from tankbattle.objects import Shell

BOARD = [
    ["#", "1", " "],
    ["%", "2", "*"],
    ["@", "*", "2"],
]


def test_player_one_classifies_cells():
    info = from_player_one_view(BOARD, 7)
    assert info.max_steps == 7
    assert info.walls == [(0, 0)]
    assert info.friendly_tanks == [(1, 0)]
    assert info.enemy_tanks == [(1, 1), (2, 2)]
    assert info.mines == [(0, 2)]
    assert info.shells == [(2, 1), (1, 2)]
    assert info.tank_position == (0, 1)


def test_player_one_counts_visible_shells():
    info = from_player_one_view(BOARD, 7)
    assert info.num_of_shells == len(info.shells)


def test_player_two_swaps_sides_and_includes_self():
    info = from_player_two_view(BOARD, 5, [])
    assert info.enemy_tanks == [(1, 0)]
    assert info.friendly_tanks == [(0, 1), (1, 1), (2, 2)]
    assert info.tank_position == (0, 1)
    assert info.num_of_shells == 0
    assert info.shells == [(2, 1), (1, 2)]


def test_player_two_keeps_tracked_shells():
    shells = [Shell(2, 1, Direction.L)]
    info = from_player_two_view(BOARD, 5, shells)
    assert info.tracked_shells == shells
    shells.append(Shell(1, 2, Direction.U))
    assert len(info.tracked_shells) == 1


def test_board_is_copied():
    board = [row[:] for row in BOARD]
    info = from_player_one_view(board, 1)
    board[0][0] = " "
    assert info.board[0][0] == "#"
    assert info.board == BOARD


def test_no_tank_marker_leaves_default_position():
    info = from_player_one_view([["1", "2"]], 3)
    assert info.tank_position == (0, 0)


def test_default_info_is_empty():
    info = BoardBattleInfo()
    assert info.board == []
    assert info.enemy_tanks == [] and info.friendly_tanks == []