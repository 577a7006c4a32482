import pytest

from tankbattle.common import ActionRequest as A
from tankbattle.common import BattleInfo, Player, Reason, TankAlgorithm
from tankbattle.game_manager import GameManager
from tankbattle.satellite import GridSatelliteView


class Scripted(TankAlgorithm):
    def __init__(self, actions):
        self.actions = list(actions)
        self.infos = []

    def get_action(self):
        return self.actions.pop(0) if self.actions else A.DO_NOTHING

    def update_battle_info(self, info):
        self.infos.append(info)


class RecordingPlayer(Player):
    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.views = []

    def update_tank_with_battle_info(self, tank, satellite_view):
        rows = [
            "".join(satellite_view.get_object_at(x, y) for x in range(self.width))
            for y in range(self.height)
        ]
        self.views.append(rows)
        tank.update_battle_info(BattleInfo())


class Factory:
    def __init__(self, scripts=None):
        self.scripts = scripts or {}
        self.calls = []
        self.made = []

    def __call__(self, player_index, tank_index):
        self.calls.append((player_index, tank_index))
        algo = Scripted(self.scripts.get(tank_index, []))
        self.made.append(algo)
        return algo


def make_map(rows):
    width, height = len(rows[0]), len(rows)
    view = GridSatelliteView(width, height)
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch != ".":
                view.set_object_at(x, y, ch)
    return view, width, height


def play(rows, max_steps, num_shells, scripts1=None, scripts2=None, verbose=False, manager=None):
    view, width, height = make_map(rows)
    p1, p2 = RecordingPlayer(width, height), RecordingPlayer(width, height)
    f1, f2 = Factory(scripts1), Factory(scripts2)
    manager = manager or GameManager(verbose)
    result = manager.run(
        width, height, view, "arena", max_steps, num_shells,
        p1, "alpha", p2, "beta", f1, f2,
    )
    return result, (p1, p2), (f1, f2)


def output_lines(tmp_path):
    files = list(tmp_path.glob("output_arena_alpha_beta_*.txt"))
    assert len(files) == 1
    return files[0].read_text(encoding="utf-8").splitlines()


def test_only_player_one_has_tanks():
    result, _, _ = play(["1.1."], 10, 3)
    assert result.winner == 1
    assert result.reason is Reason.ALL_TANKS_DEAD
    assert result.rounds == 0
    assert result.remaining_tanks == [2, 0]


def test_no_tanks_is_a_tie():
    result, _, _ = play(["#.@."], 10, 3)
    assert result.winner == 0
    assert result.reason is Reason.ALL_TANKS_DEAD
    assert result.remaining_tanks == [0, 0]


def test_max_steps_tie():
    result, _, _ = play(["1..2"], 3, 5)
    assert result.reason is Reason.MAX_STEPS
    assert result.winner == 0
    assert result.rounds == 3
    assert result.remaining_tanks == [1, 1]


def test_shot_destroys_enemy():
    result, _, _ = play([".2.1."], 10, 1, scripts1={0: [A.SHOOT]})
    assert result.winner == 1
    assert result.reason is Reason.ALL_TANKS_DEAD
    assert result.remaining_tanks == [1, 0]
    assert result.rounds == 2
    assert result.game_state.get_object_at(1, 0) == " "
    assert result.game_state.get_object_at(3, 0) == "1"


def test_verbose_log_of_a_shot(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result, _, _ = play([".2.1."], 10, 1, scripts1={0: [A.SHOOT]}, verbose=True)
    assert result.winner == 1
    assert result.rounds == 2
    assert output_lines(tmp_path) == [
        "DoNothing, Shoot",
        "DoNothing (killed), DoNothing",
        "Player 1 won with 1 tanks still alive",
    ]


def test_tank_driving_onto_mine_dies():
    result, _, _ = play([".@1.2"], 10, 1, scripts1={0: [A.MOVE_FORWARD]})
    assert result.winner == 2
    assert result.remaining_tanks == [0, 1]
    assert result.game_state.get_object_at(1, 0) == " "


def test_move_into_wall_is_ignored(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result, _, _ = play([".#1.2"], 1, 1, scripts1={0: [A.MOVE_FORWARD]}, verbose=True)
    assert result.game_state.get_object_at(2, 0) == "1"
    assert result.game_state.get_object_at(1, 0) == "#"
    assert output_lines(tmp_path) == [
        "MoveForward (ignored), DoNothing",
        "Tie, reached max steps = 1, player 1 has 1 tanks, player 2 has 1 tanks",
    ]


def test_backward_move_happens_after_waiting(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result, _, _ = play(["..1..2"], 3, 1, scripts1={0: [A.MOVE_BACKWARD] * 3}, verbose=True)
    assert result.game_state.get_object_at(2, 0) == " "
    assert result.game_state.get_object_at(3, 0) == "1"
    lines = output_lines(tmp_path)
    assert lines[1] == "MoveBackward (ignored), DoNothing"


def test_rotation_changes_forward_direction():
    rows = ["...", ".1.", "..2"]
    result, _, _ = play(rows, 2, 1, scripts1={0: [A.ROTATE_RIGHT_90, A.MOVE_FORWARD]})
    assert result.game_state.get_object_at(1, 1) == " "
    assert result.game_state.get_object_at(1, 0) == "1"


def test_tanks_passing_each_other_both_die():
    result, _, _ = play(["..21.."], 5, 1, scripts1={0: [A.MOVE_FORWARD]}, scripts2={0: [A.MOVE_FORWARD]})
    assert result.winner == 0
    assert result.reason is Reason.ALL_TANKS_DEAD
    assert result.remaining_tanks == [0, 0]
    assert result.rounds == 1


def test_factories_called_in_board_order():
    _, _, (f1, f2) = play(["11.2"], 1, 1)
    assert f1.calls == [(1, 0), (1, 1)]
    assert f2.calls == [(2, 0)]


def test_zero_shells_ends_game():
    result, _, _ = play(["1..2"], 100, 0)
    assert result.reason is Reason.ZERO_SHELLS
    assert result.winner == 0
    assert result.rounds == 41
    assert result.remaining_tanks == [1, 1]


def test_manager_can_be_reused():
    manager = GameManager(False)
    first, _, _ = play(["1..2"], 4, 2, manager=manager)
    second, _, _ = play(["1..2"], 4, 2, manager=manager)
    assert (first.rounds, first.remaining_tanks, first.reason) == (
        second.rounds,
        second.remaining_tanks,
        second.reason,
    )


def test_prints_initial_board(capsys):
    play(["1..2"], 1, 0)
    out = capsys.readouterr().out
    assert "map_width: 4, map_height: 1, max_steps: 1, num_shells: 0, Initial board:" in out
    assert "1__2" in out


@pytest.mark.parametrize("shells", [0, 3])
def test_final_state_matches_board_size(shells):
    result, _, _ = play(["1.", ".2"], 2, shells)
    assert result.game_state.get_object_at(2, 0) == "&"
    assert result.game_state.get_object_at(1, 1) == "2"