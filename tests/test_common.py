import pytest

from tankbattle.common import (
    AbstractGameManager,
    ActionRequest,
    BattleInfo,
    GameResult,
    Player,
    Reason,
    SatelliteView,
    TankAlgorithm,
)


class _FixedView(SatelliteView):
    def get_object_at(self, x, y):
        return "#" if (x, y) == (0, 0) else " "


class _Shooter(TankAlgorithm):
    def __init__(self):
        self.received = []

    def get_action(self):
        return ActionRequest.SHOOT

    def update_battle_info(self, info):
        self.received.append(info)


class _Forwarder(Player):
    def __init__(self, info):
        self.info = info

    def update_tank_with_battle_info(self, tank, satellite_view):
        tank.update_battle_info(self.info)


class _TieManager(AbstractGameManager):
    def run(self, map_width, map_height, game_map, map_name, max_steps, num_shells,
            player1, name1, player2, name2, player1_tank_algo_factory,
            player2_tank_algo_factory):
        return GameResult(winner=0, reason=Reason.MAX_STEPS,
                          remaining_tanks=[1, 1], game_state=game_map, rounds=max_steps)


@pytest.mark.parametrize("cls", [SatelliteView, TankAlgorithm, Player, AbstractGameManager])
def test_interfaces_are_abstract(cls):
    with pytest.raises(TypeError):
        cls()


def test_action_request_has_nine_distinct_actions():
    assert len(set(ActionRequest)) == 9
    assert ActionRequest("GetBattleInfo") is ActionRequest.GET_BATTLE_INFO


def test_reason_members():
    assert [r.name for r in Reason] == ["ALL_TANKS_DEAD", "MAX_STEPS", "ZERO_SHELLS"]
    result = GameResult(reason=Reason.ZERO_SHELLS)
    assert result.reason.name == "ZERO_SHELLS"


def test_game_result_defaults_are_independent():
    first = GameResult()
    second = GameResult()
    first.remaining_tanks.append(3)
    assert second.remaining_tanks == []
    assert first.game_state is None and first.winner == 0


def test_satellite_view_subclass():
    result = GameResult(game_state=_FixedView())
    assert result.game_state.get_object_at(0, 0) == "#"
    assert result.game_state.get_object_at(1, 0) == " "


def test_player_passes_info_to_tank():
    info = BattleInfo()
    tank = _Shooter()
    _Forwarder(info).update_tank_with_battle_info(tank, _FixedView())
    assert tank.received == [info]
    assert tank.get_action() is ActionRequest("Shoot")


def test_game_manager_subclass_run():
    view = _FixedView()
    info = BattleInfo()
    result = _TieManager().run(1, 1, view, "map", 7, 2, _Forwarder(info), "a",
                               _Forwarder(info), "b", lambda p, t: _Shooter(),
                               lambda p, t: _Shooter())
    expected = GameResult(winner=0, reason=Reason.MAX_STEPS,
                          remaining_tanks=[1, 1], game_state=view, rounds=7)
    assert result == expected
    assert result.reason is Reason.MAX_STEPS
    assert result.rounds == 7
    assert result.game_state is view