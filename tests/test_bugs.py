import pytest

from termgalaga.bugs import (
    BOTTOM_ROW,
    DIVE_AFTER,
    HOME_X,
    HOME_Y,
    MAX_BUGS,
    MIRROR_WIDTH,
    PATH_X1,
    PATH_X2,
    PATH_Y1,
    PATH_Y2,
    FlyPattern,
    Side,
    Stage,
    Swarm,
    choose_fly_pattern,
    choose_spawn_side,
    home_position,
)


class _FixedRng:
    def __init__(self, value):
        self.value = value
        self.calls = 0

    def randrange(self, stop):
        self.calls += 1
        return self.value


class _NoRng:
    def randrange(self, stop):
        raise AssertionError("random choice not expected")


def test_spawn_side_fixed_for_early_ids():
    assert choose_spawn_side(0, _NoRng()) is Side.LEFT
    assert choose_spawn_side(6, _NoRng()) is Side.LEFT
    assert choose_spawn_side(7, _NoRng()) is Side.RIGHT
    assert choose_spawn_side(62, _NoRng()) is Side.LEFT


def test_spawn_side_random_for_late_ids():
    rng = _FixedRng(1)
    assert choose_spawn_side(63, rng) is Side.RIGHT
    assert rng.calls == 1
    assert choose_spawn_side(90, _FixedRng(0)) is Side.LEFT


def test_fly_pattern_fixed_for_early_ids():
    assert choose_fly_pattern(13, _NoRng()) is FlyPattern.LEFT
    assert choose_fly_pattern(14, _NoRng()) is FlyPattern.RIGHT
    assert choose_fly_pattern(55, _NoRng()) is FlyPattern.RIGHT


def test_fly_pattern_random_for_late_ids():
    rng = _FixedRng(0)
    assert choose_fly_pattern(56, rng) is FlyPattern.LEFT
    assert rng.calls == 1


def test_home_position_of_row_starts():
    for row in range(len(HOME_X)):
        assert home_position(row * 7) == (HOME_X[row], HOME_Y[row])


def test_home_position_columns_step_right():
    for bug_id in range(MAX_BUGS):
        row_start = bug_id - bug_id % 7
        x, y = home_position(bug_id)
        start_x, start_y = home_position(row_start)
        assert x - start_x == bug_id % 7
        assert y == start_y


@pytest.mark.parametrize("bug_id", [-1, MAX_BUGS])
def test_home_position_rejects_out_of_range(bug_id):
    with pytest.raises(ValueError):
        home_position(bug_id)


def test_spawn_puts_newest_first_at_origin():
    swarm = Swarm()
    first = swarm.spawn(0, _NoRng())
    second = swarm.spawn(7, _NoRng())
    assert list(swarm) == [second, first]
    assert (second.x, second.y, second.counter) == (0, 0, 0)
    assert second.stage is Stage.ENTERING
    assert second.side is Side.RIGHT


def test_entering_follows_left_path_then_homes():
    swarm = Swarm()
    bug = swarm.spawn(0, _NoRng())
    spawn_map = [0] * MAX_BUGS
    seen = []
    for _ in PATH_X1:
        swarm.move(23, spawn_map)
        seen.append((bug.x, bug.y))
    assert seen == list(zip(PATH_X1, PATH_Y1))
    assert bug.stage is Stage.ENTERING
    swarm.move(23, spawn_map)
    assert bug.stage is Stage.HOMING
    assert (bug.x, bug.y) == (PATH_X1[-1], PATH_Y1[-1])


@pytest.mark.parametrize(
    "bug_id, expected_x, expected_y",
    [
        (0, PATH_X1[0], PATH_Y1[0]),
        (7, MIRROR_WIDTH - PATH_X1[0], PATH_Y1[0]),
        (14, MIRROR_WIDTH - PATH_X2[0], PATH_Y2[0]),
        (21, PATH_X2[0], PATH_Y2[0]),
    ],
)
def test_first_step_by_side_and_pattern(bug_id, expected_x, expected_y):
    swarm = Swarm()
    bug = swarm.spawn(bug_id, _NoRng())
    swarm.move(23, [0] * MAX_BUGS)
    assert (bug.x, bug.y) == (expected_x, expected_y)


def test_homing_reaches_slot_one_step_at_a_time():
    swarm = Swarm()
    bug = swarm.spawn(5, _NoRng())
    spawn_map = [0] * MAX_BUGS
    for _ in range(200):
        if bug.stage is Stage.HOMING:
            break
        swarm.move(23, spawn_map)
    assert bug.stage is Stage.HOMING
    for _ in range(200):
        before = (bug.x, bug.y)
        swarm.move(23, spawn_map)
        assert abs(bug.x - before[0]) <= 1
        assert abs(bug.y - before[1]) <= 1
        if bug.stage is not Stage.HOMING:
            break
    assert bug.stage is Stage.HOLDING
    assert (bug.x, bug.y) == home_position(5)


def test_holding_turns_to_diving():
    swarm = Swarm()
    bug = swarm.spawn(0, _NoRng())
    bug.stage = Stage.HOLDING
    bug.counter = DIVE_AFTER - 2
    swarm.move(23, [0] * MAX_BUGS)
    assert bug.stage is Stage.HOLDING
    swarm.move(23, [0] * MAX_BUGS)
    assert bug.stage is Stage.DIVING


def test_diving_chases_player_and_falls_off():
    swarm = Swarm()
    bug = swarm.spawn(0, _NoRng())
    bug.stage = Stage.DIVING
    bug.x, bug.y = 10, BOTTOM_ROW - 1
    spawn_map = [0] * MAX_BUGS
    spawn_map[0] = 1
    assert swarm.move(20, spawn_map) == []
    assert (bug.x, bug.y) == (11, BOTTOM_ROW)
    assert spawn_map[0] == 1
    fallen = swarm.move(5, spawn_map)
    assert fallen == [bug]
    assert bug.x == 10
    assert spawn_map[0] == 0
    assert len(swarm) == 0


def test_whole_flight_ends_with_bug_removed():
    swarm = Swarm()
    bug = swarm.spawn(40, _NoRng())
    keeper = swarm.spawn(3, _NoRng())
    spawn_map = [0] * MAX_BUGS
    spawn_map[40] = spawn_map[3] = 1
    stages = set()
    for _ in range(1000):
        if bug not in list(swarm):
            break
        stages.add(bug.stage)
        keeper.counter = 0 if keeper.stage is Stage.HOLDING else keeper.counter
        swarm.move(23, spawn_map)
    assert bug not in list(swarm)
    assert stages == set(Stage)
    assert spawn_map[40] == 0
    assert spawn_map[3] == 1
    assert list(swarm) == [keeper]


def test_kill_removes_and_returns_bug():
    swarm = Swarm()
    a = swarm.spawn(1, _NoRng())
    b = swarm.spawn(2, _NoRng())
    assert swarm.kill(1) is a
    assert list(swarm) == [b]
    assert swarm.kill(1) is None
    assert list(swarm) == [b]


def test_clear_empties_swarm():
    swarm = Swarm()
    for bug_id in range(5):
        swarm.spawn(bug_id, _NoRng())
    assert len(swarm) == 5
    swarm.clear()
    assert len(swarm) == 0
    assert list(swarm) == []