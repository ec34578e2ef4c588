import pytest

from framekit.timer import Timer


def make_timer(ticks, tps=1000):
    return Timer(iter(ticks).__next__, tps)


def test_new_timer_is_stopped():
    timer = make_timer([])
    assert timer.stopped is True
    assert timer.delta == 0.0
    assert timer.running == 0.0


def test_start_twice_raises():
    timer = make_timer([0, 10])
    timer.start()
    with pytest.raises(RuntimeError):
        timer.start()


def test_stop_when_stopped_raises():
    timer = make_timer([])
    with pytest.raises(RuntimeError):
        timer.stop()


def test_update_while_stopped_changes_nothing():
    timer = make_timer([])
    timer.update()
    assert timer.running == 0.0
    assert timer.fps == 0.0


def test_delta_after_update():
    timer = make_timer([0, 250])
    timer.start()
    timer.update()
    assert timer.stopped is False
    assert timer.delta == pytest.approx(0.25)


def test_running_is_sum_of_deltas():
    timer = make_timer([0, 120, 300, 310, 900])
    timer.start()
    deltas = []
    for _ in range(4):
        timer.update()
        deltas.append(timer.delta)
    assert timer.running == pytest.approx(sum(deltas))
    assert all(delta >= 0 for delta in deltas)


def test_stop_adds_remaining_time_and_zeroes_delta():
    timer = make_timer([0, 400, 1000])
    timer.start()
    timer.update()
    timer.stop()
    assert timer.running == pytest.approx(1.0)
    assert timer.delta == 0.0


def test_fps_measured_after_half_second():
    timer = make_timer([0, 250, 500])
    timer.start()
    timer.update()
    assert timer.fps == 0.0
    timer.update()
    assert timer.fps == pytest.approx(4.0)


def test_restart_after_stop():
    timer = make_timer([0, 100, 200, 300])
    timer.start()
    timer.stop()
    running_before = timer.running
    timer.start()
    timer.update()
    assert timer.running > running_before


def test_custom_counter_requires_resolution():
    with pytest.raises(ValueError):
        Timer(iter([0]).__next__)


def test_non_positive_resolution_rejected():
    with pytest.raises(ValueError):
        Timer(iter([0]).__next__, 0)