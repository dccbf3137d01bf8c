from cosmon.shutdown import ShutdownDebouncer
from cosmon.state import Intent


def test_starts_at_zero():
    d = ShutdownDebouncer(activate_count=30)
    assert d.pressed_count == 0
    assert d.fired is False


def test_count_tracks_consecutive_presses_and_resets():
    d = ShutdownDebouncer(activate_count=30)
    for k in range(1, 11):
        assert d.on_sample(True) is None
        assert d.pressed_count == k

    assert d.on_sample(False) is None
    assert d.pressed_count == 0


def test_fires_on_31st_press_with_threshold_30():
    d = ShutdownDebouncer(activate_count=30)
    results = [d.on_sample(True) for _ in range(31)]
    assert results[:30] == [None] * 30
    assert results[30] is Intent.SHUTDOWN
    assert d.pressed_count == 31


def test_fires_only_once():
    d = ShutdownDebouncer(activate_count=2)
    results = [d.on_sample(True) for _ in range(10)]
    assert results.count(Intent.SHUTDOWN) == 1
    assert results.index(Intent.SHUTDOWN) == 2


def test_bouncy_button_never_fires():
    d = ShutdownDebouncer(activate_count=5)
    pattern = ([True] * 5 + [False]) * 20
    assert all(d.on_sample(p) is None for p in pattern)
    assert d.fired is False
