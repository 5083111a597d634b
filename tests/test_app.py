from mini_invaders.app import FireThrottle, cooldown_frames


def test_cooldown_frames():
    assert cooldown_frames(500, 60) == 30
    assert cooldown_frames(0, 60) == 0


def test_throttle_blocks_until_cooldown_elapsed():
    throttle = FireThrottle(cooldown=30)
    assert throttle.allow(1)
    assert not throttle.allow(10)
    assert not throttle.allow(30)
    assert throttle.allow(31)
    assert not throttle.allow(60)
    assert throttle.allow(61)


def test_throttle_without_cooldown():
    throttle = FireThrottle(cooldown=0)
    assert throttle.allow(1)
    assert throttle.allow(1)
