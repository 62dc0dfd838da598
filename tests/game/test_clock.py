"""Unit tests for GameClock.

- Timezone validation keeps every timestamp timezone-aware
- mode is derived from is_paused, auto_advance and time_scale
- calculate_advancement() scales wall time
- advance() and set_time() never move backwards
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from game.clock import GameClock, TimeMode
from tests.fixtures.core.sessions import START_TIME


def create_clock(**overrides) -> GameClock:
    fields = {"current_time": START_TIME, "last_wall_time_update": START_TIME}
    fields.update(overrides)
    return GameClock(**fields)


class TestGameClockInstantiation:
    """Test instantiation and validation."""

    def test_defaults(self):
        clock = create_clock()

        assert clock.current_time == START_TIME
        assert clock.time_scale == 1.0
        assert clock.is_paused is False
        assert clock.auto_advance is False

    def test_naive_datetime_rejected(self):
        with pytest.raises(ValidationError, match="timezone-aware"):
            GameClock(current_time=datetime(2025, 1, 1))

    def test_non_positive_scale_rejected(self):
        with pytest.raises(ValidationError):
            create_clock(time_scale=0.0)


class TestGameClockMode:
    """Test TimeMode derivation."""

    @pytest.mark.parametrize(
        "overrides, mode",
        [
            ({"is_paused": True, "auto_advance": True}, TimeMode.PAUSED),
            ({}, TimeMode.MANUAL),
            ({"auto_advance": True}, TimeMode.REAL_TIME),
            ({"auto_advance": True, "time_scale": 10.0}, TimeMode.FAST_FORWARD),
            ({"auto_advance": True, "time_scale": 0.5}, TimeMode.SLOW_MOTION),
        ],
    )
    def test_mode(self, overrides, mode):
        assert create_clock(**overrides).mode == mode


class TestGameClockAdvancement:
    """Test moving game time."""

    def test_calculate_advancement_scales(self):
        clock = create_clock(time_scale=10.0)

        assert clock.calculate_advancement(timedelta(seconds=1)) == timedelta(seconds=10)

    def test_calculate_advancement_paused(self):
        clock = create_clock(is_paused=True)

        assert clock.calculate_advancement(timedelta(seconds=5)) == timedelta(0)

    def test_set_time_forward_only(self):
        clock = create_clock()
        later = START_TIME + timedelta(minutes=1)

        clock.set_time(later)
        assert clock.current_time == later

        with pytest.raises(ValueError):
            clock.set_time(START_TIME)

    def test_set_scale(self):
        clock = create_clock()
        clock.set_scale(4.0)

        assert clock.time_scale == 4.0
        with pytest.raises(ValueError):
            clock.set_scale(-1.0)

    def test_pause_and_resume(self):
        clock = create_clock()
        clock.pause()
        assert clock.mode == TimeMode.PAUSED

        clock.resume()
        assert clock.is_paused is False
        assert clock.last_wall_time_update > START_TIME

    def test_to_dict(self):
        data = create_clock().to_dict()

        assert data["current_time"] == START_TIME.isoformat()
        assert data["mode"] == "manual"
        assert datetime.fromisoformat(data["current_time"]).tzinfo == timezone.utc
