from datetime import datetime, timedelta

from timegate.config import Settings
from timegate.services.schedule_gate import check_gate, evaluate_gate, format_minute
from timegate.services.time_ranges import TimeRanges, parse_time_ranges


def test_evaluate_gate_allowed():
    decision = evaluate_gate(parse_time_ranges("06:00-08:00"), 400)
    assert decision.allowed
    assert decision.next_allowed_minute is None
    assert decision.sleep == timedelta(0)


def test_evaluate_gate_waits_until_next_day():
    decision = evaluate_gate(parse_time_ranges("06:00-08:00"), 500)
    assert not decision.allowed
    assert decision.next_allowed_minute == 360
    assert decision.sleep == timedelta(minutes=1300)
    payload = decision.as_dict()
    assert payload["current_time"] == "08:20"
    assert payload["next_allowed_time"] == "06:00"
    assert payload["sleep_seconds"] == 1300 * 60
    assert payload["ranges"] == "360-480"


def test_evaluate_gate_with_no_allowed_minute():
    for ranges in (TimeRanges(), parse_time_ranges("10:00-10:00")):
        decision = evaluate_gate(ranges, 500)
        assert not decision.allowed
        assert decision.next_allowed_minute is None
        assert decision.sleep == timedelta(days=1)


def test_format_minute():
    assert format_minute(0) == "00:00"
    assert format_minute(1439) == "23:59"


def test_check_gate_uses_settings_and_now():
    settings = Settings(ALLOWED_TIME_RANGES="22:00-02:00", TIMEZONE="")
    assert check_gate(settings, now=datetime(2024, 1, 1, 23, 30)).allowed
    assert check_gate(settings, now=datetime(2024, 1, 1, 1, 59)).allowed
    decision = check_gate(settings, now=datetime(2024, 1, 1, 2, 0))
    assert not decision.allowed
    assert decision.next_allowed_minute == 22 * 60


def test_check_gate_explicit_minute():
    settings = Settings(ALLOWED_TIME_RANGES="06:00-08:00", TIMEZONE="")
    assert check_gate(settings, minute=361).allowed
    assert not check_gate(settings, minute=700).allowed


def test_disabled_gate_always_allows():
    settings = Settings(ALLOWED_TIME_RANGES="06:00-08:00", GATE_ENABLED=False, TIMEZONE="")
    assert check_gate(settings, now=datetime(2024, 1, 1, 12, 0)).allowed
