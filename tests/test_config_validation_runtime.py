import pytest

from timegate.config import Settings
from timegate.services.time_ranges import FormatError, InvalidTimeError
from timegate.utils.config_validation import validate_runtime_config


def test_config_validation_rejects_malformed_ranges():
    settings = Settings(ALLOWED_TIME_RANGES="06:00-08:00-10:00", TIMEZONE="")

    with pytest.raises(RuntimeError, match="Invalid ALLOWED_TIME_RANGES") as info:
        validate_runtime_config(settings)
    assert isinstance(info.value.__cause__, FormatError)


def test_config_validation_rejects_bad_hour():
    settings = Settings(ALLOWED_TIME_RANGES="25:00-08:00", TIMEZONE="")

    with pytest.raises(RuntimeError, match="invalid start time") as info:
        validate_runtime_config(settings)
    assert isinstance(info.value.__cause__, InvalidTimeError)


def test_config_validation_rejects_unknown_timezone():
    settings = Settings(TIMEZONE="Mars/Olympus_Mons")

    with pytest.raises(RuntimeError, match="Invalid TIMEZONE"):
        validate_runtime_config(settings)


@pytest.mark.parametrize("field", ["JOB_INTERVAL_SECONDS", "MAX_SLEEP_SECONDS"])
def test_config_validation_rejects_non_positive_intervals(field):
    settings = Settings(TIMEZONE="", **{field: 0})

    with pytest.raises(RuntimeError, match=field):
        validate_runtime_config(settings)


def test_config_validation_passes_for_valid_combo():
    settings = Settings(ALLOWED_TIME_RANGES="06:00-08:00,22:00-02:00", TIMEZONE="UTC")

    validate_runtime_config(settings)


def test_config_validation_allows_disabled_gate():
    settings = Settings(ALLOWED_TIME_RANGES="06:00-08:00", GATE_ENABLED=False, TIMEZONE="")

    validate_runtime_config(settings)
