from pathlib import Path

import pytest
from pydantic import ValidationError

from travel_booking.config import Settings


def test_defaults():
    settings = Settings.from_env({})

    assert settings.data_dir == Path("data")
    assert settings.log_level == "WARNING"
    assert settings.log_file is None
    assert settings.report_path == Path("data") / "reservations_report.txt"


def test_values_from_environment():
    settings = Settings.from_env(
        {
            "TRAVEL_BOOKING_DATA_DIR": "/tmp/booking",
            "TRAVEL_BOOKING_LOG_LEVEL": "debug",
            "TRAVEL_BOOKING_REPORT_FILE": "report.txt",
            "UNRELATED": "ignored",
        }
    )

    assert settings.data_dir == Path("/tmp/booking")
    assert settings.log_level == "DEBUG"
    assert settings.report_path == Path("/tmp/booking/report.txt")


def test_empty_value_uses_default():
    assert Settings.from_env({"TRAVEL_BOOKING_LOG_LEVEL": ""}).log_level == "WARNING"


def test_unknown_log_level():
    with pytest.raises(ValidationError):
        Settings.from_env({"TRAVEL_BOOKING_LOG_LEVEL": "LOUD"})
