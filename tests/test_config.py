"""Tests for settings validation."""
import pytest
from pydantic import ValidationError

from workout_planner.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.storage_key
    assert settings.webhook_timeout_seconds == 4.0
    assert settings.webhook_fail_silently is True


def test_log_level_is_normalized():
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")


def test_library_log_level_is_validated():
    assert Settings(_env_file=None).library_log_level == "WARNING"
    assert Settings(library_log_level="error").library_log_level == "ERROR"
    with pytest.raises(ValidationError):
        Settings(library_log_level="loud")


@pytest.mark.parametrize("value", ["", "   ", None])
def test_blank_webhook_url_disables_notifications(value):
    assert Settings(webhook_url=value).webhook_url is None


def test_webhook_url_must_be_http():
    with pytest.raises(ValidationError):
        Settings(webhook_url="ftp://example.com/hook")


def test_webhook_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(webhook_timeout_seconds=0)
