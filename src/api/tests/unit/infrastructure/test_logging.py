"""Unit tests for structlog configuration."""

import structlog

from infrastructure.logging import (
    REDACTED,
    SERVICE_NAME,
    add_service_info,
    configure_logging,
    redact_private_fields,
)
from infrastructure.version import __version__


class TestProcessors:
    def test_service_info_added(self):
        event = add_service_info(None, "info", {"event": "feed_loaded"})

        assert event["service"] == SERVICE_NAME
        assert event["version"] == __version__

    def test_private_fields_masked(self):
        event = redact_private_fields(
            None,
            "info",
            {"event": "x", "notes": "knee hurts", "token": "abc", "count": 3},
        )

        assert event == {
            "event": "x",
            "notes": REDACTED,
            "token": REDACTED,
            "count": 3,
        }

    def test_empty_private_fields_left_alone(self):
        event = redact_private_fields(None, "info", {"event": "x", "notes": ""})
        assert event["notes"] == ""


class TestConfigureLogging:
    def test_debug_events_dropped_by_default(self, capsys):
        configure_logging()
        structlog.get_logger().debug("identity_resolved")
        structlog.get_logger().info("profile_created")

        output = capsys.readouterr().out
        assert "identity_resolved" not in output
        assert "profile_created" in output

    def test_debug_mode_keeps_debug_events(self, capsys):
        configure_logging(debug=True)
        structlog.get_logger().debug("feed_loaded")

        assert "feed_loaded" in capsys.readouterr().out

    def teardown_method(self):
        structlog.reset_defaults()
