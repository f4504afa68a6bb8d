import logging

from useful_objects.adapters.telemetry.logging_sink import LoggingSink


def test_logging_sink_logs_and_keeps_records(caplog):
    sink = LoggingSink(logging.getLogger("tests.telemetry"), level=logging.WARNING)

    with caplog.at_level(logging.WARNING, logger="tests.telemetry"):
        sink.record("something_done", "some value", attempt=2)

    (entry,) = caplog.records
    assert entry.getMessage() == "something_done"
    assert entry.levelno == logging.WARNING
    assert entry.payload == ("some value",)
    assert entry.fields == {"attempt": 2}
    assert sink.recorded("something_done")


def test_default_logger_name(caplog):
    sink = LoggingSink()

    with caplog.at_level(logging.INFO, logger="useful_objects.telemetry"):
        sink.record("ping")

    assert [r.name for r in caplog.records] == ["useful_objects.telemetry"]
