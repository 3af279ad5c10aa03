import io
import logging
import sys

import pytest

from tallytest.output.channels import CHANNEL_LOGGER, OutputSink, channels_for_flags, configure_logging


def test_only_result_logs_mutes_everything_but_results():
    assert channels_for_flags(["-only-result-logs"]) == {"log", "error", "test", "assert"}


def test_flags_combine_and_unknown_flags_are_ignored():
    assert channels_for_flags(["-no-logs", "-no-assert-logs", "-verbose"]) == {"log", "assert"}
    assert channels_for_flags([]) == frozenset()


def test_sink_rejects_unknown_channels():
    with pytest.raises(ValueError):
        OutputSink({"metrics"})
    with pytest.raises(ValueError):
        OutputSink().emit("metrics", "hello")


def test_sink_writes_enabled_channels_only(channel_output):
    sink = OutputSink({"assert"})

    sink.test("heading")
    sink.assertion("hidden")
    sink.result("summary")

    assert channel_output("test") == ["heading"]
    assert channel_output("assert") == []
    assert channel_output("result") == ["summary"]


def test_error_channel_logs_at_error_level(caplog):
    with caplog.at_level(logging.INFO, logger=CHANNEL_LOGGER):
        OutputSink().error("broken")

    record = caplog.records[-1]
    assert record.name == f"{CHANNEL_LOGGER}.error"
    assert record.levelno == logging.ERROR


def test_muted_streams_swallow_user_output(capsys):
    with OutputSink({"log", "error"}).muted_streams():
        print("to stdout")
        print("to stderr", file=sys.stderr)
    with OutputSink().muted_streams():
        print("visible")

    captured = capsys.readouterr()
    assert captured.out == "visible\n"
    assert captured.err == ""


def test_configure_logging_prints_channel_messages_bare():
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    stream = io.StringIO()

    try:
        configure_logging(logging.WARNING, stream=stream)
        OutputSink().test('Test: "bare"')
        logging.getLogger("tallytest.runner").warning("event=diagnostic")
        logging.getLogger("tallytest.runner").info("event=hidden")
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    assert stream.getvalue().splitlines() == ['Test: "bare"', "WARNING: event=diagnostic"]
