"""Named output channels used by the harness.

Everything the harness prints goes through one of five channels:

* ``log`` and ``error``: whatever test code writes to ``stdout``/``stderr``
  (plus harness errors on ``error``).
* ``test``: suite and test headings and failure alerts.
* ``assert``: per-assertion failure messages.
* ``result``: the summary report.

Channels are child loggers of ``tallytest.channel`` so they travel through
the regular logging machinery. Muting is decided by the :class:`OutputSink`
that emits them, never by mutating global state.
"""
from __future__ import annotations

import contextlib
import io
import logging
import sys
from typing import Dict, Iterable, Iterator, Optional, TextIO, Tuple

CHANNEL_LOGGER = "tallytest.channel"

LOG = "log"
ERROR = "error"
TEST = "test"
ASSERT = "assert"
RESULT = "result"
CHANNELS: Tuple[str, ...] = (LOG, ERROR, TEST, ASSERT, RESULT)

FLAG_CHANNELS: Dict[str, Tuple[str, ...]] = {
    "-no-logs": (LOG,),
    "-no-errors": (ERROR,),
    "-no-test-logs": (TEST,),
    "-no-assert-logs": (ASSERT,),
    "-no-result-logs": (RESULT,),
    "-only-result-logs": (LOG, ERROR, TEST, ASSERT),
}

# Channel output is not diagnostic chatter; keep it visible at any root level.
logging.getLogger(CHANNEL_LOGGER).setLevel(logging.INFO)


def channels_for_flags(flags: Iterable[str]) -> frozenset[str]:
    """Return the channels muted by ``flags``; unknown flags mute nothing."""

    muted: set[str] = set()
    for flag in flags:
        muted.update(FLAG_CHANNELS.get(flag, ()))
    return frozenset(muted)


class OutputSink:
    """Writes harness output to the channel loggers, skipping muted channels."""

    def __init__(self, muted: Iterable[str] = ()) -> None:
        muted = frozenset(muted)
        unknown = muted.difference(CHANNELS)
        if unknown:
            raise ValueError(f"Unknown output channels: {', '.join(sorted(unknown))}")
        self.muted = muted

    def is_enabled(self, channel: str) -> bool:
        return channel not in self.muted

    def emit(self, channel: str, message: str, *, level: int = logging.INFO, exc_info=None) -> None:
        if channel not in CHANNELS:
            raise ValueError(f"Unknown output channel: {channel}")
        if not self.is_enabled(channel):
            return
        logging.getLogger(f"{CHANNEL_LOGGER}.{channel}").log(level, message, exc_info=exc_info)

    def test(self, message: str) -> None:
        self.emit(TEST, message)

    def assertion(self, message: str) -> None:
        self.emit(ASSERT, message)

    def result(self, message: str) -> None:
        self.emit(RESULT, message)

    def error(self, message: str, *, exc_info=None) -> None:
        self.emit(ERROR, message, level=logging.ERROR, exc_info=exc_info)

    @contextlib.contextmanager
    def muted_streams(self) -> Iterator[None]:
        """Swallow test code's ``stdout``/``stderr`` when those channels are muted."""

        with contextlib.ExitStack() as stack:
            if not self.is_enabled(LOG):
                stack.enter_context(contextlib.redirect_stdout(io.StringIO()))
            if not self.is_enabled(ERROR):
                stack.enter_context(contextlib.redirect_stderr(io.StringIO()))
            yield


class _ChannelFormatter(logging.Formatter):
    """Prints channel records as the bare message, diagnostics with a level prefix."""

    def format(self, record: logging.LogRecord) -> str:
        if not record.name.startswith(CHANNEL_LOGGER):
            return super().format(record)
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Install a single console handler on the root logger."""

    root = logging.getLogger()
    root.setLevel(level)
    # Remove existing handlers to avoid duplicate output on repeated runs
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(_ChannelFormatter("%(levelname)s: %(message)s"))
    root.addHandler(handler)


__all__ = [
    "CHANNELS",
    "CHANNEL_LOGGER",
    "FLAG_CHANNELS",
    "OutputSink",
    "channels_for_flags",
    "configure_logging",
]
