"""Keyboard and resize events read from the controlling terminal."""

from __future__ import annotations

import logging
import os
import select
import signal
from dataclasses import dataclass
from typing import List, Optional, Union

from .board import Direction
from .terminal import Terminal


LOGGER = logging.getLogger(__name__)

# Final bytes of the CSI / SS3 arrow key sequences.
ARROW_KEYS = {"A": "up", "B": "down", "C": "right", "D": "left"}

KEY_DIRECTIONS = {
    "up": Direction.UP,
    "w": Direction.UP,
    "down": Direction.DOWN,
    "s": Direction.DOWN,
    "left": Direction.LEFT,
    "a": Direction.LEFT,
    "right": Direction.RIGHT,
    "d": Direction.RIGHT,
}

# Seconds to wait for the rest of an escape sequence before a lone ESC is
# taken to be the Escape key.
ESCAPE_TIMEOUT = 0.05


@dataclass(frozen=True)
class KeyEvent:
    """A key press.  ``key`` is a name such as ``"up"`` or ``"esc"`` or the
    character typed."""

    key: str
    ctrl: bool = False
    alt: bool = False


@dataclass(frozen=True)
class ResizeEvent:
    columns: int
    rows: int


Event = Union[KeyEvent, ResizeEvent]


def _printable(ch: str) -> bool:
    return ch >= " " and ch != "\x7f"


class KeyDecoder:
    """Turn raw terminal input into key events across several reads.

    Arrow keys arrive as ``ESC [ A`` (or ``ESC O A`` in application mode).
    A sequence cut off at the end of a read is kept in :attr:`pending` and
    completed by the next :meth:`feed`; :meth:`flush` settles it once no more
    input is coming, turning a lone ``ESC`` into the Escape key.  ``ESC``
    followed by a printable character is that character with Alt held.
    Control characters become ``ctrl`` events named after their letter.
    Escape sequences that are not arrows are dropped.
    """

    def __init__(self) -> None:
        self.pending = ""

    def feed(self, data: bytes) -> List[KeyEvent]:
        text = self.pending + data.decode("utf-8", errors="ignore")
        self.pending = ""
        events: List[KeyEvent] = []
        i = 0
        while i < len(text):
            ch = text[i]
            if ch != "\x1b":
                if ch < " ":
                    events.append(KeyEvent(chr(ord(ch) + 0x60), ctrl=True))
                elif _printable(ch):
                    events.append(KeyEvent(ch))
                i += 1
                continue

            if i + 1 == len(text):
                self.pending = text[i:]
                break
            nxt = text[i + 1]
            if nxt in "[O":
                j = i + 2
                # Skip parameter and intermediate bytes up to the final byte.
                while j < len(text) and "\x20" <= text[j] <= "\x3f":
                    j += 1
                if j == len(text):
                    self.pending = text[i:]
                    break
                if text[j] in ARROW_KEYS:
                    events.append(KeyEvent(ARROW_KEYS[text[j]]))
                i = j + 1
            elif _printable(nxt):
                events.append(KeyEvent(nxt, alt=True))
                i += 2
            else:
                events.append(KeyEvent("esc"))
                i += 1
        return events

    def flush(self) -> List[KeyEvent]:
        """Settle whatever is pending, assuming no more input follows."""

        pending, self.pending = self.pending, ""
        if pending == "\x1b":
            return [KeyEvent("esc")]
        # An unfinished CSI / SS3 sequence carries no key.
        return []


def decode_keys(data: bytes) -> List[KeyEvent]:
    """Decode a complete chunk of input into key events."""

    decoder = KeyDecoder()
    return decoder.feed(data) + decoder.flush()


def is_exit_request(event: KeyEvent) -> bool:
    """Raw mode disables the usual interrupt keys, so check for them here."""

    if event.key == "esc":
        return True
    return event.ctrl and event.key in ("c", "d")


def direction_for(event: KeyEvent) -> Optional[Direction]:
    """Map arrow keys and lowercase WASD to a move; any other key gives ``None``."""

    if event.ctrl:
        return None
    return KEY_DIRECTIONS.get(event.key)


class EventReader:
    """Blocking reader for key presses and window resizes.

    Resizes are delivered through ``SIGWINCH``: the signal's wakeup fd is a
    pipe that is watched with :func:`select.select` alongside the terminal
    input, so a resize interrupts a blocked read.
    """

    def __init__(
        self,
        terminal: Terminal,
        *,
        read_size: int = 64,
        escape_timeout: float = ESCAPE_TIMEOUT,
    ) -> None:
        self.terminal = terminal
        self.read_size = read_size
        self.escape_timeout = escape_timeout
        self.decoder = KeyDecoder()
        self._pipe: Optional[tuple[int, int]] = None
        self._old_handler = None
        self._old_wakeup_fd = -1

    def __enter__(self) -> "EventReader":
        if hasattr(signal, "SIGWINCH"):
            read_fd, write_fd = os.pipe()
            os.set_blocking(read_fd, False)
            os.set_blocking(write_fd, False)
            self._pipe = (read_fd, write_fd)
            self._old_handler = signal.signal(signal.SIGWINCH, self._on_resize)
            self._old_wakeup_fd = signal.set_wakeup_fd(write_fd)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._pipe is None:
            return
        signal.set_wakeup_fd(self._old_wakeup_fd)
        signal.signal(signal.SIGWINCH, self._old_handler)
        for fd in self._pipe:
            os.close(fd)
        self._pipe = None

    @staticmethod
    def _on_resize(signum, frame) -> None:
        # The wakeup fd does the work; a Python-level handler is still needed
        # for the signal to be caught at all.
        pass

    def _drain_signals(self) -> bool:
        assert self._pipe is not None
        received = b""
        while True:
            try:
                chunk = os.read(self._pipe[0], 512)
            except BlockingIOError:
                break
            if not chunk:
                break
            received += chunk
        return signal.SIGWINCH in received

    def _read_keys(self, input_fd: int) -> List[KeyEvent]:
        data = os.read(input_fd, self.read_size)
        events: List[KeyEvent] = []
        while data:
            events.extend(self.decoder.feed(data))
            if not self.decoder.pending:
                return events
            ready, _, _ = select.select([input_fd], [], [], self.escape_timeout)
            if not ready:
                return events + self.decoder.flush()
            data = os.read(input_fd, self.read_size)
        # EOF on input ends the game like ctrl+d.
        return events + self.decoder.flush() + [KeyEvent("d", ctrl=True)]

    def read(self) -> List[Event]:
        """Block until input or a resize arrives and return the events."""

        input_fd = self.terminal.fileno()
        watched = [input_fd]
        if self._pipe is not None:
            watched.append(self._pipe[0])
        ready, _, _ = select.select(watched, [], [])

        events: List[Event] = []
        if self._pipe is not None and self._pipe[0] in ready and self._drain_signals():
            columns, rows = self.terminal.size()
            LOGGER.debug("Resized to %dx%d", columns, rows)
            events.append(ResizeEvent(columns, rows))
        if input_fd in ready:
            events.extend(self._read_keys(input_fd))
        return events
