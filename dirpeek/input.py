"""Low-level terminal input decoding and command mapping.

Reads raw bytes from stdin and translates them into key tokens, then maps
the tokens the browser understands onto navigation commands.
"""

from __future__ import annotations

import enum
import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []
_ARROW_KEYS = {b"A": "UP", b"B": "DOWN"}
_CONTROL_KEYS = {b"\r": "ENTER", b"\n": "ENTER", b"\x03": "CTRL_C"}


class Command(enum.Enum):
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    ACTIVATE = "activate"
    QUIT = "quit"


KEY_COMMANDS: dict[str, Command] = {
    "UP": Command.MOVE_UP,
    "k": Command.MOVE_UP,
    "DOWN": Command.MOVE_DOWN,
    "j": Command.MOVE_DOWN,
    "ENTER": Command.ACTIVATE,
    "q": Command.QUIT,
    "Q": Command.QUIT,
    "CTRL_C": Command.QUIT,
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_escape_sequence(fd: int) -> str:
    """Decode the bytes after ESC; only Up/Down arrows produce a named token."""
    introducer = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if introducer is None:
        return "ESC"
    if introducer != b"[":
        # Plain key pressed right after ESC; deliver it on the next read.
        _PENDING_BYTES.append(introducer)
        return "ESC"
    final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    return _ARROW_KEYS.get(final, "ESC")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token; returns ``""`` on timeout or end of input."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        ch = _read_ready_byte(fd, timeout_ms) if timeout_ms is not None else os.read(fd, 1)
        if not ch:
            return ""

    if ch == b"\x1b":
        return _read_escape_sequence(fd)
    token = _CONTROL_KEYS.get(ch)
    if token is not None:
        return token
    return ch.decode("utf-8", errors="replace")


def command_for_key(key: str) -> Command | None:
    """Map a key token to a browser command; unknown keys map to ``None``."""
    return KEY_COMMANDS.get(key)


__all__ = [
    "Command",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KEY_COMMANDS",
    "command_for_key",
    "read_key",
]
