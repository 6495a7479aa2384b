"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing and the navigation keys the browser binds.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x02": "CTRL_B",
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x06": "CTRL_F",
    b"\x0c": "CTRL_L",
    b"\x15": "CTRL_U",
    b"\t": "TAB",
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
}
_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
    b"Z": "SHIFT_TAB",
}
_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"1": "HOME",
    b"7": "HOME",
    b"4": "END",
    b"8": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
}


class KeyReader:
    """Decode key tokens from one file descriptor.

    Bytes read ahead while resolving a lone ESC are kept and replayed on the
    next call, so ``ESC`` followed by a printable key yields both tokens.
    """

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._pending: list[bytes] = []

    def _read_ready_byte(self, timeout_ms: int) -> bytes | None:
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
        ch = os.read(self.fd, 1)
        if not ch:
            return None
        return ch

    def _read_utf8_tail(self, lead: bytes) -> bytes:
        first = lead[0]
        if first >= 0xF0:
            extra = 3
        elif first >= 0xE0:
            extra = 2
        elif first >= 0xC0:
            extra = 1
        else:
            return lead
        out = lead
        for _ in range(extra):
            nxt = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if nxt is None:
                break
            out += nxt
        return out

    def read_key(self, timeout_ms: int | None = None) -> str:
        """Return the next key token, or ``""`` when nothing arrived in time.

        Raises ``EOFError`` when the descriptor reaches end of file.
        """
        if self._pending:
            ch = self._pending.pop(0)
        else:
            if timeout_ms is not None:
                ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
                if not ready:
                    return ""
            ch = os.read(self.fd, 1)
            if not ch:
                raise EOFError("input closed")

        named = _CONTROL_KEYS.get(ch)
        if named is not None:
            return named
        if ch != b"\x1b":
            return self._read_utf8_tail(ch).decode("utf-8", errors="replace")

        # Escape / arrow key sequences.
        seq = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return "ESC"
        if seq not in {b"[", b"O"}:
            self._pending.append(seq)
            return "ESC"
        seq = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return "ESC"
        final = _CSI_FINAL_KEYS.get(seq)
        if final is not None:
            return final
        if seq in _CSI_TILDE_KEYS:
            terminator = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if terminator == b"~":
                return _CSI_TILDE_KEYS[seq]
        return "ESC"


__all__ = ["ESC_SEQUENCE_TIMEOUT_MS", "KeyReader"]
