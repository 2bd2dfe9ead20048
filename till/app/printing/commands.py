"""ESC/POS command table for 58mm thermal receipt printers.

Fixed sequences are plain ``bytes`` constants; parametrised commands are small
functions returning ``bytes``. Two QR code command dialects are provided
because cheap printers implement one or the other:

* :class:`QrModel1` uses the ``GS ( k`` function family (store, then print).
* :class:`QrModel2` uses the older ``GS Z`` / ``ESC Z`` form with the data
  following a two byte length.

Each dialect's :meth:`encode` returns ``None`` when the payload cannot be
framed so callers can move on to the next dialect.
"""

from __future__ import annotations

from typing import Protocol

# Characters per line (48mm printable width)
CHARS_PER_LINE_FONT_A = 32
CHARS_PER_LINE_FONT_B = 42

INIT = b"\x1b\x40"

FONT_A = b"\x1b\x4d\x00"
FONT_B = b"\x1b\x4d\x01"

ALIGN_LEFT = b"\x1b\x61\x00"
ALIGN_CENTER = b"\x1b\x61\x01"
ALIGN_RIGHT = b"\x1b\x61\x02"

BOLD_ON = b"\x1b\x45\x01"
BOLD_OFF = b"\x1b\x45\x00"
UNDERLINE_ON = b"\x1b\x2d\x01"
UNDERLINE_OFF = b"\x1b\x2d\x00"
DOUBLE_ON = b"\x1b\x47\x01"
DOUBLE_OFF = b"\x1b\x47\x00"

LINE_SPACE_DEFAULT = b"\x1b\x32"
LINE_SPACE_CUSTOM = b"\x1b\x33"

FEED_LINE = b"\x0a"

CUT_PARTIAL = b"\x1b\x6d"
CUT_FULL = b"\x1b\x69"

TEXT_ENCODING = "utf-8"


def _byte(n: int) -> int:
    if not 0 <= n <= 0xFF:
        raise ValueError(f"parameter out of range 0..255: {n}")
    return n


def _le16(n: int) -> bytes:
    """Two byte little-endian length (pL pH)."""

    return bytes([n & 0xFF, (n >> 8) & 0xFF])


def feed_lines(n: int) -> bytes:
    """ESC d n - print and feed ``n`` lines."""

    return bytes([0x1B, 0x64, _byte(n)])


def feed_units(n: int) -> bytes:
    """ESC J n - print and feed ``n`` motion units."""

    return bytes([0x1B, 0x4A, _byte(n)])


def line_spacing(n: int) -> bytes:
    return LINE_SPACE_CUSTOM + bytes([_byte(n)])


class QrDialect(Protocol):
    name: str

    def encode(self, payload: str) -> bytes | None:
        ...


class QrModel1:
    """``GS ( k`` QR commands: select model, size, error level, store, print."""

    name = "model1"

    MODEL = b"\x1d\x28\x6b\x04\x00\x31\x41\x31\x00"
    PRINT = b"\x1d\x28\x6b\x03\x00\x31\x51\x30"
    # pL pH counts the three sub-header bytes (cn fn m) plus the data
    HEADER_LEN = 3
    MAX_DATA = 0xFFFF - HEADER_LEN

    def __init__(self, module_size: int = 6, error_level: int = 49) -> None:
        self.module_size = module_size
        self.error_level = error_level

    @staticmethod
    def size(n: int) -> bytes:
        return b"\x1d\x28\x6b\x03\x00\x31\x43" + bytes([_byte(n)])

    @staticmethod
    def error_correction(n: int) -> bytes:
        return b"\x1d\x28\x6b\x03\x00\x31\x45" + bytes([_byte(n)])

    @classmethod
    def store(cls, data: bytes) -> bytes:
        if len(data) > cls.MAX_DATA:
            raise ValueError(f"QR data too long for model 1 framing: {len(data)}")
        return b"\x1d\x28\x6b" + _le16(len(data) + cls.HEADER_LEN) + b"\x31\x50\x30" + data

    def encode(self, payload: str) -> bytes | None:
        data = payload.encode(TEXT_ENCODING)
        if len(data) > self.MAX_DATA:
            return None
        return b"".join(
            [
                self.MODEL,
                self.size(self.module_size),
                self.error_correction(self.error_level),
                self.store(data),
                self.PRINT,
            ]
        )


class QrModel2:
    """``GS Z`` / ``ESC Z`` QR commands with a plain length prefix."""

    name = "model2"

    HEADER = b"\x1d\x5a\x02\x1b\x5a"
    MAX_DATA = 0xFFFF

    def __init__(self, size: int = 3) -> None:
        self.module_size = size

    @staticmethod
    def size(n: int) -> bytes:
        return bytes([_byte(n)])

    @classmethod
    def print_data(cls, data: bytes) -> bytes:
        if len(data) > cls.MAX_DATA:
            raise ValueError(f"QR data too long for model 2 framing: {len(data)}")
        return _le16(len(data)) + data

    def encode(self, payload: str) -> bytes | None:
        data = payload.encode(TEXT_ENCODING)
        if len(data) > self.MAX_DATA:
            return None
        return self.HEADER + self.size(self.module_size) + self.print_data(data)


DEFAULT_QR_DIALECTS: tuple[QrDialect, ...] = (QrModel1(), QrModel2())
