"""
Column value to SQL literal conversion for SQL Dumper.
"""

from datetime import datetime, timedelta
from typing import Any, Callable, Iterable

from .models import LiteralMode


def format_time(value: timedelta) -> str:
    """Format a TIME value the way MySQL prints it: [-]HH:MM:SS[.ffffff].

    Hours are not wrapped at 24, TIME ranges up to 838:59:59.
    """
    sign = '-' if value < timedelta(0) else ''
    value = abs(value)
    minutes, seconds = divmod(value.days * 86400 + value.seconds, 60)
    hours, minutes = divmod(minutes, 60)
    text = f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"
    if value.microseconds:
        text += f".{value.microseconds:06d}"
    return text


class ValueEncoder:
    """Turns driver values into quoted SQL literals.

    Every value is first reduced to its text form, the way a generic text
    scan would see it. In RAW mode that text is quoted as-is, so SQL NULL and
    the empty string both come out as ``''`` and embedded quotes are not
    escaped. Binary values are decoded as UTF-8 in RAW mode, so bytes that
    are not valid UTF-8 are replaced and do not survive a replay.

    ESCAPED mode escapes the text, writes NULL as ``NULL`` and writes binary
    values as hex literals.
    """

    ESCAPES = (
        ("\\", "\\\\"),
        ("'", "\\'"),
        ("\n", "\\n"),
        ("\r", "\\r"),
        ("\x00", "\\0"),
        ("\x1a", "\\Z"),
    )

    def __init__(self, mode: LiteralMode = LiteralMode.RAW):
        self.mode = mode

        # Pre-build text converters for faster dispatch
        self._text_converters: dict[type, Callable[[Any], str]] = {
            type(None): lambda v: '',
            str: lambda v: v,
            bool: lambda v: '1' if v else '0',
            int: str,
            float: str,
            bytes: lambda v: v.decode('utf-8', errors='replace'),
            bytearray: lambda v: bytes(v).decode('utf-8', errors='replace'),
            datetime: lambda v: v.isoformat(sep=' '),
            timedelta: format_time,
            set: lambda v: ','.join(sorted(v)),
            frozenset: lambda v: ','.join(sorted(v)),
        }

    def to_text(self, value: Any) -> str:
        """Reduce a driver value to the text a generic scan would produce."""
        converter = self._text_converters.get(type(value))
        if converter:
            return converter(value)
        return str(value)

    def encode(self, value: Any) -> str:
        """Encode a single column value as an SQL literal."""
        if self.mode == LiteralMode.ESCAPED:
            if value is None:
                return 'NULL'
            if isinstance(value, (bytes, bytearray)):
                return f"X'{bytes(value).hex()}'"
            return f"'{self.escape(self.to_text(value))}'"
        return f"'{self.to_text(value)}'"

    def encode_row(self, row: Iterable[Any]) -> str:
        """Encode one result row as a parenthesized tuple."""
        return f"({','.join(self.encode(value) for value in row)})"

    @classmethod
    def escape(cls, text: str) -> str:
        for raw, escaped in cls.ESCAPES:
            text = text.replace(raw, escaped)
        return text
