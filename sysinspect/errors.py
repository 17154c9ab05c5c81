"""
Error taxonomy for the sysinspect parsing engine.

Text grammars fail locally (one field or one record), binary decoding
fails totally (there is no partial monitor), and collaborator errors are
passed through to the caller unchanged.
"""

from __future__ import annotations

from typing import Optional, Sequence

SOURCE_TEXT_RECORD = 'text-record'
SOURCE_BINARY_FIELD = 'binary-field'


class SysInspectError(Exception):
    """Base class for every error raised by sysinspect."""


class ParseError(SysInspectError):
    """
    A decoder could not make sense of part of its input.

    Attributes:
        source_kind: SOURCE_TEXT_RECORD or SOURCE_BINARY_FIELD.
        location: The offending line, or a byte range such as '0:64'.
        reason: Human-readable explanation.
    """

    def __init__(self, source_kind: str, location: str, reason: str):
        self.source_kind = source_kind
        self.location = location
        self.reason = reason
        super().__init__(f"{reason} ({source_kind}: {location!r})")


class FieldParseError(ParseError):
    """One field of one record could not be parsed."""

    def __init__(self, line: str, reason: str, field_name: Optional[str] = None):
        self.field_name = field_name
        super().__init__(SOURCE_TEXT_RECORD, line, reason)


class MalformedRecord(ParseError):
    """A record-start line could not be parsed; the record is dropped."""

    def __init__(self, line: str, reason: str):
        super().__init__(SOURCE_TEXT_RECORD, line, reason)


class MalformedEdid(ParseError):
    """An EDID buffer is too short or not decodable at all."""

    def __init__(self, expected_len: int, actual_len: int, reason: Optional[str] = None):
        self.expected_len = expected_len
        self.actual_len = actual_len
        if reason is None:
            reason = f"EDID requires at least {expected_len} bytes, got {actual_len}"
        super().__init__(SOURCE_BINARY_FIELD, f"0:{actual_len}", reason)


class CommandError(SysInspectError):
    """A system utility is missing, timed out or exited abnormally."""

    def __init__(
        self,
        args: Sequence[str],
        reason: str,
        returncode: Optional[int] = None,
        stderr: str = '',
    ):
        self.command = list(args)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"{' '.join(self.command)}: {reason}")


class IoError(SysInspectError):
    """A pseudo-file or device file could not be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"{path}: {reason}")
