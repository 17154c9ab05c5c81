"""
Line-oriented record scanner.

Segments tool output into per-entity records. A grammar says which lines
open a record and supplies an ordered table of field rules; the scanner
owns the state machine:

    NO_RECORD --start line--> IN_RECORD(new)
    IN_RECORD --start line--> seal current, IN_RECORD(new)
    IN_RECORD --other line--> first matching rule updates current
    NO_RECORD --other line--> ignored
    end of input: seal current if IN_RECORD

Field rule failures are collected as FieldParseError and never end a scan.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterable, Optional, TypeVar

from .errors import FieldParseError, MalformedRecord, ParseError

logger = logging.getLogger(__name__)

R = TypeVar('R')

# Exceptions a grammar callback may raise that count as a parse failure
FIELD_ERRORS = (ParseError, ValueError, LookupError, TypeError, AttributeError, ArithmeticError)

# Per-scan scratch space shared by a grammar's callbacks (e.g. interface name)
ScanContext = dict

LinePredicate = Callable[[str], bool]


class ScannerState(enum.Enum):
    """Record scanner states."""
    NO_RECORD = 'no_record'
    IN_RECORD = 'in_record'


@dataclass(frozen=True)
class FieldRule(Generic[R]):
    """
    One entry of a grammar's field table.

    Attributes:
        name: Field (or field group) the rule populates, used in errors.
        matches: Predicate over the stripped line.
        apply: Setter called as apply(record, line, context).
    """
    name: str
    matches: LinePredicate
    apply: Callable[[R, str, ScanContext], None]


@dataclass(frozen=True)
class ContextRule:
    """
    A line that carries scan-wide information rather than record fields.

    Context rules are checked before anything else, in any state, and the
    matching line is consumed.
    """
    name: str
    matches: LinePredicate
    apply: Callable[[str, ScanContext], None]


@dataclass(frozen=True)
class Grammar(Generic[R]):
    """
    Description of one line-oriented output format.

    Attributes:
        name: Short identifier, e.g. 'iw'.
        is_record_start: Predicate over the raw line.
        start_record: Builds an empty record from the start line. May raise
            MalformedRecord, in which case the record is dropped.
        rules: Ordered field rules; the first match wins.
        context_rules: Scan-wide rules, see ContextRule.
        strip_lines: Pass stripped lines to rules (raw lines are always
            passed to is_record_start).
    """
    name: str
    is_record_start: LinePredicate
    start_record: Callable[[str, ScanContext], R]
    rules: tuple[FieldRule[R], ...] = ()
    context_rules: tuple[ContextRule, ...] = ()
    strip_lines: bool = True


@dataclass
class ScanResult(Generic[R]):
    """Sealed records plus every error recorded along the way."""
    records: list[R] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)
    markers: int = 0  # record-start lines seen


@dataclass
class _Cursor(Generic[R]):
    """Scanner position: state plus the record being built."""
    state: ScannerState = ScannerState.NO_RECORD
    current: Optional[R] = None


def open_record(cursor: _Cursor, grammar: Grammar, line: str,
                context: ScanContext, result: ScanResult) -> _Cursor:
    """Transition for a record-start line."""
    seal_record(cursor, result)
    result.markers += 1
    try:
        record = grammar.start_record(line, context)
    except FIELD_ERRORS as e:
        if isinstance(e, MalformedRecord):
            error = e
        else:
            error = MalformedRecord(line, f"{type(e).__name__}: {e}")
        logger.warning(f"{grammar.name}: dropping record: {error}")
        result.errors.append(error)
        return _Cursor()
    return _Cursor(ScannerState.IN_RECORD, record)


def apply_rules(cursor: _Cursor, grammar: Grammar, line: str,
                context: ScanContext, result: ScanResult) -> _Cursor:
    """Transition for any other line."""
    if cursor.state is ScannerState.NO_RECORD:
        return cursor

    for rule in grammar.rules:
        if not rule.matches(line):
            continue
        try:
            rule.apply(cursor.current, line, context)
        except FIELD_ERRORS as e:
            if isinstance(e, FieldParseError):
                error = e
            else:
                error = FieldParseError(line, f"{type(e).__name__}: {e}", rule.name)
            if error.field_name is None:
                error.field_name = rule.name
            logger.debug(f"{grammar.name}: failed to parse {rule.name}: {error}")
            result.errors.append(error)
        break

    return cursor


def seal_record(cursor: _Cursor, result: ScanResult) -> _Cursor:
    """Move the record being built (if any) into the result."""
    if cursor.state is ScannerState.IN_RECORD:
        result.records.append(cursor.current)
    return _Cursor()


class RecordScanner(Generic[R]):
    """
    Scan lines into records according to a Grammar.

    Usage::

        scanner = RecordScanner(IW_SCAN_GRAMMAR)
        result = scanner.scan(lines)
        for record in result.records:
            ...
    """

    def __init__(self, grammar: Grammar[R]):
        self.grammar = grammar

    def scan(self, lines: Iterable[str], context: Optional[ScanContext] = None) -> ScanResult[R]:
        """
        Scan a complete sequence of lines.

        Args:
            lines: Tool output, one line per item.
            context: Optional initial scan context (copied).

        Returns:
            ScanResult with one record per well-formed record-start line.
        """
        grammar = self.grammar
        context = dict(context or {})
        result: ScanResult[R] = ScanResult()
        cursor: _Cursor[R] = _Cursor()

        for raw in lines:
            raw = raw.rstrip('\r\n')
            line = raw.strip() if grammar.strip_lines else raw

            if self._apply_context(line, context, result):
                continue

            if grammar.is_record_start(raw):
                cursor = open_record(cursor, grammar, raw, context, result)
            else:
                cursor = apply_rules(cursor, grammar, line, context, result)

        seal_record(cursor, result)

        if result.errors:
            logger.debug(
                f"{grammar.name}: {len(result.records)} records, "
                f"{len(result.errors)} parse errors"
            )
        return result

    def _apply_context(self, line: str, context: ScanContext, result: ScanResult) -> bool:
        for rule in self.grammar.context_rules:
            if not rule.matches(line):
                continue
            try:
                rule.apply(line, context)
            except FIELD_ERRORS as e:
                error = e if isinstance(e, FieldParseError) else FieldParseError(
                    line, f"{type(e).__name__}: {e}", rule.name
                )
                result.errors.append(error)
            return True
        return False


def scan_records(lines: Iterable[str], grammar: Grammar[R]) -> ScanResult[R]:
    """Convenience wrapper: RecordScanner(grammar).scan(lines)."""
    return RecordScanner(grammar).scan(lines)


def starts_with(*prefixes: str) -> LinePredicate:
    """Predicate: line starts with any of the prefixes."""
    return lambda line: line.startswith(prefixes)


def contains(*needles: str) -> LinePredicate:
    """Predicate: line contains every needle."""
    return lambda line: all(n in line for n in needles)
