"""
Processor details from /proc/cpuinfo.

/proc/cpuinfo holds one block per logical processor, each starting with
a 'processor' line, so it is scanned with the record scanner.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..constants import PROC_CPUINFO
from ..errors import FieldParseError, MalformedRecord
from ..fields import parse_int, parse_number, split_label, tokenize
from ..records import FieldRule, Grammar, RecordScanner, ScanContext, starts_with
from ..system import read_lines


@dataclass
class ProcessorEntry:
    """One 'processor' block of /proc/cpuinfo."""
    processor: int
    physical_id: Optional[str] = None
    vendor: Optional[str] = None
    model_name: Optional[str] = None
    family: Optional[str] = None
    model: Optional[str] = None
    stepping: Optional[str] = None
    mhz: Optional[float] = None
    bogomips: Optional[float] = None
    flags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CpuInfo:
    """Summary of the installed processors."""
    logical_count: int
    physical_count: int
    vendor: Optional[str] = None
    name: Optional[str] = None
    family: Optional[str] = None
    model: Optional[str] = None
    stepping: Optional[str] = None
    frequency: Optional[float] = None
    bogomips: Optional[float] = None
    flags: tuple[str, ...] = ()

    @property
    def is_64bit(self) -> bool:
        # 'lm' (long mode) is the x86-64 capability flag
        return 'lm' in self.flags

    def to_dict(self) -> dict:
        return {
            'logical_count': self.logical_count,
            'physical_count': self.physical_count,
            'vendor': self.vendor,
            'name': self.name,
            'family': self.family,
            'model': self.model,
            'stepping': self.stepping,
            'frequency': self.frequency,
            'bogomips': self.bogomips,
            'flags': list(self.flags),
        }


def _value(line: str) -> str:
    value = split_label(line, ':')[1]
    if value is None:
        raise FieldParseError(line, "missing ':' separator")
    return value


def _start_processor(line: str, context: ScanContext) -> ProcessorEntry:
    index = parse_int(split_label(line, ':')[1])
    if index is None:
        raise MalformedRecord(line, "processor number is not an integer")
    return ProcessorEntry(processor=index)


def _text_setter(attribute: str):
    def setter(entry: ProcessorEntry, line: str, context: ScanContext) -> None:
        setattr(entry, attribute, _value(line) or None)
    return setter


def _number_setter(attribute: str):
    def setter(entry: ProcessorEntry, line: str, context: ScanContext) -> None:
        number = parse_number(_value(line))
        if number is None:
            raise FieldParseError(line, f"{attribute} is not a number", attribute)
        setattr(entry, attribute, number)
    return setter


def _set_flags(entry: ProcessorEntry, line: str, context: ScanContext) -> None:
    entry.flags = tokenize(_value(line))


def _label_is(*labels: str):
    return lambda line: split_label(line, ':')[0] in labels


CPUINFO_GRAMMAR: Grammar[ProcessorEntry] = Grammar(
    name='cpuinfo',
    is_record_start=lambda line: split_label(line, ':')[0] == 'processor',
    start_record=_start_processor,
    rules=(
        FieldRule('physical_id', _label_is('physical id'), _text_setter('physical_id')),
        FieldRule('vendor', _label_is('vendor_id', 'CPU implementer'), _text_setter('vendor')),
        FieldRule('model_name', _label_is('model name'), _text_setter('model_name')),
        FieldRule('family', _label_is('cpu family'), _text_setter('family')),
        FieldRule('model', _label_is('model'), _text_setter('model')),
        FieldRule('stepping', _label_is('stepping'), _text_setter('stepping')),
        FieldRule('mhz', _label_is('cpu MHz'), _number_setter('mhz')),
        FieldRule('bogomips', starts_with('bogomips', 'BogoMIPS'), _number_setter('bogomips')),
        FieldRule('flags', _label_is('flags', 'Features'), _set_flags),
    ),
)


def parse_cpuinfo(lines: Iterable[str]) -> CpuInfo:
    """
    Parse /proc/cpuinfo content.

    Descriptive fields are taken from the first processor block.
    """
    entries = RecordScanner(CPUINFO_GRAMMAR).scan(lines).records
    if not entries:
        return CpuInfo(logical_count=0, physical_count=0)

    first = entries[0]
    physical_ids = {entry.physical_id for entry in entries if entry.physical_id is not None}

    return CpuInfo(
        logical_count=len(entries),
        physical_count=len(physical_ids) or 1,
        vendor=first.vendor,
        name=first.model_name,
        family=first.family,
        model=first.model,
        stepping=first.stepping,
        frequency=first.mhz,
        bogomips=first.bogomips,
        flags=tuple(first.flags),
    )


def read_cpu_info(path: str = PROC_CPUINFO) -> CpuInfo:
    """
    Read and parse /proc/cpuinfo.

    Raises:
        IoError: If the file cannot be read.
    """
    return parse_cpuinfo(read_lines(path))
