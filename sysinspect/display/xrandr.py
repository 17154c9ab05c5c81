"""
Display discovery from 'xrandr --verbose' and DRM sysfs.

xrandr prints each connected output's EDID as a hex dump:

    HDMI-1 connected primary 1920x1080+0+0 (0x48) normal ...
        EDID:
            00ffffffffffff0022f0142600000000
            210e01030e321f78eacfb5a355499925
            ...
        Brightness: 1.0

The hex lines are concatenated and decoded into the EDID buffer.
"""

from __future__ import annotations

import glob
import logging
import re
from typing import Iterable

from ..constants import CMD_XRANDR, DRM_EDID_GLOB
from ..errors import MalformedEdid
from ..system import read_bytes, run_command
from .edid import EDID_BLOCK_LENGTH, DisplayDescriptor, decode_edid

logger = logging.getLogger(__name__)

EDID_LABEL = 'EDID'
_HEX_LINE = re.compile(r'^[0-9a-fA-F]+$')


def hex_to_bytes(chunks: Iterable[str]) -> bytes:
    """
    Concatenate hex dump lines and decode them.

    Raises:
        MalformedEdid: If the text is not an even-length hex string.
    """
    text = ''.join(chunk.strip() for chunk in chunks)
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise MalformedEdid(
            EDID_BLOCK_LENGTH, len(text) // 2, f"EDID hex dump is not valid hex: {e}"
        ) from None


def extract_edid_dumps(lines: Iterable[str]) -> list[list[str]]:
    """Collect the hex lines that follow each 'EDID:' label."""
    dumps: list[list[str]] = []
    current = None

    for line in lines:
        stripped = line.strip()
        if stripped.startswith(EDID_LABEL):
            current = []
            dumps.append(current)
            continue
        if current is None:
            continue
        if stripped and _HEX_LINE.match(stripped):
            current.append(stripped)
        else:
            current = None

    return [dump for dump in dumps if dump]


def parse_xrandr_verbose(lines: Iterable[str]) -> list[DisplayDescriptor]:
    """
    Decode every EDID found in 'xrandr --verbose' output.

    A dump that cannot be decoded is logged and skipped; duplicates (the
    same monitor on two outputs) are kept once.
    """
    displays: list[DisplayDescriptor] = []
    for dump in extract_edid_dumps(lines):
        try:
            display = decode_edid(hex_to_bytes(dump))
        except MalformedEdid as e:
            logger.warning(f"Skipping display: {e}")
            continue
        if display not in displays:
            displays.append(display)
    return displays


def list_displays() -> list[DisplayDescriptor]:
    """
    Run 'xrandr --verbose' and decode the connected displays.

    Raises:
        CommandError: If xrandr is missing or fails (e.g. no X display).
    """
    return parse_xrandr_verbose(run_command([CMD_XRANDR, '--verbose'], sudo=False))


def read_drm_displays(pattern: str = DRM_EDID_GLOB) -> list[DisplayDescriptor]:
    """
    Decode the EDID files the kernel exports for each DRM connector.

    Disconnected connectors expose an empty file and are skipped.

    Raises:
        IoError: If a matching file cannot be read.
    """
    displays: list[DisplayDescriptor] = []
    for path in sorted(glob.glob(pattern)):
        data = read_bytes(path)
        if not data:
            continue
        try:
            display = decode_edid(data)
        except MalformedEdid as e:
            logger.warning(f"Skipping {path}: {e}")
            continue
        if display not in displays:
            displays.append(display)
    return displays
