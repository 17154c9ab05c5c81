"""
Display identification package for sysinspect.

Decodes monitor EDID blobs into DisplayDescriptor objects.
"""

from .edid import (
    DisplayDescriptor,
    RangeLimits,
    decode_edid,
    decode_manufacturer_id,
    encode_manufacturer_id,
)
from .xrandr import (
    hex_to_bytes,
    list_displays,
    parse_xrandr_verbose,
    read_drm_displays,
)

__all__ = [
    'DisplayDescriptor',
    'RangeLimits',
    'decode_edid',
    'decode_manufacturer_id',
    'encode_manufacturer_id',
    'hex_to_bytes',
    'list_displays',
    'parse_xrandr_verbose',
    'read_drm_displays',
]
