"""
Shared constants for sysinspect collectors.
"""

from __future__ import annotations

# =============================================================================
# PSEUDO-FILESYSTEM PATHS
# =============================================================================

PROC_NET_DEV = '/proc/net/dev'
PROC_MEMINFO = '/proc/meminfo'
PROC_CPUINFO = '/proc/cpuinfo'

# Glob matching the EDID blob exported for each DRM connector
DRM_EDID_GLOB = '/sys/class/drm/*/edid'

# Glob matching the uevent file of each power supply (batteries, AC adapters)
SYS_POWER_SUPPLY_UEVENT_GLOB = '/sys/class/power_supply/*/uevent'

SYS_CLASS_NET = '/sys/class/net'
SYS_CLASS_HWMON = '/sys/class/hwmon'

# =============================================================================
# SYSTEM UTILITIES
# =============================================================================

CMD_SUDO = 'sudo'
CMD_IW = 'iw'
CMD_IWLIST = 'iwlist'
CMD_XRANDR = 'xrandr'

# =============================================================================
# SETTING DEFAULTS
# =============================================================================

# Environment variable prefix for setting overrides (SYSINSPECT_<KEY>)
SETTINGS_ENV_PREFIX = 'SYSINSPECT_'

DEFAULT_USE_SUDO = False
DEFAULT_COMMAND_TIMEOUT = 30.0  # seconds
DEFAULT_LOG_LEVEL = 'WARNING'

# Interface name prefixes treated as wireless in /proc/net/dev
DEFAULT_WIRELESS_PREFIXES = 'wlan,wlp,wlx'
