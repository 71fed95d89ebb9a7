"""Shared constants for rangecut.

Positions are 1-based and inclusive. Status codes are the values the
``cut`` command reports to its caller.
"""

import sys

# Right bound of an open-ended range such as "8-"
OPEN_END = sys.maxsize

DEFAULT_DELIMITER = "\t"
STDIN_PARAM = "-"

# Status codes
STATUS_OK = 0
STATUS_IO_ERROR = 1
STATUS_RUNTIME_ERROR = 2
STATUS_USAGE_ERROR = 9

LOG_LEVEL_ENV = "RANGECUT_LOG_LEVEL"
