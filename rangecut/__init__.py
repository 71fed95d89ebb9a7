from .errors import InvalidRange, MalformedRangeToken, RangeError
from .extract import (
    ExtractionResult,
    Extractor,
    extract_by_delimiter,
    extract_by_position,
)
from .interval import Interval
from .ranges import (
    ParseResult,
    RangeEngine,
    RangeSpec,
    merge,
    parse_intervals,
    parse_range,
    parse_token,
)
from .util import DEFAULT_DELIMITER, OPEN_END

__all__ = [
    "Interval",
    "RangeSpec",
    "ParseResult",
    "RangeEngine",
    "parse_token",
    "parse_intervals",
    "parse_range",
    "merge",
    "ExtractionResult",
    "Extractor",
    "extract_by_position",
    "extract_by_delimiter",
    "RangeError",
    "MalformedRangeToken",
    "InvalidRange",
    "OPEN_END",
    "DEFAULT_DELIMITER",
]
