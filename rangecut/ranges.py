"""Range list parsing and normalization.

A range list is a comma-separated string of tokens, each one of ``N``,
``A-B`` or ``A-``. Parsing turns it into a ``RangeSpec``: the intervals
sorted by left bound with overlapping and adjacent ones merged.
"""

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace

from rangecut.errors import InvalidRange, MalformedRangeToken, RangeError
from rangecut.interval import Interval
from rangecut.util import OPEN_END

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"([0-9]+)(?:(-)([0-9]*))?")


@dataclass(frozen=True)
class RangeSpec:
    """Canonical form of a range list.

    Intervals are ascending by ``left`` and no two of them overlap or touch.
    Build one with ``merge`` or ``parse_range`` rather than directly.
    """

    intervals: tuple[Interval, ...] = ()

    def __iter__(self) -> Iterator[Interval]:
        return iter(self.intervals)

    def __len__(self) -> int:
        return len(self.intervals)

    def __bool__(self) -> bool:
        return bool(self.intervals)

    @property
    def min_left(self) -> int | None:
        return self.intervals[0].left if self.intervals else None

    def __contains__(self, position: object) -> bool:
        if not isinstance(position, int):
            return False
        return any(ivl.left <= position <= ivl.right for ivl in self.intervals)

    def __str__(self) -> str:
        return ",".join(str(interval) for interval in self.intervals)


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing a range list.

    Attributes:
        success: True if the list parsed
        spec: The canonical spec if successful, None if failed
        error: The range error if failed, None if successful
    """

    success: bool
    spec: RangeSpec | None
    error: RangeError | None

    def unwrap(self) -> RangeSpec:
        """Return the spec, raising the stored error if parsing failed."""
        if self.error is not None:
            raise self.error
        assert self.spec is not None
        return self.spec


def parse_token(token: str) -> Interval | RangeError:
    """Parse a single token into an interval.

    ``N`` is ``[N, N]``, ``A-B`` is ``[A, B]`` and ``A-`` runs to the end of
    the line. Decreasing ranges are malformed. A bound of zero is an
    ``InvalidRange``.
    """
    match = _TOKEN_RE.fullmatch(token)
    if match is None:
        return MalformedRangeToken(f"Invalid range token: {token!r}", token)

    left_str, dash, right_str = match.groups()
    try:
        left = int(left_str)
        if not dash:
            right = left
        elif right_str:
            right = int(right_str)
        else:
            right = OPEN_END
    except ValueError:
        # past sys.get_int_max_str_digits()
        left = right = OPEN_END + 1
    if left > OPEN_END or right > OPEN_END:
        return MalformedRangeToken(
            f"Range bound too large: {token[:20]!r}", token
        )

    if left > right:
        return MalformedRangeToken(
            f"Invalid decreasing range: {token!r}", token
        )
    if left < 1:
        return InvalidRange(token)
    return Interval(left=left, right=right)


def parse_intervals(raw: str) -> list[Interval] | RangeError:
    """Parse every token of ``raw`` in order, without sorting or merging.

    Returns the first token error instead of a list when any token fails.
    """
    if not raw:
        return MalformedRangeToken("Empty range list", raw)

    intervals: list[Interval] = []
    for token in raw.split(","):
        parsed = parse_token(token)
        if isinstance(parsed, RangeError):
            return parsed
        intervals.append(parsed)
    return intervals


def merge(intervals: Iterable[Interval]) -> RangeSpec:
    """Coalesce intervals into a canonical ``RangeSpec``.

    Algorithm: sort by (left, right), then sweep once. An interval that
    starts at or before ``previous.right + 1`` extends the previous one;
    anything else starts a new run.
    """
    ordered = sorted(intervals, key=lambda ivl: (ivl.left, ivl.right))
    if not ordered:
        return RangeSpec()

    merged: list[Interval] = []
    current = ordered[0]
    for interval in ordered[1:]:
        if interval.left <= current.right + 1:
            if interval.right > current.right:
                current = replace(current, right=interval.right)
        else:
            merged.append(current)
            current = interval
    merged.append(current)

    return RangeSpec(tuple(merged))


def parse_range(raw: str) -> ParseResult:
    """Parse and normalize ``raw`` without any caching.

    Sub-1 bounds are rejected per token by ``parse_token``, so a merged spec
    always starts at 1 or later.
    """
    parsed = parse_intervals(raw)
    if isinstance(parsed, RangeError):
        return ParseResult(success=False, spec=None, error=parsed)
    return ParseResult(success=True, spec=merge(parsed), error=None)


class RangeEngine:
    """Parses range lists, remembering the most recent one.

    A tool invocation usually applies the same range list to every input
    line, so the last raw string and its result are kept. The cache is
    keyed by value: any different string is parsed again.

    Instances hold mutable state and must not be shared across threads.
    """

    def __init__(self) -> None:
        self._cached_raw: str | None = None
        self._cached_result: ParseResult | None = None
        self.parse_count: int = 0

    def parse(self, raw: str) -> ParseResult:
        if self._cached_result is not None and self._cached_raw == raw:
            return self._cached_result

        if self._cached_raw is not None:
            logger.debug(
                "Range list changed from %r to %r, reparsing", self._cached_raw, raw
            )
        result = parse_range(raw)
        self.parse_count += 1
        if result.success:
            logger.debug("Parsed range list %r as %s", raw, result.spec)
        else:
            logger.debug("Rejected range list %r: %s", raw, result.error)

        self._cached_raw = raw
        self._cached_result = result
        return result

    def clear(self) -> None:
        self._cached_raw = None
        self._cached_result = None
