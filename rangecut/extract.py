"""Apply a ``RangeSpec`` to a line of text.

Both modes walk the spec in ascending order and stop after the first
interval whose right bound runs past the end of the line.
"""

from dataclasses import dataclass

from rangecut.errors import RangeError
from rangecut.ranges import RangeEngine, RangeSpec


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of cutting one line.

    Attributes:
        success: True if the range list parsed and the line was cut
        text: The extracted text if successful, None if failed
        error: The range error if failed, None if successful
    """

    success: bool
    text: str | None
    error: RangeError | None


def extract_by_position(spec: RangeSpec, line: str) -> str:
    """Select character positions from ``line``.

    Spans are concatenated without separators. An interval starting past the
    end of the line contributes nothing.
    """
    length = len(line)
    pieces: list[str] = []
    for interval in spec:
        if interval.left <= length:
            pieces.append(line[interval.left - 1 : min(interval.right, length)])
        if interval.right > length:
            break
    return "".join(pieces)


def extract_by_delimiter(spec: RangeSpec, delimiter: str, line: str) -> str:
    """Select ``delimiter``-separated fields from ``line``.

    The delimiter is matched literally. An empty delimiter leaves the line as
    a single field. The stop condition compares against the line's character
    length, not its field count.
    """
    fields = line.split(delimiter) if delimiter else [line]
    count = len(fields)
    selected: list[str] = []
    for interval in spec:
        if interval.left <= count:
            selected.extend(fields[interval.left - 1 : min(interval.right, count)])
        if interval.right > len(line):
            break
    return delimiter.join(selected)


class Extractor:
    """Cuts lines using range lists parsed through a private ``RangeEngine``.

    One extractor serves one tool invocation; it is not thread-safe.
    """

    def __init__(self, engine: RangeEngine | None = None) -> None:
        self.engine: RangeEngine = engine if engine is not None else RangeEngine()

    def cut_characters(self, raw: str, line: str) -> ExtractionResult:
        result = self.engine.parse(raw)
        if result.spec is None:
            return ExtractionResult(success=False, text=None, error=result.error)
        return ExtractionResult(
            success=True, text=extract_by_position(result.spec, line), error=None
        )

    def cut_fields(self, raw: str, delimiter: str, line: str) -> ExtractionResult:
        result = self.engine.parse(raw)
        if result.spec is None:
            return ExtractionResult(success=False, text=None, error=result.error)
        return ExtractionResult(
            success=True,
            text=extract_by_delimiter(result.spec, delimiter, line),
            error=None,
        )
