"""
Report Parser

Turns the raw text returned by the statistics endpoint into a ParsedReport.

Wire format (one logical line, whitespace around the line and around each
field is ignored):

    load,totalMemory,usedMemory,totalDisk,usedDisk,totalNet,usedNet

Parsing happens in two stages so that callers can evaluate rules that do not
depend on a total before the totals are validated:

1. parse_fields() - field count and numeric conversion
2. validate_totals() - totals must be strictly positive
"""
import logging
import math
import re

from stats_monitor.errors import ParseError, ParseErrorKind
from stats_monitor.models import REPORT_FIELDS, ParsedReport

logger = logging.getLogger(__name__)

FIELD_COUNT = len(REPORT_FIELDS)

# Totals in validation order
TOTAL_FIELDS = ('total_memory', 'total_disk', 'total_net_bandwidth')

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Significant digits in INT64_MAX
MAX_INTEGER_DIGITS = 19

_INFINITY_SPELLINGS = ('inf', 'infinity')

_INTEGER_RE = re.compile(r'[+-]?[0-9]+', re.ASCII)


def _parse_int(text: str, index: int) -> int:
    """Parse a signed base-10 64-bit integer field."""
    if not _INTEGER_RE.fullmatch(text):
        raise ParseError(
            ParseErrorKind.BAD_FIELD,
            f"field {index} ({REPORT_FIELDS[index]}): invalid integer {text!r}",
            field=index
        )
    # int() refuses very long digit strings
    digits = text.lstrip('+-').lstrip('0')
    value = None
    if len(digits) <= MAX_INTEGER_DIGITS:
        value = int(digits or '0')
        if text.startswith('-'):
            value = -value
    if value is None or not INT64_MIN <= value <= INT64_MAX:
        raise ParseError(
            ParseErrorKind.BAD_FIELD,
            f"field {index} ({REPORT_FIELDS[index]}): value out of range {text!r}",
            field=index
        )
    return value


def _parse_float(text: str, index: int) -> float:
    """Parse a floating-point field, rejecting values that overflow."""
    error = ParseError(
        ParseErrorKind.BAD_FIELD,
        f"field {index} ({REPORT_FIELDS[index]}): invalid number {text!r}",
        field=index
    )
    # float() accepts digit separators
    if '_' in text:
        raise error
    try:
        value = float(text)
    except ValueError:
        raise error from None
    if math.isinf(value) and text.lstrip('+-').lower() not in _INFINITY_SPELLINGS:
        raise ParseError(
            ParseErrorKind.BAD_FIELD,
            f"field {index} ({REPORT_FIELDS[index]}): value out of range {text!r}",
            field=index
        )
    return value


def parse_fields(raw: str) -> ParsedReport:
    """
    Split a raw report and convert every field to its numeric type.

    Totals are not validated here; see validate_totals().

    Args:
        raw: Raw response body

    Returns:
        ParsedReport

    Raises:
        ParseError: WRONG_FIELD_COUNT or BAD_FIELD
    """
    parts = raw.strip().split(',')

    if len(parts) != FIELD_COUNT:
        raise ParseError(
            ParseErrorKind.WRONG_FIELD_COUNT,
            f"bad format: expected {FIELD_COUNT} fields, got {len(parts)}"
        )

    values = [_parse_float(parts[0].strip(), 0)]
    for index in range(1, FIELD_COUNT):
        values.append(_parse_int(parts[index].strip(), index))

    return ParsedReport(*values)


def validate_total(report: ParsedReport, name: str) -> None:
    """
    Check that a single total field is strictly positive.

    Raises:
        ParseError: INVALID_TOTAL naming the field
    """
    value = getattr(report, name)
    if value <= 0:
        raise ParseError(
            ParseErrorKind.INVALID_TOTAL,
            f"invalid {name.replace('_', ' ')} ({value})",
            field=name
        )


def validate_totals(report: ParsedReport) -> ParsedReport:
    """Validate memory, disk and network totals in that order."""
    for name in TOTAL_FIELDS:
        validate_total(report, name)
    return report


def parse_report(raw: str) -> ParsedReport:
    """
    Parse and fully validate a raw report.

    Raises:
        ParseError: on any malformed or semantically invalid report
    """
    report = validate_totals(parse_fields(raw))
    logger.debug(f"Parsed report: {report.to_dict()}")
    return report
