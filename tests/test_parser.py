"""
Tests for stats_monitor/parser.py

Tests cover:
- Field count and numeric conversion
- Whitespace handling around the line and each field
- Total validation order and error details
"""
import pytest

from stats_monitor.errors import ParseError, ParseErrorKind
from stats_monitor.models import ParsedReport
from stats_monitor.parser import parse_fields, parse_report, validate_totals


VALID_RAW = '12.5,8000,4000,1000000000,500000000,100000000,20000000'


class TestParseFields:
    """Tests for count and conversion stage"""

    def test_valid_report(self):
        """Test all seven fields are converted in order"""
        report = parse_fields(VALID_RAW)

        assert report == ParsedReport(
            load=12.5,
            total_memory=8000,
            used_memory=4000,
            total_disk=1000000000,
            used_disk=500000000,
            total_net_bandwidth=100000000,
            used_net_bandwidth=20000000
        )
        assert isinstance(report.load, float)
        assert isinstance(report.total_memory, int)

    def test_surrounding_whitespace_ignored(self):
        """Test whitespace around the blob and every field is trimmed"""
        report = parse_fields('\n  12.5 , 8000,\t4000 ,1000000000,500000000 , 100000000,20000000 \r\n')
        assert report.load == 12.5
        assert report.used_memory == 4000
        assert report.used_net_bandwidth == 20000000

    def test_integer_load_parses_as_float(self):
        """Test a whole-number load is still a float"""
        report = parse_fields('31,1,0,1,0,1,0')
        assert report.load == 31.0
        assert isinstance(report.load, float)

    def test_exponent_load(self):
        """Test load accepts exponent notation"""
        assert parse_fields('3.1e1,1,0,1,0,1,0').load == 31.0

    def test_signed_integers(self):
        """Test explicit signs on integer fields"""
        report = parse_fields('1,+100,-5,1,0,1,0')
        assert report.total_memory == 100
        assert report.used_memory == -5

    def test_totals_not_validated(self):
        """Test zero totals pass the conversion stage"""
        report = parse_fields('1,0,0,0,0,0,0')
        assert report.total_memory == 0

    @pytest.mark.parametrize('raw,count', [
        ('1,2,3,4,5,6', 6),
        ('1,2,3,4,5,6,7,8', 8),
        ('', 1),
        ('1;2;3;4;5;6;7', 1),
    ])
    def test_wrong_field_count(self, raw, count):
        """Test anything other than seven fields is rejected"""
        with pytest.raises(ParseError) as exc_info:
            parse_fields(raw)

        assert exc_info.value.kind == ParseErrorKind.WRONG_FIELD_COUNT
        assert exc_info.value.field is None
        assert f"got {count}" in str(exc_info.value)

    def test_trailing_comma_counts_as_field(self):
        """Test a trailing comma produces an empty eighth field"""
        with pytest.raises(ParseError) as exc_info:
            parse_fields(VALID_RAW + ',')
        assert exc_info.value.kind == ParseErrorKind.WRONG_FIELD_COUNT

    @pytest.mark.parametrize('raw,index', [
        ('abc,1,0,1,0,1,0', 0),
        (',1,0,1,0,1,0', 0),
        ('1_0,1,0,1,0,1,0', 0),
        ('1,1.5,0,1,0,1,0', 1),
        ('1,1,x,1,0,1,0', 2),
        ('1,1,0,1e3,0,1,0', 3),
        ('1,1,0,1,1_000,1,0', 4),
        ('1,1,0,1,0,,0', 5),
        ('1,1,0,1,0,1,0x10', 6),
    ])
    def test_bad_field(self, raw, index):
        """Test conversion failure reports the field index"""
        with pytest.raises(ParseError) as exc_info:
            parse_fields(raw)

        assert exc_info.value.kind == ParseErrorKind.BAD_FIELD
        assert exc_info.value.field == index

    def test_integer_out_of_range(self):
        """Test integers beyond 64 bits are rejected"""
        with pytest.raises(ParseError) as exc_info:
            parse_fields('1,9223372036854775808,0,1,0,1,0')

        assert exc_info.value.kind == ParseErrorKind.BAD_FIELD
        assert exc_info.value.field == 1

    def test_int64_max_accepted(self):
        """Test the largest 64-bit value is accepted"""
        report = parse_fields('1,9223372036854775807,0,1,0,1,0')
        assert report.total_memory == 2 ** 63 - 1

    def test_int64_min_accepted(self):
        """Test the smallest 64-bit value is accepted"""
        report = parse_fields('1,1,-9223372036854775808,1,0,1,0')
        assert report.used_memory == -(2 ** 63)

    def test_leading_zeros_accepted(self):
        """Test zero padding does not count toward the digit limit"""
        report = parse_fields('1,' + '0' * 30 + '42,0,1,0,1,0')
        assert report.total_memory == 42

    @pytest.mark.parametrize('digits', [20, 5000])
    def test_very_long_integer(self, digits):
        """Test huge digit strings are a field error, not a crash"""
        with pytest.raises(ParseError) as exc_info:
            parse_fields('1,' + '9' * digits + ',1,100,1,100,1')

        assert exc_info.value.kind == ParseErrorKind.BAD_FIELD
        assert exc_info.value.field == 1

    def test_long_zero_padded_integer(self):
        """Test thousands of leading zeros still parse"""
        report = parse_fields('1,1,' + '0' * 5000 + '7,1,0,1,0')
        assert report.used_memory == 7

    @pytest.mark.parametrize('load', ['1e400', '-1e400', '9' * 400])
    def test_overflowing_load(self, load):
        """Test a load that overflows a double is rejected"""
        with pytest.raises(ParseError) as exc_info:
            parse_fields(load + ',1,0,1,0,1,0')

        assert exc_info.value.kind == ParseErrorKind.BAD_FIELD
        assert exc_info.value.field == 0

    @pytest.mark.parametrize('load', ['inf', '+Inf', 'Infinity', '-inf'])
    def test_explicit_infinity_load(self, load):
        """Test spelled-out infinity is a valid float"""
        report = parse_fields(load + ',1,0,1,0,1,0')
        assert report.load in (float('inf'), float('-inf'))

    def test_first_bad_field_reported(self):
        """Test the lowest bad index wins"""
        with pytest.raises(ParseError) as exc_info:
            parse_fields('1,x,y,1,0,1,0')
        assert exc_info.value.field == 1


class TestValidateTotals:
    """Tests for total validation stage"""

    @pytest.mark.parametrize('raw,name', [
        ('1,0,0,1,0,1,0', 'total_memory'),
        ('1,-1,0,1,0,1,0', 'total_memory'),
        ('1,1,0,0,0,1,0', 'total_disk'),
        ('1,1,0,1,0,0,0', 'total_net_bandwidth'),
        ('1,1,0,1,0,-100,0', 'total_net_bandwidth'),
    ])
    def test_non_positive_total(self, raw, name):
        """Test non-positive totals are rejected by name"""
        with pytest.raises(ParseError) as exc_info:
            validate_totals(parse_fields(raw))

        assert exc_info.value.kind == ParseErrorKind.INVALID_TOTAL
        assert exc_info.value.field == name

    def test_memory_checked_before_disk(self):
        """Test memory total is reported first when several are invalid"""
        with pytest.raises(ParseError) as exc_info:
            validate_totals(parse_fields('1,0,0,0,0,0,0'))
        assert exc_info.value.field == 'total_memory'

    def test_used_values_not_validated(self):
        """Test negative usage is not an error"""
        report = validate_totals(parse_fields('1,1,-1,1,-1,1,-1'))
        assert report.used_disk == -1


class TestParseReport:
    """Tests for combined parse"""

    def test_valid(self):
        """Test a valid report passes both stages"""
        assert parse_report(VALID_RAW).total_disk == 1000000000

    def test_zero_total_memory(self):
        """Test zero memory total fails with INVALID_TOTAL"""
        with pytest.raises(ParseError) as exc_info:
            parse_report('1,0,0,1,0,1,0')
        assert exc_info.value.kind == ParseErrorKind.INVALID_TOTAL

    def test_deterministic(self):
        """Test repeated parses of the same text are equal"""
        assert parse_report(VALID_RAW) == parse_report(VALID_RAW)
