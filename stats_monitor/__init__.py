"""
Server Statistics Monitor

Polls a host's statistics endpoint, parses the comma-separated report it
returns and prints a warning line for every resource (load, memory, disk,
network) that is over its threshold.

Usage:
    from stats_monitor import parse_report, evaluate

    report = parse_report('31,100,81,1000000000,950000000,100000000,95000000')
    for alert in evaluate(report):
        print(alert.message)
"""

__version__ = "1.0.0"

from stats_monitor.errors import ConfigError, FetchError, MonitorError, ParseError, ParseErrorKind
from stats_monitor.models import Alert, AlertCategory, CycleResult, CycleStatus, ParsedReport
from stats_monitor.parser import parse_fields, parse_report, validate_totals
from stats_monitor.evaluator import evaluate, evaluate_raw, evaluate_staged

__all__ = [
    'Alert',
    'AlertCategory',
    'ConfigError',
    'CycleResult',
    'CycleStatus',
    'FetchError',
    'MonitorError',
    'ParseError',
    'ParseErrorKind',
    'ParsedReport',
    'evaluate',
    'evaluate_raw',
    'evaluate_staged',
    'parse_fields',
    'parse_report',
    'validate_totals',
]
