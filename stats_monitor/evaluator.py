"""
Threshold Evaluator
===================
Four fixed threshold rules, evaluated in order against one report:

- load:    load average > 30
- memory:  truncated used/total percentage > 80
- disk:    used > 90% of total, reports free space in binary megabytes
- network: used > 90% of total, reports available bandwidth in Mbit/s (SI)

Rules are stateless. Every alert is recomputed from the report it is given.
"""
import logging
import math
from typing import Callable, List, Optional, Tuple

from stats_monitor.errors import ParseError
from stats_monitor.models import Alert, AlertCategory, ParsedReport
from stats_monitor.parser import parse_fields, validate_total

logger = logging.getLogger(__name__)

LOAD_THRESHOLD = 30
MEMORY_PERCENT_THRESHOLD = 80
DISK_USAGE_RATIO = 0.9
NETWORK_USAGE_RATIO = 0.9

BYTES_PER_MEGABYTE = 1024 * 1024
BYTES_PER_MEGABIT = 1_000_000


def format_load(load: float) -> str:
    """Whole numbers render without decimals, everything else with two."""
    if math.isinf(load):
        return '+Inf' if load > 0 else '-Inf'
    if load.is_integer():
        return str(int(load))
    return f"{load:.2f}"


def check_load(report: ParsedReport) -> Optional[Alert]:
    if report.load > LOAD_THRESHOLD:
        return Alert(
            AlertCategory.LOAD,
            f"Load Average is too high: {format_load(report.load)}"
        )
    return None


def memory_percent(report: ParsedReport) -> int:
    """Integer percentage of memory in use, truncated toward zero."""
    # Floor division rounds negatives down, not toward zero
    numerator = report.used_memory * 100
    percent = abs(numerator) // report.total_memory
    return percent if numerator >= 0 else -percent


def check_memory(report: ParsedReport) -> Optional[Alert]:
    percent = memory_percent(report)
    if percent > MEMORY_PERCENT_THRESHOLD:
        return Alert(AlertCategory.MEMORY, f"Memory usage too high: {percent}%")
    return None


def check_disk(report: ParsedReport) -> Optional[Alert]:
    if float(report.used_disk) > float(report.total_disk) * DISK_USAGE_RATIO:
        free_mb = max(0, report.total_disk - report.used_disk) // BYTES_PER_MEGABYTE
        return Alert(
            AlertCategory.DISK,
            f"Free disk space is too low: {free_mb} Mb left"
        )
    return None


def check_network(report: ParsedReport) -> Optional[Alert]:
    if float(report.used_net_bandwidth) > float(report.total_net_bandwidth) * NETWORK_USAGE_RATIO:
        available = max(0, report.total_net_bandwidth - report.used_net_bandwidth)
        available_mbit = available // BYTES_PER_MEGABIT
        return Alert(
            AlertCategory.NETWORK,
            f"Network bandwidth usage high: {available_mbit} Mbit/s available"
        )
    return None


# (total that must be validated first, rule)
THRESHOLD_RULES: List[Tuple[Optional[str], Callable[[ParsedReport], Optional[Alert]]]] = [
    (None, check_load),
    ('total_memory', check_memory),
    ('total_disk', check_disk),
    ('total_net_bandwidth', check_network),
]


def evaluate(report: ParsedReport) -> List[Alert]:
    """
    Run every threshold rule against a validated report.

    Args:
        report: Report whose totals have passed validate_totals()

    Returns:
        Alerts in rule order (load, memory, disk, network), possibly empty
    """
    alerts = []
    for _, rule in THRESHOLD_RULES:
        alert = rule(report)
        if alert is not None:
            alerts.append(alert)
    return alerts


def evaluate_staged(report: ParsedReport) -> Tuple[List[Alert], Optional[ParseError]]:
    """
    Run the rules, validating each total immediately before the rule that
    divides by it.

    The load rule needs no total, so its alert is produced even when the
    memory total turns out to be invalid. Evaluation stops at the first
    invalid total.

    Returns:
        (alerts produced so far, ParseError or None)
    """
    alerts = []
    for total_name, rule in THRESHOLD_RULES:
        if total_name is not None:
            try:
                validate_total(report, total_name)
            except ParseError as e:
                return alerts, e
        alert = rule(report)
        if alert is not None:
            alerts.append(alert)
    return alerts, None


def evaluate_raw(raw: str) -> Tuple[List[Alert], Optional[ParseError]]:
    """
    Parse a raw report and evaluate it.

    Returns:
        (alerts, error). A count or conversion failure yields no alerts.
    """
    try:
        report = parse_fields(raw)
    except ParseError as e:
        return [], e

    alerts, error = evaluate_staged(report)
    logger.debug(f"Evaluated report {report.to_dict()}: {len(alerts)} alert(s)")
    return alerts, error
