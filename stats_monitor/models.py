"""
Data structures shared by the parser, evaluator and poll driver.

A ParsedReport is built fresh for every poll and nothing is carried over
between polls.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from stats_monitor.errors import MonitorError


# Report field names in wire order
REPORT_FIELDS = (
    'load',
    'total_memory',
    'used_memory',
    'total_disk',
    'used_disk',
    'total_net_bandwidth',
    'used_net_bandwidth',
)


class AlertCategory(str, Enum):
    """Resource dimension an alert relates to"""
    LOAD = "load"
    MEMORY = "memory"
    DISK = "disk"
    NETWORK = "network"


class CycleStatus(str, Enum):
    """Outcome of a single poll cycle"""
    OK = "ok"
    FETCH_FAILED = "fetch_failed"
    PARSE_FAILED = "parse_failed"


@dataclass(frozen=True)
class ParsedReport:
    """One statistics snapshot of the monitored host."""
    load: float
    total_memory: int
    used_memory: int
    total_disk: int
    used_disk: int
    total_net_bandwidth: int
    used_net_bandwidth: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {name: getattr(self, name) for name in REPORT_FIELDS}


@dataclass(frozen=True)
class Alert:
    """A rendered warning line for one resource dimension."""
    category: AlertCategory
    message: str


@dataclass
class CycleResult:
    """Result of one fetch/parse/evaluate cycle"""
    status: CycleStatus
    alerts: List[Alert] = field(default_factory=list)
    error: Optional[MonitorError] = None
    consecutive_failures: int = 0
    diagnostic_emitted: bool = False

    @property
    def ok(self) -> bool:
        return self.status == CycleStatus.OK
