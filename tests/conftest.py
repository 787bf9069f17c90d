"""
Pytest configuration and shared fixtures
"""
import pytest
from unittest.mock import MagicMock

from stats_monitor.config import MonitorConfig


ENV_VARS = ('STATS_MONITOR_URL', 'STATS_MONITOR_INTERVAL', 'STATS_MONITOR_LOG_LEVEL')


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host environment from leaking into config defaults"""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def monitor_config():
    """Config pointing at a test endpoint"""
    return MonitorConfig(url='http://stats.test/_stats', interval_seconds=1.0)


@pytest.fixture
def mock_fetcher():
    """Fetcher double whose fetch() is driven by side_effect"""
    fetcher = MagicMock()
    fetcher.fetch.return_value = '1.5,100,10,1000000000,100,100000000,100'
    return fetcher


@pytest.fixture
def quiet_report():
    """Raw report with every value well below its threshold"""
    return '0.5,8589934592,1073741824,536870912000,107374182400,125000000,1000000'
