"""
CLI interface for the statistics monitor
"""
import sys
import argparse
import logging

from dotenv import load_dotenv

from stats_monitor import __version__
from stats_monitor.config import DEFAULT_INTERVAL, DEFAULT_URL, MonitorConfig
from stats_monitor.driver import PollDriver
from stats_monitor.errors import ConfigError
from stats_monitor.models import CycleStatus

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='stats-monitor',
        description='Poll a server statistics endpoint and print resource alerts'
    )
    parser.add_argument(
        '--url', type=str,
        help=f'URL to fetch stats from (GET), env STATS_MONITOR_URL (default: {DEFAULT_URL})'
    )
    parser.add_argument(
        '--interval', type=str,
        help=f'Poll interval, e.g. 1s, 500ms, env STATS_MONITOR_INTERVAL (default: {DEFAULT_INTERVAL})'
    )
    parser.add_argument(
        '--log-level', type=str,
        help='Log level for stderr diagnostics, env STATS_MONITOR_LOG_LEVEL (default: WARNING)'
    )
    parser.add_argument('--once', action='store_true', help='Run a single poll cycle and exit')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )


def main(argv=None) -> int:
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = MonitorConfig.from_args(args)
    except ConfigError as e:
        parser.error(str(e))

    configure_logging(config.log_level)

    driver = PollDriver(config)
    try:
        if args.once:
            result = driver.run(max_cycles=1)
            return 0 if result is not None and result.status == CycleStatus.OK else 1
        driver.run()
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    finally:
        driver.close()

    return 0


if __name__ == '__main__':
    sys.exit(main())
