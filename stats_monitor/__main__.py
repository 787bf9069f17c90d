import sys

from stats_monitor.cli import main

sys.exit(main())
