"""tiletempo/reports — Config, runner, console output, JSON export, baseline comparison."""

from tiletempo.reports.config import ReportConfig, load_config
from tiletempo.reports.runner import TimingResult, run_level
from tiletempo.reports.compare import compare_timings
from tiletempo.reports.output import (
    print_auto_offset,
    print_level_info,
    print_timings,
    save_results,
)

__all__ = [
    "ReportConfig",
    "load_config",
    "TimingResult",
    "run_level",
    "compare_timings",
    "print_auto_offset",
    "print_level_info",
    "print_timings",
    "save_results",
]
