"""Report generation modules for hoursViz."""

from .time_record import TimeRecord
from .aggregator import EmployeeSummary, summarize
from .html_table import HtmlTableRenderer, TableOptions
from .pie_chart import PieChartRenderer, build_slices

__all__ = [
    'TimeRecord', 'EmployeeSummary', 'summarize',
    'HtmlTableRenderer', 'TableOptions', 'PieChartRenderer', 'build_slices'
]
