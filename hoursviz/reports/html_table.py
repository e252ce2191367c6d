"""HtmlTableRenderer class for rendering employee summaries as an HTML page."""
from dataclasses import dataclass
from datetime import datetime
from html import escape
from pathlib import Path
from typing import List, Optional, Union

from .aggregator import EmployeeSummary, total_hours
from ..utils.date_utils import generated_str
from ..utils.file_utils import write_text
from ..utils.format_utils import format_hours


@dataclass(frozen=True)
class TableOptions:
    """Titles, threshold and colors used by the HTML report."""

    report_title: str = "Employee Time Analysis Report"
    page_title: str = "Company Time Tracker Dashboard"
    low_hours_threshold: float = 100.0
    primary_color: str = "#2e7d32"
    low_hours_color: str = "#ffcdd2"
    low_hours_text_color: str = "#d32f2f"


PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <title>{page_title}</title>
    <style>
        body {{ font-family: Arial, Helvetica, sans-serif; margin: 20px; color: #333; }}
        h1 {{ color: {primary}; }}
        table {{ border-collapse: collapse; width: 100%; }}
        th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; }}
        th {{ background-color: {primary}; color: white; }}
        td.hours {{ text-align: right; }}
        tr.low-hours {{ background-color: {low_bg}; color: {low_fg}; font-weight: bold; }}
        tfoot td {{ font-weight: bold; border-top: 2px solid {primary}; }}
        .legend {{ margin-top: 12px; }}
        .legend .swatch {{ display: inline-block; width: 14px; height: 14px; background-color: {low_bg}; border: 1px solid {low_fg}; vertical-align: middle; }}
        .generated {{ color: #777; font-size: 0.9em; }}
    </style>
</head>
<body>
    <h1>{report_title}</h1>
    <table>
        <thead>
            <tr><th>Employee Name</th><th>Total Hours</th></tr>
        </thead>
        <tbody>
{rows}
        </tbody>
        <tfoot>
            <tr><td>{employee_count} employees</td><td class="hours">{grand_total}</td></tr>
        </tfoot>
    </table>
    <p class="legend"><span class="swatch"></span> Highlighted rows: employees with less than {threshold} hours</p>
    <p class="generated">Generated: {generated}</p>
</body>
</html>
"""


class HtmlTableRenderer:
    """Class for rendering employee summaries as a self-contained HTML document."""

    def __init__(self, options: Optional[TableOptions] = None):
        """Initialize an HtmlTableRenderer.

        Args:
            options: Titles, threshold and colors (defaults to TableOptions())
        """
        self.options = options or TableOptions()

    def is_low_hours(self, summary: EmployeeSummary) -> bool:
        """Check whether a summary is strictly below the low-hours threshold."""
        return summary.total_hours < self.options.low_hours_threshold

    def _row(self, summary: EmployeeSummary) -> str:
        css = ' class="low-hours"' if self.is_low_hours(summary) else ""
        return (
            f"            <tr{css}><td>{escape(summary.employee_name)}</td>"
            f"<td class=\"hours\">{format_hours(summary.total_hours)}</td></tr>"
        )

    def render(self, summaries: List[EmployeeSummary], generated_at: Optional[datetime] = None) -> str:
        """Render the HTML report.

        Rows are emitted in the given order; summaries are never dropped or
        altered, low-hours rows are only styled differently.

        Args:
            summaries: Employee summaries, already sorted
            generated_at: Timestamp shown in the footer (defaults to now)

        Returns:
            Complete HTML document
        """
        opts = self.options
        return PAGE_TEMPLATE.format(
            page_title=escape(opts.page_title),
            report_title=escape(opts.report_title),
            primary=escape(opts.primary_color),
            low_bg=escape(opts.low_hours_color),
            low_fg=escape(opts.low_hours_text_color),
            rows="\n".join(self._row(s) for s in summaries),
            employee_count=len(summaries),
            grand_total=format_hours(total_hours(summaries)),
            threshold=f"{opts.low_hours_threshold:g}",
            generated=generated_str(generated_at),
        )

    def save(self, html: str, path: Union[str, Path]) -> Path:
        """Save a rendered report as UTF-8.

        Args:
            html: Rendered document
            path: Output file path

        Returns:
            Absolute path of the written file

        Raises:
            RenderError: If the file cannot be written
        """
        return write_text(path, html)
