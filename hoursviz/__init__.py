"""
hoursViz: A CLI tool that turns employee time entries into an HTML report and a pie chart.

- Fetches time entries from the time tracking API
- Totals hours per employee, skipping deleted and unnamed entries
- Renders an HTML table (highlighting low-hours employees) and a PNG pie chart
- Exports to CSV and Markdown
- Can be used as a CLI (via `python -m hoursviz` or `hoursviz` if installed as a package)
"""

__version__ = "0.1.0"
