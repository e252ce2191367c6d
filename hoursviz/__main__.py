"""Main module for the hoursViz package."""
import os
import sys
import argparse
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv
from tabulate import tabulate

from .api.client import TimeEntriesClient
from .errors import FetchError, RenderError
from .reports.aggregator import EmployeeSummary, summarize, total_hours
from .reports.html_table import HtmlTableRenderer, TableOptions
from .reports.pie_chart import PieChartRenderer
from .utils.file_utils import write_csv, write_markdown, open_with_default_app
from .utils.format_utils import format_hours, percent, redact_url

DEFAULT_HTML_NAME = "employee_time_report.html"
DEFAULT_CHART_NAME = "employee_time_piechart.png"
TOP_N = 10
SUMMARY_HEADERS = ["Employee", "Total Hours", "% of Total"]

EXIT_OK = 0
EXIT_FETCH_FAILED = 1
EXIT_RENDER_FAILED = 2

# --- Environment Setup ---
def load_environment():
    """Load environment variables from the hoursviz.env file, if there is one."""
    env_file = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'hoursviz.env')
    if os.path.exists(env_file):
        load_dotenv(env_file)

def get_env_var(key: str) -> str:
    """Get an environment variable or exit if not found.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        SystemExit: If the environment variable is not found
    """
    value = os.getenv(key)
    if not value:
        print(f"Set {key} in your environment or hoursviz.env.")
        sys.exit(1)
    return value

def get_number_env_var(key: str, default: Optional[float], cast=float) -> Optional[float]:
    """Get an optional numeric environment variable.

    Args:
        key: Environment variable name
        default: Value used when the variable is unset
        cast: Conversion function (float or int)

    Raises:
        SystemExit: If the variable is set but not a number
    """
    value = os.getenv(key)
    if not value:
        return default
    try:
        return cast(value)
    except ValueError:
        print(f"{key} must be a number, got '{value}'.")
        sys.exit(1)

# --- CLI Logic ---
def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Fetch employee time entries and render an HTML report and a pie chart.",
        epilog="""
Examples:
    # Write the report and chart to the current directory, then ask to open them
  hoursviz
    ---
    # Flag employees under 120 hours and write everything to ./out without prompting
  hoursviz --threshold 120 --out-dir out --no-open
    ---
    # Also export the summary as CSV and append it to a markdown log
  hoursviz --csv hours.csv --md hours.md

The endpoint is read from HOURSVIZ_API_URL (environment or hoursviz.env).
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        prog="hoursviz"
    )
    parser.add_argument('--out-dir', default='.', help='Directory for the HTML report and chart (default: current directory)')
    parser.add_argument('--html-name', default=DEFAULT_HTML_NAME, help=f'HTML report file name (default: {DEFAULT_HTML_NAME})')
    parser.add_argument('--chart-name', default=DEFAULT_CHART_NAME, help=f'Pie chart file name (default: {DEFAULT_CHART_NAME})')
    parser.add_argument('--width', type=int, default=1000, help='Chart width in pixels (default: 1000)')
    parser.add_argument('--height', type=int, default=700, help='Chart height in pixels (default: 700)')
    parser.add_argument('--threshold', type=float, default=100.0, help='Highlight employees with fewer hours than this (default: 100)')
    parser.add_argument('--timeout', type=float, help='API request timeout in seconds (default: HOURSVIZ_TIMEOUT or 30)')
    parser.add_argument('--csv', help='Export the employee summary to the given CSV file')
    parser.add_argument('--md', help='Export the employee summary as markdown to the given file path')
    parser.add_argument('--overwrite', action='store_true', help='Explicitly overwrite the markdown file if it exists (DANGEROUS)')
    parser.add_argument('--no-open', action='store_true', help='Do not ask to open the generated files')
    args = parser.parse_args(argv)
    if args.width < 1 or args.height < 1:
        parser.error("--width and --height must be positive")
    return args

def prompt_yes_no(prompt: str) -> bool:
    """Ask a yes/no question; anything starting with 'y' counts as yes.

    Args:
        prompt: Question to print

    Returns:
        True if the user answered yes
    """
    try:
        answer = input(f"{prompt} (y/n): ").strip().lower()
    except EOFError:
        return False
    return answer.startswith("y")

def summary_rows(summaries: List[EmployeeSummary]) -> List[List[str]]:
    """Build table rows (name, hours, share of total) for console and export output."""
    grand_total = total_hours(summaries)
    return [
        [s.employee_name, format_hours(s.total_hours), percent(s.total_hours, grand_total)]
        for s in summaries
    ]

def print_top_employees(summaries: List[EmployeeSummary], threshold: float, limit: int = TOP_N) -> None:
    """Print the top employees by hours, flagging those below the threshold.

    Args:
        summaries: Sorted employee summaries
        threshold: Low-hours threshold
        limit: Number of employees to show
    """
    rows = []
    for row, summary in zip(summary_rows(summaries)[:limit], summaries):
        flag = f"< {threshold:g} hours" if summary.total_hours < threshold else ""
        rows.append(row + [flag])
    print(f"\n### Top {min(limit, len(summaries))} Employees by Total Hours:")
    print(tabulate(rows, headers=SUMMARY_HEADERS + [""], tablefmt="github", disable_numparse=True))
    print()

def open_output(label: str, path: Optional[Path]) -> None:
    """Offer to open a generated file with the default application.

    Args:
        label: Name shown in the prompt
        path: File written in this run, or None if writing it failed
    """
    if path is None or not path.exists():
        return
    if not prompt_yes_no(f"Would you like to open the {label}?"):
        return
    try:
        if open_with_default_app(path):
            print(f"[INFO] Opened {label}: {path}")
        else:
            print(f"[ERROR] No application available to open {path}")
    except Exception as e:
        print(f"[ERROR] Could not open {label}: {e}")

def report_interface(client: TimeEntriesClient, out_dir: str = ".", html_name: str = DEFAULT_HTML_NAME,
                     chart_name: str = DEFAULT_CHART_NAME, width: int = 1000, height: int = 700,
                     options: Optional[TableOptions] = None, csv_path: Optional[str] = None,
                     md_path: Optional[str] = None, overwrite: bool = False, open_files: bool = True) -> int:
    """Fetch, summarize and render the employee time report.

    Args:
        client: Configured API client
        out_dir: Directory for the HTML report and chart
        html_name: HTML report file name
        chart_name: Pie chart file name
        width: Chart width in pixels
        height: Chart height in pixels
        options: HTML report options
        csv_path: Path to export the summary as CSV (optional)
        md_path: Path to export the summary as markdown (optional)
        overwrite: Whether to overwrite an existing markdown file
        open_files: Whether to offer opening the generated files

    Returns:
        Process exit code
    """
    options = options or TableOptions()

    print(f"🌐 Fetching employee time data from {client.redacted_url}")
    try:
        records = client.get_time_entries()
    except FetchError as e:
        print(f"[ERROR] Could not fetch time entries: {e}")
        if e.__cause__ is not None:
            print(f"[ERROR] Cause: {redact_url(str(e.__cause__))}")
        return EXIT_FETCH_FAILED

    if not records:
        print("\n⚠️  No time entries found.")
        return EXIT_OK

    print(f"📊 Found {len(records)} time entries")

    summaries = summarize(records)
    print(f"👥 Processed data for {len(summaries)} employees")
    print_top_employees(summaries, options.low_hours_threshold)

    out = Path(out_dir)
    html_path = out / html_name
    chart_path = out / chart_name
    exit_code = EXIT_OK

    try:
        out.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"[ERROR] Could not create output directory '{out}': {e}")
        return EXIT_RENDER_FAILED

    print("📝 Generating HTML table...")
    html_renderer = HtmlTableRenderer(options)
    try:
        html_path = html_renderer.save(html_renderer.render(summaries), html_path)
        print(f"[SUCCESS] HTML report written to '{html_path}'")
    except RenderError as e:
        print(f"[ERROR] {e}")
        html_path = None
        exit_code = EXIT_RENDER_FAILED

    print("🥧 Generating pie chart...")
    chart_renderer = PieChartRenderer()
    try:
        with chart_renderer.render(summaries, width, height) as image:
            chart_path = chart_renderer.save(image, chart_path)
        print(f"[SUCCESS] Pie chart written to '{chart_path}'")
    except (RenderError, ValueError) as e:
        print(f"[ERROR] {e}")
        chart_path = None
        exit_code = EXIT_RENDER_FAILED

    if csv_path:
        try:
            write_csv(csv_path, SUMMARY_HEADERS, summary_rows(summaries))
            print(f"[SUCCESS] CSV summary written to '{csv_path}'")
        except RenderError as e:
            print(f"[ERROR] {e}")
            exit_code = EXIT_RENDER_FAILED

    if md_path:
        table = tabulate(summary_rows(summaries), headers=SUMMARY_HEADERS, tablefmt="github", disable_numparse=True)
        try:
            write_markdown(md_path, f"\n{table}\n", options.report_title, overwrite)
            print(f"[SUCCESS] Markdown output written to '{md_path}'")
        except RenderError as e:
            print(f"[ERROR] {e}")
            exit_code = EXIT_RENDER_FAILED

    print("\nOutput Files:")
    print(f"- HTML Report: {html_path or 'not written'}")
    print(f"- Pie Chart: {chart_path or 'not written'}")
    print()

    if open_files:
        open_output("HTML report", html_path)
        open_output("pie chart", chart_path)

    return exit_code

def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    # Load environment variables
    load_environment()

    # Parse command line arguments
    args = parse_args(argv)

    timeout = args.timeout if args.timeout is not None else get_number_env_var("HOURSVIZ_TIMEOUT", 30.0)
    client = TimeEntriesClient(
        get_env_var("HOURSVIZ_API_URL"),
        timeout=timeout,
        max_response_bytes=get_number_env_var("HOURSVIZ_MAX_RESPONSE_BYTES", None, cast=int),
    )

    print("Employee Time Visualizer")
    print("========================")
    sys.exit(report_interface(
        client, args.out_dir, args.html_name, args.chart_name, args.width, args.height,
        TableOptions(low_hours_threshold=args.threshold), args.csv, args.md,
        args.overwrite, not args.no_open
    ))

if __name__ == "__main__":
    main()
