import sys
import os
import csv
import tempfile
import unittest
from unittest.mock import patch, MagicMock
from datetime import datetime, timedelta, timezone
from io import StringIO
from pathlib import Path

import requests

# Add the parent directory to sys.path to import the hoursviz package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from hoursviz.__main__ import (
    report_interface, main, parse_args, summary_rows,
    EXIT_OK, EXIT_FETCH_FAILED, EXIT_RENDER_FAILED,
)
from hoursviz.api.client import TimeEntriesClient
from hoursviz.errors import FetchError, RenderError
from hoursviz.reports.aggregator import EmployeeSummary
from hoursviz.reports.html_table import TableOptions
from hoursviz.reports.time_record import TimeRecord

T = datetime(2023, 1, 2, 9, 0, tzinfo=timezone.utc)


class TestReportInterface(unittest.TestCase):
    """Test the complete fetch, summarize and render flow."""

    def setUp(self):
        """Set up test fixtures."""
        self.records = [
            TimeRecord("1", "Ann", T, T + timedelta(hours=120)),
            TimeRecord("2", "Bob", T, T + timedelta(hours=30)),
            TimeRecord("3", "Bob", T, T + timedelta(hours=20)),
            TimeRecord("4", None, T, T + timedelta(hours=8)),
            TimeRecord("5", "Cid", T, T + timedelta(hours=8), deleted_at=T),
        ]
        self.client = MagicMock(spec=TimeEntriesClient)
        self.client.redacted_url = "https://example.test/api?code=***"
        self.client.get_time_entries.return_value = self.records

        self.tmp = tempfile.TemporaryDirectory()
        self.out_dir = Path(self.tmp.name)

    def tearDown(self):
        """Tear down test fixtures."""
        self.tmp.cleanup()

    @patch('builtins.input', return_value='n')
    @patch('sys.stdout', new_callable=StringIO)
    def test_writes_report_and_chart(self, mock_stdout, mock_input):
        code = report_interface(self.client, str(self.out_dir))

        self.assertEqual(code, EXIT_OK)
        html = (self.out_dir / "employee_time_report.html").read_text(encoding="utf-8")
        self.assertIn("<td>Ann</td>", html)
        self.assertIn('<tr class="low-hours"><td>Bob</td><td class="hours">50.00</td>', html)
        self.assertNotIn("Cid", html)
        self.assertTrue((self.out_dir / "employee_time_piechart.png").exists())

        output = mock_stdout.getvalue()
        self.assertIn("Found 5 time entries", output)
        self.assertIn("Processed data for 2 employees", output)
        self.assertIn("< 100 hours", output)
        self.assertIn("Output Files:", output)
        self.assertEqual(mock_input.call_count, 2)

    @patch('hoursviz.__main__.open_with_default_app', return_value=True)
    @patch('builtins.input', side_effect=['y', 'no'])
    @patch('sys.stdout', new_callable=StringIO)
    def test_prompts_open_html_only(self, mock_stdout, mock_input, mock_open):
        report_interface(self.client, str(self.out_dir))

        mock_open.assert_called_once()
        self.assertEqual(mock_open.call_args[0][0].name, "employee_time_report.html")
        self.assertIn("Opened HTML report", mock_stdout.getvalue())

    @patch('hoursviz.__main__.open_with_default_app', side_effect=OSError("no display"))
    @patch('builtins.input', return_value='yes')
    @patch('sys.stdout', new_callable=StringIO)
    def test_open_failure_reported(self, mock_stdout, mock_input, mock_open):
        code = report_interface(self.client, str(self.out_dir))
        self.assertEqual(code, EXIT_OK)
        self.assertIn("[ERROR] Could not open pie chart: no display", mock_stdout.getvalue())

    @patch('builtins.input')
    @patch('sys.stdout', new_callable=StringIO)
    def test_no_open_skips_prompts(self, mock_stdout, mock_input):
        report_interface(self.client, str(self.out_dir), open_files=False)
        mock_input.assert_not_called()

    @patch('builtins.input')
    @patch('sys.stdout', new_callable=StringIO)
    def test_fetch_error_stops_gracefully(self, mock_stdout, mock_input):
        try:
            raise FetchError("API request timed out") from TimeoutError("read timed out")
        except FetchError as e:
            self.client.get_time_entries.side_effect = e

        code = report_interface(self.client, str(self.out_dir))

        self.assertEqual(code, EXIT_FETCH_FAILED)
        output = mock_stdout.getvalue()
        self.assertIn("[ERROR] Could not fetch time entries: API request timed out", output)
        self.assertIn("read timed out", output)
        self.assertFalse((self.out_dir / "employee_time_report.html").exists())
        mock_input.assert_not_called()

    @patch('builtins.input')
    @patch('sys.stdout', new_callable=StringIO)
    def test_no_entries(self, mock_stdout, mock_input):
        self.client.get_time_entries.return_value = []
        code = report_interface(self.client, str(self.out_dir))
        self.assertEqual(code, EXIT_OK)
        self.assertIn("No time entries found", mock_stdout.getvalue())
        self.assertEqual(list(self.out_dir.iterdir()), [])

    @patch('builtins.input', return_value='n')
    @patch('sys.stdout', new_callable=StringIO)
    def test_all_filtered_renders_placeholder(self, mock_stdout, mock_input):
        self.client.get_time_entries.return_value = [
            TimeRecord("1", "", T, T + timedelta(hours=1)),
            TimeRecord("2", "Cid", T, T + timedelta(hours=1), deleted_at=T),
        ]
        code = report_interface(self.client, str(self.out_dir))
        self.assertEqual(code, EXIT_OK)
        self.assertIn("Processed data for 0 employees", mock_stdout.getvalue())
        self.assertTrue((self.out_dir / "employee_time_piechart.png").exists())

    @patch('hoursviz.reports.pie_chart.PieChartRenderer.save')
    @patch('builtins.input', return_value='n')
    @patch('sys.stdout', new_callable=StringIO)
    def test_chart_failure_keeps_html(self, mock_stdout, mock_input, mock_save):
        from hoursviz.errors import RenderError
        mock_save.side_effect = RenderError("Failed to save chart to 'x.png': disk full")

        code = report_interface(self.client, str(self.out_dir))

        self.assertEqual(code, EXIT_RENDER_FAILED)
        self.assertIn("[ERROR] Failed to save chart", mock_stdout.getvalue())
        self.assertTrue((self.out_dir / "employee_time_report.html").exists())

    @patch('hoursviz.api.client.requests.get')
    @patch('builtins.input')
    @patch('sys.stdout', new_callable=StringIO)
    def test_fetch_error_hides_access_token(self, mock_stdout, mock_input, mock_get):
        url = "https://example.azurewebsites.net/api/gettimeentries?code=s3cret=="
        resp = MagicMock()
        resp.raise_for_status.side_effect = requests.HTTPError(
            f"401 Client Error: Unauthorized for url: {url}"
        )
        mock_get.return_value = resp

        code = report_interface(TimeEntriesClient(url), str(self.out_dir))

        self.assertEqual(code, EXIT_FETCH_FAILED)
        output = mock_stdout.getvalue()
        self.assertIn("401 Client Error", output)
        self.assertIn("[ERROR] Cause:", output)
        self.assertNotIn("s3cret", output)

    @patch('hoursviz.__main__.open_with_default_app', return_value=True)
    @patch('hoursviz.reports.html_table.HtmlTableRenderer.save')
    @patch('builtins.input', return_value='y')
    @patch('sys.stdout', new_callable=StringIO)
    def test_failed_html_write_not_offered(self, mock_stdout, mock_input, mock_save, mock_open):
        stale = self.out_dir / "employee_time_report.html"
        stale.write_text("OLD REPORT", encoding="utf-8")
        mock_save.side_effect = RenderError("disk full")

        code = report_interface(self.client, str(self.out_dir))

        self.assertEqual(code, EXIT_RENDER_FAILED)
        output = mock_stdout.getvalue()
        self.assertIn("[ERROR] disk full", output)
        self.assertIn("- HTML Report: not written", output)
        self.assertEqual(stale.read_text(encoding="utf-8"), "OLD REPORT")
        self.assertEqual(mock_input.call_count, 1)
        mock_open.assert_called_once()
        self.assertEqual(mock_open.call_args[0][0].name, "employee_time_piechart.png")

    @patch('hoursviz.__main__.open_with_default_app', return_value=True)
    @patch('hoursviz.reports.pie_chart.PieChartRenderer.save')
    @patch('builtins.input', return_value='y')
    @patch('sys.stdout', new_callable=StringIO)
    def test_failed_chart_write_not_offered(self, mock_stdout, mock_input, mock_save, mock_open):
        (self.out_dir / "employee_time_piechart.png").write_bytes(b"old chart")
        mock_save.side_effect = RenderError("disk full")

        report_interface(self.client, str(self.out_dir))

        self.assertIn("- Pie Chart: not written", mock_stdout.getvalue())
        mock_open.assert_called_once()
        self.assertEqual(mock_open.call_args[0][0].name, "employee_time_report.html")

    @patch('builtins.input', return_value='n')
    @patch('sys.stdout', new_callable=StringIO)
    def test_custom_threshold(self, mock_stdout, mock_input):
        report_interface(self.client, str(self.out_dir), options=TableOptions(low_hours_threshold=40.0))
        html = (self.out_dir / "employee_time_report.html").read_text(encoding="utf-8")
        self.assertNotIn('class="low-hours"><td>', html)

    @patch('builtins.input', return_value='n')
    @patch('sys.stdout', new_callable=StringIO)
    def test_csv_export(self, mock_stdout, mock_input):
        csv_path = self.out_dir / "hours.csv"
        report_interface(self.client, str(self.out_dir), csv_path=str(csv_path))

        with open(csv_path, newline='', encoding='utf-8') as f:
            rows = list(csv.reader(f))
        self.assertEqual(rows[0], ["Employee", "Total Hours", "% of Total"])
        self.assertEqual(rows[1], ["Ann", "120.00", "70.6"])
        self.assertEqual(rows[2], ["Bob", "50.00", "29.4"])

    @patch('builtins.input', return_value='n')
    @patch('sys.stdout', new_callable=StringIO)
    def test_markdown_export_appends(self, mock_stdout, mock_input):
        md_path = self.out_dir / "hours.md"
        report_interface(self.client, str(self.out_dir), md_path=str(md_path))
        report_interface(self.client, str(self.out_dir), md_path=str(md_path))

        content = md_path.read_text(encoding="utf-8")
        self.assertTrue(content.startswith("# Employee Time Analysis Report"))
        self.assertEqual(content.count("| Ann"), 2)
        self.assertIn("Appending output", mock_stdout.getvalue())

        report_interface(self.client, str(self.out_dir), md_path=str(md_path), overwrite=True)
        self.assertEqual(md_path.read_text(encoding="utf-8").count("| Ann"), 1)


class TestCli(unittest.TestCase):
    """Test argument parsing and the main entry point."""

    def test_parse_args_defaults(self):
        args = parse_args([])
        self.assertEqual(args.out_dir, ".")
        self.assertEqual((args.width, args.height), (1000, 700))
        self.assertEqual(args.threshold, 100.0)
        self.assertIsNone(args.timeout)
        self.assertFalse(args.no_open)

    @patch('sys.stderr', new_callable=StringIO)
    def test_parse_args_rejects_bad_size(self, mock_stderr):
        with self.assertRaises(SystemExit):
            parse_args(['--width', '0'])

    def test_summary_rows(self):
        rows = summary_rows([EmployeeSummary("A", 3.0), EmployeeSummary("B", 1.0)])
        self.assertEqual(rows, [["A", "3.00", "75.0"], ["B", "1.00", "25.0"]])
        self.assertEqual(summary_rows([]), [])

    @patch('hoursviz.__main__.report_interface', return_value=EXIT_OK)
    @patch('hoursviz.__main__.load_environment')
    @patch.dict('os.environ', {
        'HOURSVIZ_API_URL': 'https://example.test/api?code=abc',
        'HOURSVIZ_TIMEOUT': '12.5',
        'HOURSVIZ_MAX_RESPONSE_BYTES': '1000',
    })
    @patch('sys.stdout', new_callable=StringIO)
    def test_main_reads_environment(self, mock_stdout, mock_load_env, mock_report):
        with self.assertRaises(SystemExit) as ctx:
            main(['--threshold', '80', '--no-open'])

        self.assertEqual(ctx.exception.code, EXIT_OK)
        client = mock_report.call_args[0][0]
        self.assertEqual(client.url, 'https://example.test/api?code=abc')
        self.assertEqual(client.timeout, 12.5)
        self.assertEqual(client.max_response_bytes, 1000)
        options = mock_report.call_args[0][6]
        self.assertEqual(options.low_hours_threshold, 80.0)
        self.assertFalse(mock_report.call_args[0][10])

    @patch('hoursviz.__main__.load_environment')
    @patch.dict('os.environ', {}, clear=True)
    @patch('sys.stdout', new_callable=StringIO)
    def test_main_requires_api_url(self, mock_stdout, mock_load_env):
        with self.assertRaises(SystemExit) as ctx:
            main([])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("HOURSVIZ_API_URL", mock_stdout.getvalue())


if __name__ == '__main__':
    unittest.main()
