"""End-to-end tests for the command line entry point."""
import os
import unittest
import tempfile
import shutil
from datetime import timedelta
from pathlib import Path
from unittest import mock
from zoneinfo import ZoneInfo

from bills.main import main, run
from bills.ledger.parser import today_in
from bills.utils.logger import configure_logging


class TestRun(unittest.TestCase):
    """Test run() exit status and report output."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())
        # Keep the loggers' handlers in place so assertLogs can capture them
        patcher = mock.patch("bills.main.configure_logging")
        patcher.start()
        self.addCleanup(patcher.stop)
        settings_patcher = mock.patch("bills.config.settings._settings", None)
        settings_patcher.start()
        self.addCleanup(settings_patcher.stop)

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def _write_ledger(self, text: str) -> str:
        ledger = self.test_dir / "costs.csv"
        ledger.write_text(text, encoding="utf-8")
        return str(ledger)

    def _report(self, argv):
        with self.assertLogs("bills.report", level="INFO") as captured:
            status = run(argv)
        return status, [record.getMessage() for record in captured.records]

    def test_scenario_all_records_included(self):
        ledger = self._write_ledger(
            "2024-01-05,Store A,10.00,lunch\n"
            "2024-01-20,Store B,5.00,coffee\n"
            "2024-02-01,Store A,7.00,dinner\n"
        )

        status, lines = self._report(["--csv", ledger, "--all"])

        self.assertEqual(status, 0)
        self.assertIn("Total: 22.00", lines)
        grouped = lines.index("Grouped costs:")
        self.assertEqual(lines[grouped + 1:grouped + 3], ["Store A: 17.00", "Store B: 5.00"])
        monthly = lines.index("Monthly costs:")
        self.assertEqual(lines[monthly + 1:monthly + 3], ["2024-01: 15.00", "2024-02: 7.00"])

    def test_scenario_large_window_includes_all(self):
        ledger = self._write_ledger(
            "2024-01-05,Store A,10.00,lunch\n"
            "2024-01-20,Store B,5.00,coffee\n"
            "2024-02-01,Store A,7.00,dinner\n"
        )

        status, lines = self._report(["--csv", ledger, "--days-back", "100000"])

        self.assertEqual(status, 0)
        self.assertIn("Total: 22.00", lines)

    def test_scenario_bad_amount_aborts(self):
        ledger = self._write_ledger(
            "2024-01-04,Store B,1.00,tea\n"
            "2024-01-05,Store A,ten,lunch\n"
        )

        with mock.patch("bills.main.ReportRenderer") as renderer:
            with self.assertLogs("bills", level="ERROR") as captured:
                status = run(["--csv", ledger, "--all"])

        self.assertEqual(status, 1)
        self.assertIn("ten", captured.output[0])
        renderer.assert_not_called()

    def test_scenario_old_record_excluded(self):
        today = today_in(ZoneInfo("UTC"))
        recent = (today - timedelta(days=1)).isoformat()
        old = (today - timedelta(days=100)).isoformat()
        ledger = self._write_ledger(
            f"{recent},Store A,10.00,lunch\n"
            f"{old},Store Old,99.00,ancient\n"
            f"{recent},Store B,5.00,coffee\n"
        )

        status, lines = self._report(
            ["--csv", ledger, "--location", "UTC", "--days-back", "30"]
        )

        self.assertEqual(status, 0)
        self.assertIn("Total: 15.00", lines)
        self.assertFalse(any("Store Old" in line for line in lines))

    def test_out_of_range_amount_aborts(self):
        ledger = self._write_ledger("2024-01-05,Store A,1e1000000,lunch\n")

        with mock.patch("bills.main.ReportRenderer") as renderer:
            with self.assertLogs("bills", level="ERROR") as captured:
                status = run(["--csv", ledger, "--all"])

        self.assertEqual(status, 1)
        self.assertIn("1e1000000", captured.output[0])
        renderer.assert_not_called()

    def test_invalid_utf8_aborts(self):
        ledger = self.test_dir / "costs.csv"
        ledger.write_bytes(b"2024-01-05,Store \xff,1.00,x\n")

        with self.assertLogs("bills", level="ERROR") as captured:
            status = run(["--csv", str(ledger), "--all"])

        self.assertEqual(status, 1)
        self.assertIn("Unable to read: ", captured.output[0])

    def test_all_defaults_to_costs_csv_in_working_directory(self):
        self._write_ledger("2024-01-05,Store A,10.00,lunch\n")
        previous = os.getcwd()
        os.chdir(self.test_dir)
        self.addCleanup(os.chdir, previous)

        status, lines = self._report(["--all"])

        self.assertEqual(status, 0)
        self.assertIn("Total: 10.00", lines)

    def test_unknown_log_level_in_config(self):
        ledger = self._write_ledger("2024-01-05,Store A,10.00,lunch\n")
        config_file = self.test_dir / "config.yaml"
        config_file.write_text("logging:\n  level: VERBOSE\n", encoding="utf-8")

        with self.assertLogs("bills", level="ERROR") as captured:
            status = run(["--csv", ledger, "--config", str(config_file)])

        self.assertEqual(status, 1)
        self.assertIn("VERBOSE", captured.output[0])

    def test_unwritable_log_file_in_config(self):
        ledger = self._write_ledger("2024-01-05,Store A,10.00,lunch\n")
        blocker = self.test_dir / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        config_file = self.test_dir / "config.yaml"
        config_file.write_text(f"logging:\n  file: {blocker / 'report.log'}\n", encoding="utf-8")

        self.addCleanup(configure_logging)
        with mock.patch("bills.main.configure_logging", side_effect=configure_logging):
            with mock.patch("bills.main.logger") as main_logger:
                status = run(["--csv", ledger, "--config", str(config_file)])

        self.assertEqual(status, 1)
        main_logger.error.assert_called_once()
        self.assertIn("log file", main_logger.error.call_args[0][0])

    def test_missing_file(self):
        with self.assertLogs("bills", level="ERROR") as captured:
            status = run(["--csv", str(self.test_dir / "missing.csv")])

        self.assertEqual(status, 1)
        self.assertIn("missing.csv", captured.output[0])

    def test_missing_csv_argument(self):
        with mock.patch("sys.stderr"):
            with self.assertLogs("bills", level="ERROR") as captured:
                status = run([])

        self.assertEqual(status, 1)
        self.assertIn("csv_path", captured.output[0])

    def test_non_positive_days_back(self):
        ledger = self._write_ledger("2024-01-05,Store A,10.00,lunch\n")

        with mock.patch("sys.stderr"):
            with self.assertLogs("bills", level="ERROR") as captured:
                status = run(["--csv", ledger, "--days-back", "0"])

        self.assertEqual(status, 1)
        self.assertIn("days_back", captured.output[0])

    def test_invalid_location(self):
        ledger = self._write_ledger("2024-01-05,Store A,10.00,lunch\n")

        with mock.patch("sys.stderr"):
            with self.assertLogs("bills", level="ERROR"):
                status = run(["--csv", ledger, "--location", "Nowhere/Special"])

        self.assertEqual(status, 1)

    def test_non_integer_days_back_exits(self):
        with mock.patch("sys.stderr"):
            with self.assertRaises(SystemExit) as ctx:
                run(["--csv", "costs.csv", "--days-back", "soon"])

        self.assertEqual(ctx.exception.code, 1)

    def test_missing_config_file(self):
        ledger = self._write_ledger("2024-01-05,Store A,10.00,lunch\n")

        with self.assertLogs("bills", level="ERROR") as captured:
            status = run(["--csv", ledger, "--config", str(self.test_dir / "nope.yaml")])

        self.assertEqual(status, 1)
        self.assertIn("nope.yaml", captured.output[0])


class TestMain(unittest.TestCase):
    """Test the process entry point."""

    def test_exit_status_from_run(self):
        with mock.patch("bills.main.run", return_value=0):
            with self.assertRaises(SystemExit) as ctx:
                main()
        self.assertEqual(ctx.exception.code, 0)

    def test_unexpected_error_logged_and_exits(self):
        with mock.patch("bills.main.run", side_effect=RuntimeError("boom")):
            with self.assertLogs("bills", level="CRITICAL") as captured:
                with self.assertRaises(SystemExit) as ctx:
                    main()

        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("Fatal error: boom", captured.output[0])


if __name__ == "__main__":
    unittest.main()
