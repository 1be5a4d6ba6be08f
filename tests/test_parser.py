"""Tests for logscope/parser.py"""

import unittest
from datetime import datetime, timezone

from logscope.parser import classify_line, parse_log_file

MIXED = "\n".join([
    "2024-01-15 10:30:45.123 INFO Application started successfully",
    "",
    '{"level":"warn","time":"2024-01-15T10:31:00Z","service":"api","msg":"slow query"}',
    "Jan 15 10:31:04 server myapp[1234]: Syslog format example message",
    "   ",
    '127.0.0.1 - - [15/Jan/2024:10:32:00 +0000] "GET /health HTTP/1.1" 200 12',
    "[10:33:00] cache warmed",
    "2023-12-01T10:30:45.123Z [ERROR] Payment failed {\"orderId\": 42}",
    "Unhandled exception {\"level\":\"error\",\"module\":\"auth\"}",
])


class TestScenarios(unittest.TestCase):
    def test_standard_format(self):
        result = parse_log_file("2024-01-15 10:30:45.123 INFO Application started successfully", "app.log")
        (record,) = result.entries
        self.assertEqual(record.level, "INFO")
        self.assertEqual(record.message, "Application started successfully")
        self.assertEqual(record.timestamp, datetime(2024, 1, 15, 10, 30, 45, 123000))
        self.assertEqual(result.detected_format, "Standard format")
        self.assertEqual(result.filename, "app.log")

    def test_json_line(self):
        line = ('{"level":"info","@timestamp":"2025-09-14T00:08:52.839Z","module":"odyssey-frontend",'
                '"feature":"app-component","message":"App is launching"}')
        result = parse_log_file(line, "app.json")
        (record,) = result.entries
        self.assertEqual(record.level, "INFO")
        self.assertEqual(record.timestamp, datetime(2025, 9, 14, 0, 8, 52, 839000, tzinfo=timezone.utc))
        self.assertEqual(record.message, "odyssey-frontend • app-component — App is launching")
        self.assertEqual(len(record.metadata), 5)
        self.assertEqual(result.detected_format, "JSON format")

    def test_syslog_line(self):
        result = parse_log_file("Jan 15 10:31:04 server myapp[1234]: Syslog format example message", "syslog")
        (record,) = result.entries
        self.assertEqual(record.source, "server")
        self.assertEqual(record.thread, "myapp[1234]")
        self.assertEqual(record.message, "Syslog format example message")
        self.assertEqual(record.timestamp.year, datetime.now().year)
        self.assertEqual(result.detected_format, "Syslog format")

    def test_whitespace_only(self):
        result = parse_log_file("   \t ", "blank.log")
        self.assertEqual(result.entries, ())
        self.assertEqual(result.total_lines, 1)
        self.assertEqual(result.detected_format, "Unknown")

    def test_embedded_json_backfill(self):
        result = parse_log_file('Unhandled exception {"level":"error","module":"auth"}', "app.log")
        (record,) = result.entries
        self.assertEqual(record.level, "ERROR")
        self.assertEqual(record.metadata, {"level": "error", "module": "auth"})
        self.assertEqual(record.message, "auth")
        self.assertEqual(result.detected_format, "Plain text")

    def test_heuristic_level(self):
        (record,) = parse_log_file("order processed warn retrying", "app.log").entries
        self.assertEqual(record.level, "WARN")
        self.assertEqual(record.message, "order processed warn retrying")


class TestLineAccounting(unittest.TestCase):
    def test_blank_lines_counted_not_recorded(self):
        result = parse_log_file("a\n\n  \nb", "x.log")
        self.assertEqual(result.total_lines, 4)
        self.assertEqual([r.line_number for r in result.entries], [1, 4])
        self.assertEqual([r.id for r in result.entries], ["line-1", "line-4"])

    def test_records_plus_blanks_equal_total(self):
        result = parse_log_file(MIXED, "mixed.log")
        blanks = sum(1 for line in MIXED.split("\n") if not line.strip())
        self.assertEqual(len(result.entries) + blanks, result.total_lines)

    def test_line_numbers_strictly_increasing(self):
        numbers = [r.line_number for r in parse_log_file(MIXED, "mixed.log").entries]
        self.assertEqual(numbers, sorted(set(numbers)))

    def test_trailing_newline_is_a_line(self):
        result = parse_log_file("only line\n", "x.log")
        self.assertEqual(result.total_lines, 2)
        self.assertEqual(len(result.entries), 1)

    def test_raw_line_is_trimmed(self):
        (record,) = parse_log_file("  plain text here \r", "x.log").entries
        self.assertEqual(record.raw_line, "plain text here")

    def test_empty_content(self):
        result = parse_log_file("", "empty.log")
        self.assertEqual(result.total_lines, 1)
        self.assertEqual(result.entries, ())


class TestClassification(unittest.TestCase):
    def test_each_shape_in_mixed_file(self):
        entries = parse_log_file(MIXED, "mixed.log").entries
        self.assertEqual(entries[1].source, "api")
        self.assertEqual(entries[1].level, "WARN")
        self.assertEqual(entries[3].source, "127.0.0.1")
        self.assertEqual(entries[3].level, "200")
        self.assertEqual(entries[3].message, "GET /health HTTP/1.1")
        self.assertEqual(entries[4].message, "cache warmed")

    def test_format_names(self):
        expected = [
            "Standard format", "JSON format", "Syslog format",
            "Apache access", "Simple timestamp", "ISO with level", "Plain text",
        ]
        lines = [line.strip() for line in MIXED.split("\n") if line.strip()]
        names = [classify_line(line, i + 1)[1] for i, line in enumerate(lines)]
        self.assertEqual(names, expected)

    def test_captured_level_beats_heuristic(self):
        (record,) = parse_log_file("2024-01-15 10:30:45 INFO disk error detected", "x.log").entries
        self.assertEqual(record.level, "INFO")

    def test_embedded_json_keeps_captured_level(self):
        entries = parse_log_file(MIXED, "mixed.log").entries
        iso = entries[5]
        self.assertEqual(iso.level, "ERROR")
        self.assertEqual(iso.metadata, {"orderId": 42})
        self.assertEqual(iso.message, "Payment failed")

    def test_json_level_outside_vocabulary_not_guessed(self):
        (record,) = parse_log_file('{"level":"warning","message":"an error happened"}', "x.log").entries
        self.assertIsNone(record.level)

    def test_malformed_json_falls_back_to_plain_text(self):
        result = parse_log_file('{"level": "info", broken', "x.log")
        (record,) = result.entries
        self.assertEqual(record.message, '{"level": "info", broken')
        self.assertEqual(record.level, "INFO")
        self.assertIsNone(record.metadata)
        self.assertEqual(result.detected_format, "Plain text")

    def test_non_ascii_digits_are_plain_text(self):
        result = parse_log_file("\u0662\u0660\u0662\u0664-\u0660\u0661-\u0661\u0665 \u0661\u0660:\u0663\u0660:\u0664\u0665 INFO hello", "x.log")
        (record,) = result.entries
        self.assertEqual(result.detected_format, "Plain text")
        self.assertIsNone(record.timestamp)
        self.assertEqual(record.level, "INFO")

    def test_apache_timestamp(self):
        (record,) = parse_log_file(
            '10.0.0.1 - - [01/Jan/2026:00:00:00 +0000] "GET / HTTP/1.1" 404 100', "access.log"
        ).entries
        self.assertEqual(record.timestamp, datetime(2026, 1, 1, tzinfo=timezone.utc))
        self.assertEqual(record.level, "404")


class TestDetectedFormat(unittest.TestCase):
    def test_last_classified_line_wins(self):
        content = '2024-01-15 10:30:45 INFO x\n{"level":"info","message":"y"}\nplain words'
        self.assertEqual(parse_log_file(content, "x.log").detected_format, "Plain text")

    def test_trailing_blank_lines_do_not_reset(self):
        content = 'plain words\n{"level":"info","message":"y"}\n\n'
        self.assertEqual(parse_log_file(content, "x.log").detected_format, "JSON format")


class TestIdempotence(unittest.TestCase):
    def test_reparse_raw_line(self):
        for record in parse_log_file(MIXED, "mixed.log").entries:
            (again,) = parse_log_file(record.raw_line, "one.log").entries
            self.assertEqual(again.level, record.level)
            self.assertEqual(again.timestamp, record.timestamp)
            self.assertEqual(again.message, record.message)
            self.assertEqual(again.metadata, record.metadata)


class TestImmutability(unittest.TestCase):
    def test_records_are_frozen(self):
        (record,) = parse_log_file("plain", "x.log").entries
        with self.assertRaises(AttributeError):
            record.raw_line = "changed"


if __name__ == "__main__":
    unittest.main()
