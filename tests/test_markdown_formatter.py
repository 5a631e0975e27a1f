"""
Markdown 格式化器测试
"""

import unittest

from php_trace_tool.formatters import MarkdownFormatter, format_markdown_path
from php_trace_tool.models import CallRecord, TraceDocument, TraceMeta

from trace_fixtures import markers_at


def call(function, file='/app/src/a.php', line=1, duration_ms=None, children=()):
    return CallRecord(function=function, file=file, line=line, start_time=0.0,
                      duration_ms=duration_ms, children=tuple(children))


def document(forest, total_time_ms=200.0, function_count=1):
    meta = TraceMeta(
        total_time_ms=total_time_ms,
        function_count=function_count,
        timestamp='2024-01-01T10:00:00+00:00',
        php_version='8.2.0',
    )
    return TraceDocument(meta=meta, forest=tuple(forest))


class TestMarkdownFormatter(unittest.TestCase):
    def setUp(self):
        self.formatter = MarkdownFormatter(exists=lambda path: False)

    def test_tags(self):
        self.assertEqual(self.formatter.extension_tag(), 'md')
        self.assertEqual(self.formatter.format_tag, 'narrative')

    def test_full_layout(self):
        doc = document([
            call('main', '/app/index.php', 3, 200.0, [
                call('slowFunction', '/app/src/Slow.php', 12, 150.0),
                call('fastFunction', '/app/src/Fast.php', 20, 1.5),
            ]),
        ], total_time_ms=200.0, function_count=3)

        result = self.formatter.render(doc)

        self.assertEqual(result, "\n".join([
            "# PHP Execution Trace",
            "",
            "**Duration**: 200.00ms",
            "**Functions**: 3",
            "**PHP Version**: 8.2.0",
            "**Timestamp**: 2024-01-01T10:00:00+00:00",
            "",
            "## Summary",
            "",
            "⚠️ **Slowest function**: `main` (200.00ms) at index.php:3",
            "",
            "## Call Tree",
            "",
            "- **main** (200.00ms) ⚠️ *SLOW* `index.php:3`",
            "  - **slowFunction** (150.00ms) ⚠️ *SLOW* `Slow.php:12`",
            "  - **fastFunction** (1.50ms) `Fast.php:20`",
        ]))

    def test_empty_document_has_no_summary(self):
        result = self.formatter.render(document([], total_time_ms=0, function_count=0))

        self.assertIn("# PHP Execution Trace", result)
        self.assertIn("**Duration**: 0.00ms", result)
        self.assertIn("**Functions**: 0", result)
        self.assertIn("**PHP Version**: 8.2.0", result)
        self.assertIn("**Timestamp**:", result)
        self.assertNotIn("## Summary", result)
        self.assertTrue(result.endswith("## Call Tree\n"))

    def test_null_duration_renders_as_zero_and_is_not_slow(self):
        result = self.formatter.render(document([call('open', line=4)]))

        self.assertIn("- **open** (0.00ms) `a.php:4`", result)
        self.assertNotIn("SLOW", result)
        self.assertNotIn("## Summary", result)

    def test_slow_threshold_is_inclusive(self):
        result = self.formatter.render(document([
            call('edge', duration_ms=100.0),
            call('below', duration_ms=99.99),
        ]))

        self.assertIn("- **edge** (100.00ms) ⚠️ *SLOW*", result)
        self.assertIn("- **below** (99.99ms) `a.php:1`", result)

    def test_indentation_two_spaces_per_level(self):
        doc = document([call('l0', duration_ms=1.0, children=[
            call('l1', duration_ms=1.0, children=[call('l2', duration_ms=1.0)]),
        ])])

        lines = self.formatter.render(doc).split("\n")

        self.assertIn("- **l0** (1.00ms) `a.php:1`", lines)
        self.assertIn("  - **l1** (1.00ms) `a.php:1`", lines)
        self.assertIn("    - **l2** (1.00ms) `a.php:1`", lines)

    def test_nested_slowest_in_summary(self):
        doc = document([call('root', duration_ms=10.0, children=[
            call('deepFunction', '/app/src/Deep.php', 8, 200.0),
        ])])

        result = self.formatter.render(doc)

        self.assertIn("**Slowest function**: `deepFunction` (200.00ms) at Deep.php:8", result)

    def test_paths_under_root_keep_relative_directories(self):
        """根目录下显示 src/x.php 而不是 x.php，根目录外只显示文件名"""
        formatter = MarkdownFormatter(exists=markers_at('/repo/src'))
        doc = document([call('main', '/repo/src/x.php', 1, 5.0, [
            call('outside', '/usr/share/php/y.php', 2, 1.0),
        ])])

        result = formatter.render(doc)

        self.assertIn("`src/x.php:1`", result)
        self.assertIn("`y.php:2`", result)

    def test_basename_without_project_root(self):
        result = self.formatter.render(document([call('main', '/random/unmarked/x.php', 9, 1.0)]))

        self.assertIn("`x.php:9`", result)
        self.assertNotIn("/random/unmarked", result)

    def test_render_is_deterministic(self):
        doc = document([call('main', duration_ms=120.0, children=[call('a', duration_ms=1.0)])])

        self.assertEqual(self.formatter.render(doc), self.formatter.render(doc))


class TestFormatMarkdownPath(unittest.TestCase):
    def test_fallbacks(self):
        self.assertEqual(format_markdown_path('/repo/src/x.php', '/repo'), 'src/x.php')
        self.assertEqual(format_markdown_path('/elsewhere/x.php', '/repo'), 'x.php')
        self.assertEqual(format_markdown_path('/random/unmarked/x.php', None), 'x.php')
        self.assertEqual(format_markdown_path('', None), '')


if __name__ == '__main__':
    unittest.main()
