"""
命令行接口测试
"""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from php_trace_tool.cli.file_utils import trace_base_name
from php_trace_tool.cli.main import main, parse_arguments
from php_trace_tool.cli.validators import (
    parse_exclude_patterns,
    parse_report_formats,
    parse_stats_formats,
    validate_top_n,
)
from php_trace_tool.config import CONFIG_FILENAME

from trace_fixtures import scenario_lines, write_trace


class TestValidators(unittest.TestCase):
    def test_parse_report_formats(self):
        self.assertEqual(parse_report_formats('json, Markdown'), ['json', 'markdown'])
        with self.assertRaises(ValueError):
            parse_report_formats('json,pdf')
        with self.assertRaises(ValueError):
            parse_report_formats(' ')

    def test_parse_stats_formats(self):
        self.assertEqual(parse_stats_formats('csv'), ['csv'])
        with self.assertRaises(ValueError):
            parse_stats_formats('json')

    def test_parse_exclude_patterns(self):
        self.assertIsNone(parse_exclude_patterns(None))
        self.assertEqual(parse_exclude_patterns(''), [])
        self.assertEqual(parse_exclude_patterns('vendor/, lib/'), ['vendor/', 'lib/'])

    def test_validate_top_n(self):
        self.assertEqual(validate_top_n(5), 5)
        with self.assertRaises(ValueError):
            validate_top_n(0)

    def test_trace_base_name(self):
        self.assertEqual(trace_base_name(Path('/tmp/trace.1234.xt.gz')), 'trace.1234')
        self.assertEqual(trace_base_name(Path('/tmp/trace.1234.xt')), 'trace.1234')


class TestCommands(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)
        self.root = Path(self.temp_dir.name)
        self.trace_file = write_trace(self.root, scenario_lines(), name='trace.1234.xt')
        self.config_file = self.root / CONFIG_FILENAME
        self.config_file.write_text(json.dumps({'output_dir': str(self.root / 'cfg')}), encoding='utf-8')

    def run_main(self, argv):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = main(argv)
        return code, buffer.getvalue()

    def test_no_command(self):
        code, output = self.run_main([])

        self.assertEqual(code, 1)
        self.assertIn('请指定命令', output)

    def test_log_level_argument(self):
        args = parse_arguments(['--log-level', 'DEBUG', 'show', 'x.xt'])

        self.assertEqual(args.log_level, 'DEBUG')
        self.assertEqual(args.format, 'markdown')
        self.assertIsNone(args.exclude)

    def test_convert(self):
        output_dir = self.root / 'reports'

        code, output = self.run_main([
            'convert', str(self.trace_file),
            '--config', str(self.config_file),
            '--output-dir', str(output_dir),
            '--timestamp', 'fixed',
        ])

        self.assertEqual(code, 0, output)
        self.assertTrue((output_dir / 'php-trace-fixed.json').exists())
        self.assertTrue((output_dir / 'php-trace-fixed.md').exists())
        self.assertTrue(self.trace_file.exists())

    def test_convert_without_suffix_and_cleanup(self):
        output_dir = self.root / 'reports'

        code, output = self.run_main([
            'convert', str(self.root / 'trace.1234'),
            '--config', str(self.config_file),
            '--output-dir', str(output_dir),
            '--format', 'json',
            '--timestamp', 'fixed',
            '--cleanup',
        ])

        self.assertEqual(code, 0, output)
        self.assertEqual(sorted(p.name for p in output_dir.iterdir()), ['php-trace-fixed.json'])
        self.assertFalse(self.trace_file.exists())

    def test_cleanup_keeps_unrelated_files(self):
        log_file = write_trace(self.root, scenario_lines(), name='run.log')
        sibling = write_trace(self.root, scenario_lines(), name='run.xt')

        code, output = self.run_main([
            'convert', str(log_file),
            '--config', str(self.config_file),
            '--output-dir', str(self.root / 'reports'),
            '--cleanup',
        ])

        self.assertEqual(code, 0, output)
        self.assertTrue(log_file.exists())
        self.assertTrue(sibling.exists())
        self.assertIn('未清理', output)

    def test_convert_missing_trace(self):
        code, output = self.run_main([
            'convert', str(self.root / 'missing.xt'),
            '--config', str(self.config_file),
        ])

        self.assertEqual(code, 1)
        self.assertIn('错误', output)

    def test_convert_invalid_format(self):
        code, _ = self.run_main([
            'convert', str(self.trace_file),
            '--config', str(self.config_file),
            '--format', 'pdf',
        ])

        self.assertEqual(code, 1)

    def test_show_markdown(self):
        code, output = self.run_main([
            'show', str(self.trace_file),
            '--config', str(self.config_file),
            '--php-version', '8.2.0',
        ])

        self.assertEqual(code, 0)
        self.assertIn('# PHP Execution Trace', output)
        self.assertIn('**PHP Version**: 8.2.0', output)
        self.assertIn('**slowDatabaseQuery** (150.10ms)', output)

    def test_show_json_with_exclusion(self):
        code, output = self.run_main([
            'show', str(self.trace_file),
            '--config', str(self.config_file),
            '--format', 'json',
            '--exclude', 'Database.php',
        ])

        self.assertEqual(code, 0)
        decoded = json.loads(output)
        self.assertEqual(decoded['meta']['function_count'], 4)
        process_user = decoded['trace'][0]['children'][0]
        self.assertEqual([c['function'] for c in process_user['children']], ['validateUser'])

    def test_stats(self):
        output_dir = self.root / 'stats'

        code, output = self.run_main([
            'stats', str(self.trace_file),
            '--config', str(self.config_file),
            '--output-dir', str(output_dir),
            '--output-format', 'csv',
            '--top', '3',
            '--chart',
            '--print-markdown',
        ])

        self.assertEqual(code, 0, output)
        self.assertTrue((output_dir / 'trace.1234_function_stats.csv').exists())
        self.assertTrue((output_dir / 'trace.1234_function_stats_top3.png').exists())
        self.assertFalse((output_dir / 'trace.1234_function_stats.xlsx').exists())
        self.assertIn('| function |', output)

    def test_stats_invalid_top(self):
        code, _ = self.run_main([
            'stats', str(self.trace_file),
            '--config', str(self.config_file),
            '--top', '0',
        ])

        self.assertEqual(code, 1)


if __name__ == '__main__':
    unittest.main()
