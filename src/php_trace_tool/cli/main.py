"""
CLI主模块
"""

import argparse
import logging
import sys

from .commands import ConvertCommand, StatsCommand, ShowCommand


def _add_common_arguments(parser: argparse.ArgumentParser):
    parser.add_argument('trace', help='Xdebug 跟踪文件路径 (format 1)，可省略 .xt / .xt.gz 后缀')
    parser.add_argument('--exclude', default=None,
                        help='排除的文件路径模式，逗号分隔，路径包含任一模式即排除\n'
                             '(默认: 使用配置，配置缺省时为 "vendor/,composer/"；传入空字符串不排除)')
    parser.add_argument('--config', default=None,
                        help='配置文件路径 (默认: 从当前目录向上查找 phptrace.json)')


def parse_arguments(argv=None):
    """解析命令行参数"""
    parser = argparse.ArgumentParser(
        description="PHP Trace Tool - 将 Xdebug 函数跟踪文件转换为调用树报告",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例用法:
  # 生成 JSON 和 Markdown 报告 (默认写入 ./traces)
  php-trace-tool convert /tmp/trace.1234.xt

  # 只生成 Markdown 报告，并指定输出目录
  php-trace-tool convert /tmp/trace.1234.xt --format markdown --output-dir reports

  # 不排除任何路径 (包括 vendor/)
  php-trace-tool convert /tmp/trace.1234.xt --exclude ""

  # 转换后删除原始跟踪文件
  php-trace-tool convert /tmp/trace.1234 --cleanup

  # 在 stdout 中打印 Markdown 报告
  php-trace-tool show /tmp/trace.1234.xt.gz --format markdown

  # 生成函数统计表和耗时最高的 10 个函数的图表
  php-trace-tool stats /tmp/trace.1234.xt --output-format csv,xlsx --top 10 --chart
        """
    )
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='日志级别 (默认: WARNING)')

    subparsers = parser.add_subparsers(dest='command', help='可用命令')

    # convert 命令 - 生成报告文件
    convert_parser = subparsers.add_parser('convert', help='将跟踪文件转换为 JSON / Markdown 报告')
    _add_common_arguments(convert_parser)
    convert_parser.add_argument('--format', default=None,
                                help='输出格式，逗号分隔: json, markdown (默认: 使用配置)')
    convert_parser.add_argument('--output-dir', default=None,
                                help='输出目录 (默认: 环境变量 TRACE_OUTPUT_DIR，其次为配置中的 output_dir)')
    convert_parser.add_argument('--timestamp', default=None,
                                help='输出文件名中的时间戳 (默认: 当前时间 YYYY-MM-DD_HH-MM-SS)')
    convert_parser.add_argument('--php-version', default='unknown', help='写入报告的 PHP 版本 (默认: unknown)')
    convert_parser.add_argument('--cleanup', action='store_true', help='转换后删除原始 .xt / .xt.gz 文件')

    # show 命令 - 打印报告
    show_parser = subparsers.add_parser('show', help='在 stdout 中打印报告')
    _add_common_arguments(show_parser)
    show_parser.add_argument('--format', default='markdown', choices=['json', 'markdown', 'md'],
                             help='输出格式 (默认: markdown)')
    show_parser.add_argument('--php-version', default='unknown', help='写入报告的 PHP 版本 (默认: unknown)')

    # stats 命令 - 函数级统计
    stats_parser = subparsers.add_parser('stats', help='按函数统计调用次数和耗时')
    _add_common_arguments(stats_parser)
    stats_parser.add_argument('--output-format', default='csv,xlsx',
                              help='输出格式，逗号分隔: csv, xlsx (默认: csv,xlsx)')
    stats_parser.add_argument('--output-dir', default='.', help='输出目录 (默认: 当前目录)')
    stats_parser.add_argument('--top', type=int, default=20, help='图表和 markdown 表格显示的函数数量 (默认: 20)')
    stats_parser.add_argument('--chart', action='store_true', help='生成耗时最高函数的条形图 (png)')
    stats_parser.add_argument('--print-markdown', action='store_true',
                              help='是否在stdout中以markdown格式打印表格 (默认: False)')

    return parser.parse_args(argv)


def main(argv=None):
    """主函数"""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    if not args.command:
        print("错误: 请指定命令 (convert, show, stats)")
        print("使用 --help 查看帮助信息")
        return 1

    if args.command == 'convert':
        command = ConvertCommand()
    elif args.command == 'show':
        command = ShowCommand()
    elif args.command == 'stats':
        command = StatsCommand()
    else:
        print(f"错误: 未知命令: {args.command}")
        return 1

    return command.run(args)


if __name__ == "__main__":
    sys.exit(main())
