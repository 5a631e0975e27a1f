"""
函数统计命令模块
"""

from pathlib import Path

from ...analyzer import (
    calculate_function_statistics,
    format_markdown_table,
    plot_slowest_functions,
    present_function_statistics,
)
from ...exceptions import TraceToolError
from ...parser import TraceParser
from ..file_utils import resolve_trace_file, trace_base_name
from ..validators import parse_exclude_patterns, parse_stats_formats, validate_top_n
from .convert import load_config


class StatsCommand:
    """统计命令处理器"""

    def run(self, args) -> int:
        print("=== 函数统计 ===")
        print(f"跟踪文件: {args.trace}")
        print(f"输出格式: {args.output_format}")
        print(f"输出目录: {args.output_dir}")
        print(f"打印markdown表格: {args.print_markdown}")
        print()

        try:
            config = load_config(args)
            output_formats = parse_stats_formats(args.output_format)
            top_n = validate_top_n(args.top)
            exclude_patterns = parse_exclude_patterns(args.exclude)
            if exclude_patterns is None:
                exclude_patterns = config.exclude_patterns
            trace_file = resolve_trace_file(args.trace)
        except (TraceToolError, ValueError) as e:
            print(f"错误: {e}")
            return 1

        try:
            document = TraceParser(exclude_patterns).parse(trace_file)
            stats = calculate_function_statistics(document)
            print(f"共 {len(stats)} 个函数")

            base_name = f"{trace_base_name(trace_file)}_function_stats"
            if args.print_markdown:
                # stdout 只打印前 top_n 行，文件中保留完整统计
                print(format_markdown_table(stats.head(top_n), f"{base_name} 函数统计"))

            generated_files = present_function_statistics(
                stats,
                output_dir=args.output_dir,
                base_name=base_name,
                output_formats=output_formats,
            )

            if args.chart:
                chart_file = plot_slowest_functions(
                    stats, Path(args.output_dir) / f"{base_name}_top{top_n}.png", top_n=top_n
                )
                if chart_file is not None:
                    generated_files.append(chart_file)

            print("\n生成的文件:")
            for file_path in generated_files:
                print(f"  {file_path}")
            return 0

        except (TraceToolError, OSError) as e:
            print(f"错误: {e}")
            return 1
