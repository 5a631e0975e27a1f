"""
转换命令模块
"""

import time

from ...config import TraceConfig
from ...exceptions import TraceToolError
from ...formatters import build_formatters
from ...manager import TraceManager
from ...parser import TraceParser
from ..file_utils import resolve_trace_file
from ..validators import parse_exclude_patterns, parse_report_formats


def load_config(args) -> TraceConfig:
    """--config 指定时读取该文件，否则自动查找 phptrace.json"""
    config_file = getattr(args, 'config', None)
    if config_file:
        return TraceConfig.from_file(config_file)
    return TraceConfig.load()


class ConvertCommand:
    """转换命令处理器: 跟踪文件 -> JSON / Markdown 报告"""

    def run(self, args) -> int:
        print("=== 跟踪文件转换 ===")
        print(f"跟踪文件: {args.trace}")
        print(f"输出格式: {args.format if args.format else '使用配置'}")
        print(f"输出目录: {args.output_dir if args.output_dir else '使用配置'}")
        print()

        try:
            config = load_config(args)
            formats = parse_report_formats(args.format) if args.format else config.formats
            exclude_patterns = parse_exclude_patterns(args.exclude)
            if exclude_patterns is None:
                exclude_patterns = config.exclude_patterns
            trace_file = resolve_trace_file(args.trace)
        except (TraceToolError, ValueError) as e:
            print(f"错误: {e}")
            return 1

        print(f"排除模式: {exclude_patterns if exclude_patterns else '无'}")

        try:
            start_time = time.time()

            manager = TraceManager(
                parser=TraceParser(exclude_patterns, php_version=args.php_version),
                formatters=build_formatters(formats),
                config=config,
            )
            generated_files = manager.process(trace_file, output_dir=args.output_dir, timestamp=args.timestamp)

            if args.cleanup:
                removed = manager.cleanup_trace_files(trace_file)
                if not removed:
                    print(f"未清理: {trace_file} 不是 .xt / .xt.gz 跟踪文件")
                for path in removed:
                    print(f"已删除原始跟踪文件: {path}")

            total_time = time.time() - start_time
            print(f"\n转换完成，总耗时: {total_time:.2f} 秒")

            print("\n生成的文件:")
            for file_path in generated_files:
                print(f"  {file_path}")

            return 0

        except (TraceToolError, OSError) as e:
            print(f"错误: {e}")
            return 1
