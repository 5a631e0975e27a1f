"""
显示命令模块
"""

from ...exceptions import TraceToolError
from ...formatters import get_formatter
from ...parser import TraceParser
from ..file_utils import resolve_trace_file
from ..validators import parse_exclude_patterns
from .convert import load_config


class ShowCommand:
    """把单个报告打印到 stdout"""

    def run(self, args) -> int:
        try:
            config = load_config(args)
            formatter = get_formatter(args.format)
            exclude_patterns = parse_exclude_patterns(args.exclude)
            if exclude_patterns is None:
                exclude_patterns = config.exclude_patterns
            trace_file = resolve_trace_file(args.trace)

            document = TraceParser(exclude_patterns, php_version=args.php_version).parse(trace_file)
            print(formatter.render(document))
            return 0
        except (TraceToolError, ValueError, OSError) as e:
            print(f"错误: {e}")
            return 1
