"""
Markdown 报告格式化器 (面向人工阅读)
"""

import posixpath
from typing import List, Optional

from ..models import TraceDocument
from ..utils.project_root import strip_project_root
from ..utils.tree_utils import find_slowest_call, iter_preorder
from .base import BaseFormatter

SLOW_THRESHOLD_MS = 100
SLOW_INDICATOR = " ⚠️ *SLOW*"
INDENT = "  "


def format_markdown_path(file_path: str, project_root: Optional[str]) -> str:
    """相对项目根目录的路径，无法相对化时只保留文件名"""
    relative = strip_project_root(file_path, project_root)
    return relative if relative is not None else posixpath.basename(file_path)


class MarkdownFormatter(BaseFormatter):
    """叙述式 Markdown 报告"""

    format_tag = 'narrative'
    extension = 'md'

    def render(self, document: TraceDocument) -> str:
        project_root = self._resolve_project_root(document)
        meta = document.meta

        output = [
            "# PHP Execution Trace",
            "",
            f"**Duration**: {meta.total_time_ms:.2f}ms",
            f"**Functions**: {meta.function_count}",
            f"**PHP Version**: {meta.php_version}",
            f"**Timestamp**: {meta.timestamp}",
            "",
        ]

        slowest = find_slowest_call(document.forest)
        if slowest is not None:
            output.append("## Summary")
            output.append("")
            output.append(
                f"⚠️ **Slowest function**: `{slowest.function}` ({slowest.duration_ms:.2f}ms) "
                f"at {format_markdown_path(slowest.file, project_root)}:{slowest.line}"
            )
            output.append("")

        output.append("## Call Tree")
        output.append("")
        output.extend(self._format_trace_tree(document, project_root))

        return "\n".join(output)

    def _format_trace_tree(self, document: TraceDocument, project_root: Optional[str]) -> List[str]:
        lines = []
        for call, depth in iter_preorder(document.forest):
            duration = call.duration_ms if call.duration_ms is not None else 0.0

            # 格式: - **function** (duration) file:line
            line = f"{INDENT * depth}- **{call.function}** ({duration:.2f}ms)"
            if call.duration_ms is not None and call.duration_ms >= SLOW_THRESHOLD_MS:
                line += SLOW_INDICATOR
            line += f" `{format_markdown_path(call.file, project_root)}:{call.line}`"

            lines.append(line)
        return lines
