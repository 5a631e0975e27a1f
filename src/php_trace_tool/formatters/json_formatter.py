"""
JSON 报告格式化器 (面向程序和 LLM 读取)
"""

import json
from typing import Any, Dict, List, Optional, Sequence
import logging

from ..exceptions import EncodingFailure
from ..models import CallRecord, TraceDocument
from ..utils.project_root import strip_project_root
from ..utils.tree_utils import find_slowest_call
from .base import BaseFormatter

logger = logging.getLogger(__name__)


def format_json_path(file_path: str, project_root: Optional[str]) -> str:
    """相对项目根目录的路径，无法相对化时保留原路径"""
    relative = strip_project_root(file_path, project_root)
    return relative if relative is not None else file_path


class JsonFormatter(BaseFormatter):
    """结构化 JSON 报告"""

    format_tag = 'structured'
    extension = 'json'

    def render(self, document: TraceDocument) -> str:
        """
        渲染 JSON 报告

        Args:
            document: 解析结果

        Returns:
            str: JSON 文本 (summary, meta, trace 三个字段)

        Raises:
            EncodingFailure: 无法序列化。json.dumps 按嵌套层级递归，
                调用树深度超过解释器递归限制的约一半时也会失败
        """
        project_root = self._resolve_project_root(document)

        try:
            output = {
                'summary': self.generate_summary(document),
                'meta': document.meta.to_dict(),
                'trace': self._format_trace_tree(document.forest, project_root),
            }
            return json.dumps(output, indent=4, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError, RecursionError) as e:
            logger.error(f"JSON 序列化失败: {e}")
            raise EncodingFailure(f"Failed to encode JSON: {e}") from e

    def generate_summary(self, document: TraceDocument) -> str:
        """一行文字摘要"""
        meta = document.meta
        summary = (
            f"PHP execution trace: {meta.function_count} functions executed "
            f"in {meta.total_time_ms:.2f}ms"
        )

        slowest = find_slowest_call(document.forest)
        if slowest is not None:
            summary += f". Slowest: {slowest.function} ({slowest.duration_ms:.2f}ms)"

        return summary

    def _format_trace_tree(self, calls: Sequence[CallRecord],
                           project_root: Optional[str]) -> List[Dict[str, Any]]:
        formatted: List[Dict[str, Any]] = []
        # (调用, 所属的兄弟列表)，子节点逆序入栈以保持原有顺序
        stack = [(call, formatted) for call in reversed(calls)]
        while stack:
            call, siblings = stack.pop()
            node = {
                'function': call.function,
                'file': format_json_path(call.file, project_root),
                'line': call.line,
                'duration_ms': call.duration_ms,
            }
            siblings.append(node)
            if call.children:
                node['children'] = []
                stack.extend((child, node['children']) for child in reversed(call.children))
        return formatted
