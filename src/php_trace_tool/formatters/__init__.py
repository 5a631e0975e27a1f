"""
报告格式化器模块
"""

from typing import Iterable, List

from .base import BaseFormatter
from .json_formatter import JsonFormatter, format_json_path
from .markdown_formatter import MarkdownFormatter, format_markdown_path, SLOW_THRESHOLD_MS

FORMATTERS = {
    'json': JsonFormatter,
    'markdown': MarkdownFormatter,
    'md': MarkdownFormatter,
}


def get_formatter(name: str, **kwargs) -> BaseFormatter:
    """
    按名称创建格式化器

    Args:
        name: json, markdown 或 md

    Raises:
        ValueError: 不支持的格式
    """
    key = name.strip().lower()
    if key not in FORMATTERS:
        raise ValueError(f"不支持的输出格式: {name}。支持的格式: {', '.join(sorted(FORMATTERS))}")
    return FORMATTERS[key](**kwargs)


def build_formatters(names: Iterable[str], **kwargs) -> List[BaseFormatter]:
    """按名称列表创建格式化器，重复的格式只创建一次"""
    formatters = []
    seen = set()
    for name in names:
        formatter = get_formatter(name, **kwargs)
        if formatter.format_tag in seen:
            continue
        seen.add(formatter.format_tag)
        formatters.append(formatter)
    return formatters


__all__ = [
    'BaseFormatter',
    'JsonFormatter',
    'MarkdownFormatter',
    'format_json_path',
    'format_markdown_path',
    'SLOW_THRESHOLD_MS',
    'get_formatter',
    'build_formatters',
]
