# -*- coding: utf-8 -*-
"""
CLI验证器模块
"""

from typing import List, Optional

from ..analyzer.presenter import VALID_OUTPUT_FORMATS
from ..formatters import FORMATTERS


def _split_options(spec: str) -> List[str]:
    return [item.strip() for item in spec.split(',') if item.strip()]


def parse_report_formats(format_spec: str) -> List[str]:
    """
    解析报告格式

    Args:
        format_spec: 逗号分隔的格式字符串，如 "json,markdown"

    Returns:
        List[str]: 格式列表

    Raises:
        ValueError: 为空或包含不支持的格式
    """
    if not format_spec or not format_spec.strip():
        raise ValueError("输出格式不能为空")

    formats = _split_options(format_spec)
    for fmt in formats:
        if fmt.lower() not in FORMATTERS:
            raise ValueError(f"不支持的输出格式: {fmt}。支持的格式: {', '.join(sorted(FORMATTERS))}")
    return [fmt.lower() for fmt in formats]


def parse_stats_formats(format_spec: str) -> List[str]:
    """解析统计表输出格式 (csv, xlsx)"""
    if not format_spec or not format_spec.strip():
        raise ValueError("输出格式不能为空")

    formats = _split_options(format_spec)
    for fmt in formats:
        if fmt not in VALID_OUTPUT_FORMATS:
            raise ValueError(f"不支持的统计输出格式: {fmt}。支持的格式: {', '.join(VALID_OUTPUT_FORMATS)}")
    return formats


def parse_exclude_patterns(exclude_spec: Optional[str]) -> Optional[List[str]]:
    """
    解析排除模式

    Returns:
        Optional[List[str]]: None 表示使用配置中的模式；空字符串表示不排除任何路径
    """
    if exclude_spec is None:
        return None
    return _split_options(exclude_spec)


def validate_top_n(top_n: int) -> int:
    if top_n <= 0:
        raise ValueError(f"--top 必须为正整数: {top_n}")
    return top_n
