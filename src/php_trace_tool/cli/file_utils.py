"""
文件处理工具模块
"""

from pathlib import Path

from ..manager import TraceManager


def resolve_trace_file(trace_path: str) -> Path:
    """
    解析跟踪文件路径，支持省略 .xt / .xt.gz 后缀

    Raises:
        ValueError: 找不到文件
    """
    trace_file = TraceManager.find_trace_file(trace_path)
    if trace_file is None:
        raise ValueError(f"文件不存在: {trace_path} (也未找到 .xt / .xt.gz)")
    return trace_file


def trace_base_name(trace_file: Path) -> str:
    """去掉 .xt / .xt.gz 后缀的文件名"""
    name = trace_file.name
    for suffix in ('.xt.gz', '.xt', '.gz'):
        if name.endswith(suffix):
            return name[:-len(suffix)]
    return trace_file.stem
