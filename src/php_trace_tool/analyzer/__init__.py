"""
分析器模块
"""

from .statistics import calculate_function_statistics, STATISTICS_COLUMNS
from .presenter import present_function_statistics, format_markdown_table
from .chart import plot_slowest_functions

__all__ = [
    'calculate_function_statistics',
    'STATISTICS_COLUMNS',
    'present_function_statistics',
    'format_markdown_table',
    'plot_slowest_functions',
]
