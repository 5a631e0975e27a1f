"""
树结构处理工具模块
"""

from typing import Iterator, Optional, Sequence, Tuple
import logging

from ..models import CallRecord

logger = logging.getLogger(__name__)


def iter_preorder(forest: Sequence[CallRecord]) -> Iterator[Tuple[CallRecord, int]]:
    """
    前序遍历调用森林

    Args:
        forest: 根调用列表

    Yields:
        Tuple[CallRecord, int]: (调用, 深度)，根调用深度为 0
    """
    stack = [(call, 0) for call in reversed(forest)]
    while stack:
        call, depth = stack.pop()
        yield call, depth
        for child in reversed(call.children):
            stack.append((child, depth + 1))


def find_slowest_call(forest: Sequence[CallRecord]) -> Optional[CallRecord]:
    """
    查找耗时最长的调用

    没有耗时的调用不参与比较；耗时相同时保留先遇到的调用。

    Args:
        forest: 根调用列表

    Returns:
        Optional[CallRecord]: 最慢的调用，没有任何带耗时的调用时返回 None
    """
    slowest = None
    for call, _ in iter_preorder(forest):
        if call.duration_ms is None:
            continue
        if slowest is None or call.duration_ms > slowest.duration_ms:
            slowest = call
    return slowest


def count_calls(forest: Sequence[CallRecord]) -> int:
    """计算森林中的调用数"""
    return sum(1 for _ in iter_preorder(forest))


def get_tree_depth(forest: Sequence[CallRecord]) -> int:
    """获取森林的最大深度，空森林为 0，只有根调用为 1"""
    max_depth = 0
    for _, depth in iter_preorder(forest):
        max_depth = max(max_depth, depth + 1)
    return max_depth
