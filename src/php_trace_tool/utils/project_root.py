"""
项目根目录探测
"""

import os
import posixpath
from typing import Callable, Iterable, Optional, Sequence
import logging

from ..models import CallRecord
from .tree_utils import iter_preorder

logger = logging.getLogger(__name__)

# 依赖清单、版本控制目录、源码目录
DEFAULT_PROJECT_MARKERS = ('composer.json', '.git', 'src')


class ProjectRootResolver:
    """
    根据调用森林中的文件路径推测项目根目录

    每个实例只解析一次，格式化器每次渲染都应创建新实例。
    """

    def __init__(self, markers: Iterable[str] = DEFAULT_PROJECT_MARKERS,
                 exists: Callable[[str], bool] = os.path.exists):
        self.markers = tuple(markers)
        self.exists = exists
        self._resolved = False
        self._root: Optional[str] = None

    def resolve(self, forest: Sequence[CallRecord]) -> Optional[str]:
        """
        前序遍历调用，从第一个带文件路径的调用开始向上查找项目标记

        Args:
            forest: 根调用列表

        Returns:
            Optional[str]: 项目根目录，未找到时返回 None
        """
        if self._resolved:
            return self._root

        for call, _ in iter_preorder(forest):
            if not call.file:
                continue
            root = self._search_upwards(call.file)
            if root is not None:
                self._root = root
                logger.debug(f"项目根目录: {root}")
                break

        self._resolved = True
        return self._root

    def _search_upwards(self, file_path: str) -> Optional[str]:
        directory = posixpath.dirname(file_path)
        # 文件系统根目录和相对路径的 '.' 不检查
        while directory not in ('/', '.', ''):
            for marker in self.markers:
                if self.exists(posixpath.join(directory, marker)):
                    return directory
            parent = posixpath.dirname(directory)
            if parent == directory:
                break
            directory = parent
        return None


def resolve_project_root(forest: Sequence[CallRecord],
                         exists: Callable[[str], bool] = os.path.exists) -> Optional[str]:
    """单次解析的便捷函数"""
    return ProjectRootResolver(exists=exists).resolve(forest)


def strip_project_root(file_path: str, project_root: Optional[str]) -> Optional[str]:
    """
    去掉路径中的项目根目录前缀

    Returns:
        Optional[str]: 相对路径；路径不在根目录下或结果为空时返回 None
    """
    if not project_root or not file_path:
        return None
    prefix = project_root.rstrip('/') + '/'
    if not file_path.startswith(prefix):
        return None
    return file_path[len(prefix):] or None
