"""
工具函数模块
"""

from .tree_utils import iter_preorder, find_slowest_call, count_calls, get_tree_depth
from .project_root import ProjectRootResolver, resolve_project_root, strip_project_root, DEFAULT_PROJECT_MARKERS

__all__ = [
    'iter_preorder',
    'find_slowest_call',
    'count_calls',
    'get_tree_depth',
    'ProjectRootResolver',
    'resolve_project_root',
    'strip_project_root',
    'DEFAULT_PROJECT_MARKERS',
]
