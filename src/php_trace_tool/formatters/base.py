"""
格式化器基类
"""

import os
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..models import TraceDocument
from ..utils.project_root import ProjectRootResolver


class BaseFormatter(ABC):
    """把 TraceDocument 渲染为文本"""

    format_tag = ''
    extension = ''

    def __init__(self, exists: Callable[[str], bool] = os.path.exists):
        # 项目标记探测函数，测试时可替换
        self.exists = exists

    def extension_tag(self) -> str:
        return self.extension

    def _resolve_project_root(self, document: TraceDocument) -> Optional[str]:
        """每次渲染都重新解析，结果不跨文档复用"""
        return ProjectRootResolver(exists=self.exists).resolve(document.forest)

    @abstractmethod
    def render(self, document: TraceDocument) -> str:
        """渲染报告文本"""
