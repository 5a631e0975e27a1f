"""
CLI命令模块
"""

from .convert import ConvertCommand
from .stats import StatsCommand
from .show import ShowCommand

__all__ = ['ConvertCommand', 'StatsCommand', 'ShowCommand']
