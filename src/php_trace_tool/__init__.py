"""
PHP Trace Tool Package
"""

from .models import CallRecord, EventKind, TraceDocument, TraceEvent, TraceMeta
from .exceptions import TraceToolError, SourceNotFound, EncodingFailure, ConfigError
from .call_tree_builder import CallTreeBuilder, ExclusionRuleSet, build_call_tree
from .parser import TraceParser, decode_event_line, parse_trace_file
from .formatters import JsonFormatter, MarkdownFormatter, get_formatter
from .utils import ProjectRootResolver, find_slowest_call

__version__ = '1.0.0'

__all__ = [
    'CallRecord',
    'EventKind',
    'TraceDocument',
    'TraceEvent',
    'TraceMeta',
    'TraceToolError',
    'SourceNotFound',
    'EncodingFailure',
    'ConfigError',
    'CallTreeBuilder',
    'ExclusionRuleSet',
    'build_call_tree',
    'TraceParser',
    'decode_event_line',
    'parse_trace_file',
    'JsonFormatter',
    'MarkdownFormatter',
    'get_formatter',
    'ProjectRootResolver',
    'find_slowest_call',
]
