"""
MCP Server Handlers Package
Contains all MCP tool handlers organized by functionality
"""

from .table_handlers import *
from .record_handlers import *
from .search_handlers import *
from .registry import TOOLS, TOOL_INDEX, ToolSpec, call_tool, parse_arguments, tool_definitions

__all__ = [
    "handle_list_bases",
    "handle_list_tables",
    "handle_describe_table",
    "handle_list_records",
    "handle_get_record",
    "handle_create_record",
    "handle_update_record",
    "handle_delete_record",
    "handle_search_records",
    "TOOLS",
    "TOOL_INDEX",
    "ToolSpec",
    "call_tool",
    "parse_arguments",
    "tool_definitions",
]
